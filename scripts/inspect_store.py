"""Print every key in the persistent store with a short summary of its value."""

import json

from core.config import DATABASE_URL
from core.database import init_db
from core.storage import SqlKeyValueStore


def main():
    print("Database:", DATABASE_URL)
    init_db()
    store = SqlKeyValueStore()
    for key in store.keys():
        raw = store.get(key)
        try:
            value = json.loads(raw)
        except ValueError:
            print(f"{key}: UNREADABLE ({len(raw)} chars)")
            continue
        if isinstance(value, list):
            print(f"{key}: {len(value)} item(s)")
        else:
            print(f"{key}: {type(value).__name__}")


if __name__ == "__main__":
    main()
