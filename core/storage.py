"""Key-value storage port.

Every store exposes ``get``/``set``/``remove`` over string keys and string
values. Callers serialize to JSON themselves (see ``load_json`` and
``save_json``). There are no transactions: a multi-step mutation is a plain
read-modify-write.
"""

import json
import logging

from core.database import SessionLocal, get_db_context
from core.exceptions import MalformedStoredDataError
from models.store_entry import StoreEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface shared by the persistent and session-scoped stores."""

    def get(self, key: str):
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict = None):
        self._data = dict(initial or {})

    def get(self, key: str):
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class SqlKeyValueStore(KeyValueStore):
    """Persistent store backed by the ``store_entries`` table.

    Each call uses its own short-lived session.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str):
        with get_db_context(self.session_factory) as db:
            entry = db.get(StoreEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with get_db_context(self.session_factory) as db:
            db.merge(StoreEntry(key=key, value=value))
            db.commit()

    def remove(self, key: str) -> None:
        with get_db_context(self.session_factory) as db:
            db.query(StoreEntry).filter(StoreEntry.key == key).delete()
            db.commit()

    def keys(self):
        with get_db_context(self.session_factory) as db:
            return [row.key for row in db.query(StoreEntry.key).order_by(StoreEntry.key).all()]


def load_json(store: KeyValueStore, key: str, default=None):
    """Read and decode ``key``; return ``default`` when the key is absent."""
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning("Unreadable value under %s: %s", key, e)
        raise MalformedStoredDataError(key, str(e)) from e


def save_json(store: KeyValueStore, key: str, value) -> None:
    store.set(key, json.dumps(value, ensure_ascii=False))
