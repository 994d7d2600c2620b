# core/setup_db.py

from core.database import init_db
from core.logging_config import setup_logging
from core.storage import SqlKeyValueStore
from services.seed_service import ensure_seeded


def main():
    setup_logging()
    print("Creating database tables...")

    init_db()

    # Insert default doctor and sample patients
    ensure_seeded(SqlKeyValueStore())

    print("Database initialized successfully.")


if __name__ == "__main__":
    main()
