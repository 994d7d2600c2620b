import os
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import DATABASE_URL, DATA_DIR


def make_engine(url: str = DATABASE_URL):
    """Create an engine; SQLite connections are shared across Streamlit threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


# Create engine
engine = make_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def init_db(bind=None):
    """Create all tables. The default SQLite file lives under DATA_DIR."""
    if bind is None:
        bind = engine
        if DATABASE_URL.startswith("sqlite:///"):
            os.makedirs(DATA_DIR, exist_ok=True)
    # Register mapped classes before create_all
    import models.store_entry  # noqa: F401

    Base.metadata.create_all(bind=bind)


@contextmanager
def get_db_context(session_factory=None):
    """
    Context manager for database sessions.
    Automatically closes session when done.

    Usage:
        with get_db_context() as db:
            result = db.query(Model).all()
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
