from .database import get_db_context, init_db, engine, SessionLocal, Base
from .exceptions import (
    ClinicError,
    RecordNotFoundError,
    DuplicateKeyError,
    DuplicateNationalIdError,
    DuplicateUsernameError,
    ProtectedRecordError,
    MalformedStoredDataError,
    ValidationError,
)
from .storage import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore, load_json, save_json

# Streamlit-dependent helpers (session_manager, helpers) are imported
# directly by pages, not here.

__all__ = [
    "get_db_context",
    "init_db",
    "engine",
    "SessionLocal",
    "Base",
    "ClinicError",
    "RecordNotFoundError",
    "DuplicateKeyError",
    "DuplicateNationalIdError",
    "DuplicateUsernameError",
    "ProtectedRecordError",
    "MalformedStoredDataError",
    "ValidationError",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
    "load_json",
    "save_json",
]
