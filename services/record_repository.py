"""Shared CRUD over one top-level record collection.

A collection is a single JSON list stored under one key. Every mutation
loads the whole list, changes it and writes the whole list back; nothing is
written when a check fails.
"""

import dataclasses
import logging

from core.exceptions import (
    DuplicateNationalIdError,
    DuplicateUsernameError,
    MalformedStoredDataError,
    RecordNotFoundError,
)
from core.storage import KeyValueStore, load_json, save_json

logger = logging.getLogger(__name__)


class RecordRepository:
    # Set by subclasses
    key: str = None
    model = None
    label: str = "registro"

    def __init__(self, store: KeyValueStore):
        self.store = store

    # -----------------------------
    # Raw collection access
    # -----------------------------
    def exists(self) -> bool:
        """True once the collection key was ever written (even as an empty list)."""
        return self.store.get(self.key) is not None

    def _load(self) -> list:
        data = load_json(self.store, self.key, default=None)
        if data is None:
            return []
        if not isinstance(data, list):
            raise MalformedStoredDataError(self.key, "expected a list")
        return [self.model.from_dict(item) for item in data]

    def _save(self, records: list) -> None:
        save_json(self.store, self.key, [r.to_dict() for r in records])

    # -----------------------------
    # Queries
    # -----------------------------
    def list_all(self) -> list:
        return self._load()

    def find_by_national_id(self, national_id: str):
        return next((r for r in self._load() if r.national_id == national_id), None)

    def find_by_username(self, username: str):
        return next((r for r in self._load() if r.username == username), None)

    def get(self, national_id: str):
        """Like ``find_by_national_id`` but raises when missing."""
        record = self.find_by_national_id(national_id)
        if record is None:
            raise RecordNotFoundError(f"{self.label.capitalize()} no encontrado.", national_id)
        return record

    def find_by_credentials(self, username: str, password: str):
        return next(
            (r for r in self._load() if r.username == username and r.password == password),
            None,
        )

    # -----------------------------
    # Mutations
    # -----------------------------
    def create(self, record):
        records = self._load()

        if any(r.national_id == record.national_id for r in records):
            raise DuplicateNationalIdError(
                f"Error: Ya existe un {self.label} con esa Cédula (CI).", record.national_id
            )
        if any(r.username == record.username for r in records):
            raise DuplicateUsernameError(
                f"Error: Ese nombre de usuario ya está en uso por otro {self.label}.", record.username
            )

        records.append(record)
        self._save(records)
        logger.info("Created %s %s", self.label, record.national_id)
        return record

    def update(self, record_id: str, **changes):
        """Replace fields of the record keyed by record_id; changes may include a new national_id."""
        records = self._load()

        index = next((i for i, r in enumerate(records) if r.national_id == record_id), None)
        if index is None:
            raise RecordNotFoundError(f"{self.label.capitalize()} no encontrado.", record_id)

        updated = dataclasses.replace(records[index], **changes)

        others = [r for i, r in enumerate(records) if i != index]
        if any(r.username == updated.username for r in others):
            raise DuplicateUsernameError(
                f"Error: Ese nombre de usuario ya está en uso por otro {self.label}.", updated.username
            )
        if any(r.national_id == updated.national_id for r in others):
            raise DuplicateNationalIdError(
                f"Error: Ya existe un {self.label} con esa Cédula (CI).", updated.national_id
            )

        records[index] = updated
        self._save(records)
        logger.info("Updated %s %s", self.label, record_id)
        return updated

    def delete(self, national_id: str) -> None:
        records = self._load()
        remaining = [r for r in records if r.national_id != national_id]
        if len(remaining) == len(records):
            raise RecordNotFoundError(f"{self.label.capitalize()} no encontrado.", national_id)

        self._save(remaining)
        logger.info("Deleted %s %s", self.label, national_id)
