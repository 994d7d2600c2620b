import base64
import binascii
import dataclasses
import logging

from core.exceptions import MalformedStoredDataError
from core.storage import KeyValueStore, load_json, save_json
from models.visit import VisitRecord

logger = logging.getLogger(__name__)

HISTORY_KEY_PREFIX = "paciente_"


def history_key(national_id: str) -> str:
    """Store key holding a patient's visit history, e.g. paciente_1315896547."""
    return f"{HISTORY_KEY_PREFIX}{national_id}"


# -----------------------------
# Attached documents
# -----------------------------
def encode_attachment(content: bytes, mime_type: str = "application/pdf") -> str:
    """Encode uploaded bytes as a base64 data URL."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


def decode_attachment(data_url: str):
    """Return ``(mime_type, bytes)`` for a data URL produced by ``encode_attachment``."""
    header, sep, payload = (data_url or "").partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Documento adjunto ilegible.")
    mime_type = header[len("data:"):-len(";base64")] or "application/octet-stream"
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError("Documento adjunto ilegible.") from e


class VisitHistoryRepository:
    """Append-only visit histories, one store key per patient."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_for_patient(self, national_id: str) -> list:
        key = history_key(national_id)
        data = load_json(self.store, key, default=None)
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.warning("Unreadable history under %s", key)
            raise MalformedStoredDataError(key, "expected a list of visits")
        return [VisitRecord.from_dict(item) for item in data]

    def append(self, national_id: str, record: VisitRecord) -> VisitRecord:
        key = history_key(national_id)
        visits = self.list_for_patient(national_id)
        visits.append(record)
        save_json(self.store, key, [v.to_dict() for v in visits])
        logger.info(
            "Appended visit for %s (%d total, document=%s)",
            national_id, len(visits), record.has_document,
        )
        return record

    def append_with_document(self, national_id: str, record: VisitRecord,
                             content: bytes = None, mime_type: str = None) -> VisitRecord:
        """Persist a visit after its document has been fully encoded."""
        if content:
            record = dataclasses.replace(record, attached_document=encode_attachment(content, mime_type))
        return self.append(national_id, record)

    def delete_all_for_patient(self, national_id: str) -> None:
        self.store.remove(history_key(national_id))
        logger.info("Deleted visit history for %s", national_id)

    def move_history(self, old_id: str, new_id: str) -> None:
        raw = self.store.get(history_key(old_id))
        if raw is None:
            return
        self.store.set(history_key(new_id), raw)
        self.store.remove(history_key(old_id))
        logger.info("Moved visit history %s -> %s", old_id, new_id)
