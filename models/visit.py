# models/visit.py

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class VisitRecord:
    """One clinical encounter. Immutable once appended to a history."""

    date: str = ""
    reason: str = ""
    weight: str = ""
    blood_pressure: str = ""
    diagnosis: str = ""
    treatment: str = ""
    notes: str = ""

    # base64 data URL of the uploaded document, if any
    attached_document: Optional[str] = None

    STORED_FIELDS = {
        "date": "fecha",
        "reason": "motivo",
        "weight": "peso",
        "blood_pressure": "presion",
        "diagnosis": "diagnostico",
        "treatment": "tratamiento",
        "notes": "observaciones",
        "attached_document": "pdfData",
    }

    @property
    def has_document(self) -> bool:
        return bool(self.attached_document)

    def to_dict(self) -> dict:
        data = asdict(self)
        return {stored: data[attr] for attr, stored in self.STORED_FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "VisitRecord":
        values = {attr: data.get(stored) for attr, stored in cls.STORED_FIELDS.items()}
        for attr, value in values.items():
            if value is None and attr != "attached_document":
                values[attr] = ""
        return cls(**values)

    def __repr__(self):
        return f"<VisitRecord {self.date} - {self.reason}>"
