# models/principal.py

from dataclasses import dataclass
from typing import Optional

ADMIN = "admin"
DOCTOR = "doctor"
PATIENT = "patient"


@dataclass(frozen=True)
class Principal:
    """Who is driving the current page: Admin, Doctor(name) or Patient(id)."""

    role: str
    name: Optional[str] = None
    national_id: Optional[str] = None

    @classmethod
    def admin(cls) -> "Principal":
        return cls(role=ADMIN)

    @classmethod
    def doctor(cls, name: str) -> "Principal":
        return cls(role=DOCTOR, name=name)

    @classmethod
    def patient(cls, national_id: str, name: str = None) -> "Principal":
        return cls(role=PATIENT, name=name, national_id=national_id)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    @property
    def is_doctor(self) -> bool:
        return self.role == DOCTOR

    @property
    def is_patient(self) -> bool:
        return self.role == PATIENT

    def __repr__(self):
        return f"<Principal {self.role} {self.name or self.national_id or ''}>".rstrip()
