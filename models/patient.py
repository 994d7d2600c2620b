# models/patient.py

import re
from dataclasses import dataclass, asdict
from typing import Union

from core.exceptions import MalformedStoredDataError

_AGE_DIGITS = re.compile(r"[0-9]+")


def parse_age(text: str) -> Union[int, str]:
    """Edit-form age: plain ASCII digits become an int, anything else is kept as typed."""
    text = text.strip()
    return int(text) if _AGE_DIGITS.fullmatch(text) else text


@dataclass
class Patient:
    full_name: str
    national_id: str

    # Seeded patients carry an int, form-created ones the raw text
    age: Union[int, str] = ""

    phone: str = ""
    email: str = ""
    allergies: str = ""

    # Defaults to the national id at creation, may diverge after edits
    username: str = ""
    password: str = ""

    STORED_FIELDS = {
        "full_name": "nombre",
        "national_id": "ci",
        "age": "edad",
        "phone": "telefono",
        "email": "email",
        "allergies": "alergias",
        "username": "usuario",
        "password": "password",
    }

    def to_dict(self) -> dict:
        data = asdict(self)
        return {stored: data[attr] for attr, stored in self.STORED_FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "Patient":
        if not isinstance(data, dict):
            raise MalformedStoredDataError("pacientes_lista", f"unexpected entry {data!r}")
        return cls(**{attr: data.get(stored, "") for attr, stored in cls.STORED_FIELDS.items()})

    def __repr__(self):
        return f"<Patient {self.national_id} - {self.full_name}>"
