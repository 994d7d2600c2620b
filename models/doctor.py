# models/doctor.py

from dataclasses import dataclass, asdict

from core.exceptions import MalformedStoredDataError


@dataclass
class Doctor:
    full_name: str
    national_id: str
    phone: str = ""
    username: str = ""
    password: str = ""
    role: str = "doctor"

    # attribute -> stored JSON field
    STORED_FIELDS = {
        "full_name": "nombre",
        "national_id": "ci",
        "phone": "telefono",
        "username": "usuario",
        "password": "password",
        "role": "rol",
    }

    def to_dict(self) -> dict:
        data = asdict(self)
        return {stored: data[attr] for attr, stored in self.STORED_FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "Doctor":
        if not isinstance(data, dict):
            raise MalformedStoredDataError("doctores_lista", f"unexpected entry {data!r}")
        return cls(
            full_name=data.get("nombre", ""),
            national_id=data.get("ci", ""),
            phone=data.get("telefono", ""),
            username=data.get("usuario", ""),
            password=data.get("password", ""),
            role=data.get("rol", "doctor"),
        )

    def __repr__(self):
        return f"<Doctor {self.national_id} - {self.full_name}>"
