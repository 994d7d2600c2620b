"""Form-boundary checks run before any repository write.

Each validator raises ``ValidationError`` on the first bad field and never
rewrites the value it was given.
"""

import re

from core.exceptions import ValidationError

NATIONAL_ID_PATTERN = re.compile(r"[0-9]{10}")
PHONE_PATTERN = re.compile(r"[0-9]{10}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_national_id(value: str):
    if not NATIONAL_ID_PATTERN.fullmatch(value or ""):
        raise ValidationError("national_id", "Error: La Cédula (CI) debe tener 10 dígitos numéricos.")


def validate_phone(value: str):
    if value and not PHONE_PATTERN.fullmatch(value):
        raise ValidationError("phone", "Error: El Teléfono debe tener 10 dígitos numéricos.")


def validate_email(value: str):
    if value and not EMAIL_PATTERN.fullmatch(value):
        raise ValidationError("email", "Error: El formato del correo electrónico no es válido.")


def validate_password(value: str):
    if not value:
        raise ValidationError("password", "Error: Debe asignar una contraseña.")


def validate_username(value: str):
    if not (value or "").strip():
        raise ValidationError("username", "Error: El Usuario es obligatorio.")


_FIELD_VALIDATORS = {
    "national_id": validate_national_id,
    "phone": validate_phone,
    "email": validate_email,
    "password": validate_password,
    "username": validate_username,
}


def validate_doctor(doctor):
    for field in ("national_id", "phone", "username", "password"):
        _FIELD_VALIDATORS[field](getattr(doctor, field))


def validate_patient(patient):
    for field in ("national_id", "phone", "email", "username", "password"):
        _FIELD_VALIDATORS[field](getattr(patient, field))


def validate_changes(original, updated):
    """Validate only the fields an edit form actually changed.

    Seeded values such as the system doctor's phone ``"N/A"`` would
    otherwise block unrelated edits.
    """
    for field, check in _FIELD_VALIDATORS.items():
        if not hasattr(updated, field):
            continue
        new_value = getattr(updated, field)
        if new_value != getattr(original, field, None):
            check(new_value)
