import logging

from core.storage import KeyValueStore, save_json
from services.doctor_service import DOCTORS_KEY
from services.patient_service import PATIENTS_KEY

logger = logging.getLogger(__name__)

DEFAULT_DOCTORS = [
    {"nombre": "Dr. (Sistema)", "ci": "9999999999", "telefono": "N/A",
     "usuario": "doctor", "password": "12345", "rol": "doctor"},
]

DEFAULT_PATIENTS = [
    {"nombre": "Carlos Andrade Vera", "ci": "1315896547", "edad": 34,
     "telefono": "0987654321", "email": "candrade@email.com",
     "alergias": "Penicilina", "usuario": "1315896547", "password": "123"},
    {"nombre": "Ana Zambrano Ponce", "ci": "1309874563", "edad": 28,
     "telefono": "0991234567", "email": "azambrano@email.com",
     "alergias": "Ninguna", "usuario": "1309874563", "password": "123"},
    {"nombre": "Luis Mendoza Cedeño", "ci": "1311223344", "edad": 45,
     "telefono": "0988776655", "email": "lmendoza@email.com",
     "alergias": "Polvo", "usuario": "1311223344", "password": "123"},
]


def ensure_seeded(store: KeyValueStore) -> None:
    """
    Write the default doctor and sample patients on first run.

    A collection is seeded only when its key was never written. A key that
    holds an empty list (everyone deleted) is left alone.
    """
    for key, defaults in ((DOCTORS_KEY, DEFAULT_DOCTORS), (PATIENTS_KEY, DEFAULT_PATIENTS)):
        if store.get(key) is None:
            save_json(store, key, [dict(item) for item in defaults])
            logger.info("Seeded %s with %d default record(s)", key, len(defaults))
