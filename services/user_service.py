import logging
from dataclasses import dataclass
from typing import Optional, Union

from core.storage import KeyValueStore
from models.doctor import Doctor
from models.patient import Patient
from models.principal import ADMIN, DOCTOR, PATIENT, Principal
from services.doctor_service import DoctorRepository
from services.patient_service import PatientRepository

logger = logging.getLogger(__name__)

# Fixed administrator credential, checked before any stored account
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

# Session-scoped key holding the logged-in doctor's display name
DOCTOR_SESSION_KEY = "doctorName"


@dataclass(frozen=True)
class LoginResult:
    role: str
    record: Optional[Union[Doctor, Patient]] = None

    def to_principal(self) -> Principal:
        if self.role == ADMIN:
            return Principal.admin()
        if self.role == DOCTOR:
            return Principal.doctor(self.record.full_name)
        return Principal.patient(self.record.national_id, self.record.full_name)


class IdentityService:
    def __init__(self, doctors: DoctorRepository, patients: PatientRepository,
                 session_store: KeyValueStore):
        self.doctors = doctors
        self.patients = patients
        self.session_store = session_store

    def login(self, username: str, password: str) -> Optional[LoginResult]:
        """Authenticate against admin, then doctors, then patients.

        Returns None for invalid credentials. Only a doctor login is
        remembered in the session store; admin and patient logins must be
        carried forward by the caller.
        """
        self.session_store.remove(DOCTOR_SESSION_KEY)

        if username == ADMIN_USERNAME and password == ADMIN_PASSWORD:
            logger.info("Admin login")
            return LoginResult(role=ADMIN)

        doctor = self.doctors.find_by_credentials(username, password)
        if doctor:
            self.session_store.set(DOCTOR_SESSION_KEY, doctor.full_name)
            logger.info("Doctor login: %s", doctor.national_id)
            return LoginResult(role=DOCTOR, record=doctor)

        patient = self.patients.find_by_credentials(username, password)
        if patient:
            logger.info("Patient login: %s", patient.national_id)
            return LoginResult(role=PATIENT, record=patient)

        logger.info("Invalid credentials for username %r", username)
        return None

    def current_doctor_session(self) -> Optional[str]:
        """Return the logged-in doctor's name, or None when not authenticated."""
        return self.session_store.get(DOCTOR_SESSION_KEY)

    def logout(self) -> None:
        self.session_store.remove(DOCTOR_SESSION_KEY)

    def find_user_by_national_id(self, national_id: str) -> Optional[LoginResult]:
        """Admin lookup by CI. Patients are checked first, then doctors."""
        national_id = (national_id or "").strip()
        if not national_id:
            return None

        patient = self.patients.find_by_national_id(national_id)
        if patient:
            return LoginResult(role=PATIENT, record=patient)

        doctor = self.doctors.find_by_national_id(national_id)
        if doctor:
            return LoginResult(role=DOCTOR, record=doctor)
        return None
