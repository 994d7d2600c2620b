import logging

from core.storage import KeyValueStore
from models.patient import Patient
from services.record_repository import RecordRepository
from services.visit_service import VisitHistoryRepository

logger = logging.getLogger(__name__)

PATIENTS_KEY = "pacientes_lista"


class PatientRepository(RecordRepository):
    key = PATIENTS_KEY
    model = Patient
    label = "paciente"

    def __init__(self, store: KeyValueStore, visits: VisitHistoryRepository = None):
        super().__init__(store)
        self.visits = visits or VisitHistoryRepository(store)

    def update(self, record_id: str, **changes):
        updated = super().update(record_id, **changes)

        # Keep the history attached to the patient if the CI was changed
        if updated.national_id != record_id:
            self.visits.move_history(record_id, updated.national_id)
        return updated

    def delete(self, national_id: str) -> None:
        super().delete(national_id)

        # Delete the history together with the patient
        self.visits.delete_all_for_patient(national_id)


def new_patient(full_name: str, national_id: str, password: str, *, age="", phone: str = "",
                email: str = "", allergies: str = "", username: str = None) -> Patient:
    """Build a patient as the add forms do: the username defaults to the CI."""
    return Patient(
        full_name=full_name,
        national_id=national_id,
        age=age,
        phone=phone,
        email=email,
        allergies=allergies,
        username=username or national_id,
        password=password,
    )
