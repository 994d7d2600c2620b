import logging

from core.exceptions import ProtectedRecordError
from models.doctor import Doctor
from services.record_repository import RecordRepository

logger = logging.getLogger(__name__)

DOCTORS_KEY = "doctores_lista"

# The seeded system doctor can never be deleted
PROTECTED_USERNAME = "doctor"


class DoctorRepository(RecordRepository):
    key = DOCTORS_KEY
    model = Doctor
    label = "doctor"

    def delete(self, national_id: str) -> None:
        doctor = self.find_by_national_id(national_id)
        if doctor is not None and doctor.username == PROTECTED_USERNAME:
            logger.warning("Refused to delete protected doctor %s", national_id)
            raise ProtectedRecordError(
                'Error: No se puede eliminar al usuario "doctor" principal del sistema.'
            )
        super().delete(national_id)
