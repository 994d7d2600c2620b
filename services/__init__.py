from dataclasses import dataclass

from core.storage import KeyValueStore
from .doctor_service import DoctorRepository
from .patient_service import PatientRepository
from .visit_service import VisitHistoryRepository
from .user_service import IdentityService
from .export_service import ExportService
from .seed_service import ensure_seeded


@dataclass
class ClinicServices:
    store: KeyValueStore
    doctors: DoctorRepository
    patients: PatientRepository
    visits: VisitHistoryRepository
    identity: IdentityService
    exports: ExportService

    def ensure_seeded(self) -> None:
        ensure_seeded(self.store)


def build_services(store: KeyValueStore, session_store: KeyValueStore) -> ClinicServices:
    """Wire every repository and service around one persistent store."""
    visits = VisitHistoryRepository(store)
    doctors = DoctorRepository(store)
    patients = PatientRepository(store, visits)
    return ClinicServices(
        store=store,
        doctors=doctors,
        patients=patients,
        visits=visits,
        identity=IdentityService(doctors, patients, session_store),
        exports=ExportService(patients, visits),
    )


__all__ = ["ClinicServices", "build_services", "ensure_seeded"]
