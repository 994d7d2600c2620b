from .doctor import Doctor
from .patient import Patient
from .visit import VisitRecord
from .principal import Principal
from .store_entry import StoreEntry

__all__ = ["Doctor", "Patient", "VisitRecord", "Principal", "StoreEntry"]
