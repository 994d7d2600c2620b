# models/store_entry.py

from sqlalchemy import Column, String, Text
from core.database import Base


class StoreEntry(Base):
    __tablename__ = "store_entries"

    # e.g. "pacientes_lista", "paciente_1315896547"
    key = Column(String, primary_key=True)

    # JSON text written by the caller; never interpreted here
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<StoreEntry {self.key}>"
