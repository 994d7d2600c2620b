"""
Patient record export (JSON, XML, PDF).

JSON and XML payloads are assembled by hand, field by field, so the output
layout stays identical to the files the clinic already exchanges. Attached
documents are only ever reported as present/absent.
"""

import logging
import re

from core.exceptions import RecordNotFoundError
from core.time_utils import iso_timestamp
from services.patient_service import PatientRepository
from services.pdf_service import render_history_pdf
from services.visit_service import VisitHistoryRepository

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")
_DIGITS = re.compile(r"[0-9]+")


# Patients downloading their own record get "mi-historial-" names
def json_filename(national_id: str, self_view: bool = False) -> str:
    if self_view:
        return f"mi-historial-{national_id}.json"
    return f"paciente-{national_id}.json"


def xml_filename(national_id: str, self_view: bool = False) -> str:
    if self_view:
        return f"mi-historial-{national_id}.xml"
    return f"paciente-{national_id}-completo.xml"


def pdf_filename(national_id: str, self_view: bool = False) -> str:
    if self_view:
        return f"mi-historial-{national_id}.pdf"
    return f"historial-paciente-{national_id}.pdf"


def _clean(value) -> str:
    """Escape a value for a JSON string literal. Line breaks become spaces."""
    if value is None or value == "":
        return ""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return _CONTROL_CHARS.sub(" ", text)


def _json_age(age) -> str:
    if isinstance(age, int) and not isinstance(age, bool):
        return str(age)
    if isinstance(age, str) and _DIGITS.fullmatch(age):
        return str(int(age))
    return f'"{_clean(age)}"'


class ExportService:
    def __init__(self, patients: PatientRepository, visits: VisitHistoryRepository):
        self.patients = patients
        self.visits = visits

    def _load(self, national_id: str):
        patient = self.patients.find_by_national_id(national_id)
        if patient is None:
            raise RecordNotFoundError(
                "No se encontraron datos del paciente para exportar.", national_id
            )
        return patient, self.visits.list_for_patient(national_id)

    # -----------------------------
    # JSON
    # -----------------------------
    def export_patient_as_json(self, national_id: str, exported_at=None) -> str:
        patient, visits = self._load(national_id)

        out = "{\n"
        out += '    "info_paciente": {\n'
        out += f'        "nombre": "{_clean(patient.full_name)}",\n'
        out += f'        "ci": "{_clean(patient.national_id)}",\n'
        out += f'        "edad": {_json_age(patient.age)},\n'
        out += f'        "telefono": "{_clean(patient.phone or "N/A")}",\n'
        out += f'        "email": "{_clean(patient.email or "N/A")}",\n'
        out += f'        "alergias": "{_clean(patient.allergies or "Ninguna")}"\n'
        out += "    },\n"

        out += '    "historial_medico": [\n'
        for index, visit in enumerate(visits):
            out += "        {\n"
            out += f'            "id_encuentro": {index + 1},\n'
            out += f'            "fecha": "{_clean(visit.date)}",\n'
            out += f'            "motivo": "{_clean(visit.reason)}",\n'
            out += f'            "peso_kg": "{_clean(visit.weight)}",\n'
            out += f'            "presion_arterial": "{_clean(visit.blood_pressure)}",\n'
            out += f'            "diagnostico": "{_clean(visit.diagnosis)}",\n'
            out += f'            "tratamiento": "{_clean(visit.treatment)}",\n'
            out += f'            "observaciones": "{_clean(visit.notes)}",\n'
            out += f'            "tiene_documento_adjunto": "{"Si" if visit.has_document else "No"}"\n'
            out += "        },\n" if index < len(visits) - 1 else "        }\n"
        out += "    ],\n"

        out += '    "metadata": {\n'
        out += f'        "fecha_exportacion": "{iso_timestamp(exported_at)}",\n'
        out += f'        "total_encuentros": {len(visits)}\n'
        out += "    }\n"
        out += "}"

        logger.info("Exported JSON for %s (%d visits)", national_id, len(visits))
        return out

    # -----------------------------
    # XML
    # -----------------------------
    def export_patient_as_xml(self, national_id: str, exported_at=None, self_view: bool = False) -> str:
        # Values are interpolated as-is: markup characters in a field are not escaped
        patient, visits = self._load(national_id)

        out = '<?xml version="1.0" encoding="UTF-8"?>\n'
        out += "<expediente_medico>\n"

        out += "  <datos_paciente>\n"
        out += f"    <nombre>{patient.full_name}</nombre>\n"
        out += f"    <ci>{patient.national_id}</ci>\n"
        out += f"    <edad>{patient.age}</edad>\n"
        out += f"    <telefono>{patient.phone or 'N/A'}</telefono>\n"
        out += f"    <email>{patient.email or 'N/A'}</email>\n"
        out += f"    <alergias>{patient.allergies or 'Ninguna'}</alergias>\n"
        out += "  </datos_paciente>\n"

        out += "  <historial_encuentros>\n"
        if not visits:
            out += "    <nota>Sin encuentros registrados</nota>\n"
        for index, visit in enumerate(visits):
            if not visit.has_document:
                document = "No"
            elif self_view:
                document = "Si"
            else:
                document = "Si (PDF disponible en sistema)"
            out += f'    <encuentro id="{index + 1}">\n'
            out += f"      <fecha>{visit.date}</fecha>\n"
            out += f"      <motivo>{visit.reason}</motivo>\n"
            out += f"      <peso_kg>{visit.weight}</peso_kg>\n"
            out += f"      <presion_arterial>{visit.blood_pressure}</presion_arterial>\n"
            out += f"      <diagnostico>{visit.diagnosis}</diagnostico>\n"
            out += f"      <tratamiento>{visit.treatment}</tratamiento>\n"
            out += f"      <observaciones>{visit.notes}</observaciones>\n"
            out += f"      <documento_adjunto>{document}</documento_adjunto>\n"
            out += "    </encuentro>\n"
        out += "  </historial_encuentros>\n"

        out += "  <metadata>\n"
        out += f"    <fecha_exportacion>{iso_timestamp(exported_at)}</fecha_exportacion>\n"
        out += f"    <total_encuentros>{len(visits)}</total_encuentros>\n"
        out += "  </metadata>\n"
        out += "</expediente_medico>"

        logger.info("Exported XML for %s (%d visits)", national_id, len(visits))
        return out

    # -----------------------------
    # PDF
    # -----------------------------
    def export_patient_as_pdf(self, national_id: str, title: str = None) -> bytes:
        """Paginated visit history. Raises RecordNotFoundError when there are no visits."""
        visits = self.visits.list_for_patient(national_id)
        if not visits:
            raise RecordNotFoundError("No hay encuentros para descargar.", national_id)

        title = title or f"Historial Clínico - Paciente ID: {national_id}"
        content = render_history_pdf(visits, title)
        logger.info("Exported PDF for %s (%d visits)", national_id, len(visits))
        return content
