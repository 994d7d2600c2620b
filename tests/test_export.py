import json
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from unittest import TestCase

from core.exceptions import RecordNotFoundError
from core.storage import MemoryKeyValueStore
from models.visit import VisitRecord
from services import build_services
from services.export_service import json_filename, pdf_filename, xml_filename
from services.patient_service import new_patient

EXPORTED_AT = datetime(2024, 5, 1, 10, 30, 0, 123000, tzinfo=timezone.utc)
DOCUMENT = b"%PDF-1.4 secret-document-bytes"


class ExportServiceTest(TestCase):
    def setUp(self):
        self.services = build_services(MemoryKeyValueStore(), MemoryKeyValueStore())
        self.services.ensure_seeded()
        self.exports = self.services.exports
        self.ci = "1315896547"

        self.services.visits.append(self.ci, VisitRecord(
            date="2024-03-01", reason="Fiebre", weight="70", blood_pressure="120/80",
            diagnosis="Gripe", treatment="Reposo", notes="Volver en\nuna semana",
        ))
        self.services.visits.append_with_document(
            self.ci, VisitRecord(date="2024-03-08", reason='Dolor "agudo"', notes="C:\\temp"),
            DOCUMENT, "application/pdf",
        )

    def test_json_payload(self):
        payload = self.exports.export_patient_as_json(self.ci, exported_at=EXPORTED_AT)
        data = json.loads(payload)

        self.assertEqual(data["info_paciente"], {
            "nombre": "Carlos Andrade Vera",
            "ci": "1315896547",
            "edad": 34,
            "telefono": "0987654321",
            "email": "candrade@email.com",
            "alergias": "Penicilina",
        })
        history = data["historial_medico"]
        self.assertEqual([v["id_encuentro"] for v in history], [1, 2])
        self.assertEqual(history[0]["observaciones"], "Volver en una semana")
        self.assertEqual(history[0]["presion_arterial"], "120/80")
        self.assertEqual(history[0]["tiene_documento_adjunto"], "No")
        self.assertEqual(history[1]["motivo"], 'Dolor "agudo"')
        self.assertEqual(history[1]["observaciones"], "C:\\temp")
        self.assertEqual(history[1]["tiene_documento_adjunto"], "Si")
        self.assertEqual(data["metadata"], {
            "fecha_exportacion": "2024-05-01T10:30:00.123Z",
            "total_encuentros": 2,
        })

    def test_json_excludes_credentials_and_document_bytes(self):
        payload = self.exports.export_patient_as_json(self.ci)
        self.assertNotIn("usuario", payload)
        self.assertNotIn("password", payload)
        self.assertNotIn("base64", payload)
        self.assertNotIn("secret-document-bytes", payload)

    def test_json_defaults_for_empty_fields(self):
        self.services.patients.create(new_patient("Sin Datos", "1300000001", "pw", age="40"))
        data = json.loads(self.exports.export_patient_as_json("1300000001"))
        self.assertEqual(data["info_paciente"]["edad"], 40)
        self.assertEqual(data["info_paciente"]["telefono"], "N/A")
        self.assertEqual(data["info_paciente"]["email"], "N/A")
        self.assertEqual(data["info_paciente"]["alergias"], "Ninguna")
        self.assertEqual(data["historial_medico"], [])
        self.assertEqual(data["metadata"]["total_encuentros"], 0)

    def test_json_non_numeric_age_is_quoted(self):
        self.services.patients.create(new_patient("Edad Rara", "1300000002", "pw", age=""))
        data = json.loads(self.exports.export_patient_as_json("1300000002"))
        self.assertEqual(data["info_paciente"]["edad"], "")

    def test_xml_payload(self):
        payload = self.exports.export_patient_as_xml(self.ci, exported_at=EXPORTED_AT)
        self.assertTrue(payload.startswith('<?xml version="1.0" encoding="UTF-8"?>\n'))

        root = ET.fromstring(payload.encode("utf-8"))
        self.assertEqual(root.tag, "expediente_medico")
        self.assertEqual(root.findtext("datos_paciente/nombre"), "Carlos Andrade Vera")
        self.assertEqual(root.findtext("datos_paciente/edad"), "34")
        self.assertIsNone(root.find("datos_paciente/usuario"))

        visits = root.findall("historial_encuentros/encuentro")
        self.assertEqual([v.get("id") for v in visits], ["1", "2"])
        self.assertEqual(visits[0].findtext("documento_adjunto"), "No")
        self.assertEqual(visits[1].findtext("documento_adjunto"), "Si (PDF disponible en sistema)")
        self.assertEqual(root.findtext("metadata/total_encuentros"), "2")
        self.assertEqual(root.findtext("metadata/fecha_exportacion"), "2024-05-01T10:30:00.123Z")
        self.assertNotIn("secret-document-bytes", payload)

    def test_xml_without_visits(self):
        payload = self.exports.export_patient_as_xml("1309874563")
        root = ET.fromstring(payload.encode("utf-8"))
        self.assertEqual(root.findtext("historial_encuentros/nota"), "Sin encuentros registrados")
        self.assertEqual(root.findtext("metadata/total_encuentros"), "0")

    def test_xml_values_are_not_escaped(self):
        # Known limitation: markup in a field reaches the payload verbatim
        self.services.visits.append("1309874563", VisitRecord(date="2024-01-01", reason="a < b & c"))
        payload = self.exports.export_patient_as_xml("1309874563")
        self.assertIn("<motivo>a < b & c</motivo>", payload)

    def test_unknown_patient(self):
        with self.assertRaises(RecordNotFoundError):
            self.exports.export_patient_as_json("0000000000")
        with self.assertRaises(RecordNotFoundError):
            self.exports.export_patient_as_xml("0000000000")

    def test_visit_count_matches_appends(self):
        for i in range(5):
            self.services.visits.append("1311223344", VisitRecord(date=f"2024-01-0{i + 1}"))
        data = json.loads(self.exports.export_patient_as_json("1311223344"))
        self.assertEqual(data["metadata"]["total_encuentros"], 5)
        self.assertEqual(len(data["historial_medico"]), 5)

    def test_filenames(self):
        self.assertEqual(json_filename(self.ci), "paciente-1315896547.json")
        self.assertEqual(xml_filename(self.ci), "paciente-1315896547-completo.xml")
        self.assertEqual(pdf_filename(self.ci), "historial-paciente-1315896547.pdf")

    def test_self_view_filenames(self):
        self.assertEqual(json_filename(self.ci, self_view=True), "mi-historial-1315896547.json")
        self.assertEqual(xml_filename(self.ci, self_view=True), "mi-historial-1315896547.xml")
        self.assertEqual(pdf_filename(self.ci, self_view=True), "mi-historial-1315896547.pdf")

    def test_self_view_xml_document_flag(self):
        payload = self.exports.export_patient_as_xml(self.ci, exported_at=EXPORTED_AT, self_view=True)
        root = ET.fromstring(payload.encode("utf-8"))
        flags = [v.findtext("documento_adjunto") for v in root.findall("historial_encuentros/encuentro")]
        self.assertEqual(flags, ["No", "Si"])
        self.assertEqual(root.findtext("metadata/total_encuentros"), "2")
