"""
Visit history as a paginated PDF.

Layout (A4, millimetres): a title line, then one block per visit with a
header line, labeled fields, the long-text fields wrapped to a fixed width,
and a horizontal separator. A new page starts before a block, or before a
wrapped line, whenever the cursor has passed PAGE_BREAK_Y.
"""

from typing import List

from fpdf import FPDF

from models.visit import VisitRecord

PAGE_BREAK_Y = 270
TOP_MARGIN = 10
TEXT_WIDTH = 180
LINE_HEIGHT = 5


def _latin1(text) -> str:
    """Core PDF fonts only cover Latin-1; anything else becomes '?'."""
    return str(text).encode("latin-1", "replace").decode("latin-1")


def _or_na(value) -> str:
    return value if value not in (None, "") else "N/A"


def wrap_text(pdf: FPDF, text: str, width: float = TEXT_WIDTH) -> List[str]:
    """Greedy word wrap using the current font; overlong words are split."""
    lines = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if pdf.get_string_width(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            while len(word) > 1 and pdf.get_string_width(word) > width:
                cut = len(word) - 1
                while cut > 1 and pdf.get_string_width(word[:cut]) > width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


def build_history_pdf(visits: List[VisitRecord], title: str) -> FPDF:
    pdf = FPDF(unit="mm", format="A4")
    pdf.set_auto_page_break(False)
    pdf.add_page()

    y = 15
    pdf.set_font("helvetica", "", 18)
    pdf.text(10, y, _latin1(title))
    y += 10

    for index, visit in enumerate(visits):
        if y > PAGE_BREAK_Y:
            pdf.add_page()
            y = TOP_MARGIN

        pdf.set_font("helvetica", "", 14)
        pdf.text(10, y, _latin1(f"Encuentro #{index + 1} - Fecha: {_or_na(visit.date)}"))
        y += 8

        pdf.set_font("helvetica", "", 10)
        pdf.text(15, y, _latin1(f"Motivo: {_or_na(visit.reason)}"))
        y += 6
        pdf.text(15, y, _latin1(f"Peso: {_or_na(visit.weight)} kg"))
        y += 6
        pdf.text(15, y, _latin1(f"Presión: {_or_na(visit.blood_pressure)}"))
        y += 6

        for label, value in (
            ("Diagnóstico", visit.diagnosis),
            ("Tratamiento", visit.treatment),
            ("Observaciones", visit.notes),
        ):
            for line in wrap_text(pdf, _latin1(f"{label}: {_or_na(value)}")):
                # Wrapped text may continue on the next page
                if y > PAGE_BREAK_Y:
                    pdf.add_page()
                    y = TOP_MARGIN
                pdf.text(15, y, line)
                y += LINE_HEIGHT
            y += 3

        y += 2
        pdf.line(10, y, 200, y)
        y += 7

    return pdf


def render_history_pdf(visits: List[VisitRecord], title: str) -> bytes:
    return bytes(build_history_pdf(visits, title).output())
