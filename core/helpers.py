import streamlit as st

from core.exceptions import ClinicError, MalformedStoredDataError
from services.export_service import json_filename, pdf_filename, xml_filename
from services.visit_service import decode_attachment


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def hide_sidebar_completely():
    """Completely hide Streamlit's sidebar and the toggle control.

    Used on the login page where navigation should not be visible.
    """
    st.markdown(
        """
        <style>
        [data-testid="stSidebar"] { display: none !important; }
        [data-testid="collapsedControl"] { display: none !important; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _logout_button():
    st.divider()
    if st.button("Cerrar Sesión", use_container_width=True):
        from core.session_manager import logout
        logout()


def render_admin_sidebar():
    """Admin menu: user list, add user, logout."""
    hide_default_sidebar_nav()
    from core.session_manager import go_to
    with st.sidebar:
        st.markdown("### Administrador")
        if st.button("Usuarios", use_container_width=True):
            go_to("pages/a_dashboard.py")
        if st.button("Agregar Usuario", use_container_width=True):
            go_to("pages/a_add_user.py")
        _logout_button()


def render_doctor_sidebar(doctor_name: str):
    """Doctor menu: patient list, add patient, logout."""
    hide_default_sidebar_nav()
    from core.session_manager import go_to
    with st.sidebar:
        st.markdown(f"### {doctor_name}")
        if st.button("Pacientes", use_container_width=True):
            go_to("pages/d_dashboard.py")
        if st.button("Agregar Paciente", use_container_width=True):
            go_to("pages/d_add_patient.py")
        _logout_button()


def render_patient_sidebar():
    """Patient sidebar with Logout only, hiding default nav."""
    hide_default_sidebar_nav()
    with st.sidebar:
        _logout_button()


# -----------------------------
# Shared patient widgets
# -----------------------------
def render_patient_info(patient):
    st.subheader("Datos Personales")
    left, right = st.columns(2)
    with left:
        st.write(f"**Nombre:** {patient.full_name}")
        st.write(f"**CI:** {patient.national_id}")
        st.write(f"**Edad:** {patient.age}")
    with right:
        st.write(f"**Teléfono:** {patient.phone or 'N/A'}")
        st.write(f"**Email:** {patient.email or 'N/A'}")
        st.write(f"**Alergias:** {patient.allergies or 'Ninguna'}")


def render_visit_history(services, national_id: str, detailed: bool = True):
    """Visit table for doctor/admin (detailed) and patient views.

    An unreadable history is shown inline instead of failing the page.
    """
    st.subheader("Historial de Encuentros")
    try:
        visits = services.visits.list_for_patient(national_id)
    except MalformedStoredDataError:
        st.error("Error al leer el historial.")
        return []

    if not visits:
        st.info("No hay encuentros registrados.")
        return visits

    rows = []
    for v in visits:
        row = {
            "Fecha": v.date or "N/A",
            "Motivo": v.reason or "N/A",
            "Diagnóstico": v.diagnosis or "N/A",
            "Tratamiento": v.treatment or "N/A",
            "Peso": v.weight or "N/A",
        }
        if detailed:
            row["Presión"] = v.blood_pressure or "N/A"
            row["Observaciones"] = v.notes or "N/A"
        row["Documento"] = "Sí" if v.has_document else "Sin Documento"
        rows.append(row)
    st.dataframe(rows, use_container_width=True, hide_index=True)

    for index, v in enumerate(visits):
        if not v.has_document:
            continue
        try:
            mime_type, content = decode_attachment(v.attached_document)
        except ValueError:
            st.caption(f"Encuentro #{index + 1}: documento ilegible.")
            continue
        st.download_button(
            f"Descargar PDF - Encuentro #{index + 1} ({v.date or 'N/A'})",
            data=content,
            file_name=f"encuentro-{v.date}.pdf",
            mime=mime_type,
            key=f"visit_doc_{index}",
        )
    return visits


def render_export_buttons(services, national_id: str, pdf_title: str = None, self_view: bool = False):
    """PDF / JSON / XML downloads for one patient. ``self_view`` is the patient's own page."""
    st.subheader("Exportar")
    c1, c2, c3 = st.columns(3)

    with c1:
        try:
            pdf = services.exports.export_patient_as_pdf(national_id, title=pdf_title)
            st.download_button("Descargar PDF", data=pdf, file_name=pdf_filename(national_id, self_view),
                               mime="application/pdf", use_container_width=True)
        except ClinicError as e:
            st.caption(str(e))

    with c2:
        try:
            payload = services.exports.export_patient_as_json(national_id)
            st.download_button("Exportar JSON", data=payload, file_name=json_filename(national_id, self_view),
                               mime="application/json", use_container_width=True)
        except ClinicError as e:
            st.caption(str(e))

    with c3:
        try:
            payload = services.exports.export_patient_as_xml(national_id, self_view=self_view)
            st.download_button("Exportar XML", data=payload, file_name=xml_filename(national_id, self_view),
                               mime="application/xml", use_container_width=True)
        except ClinicError as e:
            st.caption(str(e))
