"""Patient profile shared by the doctor and admin views.

Admins get a read-only view; doctors can add encounters.
"""

import streamlit as st

from core.exceptions import MalformedStoredDataError
from core.helpers import (
    render_admin_sidebar,
    render_doctor_sidebar,
    render_export_buttons,
    render_patient_info,
    render_visit_history,
)
from core.session_manager import require_role, get_services, go_to, selected_id


def main():
    principal = require_role("doctor", "admin")
    if principal.is_admin:
        render_admin_sidebar()
        back_page = "pages/a_dashboard.py"
    else:
        render_doctor_sidebar(principal.name)
        back_page = "pages/d_dashboard.py"

    services = get_services()
    national_id = selected_id()

    if not national_id:
        st.error("Error: No se especificó un paciente.")
        if st.button("Volver"):
            go_to(back_page)
        st.stop()

    try:
        patient = services.patients.find_by_national_id(national_id)
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    st.title("Perfil del Paciente")

    if patient is None:
        st.error("Error: Paciente no encontrado")
        if st.button("Volver"):
            go_to(back_page)
        st.stop()

    render_patient_info(patient)
    st.write("---")

    if principal.is_doctor:
        if st.button("Agregar Encuentro", type="primary"):
            go_to("pages/d_add_visit.py", national_id)

    render_visit_history(services, national_id, detailed=True)
    st.write("---")
    render_export_buttons(services, national_id)

    st.write("---")
    if st.button("Volver"):
        go_to(back_page)


if __name__ == "__main__":
    main()
