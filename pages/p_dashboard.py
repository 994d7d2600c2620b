import streamlit as st

from core.exceptions import MalformedStoredDataError
from core.helpers import (
    render_export_buttons,
    render_patient_info,
    render_patient_sidebar,
    render_visit_history,
)
from core.session_manager import require_role, get_services, logout


def main():
    principal = require_role("patient")
    render_patient_sidebar()

    services = get_services()

    # A patient only ever sees their own record
    national_id = principal.national_id

    try:
        patient = services.patients.find_by_national_id(national_id)
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    if patient is None:
        st.error("Error: No se pudo cargar el perfil.")
        if st.button("Volver al inicio"):
            logout()
        st.stop()

    st.title(f"Bienvenido, {patient.full_name}")

    render_patient_info(patient)
    st.write("---")
    render_visit_history(services, national_id, detailed=False)
    st.write("---")
    render_export_buttons(
        services, national_id,
        pdf_title=f"Mi Historial Clínico - Paciente ID: {national_id}",
        self_view=True,
    )


if __name__ == "__main__":
    main()
