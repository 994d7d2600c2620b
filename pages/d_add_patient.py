import streamlit as st

from core.exceptions import ClinicError
from core.helpers import render_doctor_sidebar
from core.session_manager import require_role, get_services, go_to
from core.validators import validate_patient
from services.patient_service import new_patient


def main():
    principal = require_role("doctor")
    render_doctor_sidebar(principal.name)

    services = get_services()

    st.title("Agregar Paciente")

    with st.form("add_patient_form"):
        full_name = st.text_input("Nombre Completo")
        national_id = st.text_input("Cédula (CI)", max_chars=10).strip()
        age = st.number_input("Edad", min_value=0, max_value=130, step=1)
        phone = st.text_input("Teléfono").strip()
        email = st.text_input("Email").strip()
        allergies = st.text_input("Alergias")
        st.caption("El usuario del paciente será su cédula.")
        password = st.text_input("Contraseña", type="password")
        submitted = st.form_submit_button("Guardar Paciente")

    if not submitted:
        return

    patient = new_patient(
        full_name.strip(), national_id, password,
        age=int(age), phone=phone, email=email, allergies=allergies,
    )
    try:
        validate_patient(patient)
        services.patients.create(patient)
    except ClinicError as e:
        st.error(str(e))
        return

    st.success("¡Paciente agregado exitosamente!")
    go_to("pages/d_dashboard.py")


if __name__ == "__main__":
    main()
