import streamlit as st

from core.exceptions import ClinicError
from core.helpers import render_admin_sidebar
from core.session_manager import require_role, get_services, go_to
from core.validators import validate_doctor, validate_patient
from models.doctor import Doctor
from services.patient_service import new_patient


def main():
    require_role("admin")
    render_admin_sidebar()

    services = get_services()

    st.title("Agregar Usuario")

    role = st.selectbox("Rol", ["Doctor", "Paciente"])

    with st.form("add_user_form"):
        full_name = st.text_input("Nombre Completo")
        national_id = st.text_input("Cédula (CI)", max_chars=10).strip()
        phone = st.text_input("Teléfono").strip()

        if role == "Paciente":
            age = st.number_input("Edad", min_value=0, max_value=130, step=1)
            email = st.text_input("Email").strip()
            allergies = st.text_input("Alergias")

        username = st.text_input("Usuario", placeholder="Por defecto, la cédula").strip()
        password = st.text_input("Contraseña", type="password")
        submitted = st.form_submit_button("Guardar Usuario")

    if not submitted:
        return

    try:
        if role == "Paciente":
            patient = new_patient(
                full_name.strip(), national_id, password,
                age=int(age), phone=phone, email=email, allergies=allergies,
                username=username,
            )
            validate_patient(patient)
            services.patients.create(patient)
        else:
            doctor = Doctor(
                full_name=full_name.strip(),
                national_id=national_id,
                phone=phone,
                username=username or national_id,
                password=password,
            )
            validate_doctor(doctor)
            services.doctors.create(doctor)
    except ClinicError as e:
        st.error(str(e))
        return

    st.success("¡Usuario agregado exitosamente!")
    go_to("pages/a_dashboard.py")


if __name__ == "__main__":
    main()
