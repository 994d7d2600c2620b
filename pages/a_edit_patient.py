import dataclasses

import streamlit as st

from core.exceptions import ClinicError, MalformedStoredDataError
from core.helpers import render_admin_sidebar
from core.session_manager import require_role, get_services, go_to, selected_id
from core.validators import validate_changes
from models.patient import parse_age


def main():
    require_role("admin")
    render_admin_sidebar()

    services = get_services()
    national_id = selected_id()

    try:
        patient = services.patients.find_by_national_id(national_id) if national_id else None
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    if patient is None:
        st.error("ERROR: Paciente no encontrado.")
        if st.button("Volver"):
            go_to("pages/a_dashboard.py")
        st.stop()

    st.title("Modificar Paciente")

    with st.form("edit_patient_form"):
        full_name = st.text_input("Nombre Completo", value=patient.full_name)
        st.text_input("Cédula (CI)", value=patient.national_id, disabled=True)
        age = st.text_input("Edad", value=str(patient.age)).strip()
        phone = st.text_input("Teléfono", value=patient.phone).strip()
        email = st.text_input("Email", value=patient.email).strip()
        allergies = st.text_input("Alergias", value=patient.allergies)
        username = st.text_input("Usuario", value=patient.username).strip()
        password = st.text_input("Contraseña", value=patient.password, type="password")
        submitted = st.form_submit_button("Guardar Cambios")

    if submitted:
        changes = {
            "full_name": full_name,
            "age": parse_age(age),
            "phone": phone,
            "email": email,
            "allergies": allergies,
            "username": username,
            "password": password,
        }
        try:
            validate_changes(patient, dataclasses.replace(patient, **changes))
            services.patients.update(patient.national_id, **changes)
        except ClinicError as e:
            st.error(str(e))
        else:
            st.success("¡Paciente actualizado exitosamente!")
            go_to("pages/a_dashboard.py")

    st.write("---")
    with st.expander("Eliminar Paciente", expanded=False):
        st.warning(
            f"¿Está seguro de que desea eliminar a este paciente?\n\n"
            f"{patient.full_name} · CI: {patient.national_id}\n\n"
            "Esta acción también borrará todo su historial clínico y no se puede deshacer."
        )
        confirm = st.checkbox("Confirmo la eliminación", key="confirm_delete_patient")
        if st.button("Eliminar", type="secondary"):
            if not confirm:
                st.error("Marque la casilla de confirmación.")
            else:
                try:
                    services.patients.delete(patient.national_id)
                except ClinicError as e:
                    st.error(str(e))
                else:
                    st.success("Paciente eliminado exitosamente.")
                    go_to("pages/a_dashboard.py")


if __name__ == "__main__":
    main()
