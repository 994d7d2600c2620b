import dataclasses

import streamlit as st

from core.exceptions import ClinicError, MalformedStoredDataError
from core.helpers import render_admin_sidebar
from core.session_manager import require_role, get_services, go_to, selected_id
from core.validators import validate_changes
from services.doctor_service import PROTECTED_USERNAME


def main():
    require_role("admin")
    render_admin_sidebar()

    services = get_services()
    national_id = selected_id()

    try:
        doctor = services.doctors.find_by_national_id(national_id) if national_id else None
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    if doctor is None:
        st.error("Doctor no encontrado.")
        if st.button("Volver"):
            go_to("pages/a_dashboard.py")
        st.stop()

    st.title("Modificar Doctor")

    with st.form("edit_doctor_form"):
        full_name = st.text_input("Nombre Completo", value=doctor.full_name)
        st.text_input("Cédula (CI)", value=doctor.national_id, disabled=True)
        phone = st.text_input("Teléfono", value=doctor.phone).strip()
        st.text_input("Usuario", value=doctor.username, disabled=True)
        password = st.text_input("Contraseña", value=doctor.password, type="password")
        submitted = st.form_submit_button("Guardar Cambios")

    if submitted:
        changes = {"full_name": full_name, "phone": phone, "password": password}
        try:
            validate_changes(doctor, dataclasses.replace(doctor, **changes))
            services.doctors.update(doctor.national_id, **changes)
        except ClinicError as e:
            st.error(str(e))
        else:
            st.success("¡Doctor actualizado exitosamente!")
            go_to("pages/a_dashboard.py")

    st.write("---")
    with st.expander("Eliminar Doctor", expanded=False):
        st.warning(
            f"¿Está seguro de que desea eliminar a este doctor?\n\n"
            f"{doctor.full_name} · Usuario: {doctor.username}\n\n"
            "Esta acción no se puede deshacer."
        )
        confirm = st.checkbox("Confirmo la eliminación", key="confirm_delete_doctor")
        if st.button("Eliminar", type="secondary"):
            if not confirm and doctor.username != PROTECTED_USERNAME:
                st.error("Marque la casilla de confirmación.")
            else:
                try:
                    services.doctors.delete(doctor.national_id)
                except ClinicError as e:
                    st.error(str(e))
                else:
                    st.success("Doctor eliminado exitosamente.")
                    go_to("pages/a_dashboard.py")


if __name__ == "__main__":
    main()
