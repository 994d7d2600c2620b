import streamlit as st
from streamlit_searchbox import st_searchbox

from core.exceptions import MalformedStoredDataError
from core.helpers import render_admin_sidebar
from core.session_manager import require_role, get_services, go_to


def main():
    require_role("admin")
    render_admin_sidebar()

    services = get_services()
    services.ensure_seeded()

    st.title("Gestión de Usuarios")

    try:
        doctors = services.doctors.list_all()
        patients = services.patients.list_all()
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    # Search by CI (patients first, then doctors)
    def lookup(term: str):
        term = (term or "").strip()
        if not term:
            return []
        options = [(f"Paciente · {p.full_name} (CI: {p.national_id})", p.national_id)
                   for p in patients if p.national_id.startswith(term)]
        options += [(f"Doctor · {d.full_name} (CI: {d.national_id})", d.national_id)
                    for d in doctors if d.national_id.startswith(term)]
        return options[:10]

    selected = st_searchbox(
        lookup,
        key="admin_user_search",
        placeholder="Buscar usuario por cédula (CI)",
    )
    if selected:
        match = services.identity.find_user_by_national_id(selected)
        if match is None:
            st.error("No existe un usuario con esa cédula.")
        elif match.role == "patient":
            go_to("pages/a_edit_patient.py", match.record.national_id)
        else:
            go_to("pages/a_edit_doctor.py", match.record.national_id)

    st.write("---")

    if not doctors and not patients:
        st.info("No hay usuarios registrados.")
        return

    header = st.columns([1, 3, 3, 2, 2])
    for col, label in zip(header, ["Rol", "Nombre", "Usuario / CI", "Teléfono", ""]):
        col.markdown(f"**{label}**")

    for d in doctors:
        cols = st.columns([1, 3, 3, 2, 2])
        cols[0].write("Doctor")
        cols[1].write(d.full_name)
        cols[2].write(f"{d.username} (CI: {d.national_id})")
        cols[3].write(d.phone or "N/A")
        if cols[4].button("Modificar", key=f"edit_doc_{d.national_id}"):
            go_to("pages/a_edit_doctor.py", d.national_id)

    for p in patients:
        cols = st.columns([1, 3, 3, 2, 2])
        cols[0].write("Paciente")
        cols[1].write(p.full_name)
        cols[2].write(p.national_id)
        cols[3].write(p.phone or "N/A")
        with cols[4]:
            if st.button("Modificar", key=f"edit_pat_{p.national_id}"):
                go_to("pages/a_edit_patient.py", p.national_id)
            if st.button("Ver Perfil", key=f"view_pat_{p.national_id}"):
                go_to("pages/d_patient_profile.py", p.national_id)


if __name__ == "__main__":
    main()
