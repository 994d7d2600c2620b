import streamlit as st
from streamlit_searchbox import st_searchbox

from core.exceptions import MalformedStoredDataError
from core.helpers import render_doctor_sidebar
from core.session_manager import require_role, get_services, go_to


def main():
    principal = require_role("doctor")
    render_doctor_sidebar(principal.name)

    services = get_services()
    services.ensure_seeded()

    st.title("Pacientes")
    st.caption(f"Bienvenido, {principal.name}")

    try:
        patients = services.patients.list_all()
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    def lookup(term: str):
        term = (term or "").strip()
        if not term:
            return []
        return [
            (f"{p.full_name} (CI: {p.national_id})", p.national_id)
            for p in patients
            if p.national_id.startswith(term)
        ][:10]

    selected = st_searchbox(
        lookup,
        key="doctor_patient_search",
        placeholder="Buscar paciente por cédula (CI)",
    )
    if selected:
        if services.patients.find_by_national_id(selected):
            go_to("pages/d_patient_profile.py", selected)
        else:
            st.error("No existe un paciente con esa cédula.")

    st.write("---")

    if not patients:
        st.info("No hay pacientes registrados.")
        return

    header = st.columns([3, 2, 1, 2, 2])
    for col, label in zip(header, ["Nombre", "CI", "Edad", "Teléfono", ""]):
        col.markdown(f"**{label}**")

    for p in patients:
        cols = st.columns([3, 2, 1, 2, 2])
        cols[0].write(p.full_name)
        cols[1].write(p.national_id)
        cols[2].write(str(p.age))
        cols[3].write(p.phone or "N/A")
        if cols[4].button("Ver Perfil", key=f"profile_{p.national_id}"):
            go_to("pages/d_patient_profile.py", p.national_id)


if __name__ == "__main__":
    main()
