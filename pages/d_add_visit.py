import datetime

import streamlit as st

from core.exceptions import ClinicError, MalformedStoredDataError
from core.helpers import render_doctor_sidebar
from core.session_manager import require_role, get_services, go_to, selected_id
from models.visit import VisitRecord


def main():
    principal = require_role("doctor")
    render_doctor_sidebar(principal.name)

    services = get_services()
    national_id = selected_id()

    if not national_id:
        go_to("pages/d_dashboard.py")

    try:
        patient = services.patients.find_by_national_id(national_id)
    except MalformedStoredDataError as e:
        st.error(str(e))
        st.stop()

    if patient is None:
        st.error("Paciente no encontrado.")
        if st.button("Volver"):
            go_to("pages/d_dashboard.py")
        st.stop()

    st.title("Nuevo Encuentro")
    st.caption(f"{patient.full_name} (CI: {patient.national_id})")

    with st.form("visit_form"):
        date = st.date_input("Fecha", value=datetime.date.today())
        reason = st.text_input("Motivo de Consulta")
        c1, c2 = st.columns(2)
        with c1:
            weight = st.text_input("Peso (kg)")
        with c2:
            blood_pressure = st.text_input("Presión Arterial", placeholder="120/80")
        diagnosis = st.text_area("Diagnóstico")
        treatment = st.text_area("Tratamiento")
        notes = st.text_area("Observaciones")
        upload = st.file_uploader("Documento PDF (opcional)", type=["pdf"])
        submitted = st.form_submit_button("Guardar Encuentro")

    if submitted:
        record = VisitRecord(
            date=date.isoformat(),
            reason=reason,
            weight=weight,
            blood_pressure=blood_pressure,
            diagnosis=diagnosis,
            treatment=treatment,
            notes=notes,
        )
        try:
            # The upload is read in full before anything is written
            content = upload.getvalue() if upload is not None else None
            services.visits.append_with_document(
                national_id, record, content, upload.type if upload is not None else None
            )
        except ClinicError as e:
            st.error(str(e))
        else:
            st.success("¡Encuentro agregado exitosamente!")
            go_to("pages/d_patient_profile.py", national_id)

    if st.button("Regresar"):
        go_to("pages/d_patient_profile.py", national_id)


if __name__ == "__main__":
    main()
