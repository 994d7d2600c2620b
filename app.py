import logging

import streamlit as st

from core.config import SUPPORT_EMAIL, SUPPORT_PHONE
from core.exceptions import ClinicError
from core.helpers import hide_sidebar_completely
from core.logging_config import setup_logging
from core.session_manager import init_session_state, clear_session, login, get_services

logger = logging.getLogger(__name__)

LANDING_PAGES = {
    "admin": "pages/a_dashboard.py",
    "doctor": "pages/d_dashboard.py",
    "patient": "pages/p_dashboard.py",
}


def handle_login(services, username, password):
    """Run one login attempt and return the principal, or None after showing the error."""
    # Every attempt starts from a clean session
    clear_session()
    try:
        result = services.identity.login(username, password)
    except ClinicError as e:
        st.error(str(e))
        return None

    if result is None:
        st.error("Usuario o contraseña incorrectos.")
        return None

    principal = result.to_principal()
    login(principal)
    return principal


def main():
    st.set_page_config(
        page_title="Policlínico",
        page_icon="🩺",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    setup_logging()
    hide_sidebar_completely()
    init_session_state()

    services = get_services()

    st.title("Policlínico")
    st.write("Ingrese sus credenciales para continuar.")

    with st.form("login_form"):
        username = st.text_input("Usuario")
        password = st.text_input("Contraseña", type="password")
        submitted = st.form_submit_button("Iniciar Sesión")

    if submitted:
        principal = handle_login(services, username, password)
        if principal is not None:
            st.success("Inicio de sesión exitoso. Redirigiendo...")
            st.switch_page(LANDING_PAGES[principal.role])

    if st.button("Recuperar Contraseña"):
        st.info(
            "Para recuperar su contraseña, por favor contacte a soporte:\n\n"
            f"Correo: {SUPPORT_EMAIL}\n\n"
            f"Teléfono: {SUPPORT_PHONE}"
        )


if __name__ == "__main__":
    main()
