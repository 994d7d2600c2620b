import streamlit as st

from core.database import init_db
from core.storage import KeyValueStore, SqlKeyValueStore
from models.principal import Principal


class StreamlitSessionStore(KeyValueStore):
    """Session-scoped store: lives as long as the browser tab's session."""

    def get(self, key: str):
        return st.session_state.get(key)

    def set(self, key: str, value: str) -> None:
        st.session_state[key] = value

    def remove(self, key: str) -> None:
        st.session_state.pop(key, None)


@st.cache_resource
def get_persistent_store() -> SqlKeyValueStore:
    """One persistent store per process."""
    init_db()
    return SqlKeyValueStore()


def get_services():
    from services import build_services

    return build_services(get_persistent_store(), StreamlitSessionStore())


def init_session_state():
    """Ensure required session keys exist."""
    if "principal" not in st.session_state:
        st.session_state.principal = None


def login(principal: Principal):
    """Persist the principal decoded from a successful login."""
    st.session_state.principal = principal


def clear_session():
    """Clear session without redirect."""
    st.session_state.pop("principal", None)
    st.session_state.pop("selected_id", None)
    get_services().identity.logout()


def logout():
    """Clear session and redirect to the login page."""
    clear_session()

    try:
        st.query_params.clear()
    except Exception:
        pass

    st.switch_page("app.py")


def go_to(page_path: str, national_id: str = None):
    """Switch page, carrying the record the next page operates on."""
    if national_id is None:
        st.session_state.pop("selected_id", None)
    else:
        st.session_state["selected_id"] = national_id
    st.switch_page(page_path)


def selected_id():
    """The ``id`` navigation parameter: query string first, then session state."""
    value = st.query_params.get("id") or st.session_state.get("selected_id")
    return value.strip() if value else None


def current_principal():
    """Decode the principal for this page run.

    A doctor principal only counts while the doctor's name is still in the
    session store.
    """
    init_session_state()
    principal = st.session_state.principal
    if principal is not None and principal.is_doctor:
        name = get_services().identity.current_doctor_session()
        if not name:
            return None
        principal = Principal.doctor(name)
    return principal


def require_role(*roles: str) -> Principal:
    """Restrict page by role; send unauthorized users to app.py."""
    principal = current_principal()

    if principal is None:
        st.warning("Sesión no encontrada. Por favor, inicie sesión.")
        st.switch_page("app.py")

    if principal.role not in roles:
        st.error("Acceso denegado.")
        st.switch_page("app.py")

    return principal
