from types import SimpleNamespace
from unittest import TestCase
from unittest.mock import Mock, patch

import app
from core import session_manager
from core.session_manager import StreamlitSessionStore
from core.storage import MemoryKeyValueStore
from models.principal import Principal
from services import build_services
from services.doctor_service import DOCTORS_KEY
from services.user_service import DOCTOR_SESSION_KEY


class PageSwitched(Exception):
    def __init__(self, page):
        super().__init__(page)
        self.page = page


class FakeSessionState(dict):
    """Dict with attribute access, like ``st.session_state``."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


def fake_streamlit():
    def switch_page(page):
        raise PageSwitched(page)

    return SimpleNamespace(
        session_state=FakeSessionState(),
        query_params={},
        switch_page=switch_page,
        warning=Mock(),
        error=Mock(),
    )


class StreamlitTestCase(TestCase):
    def setUp(self):
        self.st = fake_streamlit()
        self.store = MemoryKeyValueStore()
        self.services = build_services(self.store, StreamlitSessionStore())

        for target, value in (
            ("core.session_manager.st", self.st),
            ("core.session_manager.get_services", lambda: self.services),
            ("app.st", self.st),
        ):
            patcher = patch(target, value)
            patcher.start()
            self.addCleanup(patcher.stop)

        self.services.ensure_seeded()

    def login_as_doctor(self):
        result = self.services.identity.login("doctor", "12345")
        session_manager.login(result.to_principal())


class CurrentPrincipalTest(StreamlitTestCase):
    def test_no_session(self):
        self.assertIsNone(session_manager.current_principal())

    def test_admin_principal_is_kept(self):
        session_manager.login(Principal.admin())
        self.assertEqual(session_manager.current_principal(), Principal.admin())

    def test_doctor_principal_while_name_present(self):
        self.login_as_doctor()
        self.assertEqual(session_manager.current_principal(), Principal.doctor("Dr. (Sistema)"))

    def test_doctor_principal_without_name_is_rejected(self):
        self.login_as_doctor()
        del self.st.session_state[DOCTOR_SESSION_KEY]
        self.assertIsNone(session_manager.current_principal())

    def test_doctor_name_is_read_from_session(self):
        self.login_as_doctor()
        self.st.session_state[DOCTOR_SESSION_KEY] = "Dra. Vera"
        self.assertEqual(session_manager.current_principal().name, "Dra. Vera")


class RequireRoleTest(StreamlitTestCase):
    def test_matching_role(self):
        session_manager.login(Principal.admin())
        self.assertTrue(session_manager.require_role("admin").is_admin)

    def test_missing_session_redirects_to_login(self):
        with self.assertRaises(PageSwitched) as ctx:
            session_manager.require_role("admin")
        self.assertEqual(ctx.exception.page, "app.py")
        self.st.warning.assert_called_once()

    def test_role_mismatch_redirects_to_login(self):
        session_manager.login(Principal.patient("1315896547"))
        with self.assertRaises(PageSwitched) as ctx:
            session_manager.require_role("admin", "doctor")
        self.assertEqual(ctx.exception.page, "app.py")
        self.st.error.assert_called_once_with("Acceso denegado.")

    def test_doctor_without_name_redirects_to_login(self):
        self.login_as_doctor()
        self.services.identity.logout()
        with self.assertRaises(PageSwitched) as ctx:
            session_manager.require_role("doctor")
        self.assertEqual(ctx.exception.page, "app.py")


class NavigationTest(StreamlitTestCase):
    def test_selected_id_prefers_query_string(self):
        self.st.query_params["id"] = " 1315896547 "
        self.st.session_state["selected_id"] = "1309874563"
        self.assertEqual(session_manager.selected_id(), "1315896547")

    def test_selected_id_falls_back_to_session(self):
        self.st.session_state["selected_id"] = "1309874563"
        self.assertEqual(session_manager.selected_id(), "1309874563")

    def test_selected_id_missing(self):
        self.assertIsNone(session_manager.selected_id())

    def test_go_to_carries_and_clears_id(self):
        with self.assertRaises(PageSwitched) as ctx:
            session_manager.go_to("pages/d_patient_profile.py", "1315896547")
        self.assertEqual(ctx.exception.page, "pages/d_patient_profile.py")
        self.assertEqual(self.st.session_state["selected_id"], "1315896547")

        with self.assertRaises(PageSwitched):
            session_manager.go_to("pages/d_dashboard.py")
        self.assertNotIn("selected_id", self.st.session_state)

    def test_logout_clears_session(self):
        self.login_as_doctor()
        self.st.session_state["selected_id"] = "1315896547"
        self.st.query_params["id"] = "1315896547"

        with self.assertRaises(PageSwitched) as ctx:
            session_manager.logout()

        self.assertEqual(ctx.exception.page, "app.py")
        self.assertNotIn("principal", self.st.session_state)
        self.assertNotIn("selected_id", self.st.session_state)
        self.assertNotIn(DOCTOR_SESSION_KEY, self.st.session_state)
        self.assertEqual(self.st.query_params, {})


class LoginPageTest(StreamlitTestCase):
    def test_patient_login(self):
        principal = app.handle_login(self.services, "1315896547", "123")

        self.assertEqual(principal, Principal.patient("1315896547", "Carlos Andrade Vera"))
        self.assertEqual(self.st.session_state["principal"], principal)
        self.assertEqual(app.LANDING_PAGES[principal.role], "pages/p_dashboard.py")

    def test_invalid_credentials(self):
        self.assertIsNone(app.handle_login(self.services, "1315896547", "mal"))
        self.st.error.assert_called_once_with("Usuario o contraseña incorrectos.")
        self.assertNotIn("principal", self.st.session_state)

    def test_unreadable_doctor_list_is_reported(self):
        self.store.set(DOCTORS_KEY, "{broken")

        self.assertIsNone(app.handle_login(self.services, "1315896547", "123"))

        self.st.error.assert_called_once()
        self.assertIn("doctores_lista", self.st.error.call_args[0][0])
        self.assertNotIn("principal", self.st.session_state)

    def test_new_attempt_drops_previous_doctor_session(self):
        self.login_as_doctor()
        app.handle_login(self.services, "admin", "admin123")

        self.assertNotIn(DOCTOR_SESSION_KEY, self.st.session_state)
        self.assertEqual(session_manager.current_principal(), Principal.admin())
