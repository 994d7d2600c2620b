"""Known race: two sessions sharing one persistent store.

There is no locking or versioning. Each mutation is a read-modify-write of
the whole collection, so interleaved writers lose updates (last write wins).
These tests pin that behavior down rather than hide it.
"""

from unittest import TestCase

from core.storage import MemoryKeyValueStore
from services import build_services
from services.patient_service import PATIENTS_KEY, new_patient


class InterleavingStore(MemoryKeyValueStore):
    """Runs ``before_write`` once, right before the next write to ``key``."""

    def __init__(self):
        super().__init__()
        self.before_write = None
        self.key = None

    def set(self, key, value):
        if key == self.key and self.before_write is not None:
            hook, self.before_write = self.before_write, None
            hook()
        super().set(key, value)


class LostUpdateTest(TestCase):
    def setUp(self):
        self.store = InterleavingStore()
        # Two tabs: same persistent store, separate session stores
        self.tab_a = build_services(self.store, MemoryKeyValueStore())
        self.tab_b = build_services(self.store, MemoryKeyValueStore())
        self.tab_a.ensure_seeded()

    def test_interleaved_creates_lose_one_write(self):
        self.store.key = PATIENTS_KEY
        self.store.before_write = lambda: self.tab_b.patients.create(
            new_patient("Desde Pestaña B", "1300000002", "pw")
        )

        self.tab_a.patients.create(new_patient("Desde Pestaña A", "1300000001", "pw"))

        ids = [p.national_id for p in self.tab_a.patients.list_all()]
        self.assertIn("1300000001", ids)
        # Tab B's create was silently overwritten
        self.assertNotIn("1300000002", ids)

    def test_sequential_writes_are_kept(self):
        self.tab_a.patients.create(new_patient("A", "1300000001", "pw"))
        self.tab_b.patients.create(new_patient("B", "1300000002", "pw"))
        ids = [p.national_id for p in self.tab_b.patients.list_all()]
        self.assertEqual(ids[-2:], ["1300000001", "1300000002"])

    def test_doctor_sessions_are_per_tab(self):
        self.tab_a.identity.login("doctor", "12345")
        self.assertEqual(self.tab_a.identity.current_doctor_session(), "Dr. (Sistema)")
        self.assertIsNone(self.tab_b.identity.current_doctor_session())
