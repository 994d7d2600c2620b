import json
from unittest import TestCase

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy import create_engine

from core.database import init_db
from core.exceptions import MalformedStoredDataError
from core.storage import MemoryKeyValueStore, SqlKeyValueStore, load_json, save_json


def make_sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    return SqlKeyValueStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


class SqlKeyValueStoreTest(TestCase):
    def setUp(self):
        self.store = make_sql_store()

    def test_missing_key_is_none(self):
        self.assertIsNone(self.store.get("pacientes_lista"))

    def test_set_get_overwrite_remove(self):
        self.store.set("doctores_lista", "[]")
        self.assertEqual(self.store.get("doctores_lista"), "[]")

        self.store.set("doctores_lista", '[{"ci": "9999999999"}]')
        self.assertEqual(self.store.get("doctores_lista"), '[{"ci": "9999999999"}]')

        self.store.remove("doctores_lista")
        self.assertIsNone(self.store.get("doctores_lista"))

    def test_remove_missing_key_is_noop(self):
        self.store.remove("paciente_0000000000")
        self.assertEqual(self.store.keys(), [])

    def test_value_is_stored_verbatim(self):
        raw = '{"nombre": "Luis Mendoza Cedeño"}'
        self.store.set("k", raw)
        self.assertEqual(self.store.get("k"), raw)


class JsonHelpersTest(TestCase):
    def setUp(self):
        self.store = MemoryKeyValueStore()

    def test_absent_key_returns_default(self):
        self.assertEqual(load_json(self.store, "x", default=[]), [])

    def test_save_then_load(self):
        save_json(self.store, "x", [{"nombre": "Ana Zambrano Ponce", "edad": 28}])
        self.assertEqual(load_json(self.store, "x"), [{"nombre": "Ana Zambrano Ponce", "edad": 28}])
        # Non-ASCII is written as-is
        save_json(self.store, "y", ["Cedeño"])
        self.assertIn("Cedeño", self.store.get("y"))
        self.assertEqual(json.loads(self.store.get("y")), ["Cedeño"])

    def test_malformed_value_raises(self):
        self.store.set("paciente_1315896547", "{not json")
        with self.assertRaises(MalformedStoredDataError) as ctx:
            load_json(self.store, "paciente_1315896547")
        self.assertEqual(ctx.exception.key, "paciente_1315896547")
