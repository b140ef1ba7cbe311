import unittest
from unittest import mock

from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from party_planner_api.app.core.db import COLLECTIONS, Database, InMemoryCollection
from party_planner_api.app.core.errors import DatabaseUnavailableError

from .helpers import make_settings


class DatabaseTests(unittest.TestCase):
    def test_missing_uri_leaves_database_unavailable(self):
        db = Database(make_settings(use_in_memory_db=False, mongodb_uri=""))
        with self.assertLogs("party_planner_api.app.core.db", level="WARNING"):
            db.connect()
        self.assertFalse(db.is_available)
        self.assertEqual(db.backend_name, "unconfigured")
        self.assertFalse(db.ping())
        with self.assertRaises(DatabaseUnavailableError):
            db.collection("services")

    def test_in_memory_backend(self):
        db = Database(make_settings())
        db.connect()
        self.assertTrue(db.is_available)
        self.assertEqual(db.backend_name, "memory")
        self.assertTrue(db.ping())
        db.close()
        self.assertFalse(db.is_available)

    def test_mongo_client_is_built_from_settings_and_indexed(self):
        client = mock.MagicMock()
        factory = mock.MagicMock(return_value=client)
        settings = make_settings(
            use_in_memory_db=False,
            mongodb_uri="mongodb://db:27017",
            mongodb_db="fiestas",
            mongodb_timeout_ms=1500,
        )
        db = Database(settings, client_factory=factory)
        db.connect()
        factory.assert_called_once_with("mongodb://db:27017", serverSelectionTimeoutMS=1500, tz_aware=True)
        client.__getitem__.assert_called_once_with("fiestas")
        backend = client.__getitem__.return_value
        self.assertEqual(backend.__getitem__.call_count, len(COLLECTIONS))
        backend.__getitem__.return_value.create_index.assert_called_with("id", unique=True)
        db.close()
        client.close.assert_called_once_with()

    def test_unreachable_server_does_not_raise(self):
        client = mock.MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        db = Database(
            make_settings(use_in_memory_db=False, mongodb_uri="mongodb://nowhere"),
            client_factory=mock.MagicMock(return_value=client),
        )
        with self.assertLogs("party_planner_api.app.core.db", level="ERROR"):
            db.connect()
        self.assertTrue(db.is_available)
        self.assertFalse(db.ping())


class InMemoryCollectionTests(unittest.TestCase):
    def test_unique_index_and_copies(self):
        collection = InMemoryCollection("services")
        collection.create_index("id", unique=True)
        document = {"id": "a", "tags": ["x"]}
        collection.insert_one(document)
        self.assertIn("_id", document)
        with self.assertRaises(DuplicateKeyError):
            collection.insert_one({"id": "a"})
        found = collection.find_one({"id": "a"}, {"_id": 0})
        found["tags"].append("y")
        self.assertEqual(collection.find_one({"id": "a"})["tags"], ["x"])
        self.assertNotIn("_id", found)

    def test_delete_counts(self):
        collection = InMemoryCollection("photos")
        collection.insert_one({"id": "p"})
        self.assertEqual(collection.delete_one({"id": "p"}).deleted_count, 1)
        self.assertEqual(collection.delete_one({"id": "p"}).deleted_count, 0)


if __name__ == "__main__":
    unittest.main()
