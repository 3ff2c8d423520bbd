"""Unit tests for the durable key-value stores."""
import pytest

from seo_backend.cache import (
    FileStore,
    InMemoryStore,
    KeywordClusterCache,
    PersistenceFailure,
    SqlStore,
    Store,
    build_store,
)
from seo_backend.db.database import SessionLocal


class TestInMemoryStore:

    def test_set_get_delete(self):
        store = InMemoryStore()
        store.set("slot", "value")
        assert store.get("slot") == "value"
        store.delete("slot")
        assert store.get("slot") is None

    def test_quota(self):
        store = InMemoryStore(quota_bytes=4)
        store.set("slot", "1234")
        with pytest.raises(PersistenceFailure):
            store.set("slot", "12345")
        assert store.get("slot") == "1234"

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryStore(), Store)


class TestFileStore:

    def test_round_trip(self, tmp_path):
        store = FileStore(tmp_path / "slots")
        assert store.get("slot") is None

        store.set("slot", '{"a": 1}')
        assert store.get("slot") == '{"a": 1}'
        assert (tmp_path / "slots" / "slot.json").exists()

        store.delete("slot")
        store.delete("slot")
        assert store.get("slot") is None

    def test_survives_new_instance(self, tmp_path, clock):
        KeywordClusterCache(FileStore(tmp_path), clock=clock).save("example.com", "sig", [])
        reopened = KeywordClusterCache(FileStore(tmp_path), clock=clock)
        assert reopened.load("example.com", "sig") == []

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FileStore(blocker / "slots")

        with pytest.raises(PersistenceFailure):
            store.set("slot", "value")


class TestSqlStore:

    def test_insert_update_delete(self):
        store = SqlStore(SessionLocal)
        assert store.get("sql_slot") is None

        store.set("sql_slot", "first")
        store.set("sql_slot", "second")
        assert store.get("sql_slot") == "second"

        store.delete("sql_slot")
        assert store.get("sql_slot") is None

    def test_backs_cluster_cache(self, clock):
        cache = KeywordClusterCache(SqlStore(SessionLocal), clock=clock)
        clusters = [{"parentId": 1, "childIds": [2]}]

        cache.save("sql-example.com", "sig", clusters)
        assert cache.load("sql-example.com", "sig") == clusters


class TestBuildStore:

    def test_memory(self):
        assert isinstance(build_store("memory"), InMemoryStore)

    def test_sql(self):
        assert isinstance(build_store("SQL"), SqlStore)

    def test_file(self, tmp_path):
        store = build_store("file", tmp_path)
        assert isinstance(store, FileStore)
        assert store.directory == tmp_path

    def test_file_requires_directory(self):
        with pytest.raises(ValueError):
            build_store("file")

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_store("redis")
