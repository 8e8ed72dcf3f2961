"""Tests for storage backends."""

import pytest

from admindash.storage.base import StorageError
from admindash.storage.factories import create_sqlite_storage
from admindash.storage.memory import MemoryStorage


class TestSQLAlchemyStorage:
    """Tests for the SQLite-backed key-value store."""

    def test_set_and_get_item(self, sqlite_storage):
        sqlite_storage.set_item("apps", "[]")

        assert sqlite_storage.get_item("apps") == "[]"

    def test_get_missing_item_returns_none(self, sqlite_storage):
        assert sqlite_storage.get_item("missing") is None

    def test_overwrite_item(self, sqlite_storage):
        sqlite_storage.set_item("k", "1")
        sqlite_storage.set_item("k", "2")

        assert sqlite_storage.get_item("k") == "2"
        assert sqlite_storage.keys() == ["k"]

    def test_remove_and_clear(self, sqlite_storage):
        sqlite_storage.set_item("a", "1")
        sqlite_storage.set_item("b", "2")

        sqlite_storage.remove_item("a")
        assert sqlite_storage.keys() == ["b"]

        sqlite_storage.clear()
        assert sqlite_storage.keys() == []

    def test_values_survive_reopening(self, temp_db_path):
        """A second storage instance on the same file sees earlier writes."""
        first = create_sqlite_storage(database_path=temp_db_path)
        first.set_item("tasks", '[{"id":1}]')
        first.disconnect()

        second = create_sqlite_storage(database_path=temp_db_path)
        try:
            assert second.get_item("tasks") == '[{"id":1}]'
        finally:
            second.disconnect()


def test_create_sqlite_storage_uses_environment_variable(temp_db_path, monkeypatch):
    monkeypatch.setenv("ADMINDASH_DB_PATH", temp_db_path)

    storage = create_sqlite_storage()

    assert storage.database_url == f"sqlite:///{temp_db_path}"
    storage.disconnect()


class TestMemoryStorage:
    """Tests for the in-memory backend."""

    def test_quota_exceeded_raises(self):
        storage = MemoryStorage(quota_bytes=10)

        with pytest.raises(StorageError, match="Quota exceeded"):
            storage.set_item("k", "0123456789abc")

    def test_quota_ignores_value_being_replaced(self):
        storage = MemoryStorage(quota_bytes=10)
        storage.set_item("k", "0123456789")

        storage.set_item("k", "abcdefghij")

        assert storage.get_item("k") == "abcdefghij"

    def test_unavailable_storage_raises(self):
        storage = MemoryStorage()
        storage.available = False

        with pytest.raises(StorageError):
            storage.get_item("k")
        with pytest.raises(StorageError):
            storage.clear()
