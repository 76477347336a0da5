"""Tests for moodo/learning/persistence.py"""

import json
import sqlite3

import pytest

from moodo.learning.persistence import (
    DEFAULT_STORAGE_KEY,
    InMemoryKeyValueStore,
    LearningStateRepository,
    PersistenceError,
    SQLiteKeyValueStore,
)


STATE = {
    "interactions": [
        {"category": "health", "affect": "calming", "accepted": True,
         "timestamp": "2026-03-10T15:00:00"},
    ],
    "moodPatterns": [],
}


class BrokenStore:
    def __init__(self, error: Exception):
        self.error = error

    def get(self, key):
        raise self.error

    def set(self, key, value):
        raise self.error


class TestInMemoryKeyValueStore:
    def test_get_missing(self):
        assert InMemoryKeyValueStore().get("missing") is None

    def test_set_and_overwrite(self):
        store = InMemoryKeyValueStore()
        store.set("k", "1")
        store.set("k", "2")
        assert store.get("k") == "2"


class TestSQLiteKeyValueStore:
    def test_roundtrip(self, temp_db):
        store = SQLiteKeyValueStore(temp_db)
        store.set("k", "value")
        assert store.get("k") == "value"

    def test_upsert(self, temp_db):
        store = SQLiteKeyValueStore(temp_db)
        store.set("k", "old")
        store.set("k", "new")

        conn = sqlite3.connect(str(temp_db))
        try:
            rows = conn.execute("SELECT value FROM kv_store WHERE key = 'k'").fetchall()
        finally:
            conn.close()
        assert rows == [("new",)]

    def test_creates_parent_directory(self, tmp_path):
        store = SQLiteKeyValueStore(tmp_path / "nested" / "moodo.db")
        assert store.get("k") is None
        assert (tmp_path / "nested" / "moodo.db").exists()


class TestLearningStateRepository:
    def test_default_key(self):
        assert LearningStateRepository(InMemoryKeyValueStore()).key == DEFAULT_STORAGE_KEY
        assert DEFAULT_STORAGE_KEY == "MoodoUserLearningData"

    def test_missing_key_loads_none(self, repository):
        assert repository.load() is None

    def test_save_then_load(self, repository, kv_store):
        repository.save(STATE)

        assert json.loads(kv_store.get(DEFAULT_STORAGE_KEY)) == STATE
        assert repository.load() == STATE

    def test_sqlite_backed(self, temp_db):
        repository = LearningStateRepository(SQLiteKeyValueStore(temp_db))
        repository.save(STATE)
        assert LearningStateRepository(SQLiteKeyValueStore(temp_db)).load() == STATE

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2, 3]", '"text"', "null"])
    def test_undecodable_blob_loads_none(self, raw):
        repository = LearningStateRepository(InMemoryKeyValueStore({DEFAULT_STORAGE_KEY: raw}))
        assert repository.load() is None

    @pytest.mark.parametrize("error", [sqlite3.OperationalError("locked"), OSError("disk")])
    def test_read_failure_loads_none(self, error):
        assert LearningStateRepository(BrokenStore(error)).load() is None

    def test_write_failure_raises(self):
        repository = LearningStateRepository(BrokenStore(sqlite3.OperationalError("readonly")))
        with pytest.raises(PersistenceError, match="Could not write"):
            repository.save(STATE)

    def test_unserializable_state_raises(self, repository):
        with pytest.raises(PersistenceError, match="not JSON-serializable"):
            repository.save({"interactions": [object()]})
