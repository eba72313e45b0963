"""Tests for the key-value storage backends."""

import json
import os

import pytest

from electricity_subsidy.services.storage import (
    CorruptedDataError,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    StorageError,
)
from electricity_subsidy.services.storage import json_file


class TestInMemoryStorage:
    """Tests for InMemoryKeyValueStorage."""

    async def test_missing_key_reads_none(self):
        storage = InMemoryKeyValueStorage()
        assert await storage.get("nothing") is None

    async def test_set_then_get(self):
        storage = InMemoryKeyValueStorage()
        await storage.set("language", '"Urdu"')
        assert await storage.get("language") == '"Urdu"'

    async def test_clear_removes_key(self):
        storage = InMemoryKeyValueStorage({"a": "1"})
        await storage.clear("a")
        assert await storage.get("a") is None

    async def test_clear_absent_key_is_noop(self):
        storage = InMemoryKeyValueStorage()
        await storage.clear("missing")
        assert storage.snapshot() == {}


class TestJsonFileStorage:
    """Tests for JsonFileKeyValueStorage."""

    async def test_missing_file_reads_empty(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        assert await storage.get("calculation_history") is None

    async def test_set_creates_file_and_parents(self, tmp_path):
        """Test that the first write creates the directory and file."""
        path = tmp_path / "nested" / "dir" / "store.json"
        storage = JsonFileKeyValueStorage(path)
        await storage.set("darkMode", "true")
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"darkMode": "true"}

    async def test_values_survive_new_instance(self, tmp_path):
        """Test durability across process restarts (new storage object)."""
        path = tmp_path / "store.json"
        await JsonFileKeyValueStorage(path).set("k", "v")
        assert await JsonFileKeyValueStorage(path).get("k") == "v"

    async def test_set_keeps_other_keys(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        await storage.set("a", "1")
        await storage.set("b", "2")
        assert await storage.get("a") == "1"
        assert await storage.get("b") == "2"

    async def test_clear_removes_only_that_key(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        await storage.set("a", "1")
        await storage.set("b", "2")
        await storage.clear("a")
        assert await storage.get("a") is None
        assert await storage.get("b") == "2"

    async def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        await storage.set("a", "1")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["store.json"]

    async def test_invalid_json_is_corrupted(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptedDataError):
            await JsonFileKeyValueStorage(path).get("a")

    async def test_non_object_is_corrupted(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(CorruptedDataError):
            await JsonFileKeyValueStorage(path).get("a")

    async def test_non_string_value_is_corrupted(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text('{"darkMode": true}', encoding="utf-8")
        with pytest.raises(CorruptedDataError):
            await JsonFileKeyValueStorage(path).get("darkMode")

    async def test_set_replaces_unparseable_file(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileKeyValueStorage(path)
        await storage.set("a", "1")
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}

    async def test_clear_resets_unparseable_file(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        storage = JsonFileKeyValueStorage(path)
        await storage.clear("a")
        assert await storage.get("a") is None
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    async def test_transient_write_failure_is_retried(self, tmp_path, monkeypatch):
        """Test that a failing replace is retried before succeeding."""
        real_replace = os.replace
        calls = {"count": 0}

        def flaky_replace(src, dst):
            calls["count"] += 1
            if calls["count"] == 1:
                raise OSError("disk busy")
            return real_replace(src, dst)

        monkeypatch.setattr(json_file.os, "replace", flaky_replace)
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        await storage.set("a", "1")

        assert calls["count"] == 2
        assert await storage.get("a") == "1"

    async def test_persistent_write_failure_raises_storage_error(self, tmp_path, monkeypatch):
        """Test that repeated failures surface as StorageError."""
        def broken_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(json_file.os, "replace", broken_replace)
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")

        with pytest.raises(StorageError, match="read-only"):
            await storage.set("a", "1")
        assert not (tmp_path / "store.json").exists()
        assert list(tmp_path.iterdir()) == []
