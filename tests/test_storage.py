"""Tests for the storage backends and the retrying writer."""

import json

import pytest

from budget_tracker.audit import AuditLogger
from budget_tracker.models import AuditEventType
from budget_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
    persist_with_retry,
)

from conftest import FailingStorage, FlakyStorage


class RefusingStorage(InMemoryKeyValueStorage):
    """Reports failure by returning False instead of raising."""

    async def write(self, key, value):
        self.write_count += 1
        return False


class TestJsonFileStorage:
    """Tests for the JSON file backend."""

    async def test_missing_file_reads_none(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path / "data.json"))
        assert await storage.read("transactions") is None

    async def test_write_then_read(self, tmp_path):
        path = tmp_path / "data.json"
        storage = JsonFileKeyValueStorage(str(path))

        assert await storage.write("currency", "€") is True
        assert await storage.write("userBudget", "1500") is True

        assert await storage.read("currency") == "€"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "currency": "€",
            "userBudget": "1500",
        }

    async def test_values_survive_new_instance(self, tmp_path):
        path = str(tmp_path / "data.json")
        await JsonFileKeyValueStorage(path).write("transactions", "[]")
        assert await JsonFileKeyValueStorage(path).read("transactions") == "[]"

    async def test_creates_parent_directories(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path / "nested" / "dir" / "data.json"))
        await storage.write("currency", "$")
        assert storage.path.exists()

    async def test_corrupt_file_raises_read_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileKeyValueStorage(str(path))

        with pytest.raises(StorageReadError):
            await storage.read("transactions")

    async def test_non_object_file_raises_read_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(StorageReadError):
            await JsonFileKeyValueStorage(str(path)).read("currency")

    async def test_write_over_corrupt_file_keeps_a_backup(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileKeyValueStorage(str(path))

        await storage.write("currency", "$")

        assert await storage.read("currency") == "$"
        assert storage.corrupt_path.read_text(encoding="utf-8") == "{not json"

    async def test_unreadable_file_fails_write_and_keeps_other_keys(self, tmp_path, monkeypatch):
        """A read error during a write must not drop the keys already on disk."""
        storage = JsonFileKeyValueStorage(str(tmp_path / "data.json"))
        await storage.write("credentials", '{"username": "alice"}')
        await storage.write("currency", "$")

        def unreadable():
            raise StorageReadError("permission denied")

        monkeypatch.setattr(storage, "_read_all", unreadable)
        with pytest.raises(StorageWriteError):
            await storage.write("transactions", "[]")
        monkeypatch.undo()

        assert await storage.read("credentials") == '{"username": "alice"}'
        assert await storage.read("currency") == "$"
        assert await storage.read("transactions") is None
        assert not storage.corrupt_path.exists()

    async def test_unreadable_file_write_is_retried_then_logged(self, tmp_path, monkeypatch):
        storage = JsonFileKeyValueStorage(str(tmp_path / "data.json"))
        await storage.write("currency", "$")
        audit_logger = AuditLogger()

        def unreadable():
            raise StorageReadError("permission denied")

        monkeypatch.setattr(storage, "_read_all", unreadable)
        ok = await persist_with_retry(storage, "transactions", "[]", audit_logger, wait_seconds=0)
        monkeypatch.undo()

        assert ok is False
        assert audit_logger.history[-1].event_type == AuditEventType.SAVE_FAILED
        assert await storage.read("currency") == "$"

    async def test_delete(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path / "data.json"))
        await storage.write("currency", "$")

        assert await storage.delete("currency") is True
        assert await storage.delete("currency") is False
        assert await storage.read("currency") is None

    async def test_no_temp_files_left(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path / "data.json"))
        await storage.write("a", "1")
        await storage.write("b", "2")
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


class TestInMemoryStorage:
    """Tests for the in-memory backend."""

    async def test_basic_operations(self):
        storage = InMemoryKeyValueStorage({"currency": "$"})

        assert isinstance(storage, KeyValueStorageInterface)
        assert await storage.read("currency") == "$"
        assert await storage.read("missing") is None

        await storage.write("currency", "£")
        assert storage.snapshot() == {"currency": "£"}
        assert storage.write_count == 1

        assert await storage.delete("currency") is True
        assert await storage.delete("currency") is False

    def test_snapshot_is_a_copy(self):
        storage = InMemoryKeyValueStorage()
        storage.snapshot()["currency"] = "$"
        assert storage.snapshot() == {}


class TestPersistWithRetry:
    """Tests for the retry-once-then-log write policy."""

    async def test_success_first_try(self):
        storage = InMemoryKeyValueStorage()
        audit_logger = AuditLogger()

        assert await persist_with_retry(storage, "currency", "$", audit_logger) is True
        assert storage.write_count == 1
        assert audit_logger.history == []

    async def test_retries_transient_failure(self):
        storage = FlakyStorage(failures=1)
        audit_logger = AuditLogger()

        ok = await persist_with_retry(storage, "currency", "$", audit_logger, wait_seconds=0)

        assert ok is True
        assert storage.write_attempts == 2
        assert storage.snapshot() == {"currency": "$"}

    async def test_gives_up_and_logs(self):
        storage = FailingStorage(fail_reads=False)
        audit_logger = AuditLogger()

        ok = await persist_with_retry(
            storage, "transactions", "[]", audit_logger, attempts=3, wait_seconds=0
        )

        assert ok is False
        assert storage.write_attempts == 3
        event = audit_logger.history[-1]
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.details["attempts"] == 3

    async def test_false_return_counts_as_failure(self):
        storage = RefusingStorage()
        audit_logger = AuditLogger()

        ok = await persist_with_retry(storage, "currency", "$", audit_logger, wait_seconds=0)

        assert ok is False
        assert storage.write_count == 2
