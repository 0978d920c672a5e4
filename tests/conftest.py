"""
Shared fixtures.

No test touches the real data file: storage is in-memory, or a temporary
file for the JSON backend tests. bcrypt runs at its minimum cost.
"""

from typing import Optional

import pytest

from budget_tracker.audit import AuditLogger
from budget_tracker.auth import AuthGate, PasswordHasher
from budget_tracker.preferences import PreferencesStore
from budget_tracker.services.storage import (
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)
from budget_tracker.transactions import TransactionIdGenerator, TransactionStore


class FailingStorage(KeyValueStorageInterface):
    """Backend whose reads and/or writes always fail."""

    def __init__(
        self,
        fail_reads: bool = True,
        fail_writes: bool = True,
        initial: Optional[dict[str, str]] = None,
    ):
        self._data = dict(initial or {})
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    async def read(self, key):
        if self.fail_reads:
            raise StorageReadError("disk unavailable")
        return self._data.get(key)

    async def write(self, key, value):
        self.write_attempts += 1
        if self.fail_writes:
            raise StorageWriteError("disk full")
        self._data[key] = value
        return True

    async def delete(self, key):
        return self._data.pop(key, None) is not None


class FlakyStorage(InMemoryKeyValueStorage):
    """Fails the first `failures` writes, then behaves."""

    def __init__(self, failures: int = 1):
        super().__init__()
        self.failures = failures
        self.write_attempts = 0

    async def write(self, key, value):
        self.write_attempts += 1
        if self.write_attempts <= self.failures:
            raise StorageWriteError("transient failure")
        return await super().write(key, value)


class StepClock:
    """Deterministic millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def store(storage, audit_logger):
    return TransactionStore(
        storage,
        audit_logger=audit_logger,
        id_generator=TransactionIdGenerator(clock=StepClock()),
    )


@pytest.fixture
def preferences(storage, audit_logger):
    return PreferencesStore(storage, audit_logger=audit_logger)


@pytest.fixture
def gate(storage, audit_logger, hasher):
    return AuthGate(storage, audit_logger=audit_logger, hasher=hasher)
