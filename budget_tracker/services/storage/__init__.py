"""
Storage Services Package

Provides the key-value storage interface and its implementations.
The JSON file backend is the default; the in-memory one is for tests.
"""

from budget_tracker.services.storage.interface import (
    BUDGET_KEY,
    CREDENTIALS_KEY,
    CURRENCY_KEY,
    TRANSACTIONS_KEY,
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from budget_tracker.services.storage.json_file import JsonFileKeyValueStorage
from budget_tracker.services.storage.memory import InMemoryKeyValueStorage
from budget_tracker.services.storage.writer import persist_with_retry

__all__ = [
    # Keys
    "BUDGET_KEY",
    "CREDENTIALS_KEY",
    "CURRENCY_KEY",
    "TRANSACTIONS_KEY",
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    # Helpers
    "persist_with_retry",
]
