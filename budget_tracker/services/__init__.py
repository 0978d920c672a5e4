"""Services package."""

from budget_tracker.services.storage import (
    BUDGET_KEY,
    CREDENTIALS_KEY,
    CURRENCY_KEY,
    TRANSACTIONS_KEY,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
    persist_with_retry,
)

__all__ = [
    "BUDGET_KEY",
    "CREDENTIALS_KEY",
    "CURRENCY_KEY",
    "TRANSACTIONS_KEY",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorageInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "persist_with_retry",
]
