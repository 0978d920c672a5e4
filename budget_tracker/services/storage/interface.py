"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a flat key-value namespace behind an
abstract interface. This allows us to:
1. Keep the default JSON file on disk
2. Use in-memory storage for testing
3. Swap in another backend without touching business logic

The interface is intentionally tiny. Each key has exactly one owner:
- transactions -> TransactionStore
- currency, userBudget -> PreferencesStore
- credentials -> AuthGate
"""

from abc import ABC, abstractmethod
from typing import Optional


TRANSACTIONS_KEY = "transactions"
CURRENCY_KEY = "currency"
BUDGET_KEY = "userBudget"
CREDENTIALS_KEY = "credentials"


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key-value storage.

    Values are text (JSON for structured keys). Any storage implementation
    must implement these methods.
    """

    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The key to read

        Returns:
            The stored text, or None if the key has never been written

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def write(self, key: str, value: str) -> bool:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The key to write
            value: The full text to store

        Returns:
            True if written successfully

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed and was removed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The backend could not be read."""
    pass


class StorageWriteError(StorageError):
    """The backend could not be written."""
    pass
