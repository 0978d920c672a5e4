"""In-memory key-value storage, for tests and throwaway sessions."""

from typing import Optional

from budget_tracker.services.storage.interface import KeyValueStorageInterface


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Dict-backed storage. Contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)

    async def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def write(self, key: str, value: str) -> bool:
        self._data[key] = value
        self.write_count += 1
        return True

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
