"""
JSON File Storage Implementation

DESIGN DECISION: All keys live in one small JSON object on disk because:
1. The data is a single person's transaction list
2. No database setup required
3. The file is human-readable and easy to back up

TRADEOFFS:
- Every write rewrites the whole file (fine at personal scale)
- No locking across processes (one local user, one process)

Writes go to a temporary file first and replace the target atomically,
so a crash mid-write leaves the previous contents intact.

A write never replaces keys it could not read. If the file cannot be
opened the write fails. If it opens but is not a JSON object, it is moved
aside to `<name>.corrupt` before a fresh file is started.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from budget_tracker.config import get_settings
from budget_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


CORRUPT_SUFFIX = ".corrupt"


class CorruptFileError(StorageReadError):
    """The file was read but does not hold a JSON object."""
    pass


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    Key-value storage backed by a single JSON file.

    The file holds an object mapping each key to its text value.
    """

    def __init__(self, path: Optional[str] = None):
        self._path = Path(path or get_settings().storage.data_path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def corrupt_path(self) -> Path:
        return self._path.with_name(self._path.name + CORRUPT_SUFFIX)

    def _read_all(self) -> dict[str, str]:
        """Load the whole file. A missing file is an empty namespace."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except OSError as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")
        except ValueError as e:
            raise CorruptFileError(f"Invalid JSON in {self._path}: {e}")

        if not isinstance(data, dict):
            raise CorruptFileError(f"Unexpected content in {self._path}")
        return data

    def _read_for_update(self) -> dict[str, str]:
        """Current contents for a read-modify-write cycle."""
        try:
            return self._read_all()
        except CorruptFileError:
            try:
                os.replace(self._path, self.corrupt_path)
            except OSError as e:
                raise StorageWriteError(f"Failed to set aside {self._path}: {e}")
            return {}
        except StorageReadError as e:
            raise StorageWriteError(f"Cannot update {self._path}: {e}")

    def _write_all(self, data: dict[str, str]) -> None:
        """Atomically replace the file with `data`."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}")

    async def read(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return None if value is None else str(value)

    async def write(self, key: str, value: str) -> bool:
        data = self._read_for_update()
        data[key] = value
        self._write_all(data)
        return True

    async def delete(self, key: str) -> bool:
        data = self._read_for_update()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True
