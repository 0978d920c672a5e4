"""
Transaction id generation.

Ids are the creation time in milliseconds, as a string. Two transactions
created within the same millisecond would collide, so the generator never
hands out a value at or below the last one: it bumps by one instead.
"""

import time
from typing import Callable, Iterable, Optional


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TransactionIdGenerator:
    """Monotonic, time-derived id source. Unique within one process."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _now_ms
        self._last = 0

    def seed(self, existing_ids: Iterable[str]) -> None:
        """Never issue an id at or below any numeric id already stored."""
        for value in existing_ids:
            if value.isascii() and value.isdigit():
                self._last = max(self._last, int(value))

    def next_id(self) -> str:
        now = self._clock()
        self._last = now if now > self._last else self._last + 1
        return str(self._last)
