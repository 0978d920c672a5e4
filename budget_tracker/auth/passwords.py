"""
Password hashing.

Salted one-way bcrypt hashes. The stored record never holds anything the
password can be recovered from.
"""

from typing import Optional

import bcrypt

from budget_tracker.config import get_settings


# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Thin wrapper over bcrypt with a configurable work factor."""

    def __init__(self, rounds: Optional[int] = None):
        self._rounds = rounds or get_settings().auth.bcrypt_rounds

    @staticmethod
    def is_too_long(password: str) -> bool:
        return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash or over-long password
            return False
