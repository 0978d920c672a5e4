"""Local account package."""

from budget_tracker.auth.gate import AuthGate, AuthState
from budget_tracker.auth.passwords import PasswordHasher

__all__ = ["AuthGate", "AuthState", "PasswordHasher"]
