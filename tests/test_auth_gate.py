"""Tests for the local account gate."""

import json

import pytest

from budget_tracker.auth import AuthGate, AuthState, PasswordHasher
from budget_tracker.errors import (
    AuthError,
    InputValidationError,
    InvalidCredentialsError,
    NoAccountError,
)
from budget_tracker.models import AuditEventType
from budget_tracker.services.storage import CREDENTIALS_KEY, InMemoryKeyValueStorage

from conftest import FailingStorage


class TestInitialState:
    """Tests for the starting state."""

    async def test_first_run_starts_in_signup(self, gate):
        assert await gate.initialize() == AuthState.SIGNUP
        assert gate.has_account is False

    async def test_existing_account_starts_in_login(self, gate, storage, hasher):
        await gate.signup("alice", "correct")

        fresh = AuthGate(storage, hasher=hasher)
        assert await fresh.initialize() == AuthState.LOGIN
        assert fresh.has_account is True
        assert fresh.is_authenticated is False

    async def test_unreadable_storage_starts_in_signup(self, hasher):
        gate = AuthGate(FailingStorage(), hasher=hasher)
        assert await gate.initialize() == AuthState.SIGNUP

    async def test_malformed_record_starts_in_signup(self, hasher):
        storage = InMemoryKeyValueStorage({CREDENTIALS_KEY: "{broken"})
        gate = AuthGate(storage, hasher=hasher)
        assert await gate.initialize() == AuthState.SIGNUP


class TestSignup:
    """Tests for creating the account."""

    async def test_signup_authenticates(self, gate):
        await gate.initialize()
        assert await gate.signup("alice", "correct") == AuthState.AUTHENTICATED
        assert gate.current_user == "alice"

    async def test_password_is_hashed_not_stored(self, gate, storage):
        await gate.signup("alice", "correct")
        record = json.loads(storage.snapshot()[CREDENTIALS_KEY])

        assert record["username"] == "alice"
        assert record["password"] != "correct"
        assert "correct" not in storage.snapshot()[CREDENTIALS_KEY]
        assert record["password"].startswith("$2")

    @pytest.mark.parametrize("username,password", [("", "pw"), ("   ", "pw"), ("alice", ""), ("", "")])
    async def test_blank_fields_rejected(self, gate, storage, username, password):
        await gate.initialize()
        with pytest.raises(InputValidationError):
            await gate.signup(username, password)
        assert gate.state == AuthState.SIGNUP
        assert CREDENTIALS_KEY not in storage.snapshot()

    async def test_overlong_password_rejected(self, gate):
        with pytest.raises(InputValidationError):
            await gate.signup("alice", "x" * 73)

    async def test_signup_replaces_previous_account(self, gate):
        await gate.signup("alice", "one")
        gate.logout()
        await gate.signup("bob", "two")
        gate.logout()

        with pytest.raises(InvalidCredentialsError):
            await gate.login("alice", "one")
        assert await gate.login("bob", "two") == AuthState.AUTHENTICATED


class TestLogin:
    """Tests for signing in."""

    async def test_login_success(self, gate):
        await gate.signup("alice", "correct")
        gate.logout()

        assert await gate.login("alice", "correct") == AuthState.AUTHENTICATED
        assert gate.current_user == "alice"

    async def test_wrong_password(self, gate, audit_logger):
        """Wrong password is an auth error and leaves the gate unauthenticated."""
        await gate.signup("alice", "correct")
        gate.logout()

        with pytest.raises(AuthError):
            await gate.login("alice", "wrong")

        assert gate.is_authenticated is False
        assert gate.state == AuthState.LOGIN
        assert audit_logger.history[-1].event_type == AuditEventType.LOGIN_FAILED

    async def test_wrong_username(self, gate):
        await gate.signup("alice", "correct")
        gate.logout()
        with pytest.raises(InvalidCredentialsError):
            await gate.login("mallory", "correct")

    async def test_no_account_moves_to_signup(self, gate):
        with pytest.raises(NoAccountError):
            await gate.login("alice", "correct")
        assert gate.state == AuthState.SIGNUP

    async def test_corrupt_hash_is_a_mismatch(self, hasher):
        storage = InMemoryKeyValueStorage({
            CREDENTIALS_KEY: '{"username": "alice", "password": "not-a-bcrypt-hash"}'
        })
        gate = AuthGate(storage, hasher=hasher)
        await gate.initialize()
        with pytest.raises(InvalidCredentialsError):
            await gate.login("alice", "anything")


class TestLogout:
    """Tests for signing out."""

    async def test_logout_keeps_record(self, gate, storage):
        await gate.signup("alice", "correct")

        assert gate.logout() == AuthState.LOGIN
        assert gate.current_user is None
        assert CREDENTIALS_KEY in storage.snapshot()


class TestPasswordHasher:
    """Tests for the bcrypt wrapper."""

    def test_hash_and_verify(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("secret")
        assert hasher.verify("secret", hashed) is True
        assert hasher.verify("Secret", hashed) is False

    def test_salted(self):
        hasher = PasswordHasher(rounds=4)
        assert hasher.hash("secret") != hasher.hash("secret")
