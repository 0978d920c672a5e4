"""
Auth Gate

A single local account guarding the rest of the app.

States:
    SIGNUP        no account stored yet
    LOGIN         an account exists, nobody is signed in
    AUTHENTICATED signed in

    SIGNUP --signup--> AUTHENTICATED
    LOGIN  --login---> AUTHENTICATED
    LOGIN  --login with no stored account--> SIGNUP
    AUTHENTICATED --logout--> LOGIN

Only one account exists at a time. Signing up again replaces it.
Logging out never deletes the stored record.
"""

from enum import Enum
from typing import Optional

from pydantic import ValidationError

from budget_tracker.audit import AuditLogger
from budget_tracker.auth.passwords import PasswordHasher
from budget_tracker.errors import (
    InputValidationError,
    InvalidCredentialsError,
    NoAccountError,
)
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.models.transaction import CredentialRecord
from budget_tracker.services.storage import (
    CREDENTIALS_KEY,
    KeyValueStorageInterface,
    StorageError,
    persist_with_retry,
)
from budget_tracker.validation import validate_credentials


class AuthState(str, Enum):
    """Where the gate currently stands."""
    SIGNUP = "signup"
    LOGIN = "login"
    AUTHENTICATED = "authenticated"


class AuthGate:
    """Local credential check with a signup / login / logout state machine."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        hasher: Optional[PasswordHasher] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._hasher = hasher or PasswordHasher()
        self._state = AuthState.SIGNUP
        self._current_user: Optional[str] = None
        self._has_account = False

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state == AuthState.AUTHENTICATED

    @property
    def current_user(self) -> Optional[str]:
        return self._current_user

    @property
    def has_account(self) -> bool:
        return self._has_account

    async def _load_record(self) -> Optional[CredentialRecord]:
        """Stored account, or None if missing, unreadable or malformed."""
        try:
            raw = await self._storage.read(CREDENTIALS_KEY)
        except StorageError as e:
            self._audit_logger.log_load_failed(CREDENTIALS_KEY, str(e))
            return None

        if raw is None:
            return None

        try:
            return CredentialRecord.model_validate_json(raw)
        except ValidationError as e:
            self._audit_logger.log_load_failed(CREDENTIALS_KEY, str(e))
            return None

    async def initialize(self) -> AuthState:
        """Pick the starting state: SIGNUP on first run, LOGIN otherwise."""
        record = await self._load_record()
        self._has_account = record is not None
        self._current_user = None
        self._state = AuthState.LOGIN if self._has_account else AuthState.SIGNUP
        return self._state

    async def signup(self, username: str, password: str) -> AuthState:
        """
        Create (or replace) the local account and sign in.

        Raises:
            InputValidationError: If either field is blank or the password is too long
        """
        issues = validate_credentials(username, password)
        if issues:
            raise InputValidationError(
                "; ".join(issue.message for issue in issues),
                field=issues[0].field,
            )
        if self._hasher.is_too_long(password):
            raise InputValidationError(
                "Password must be at most 72 bytes",
                field="password",
            )

        record = CredentialRecord(
            username=username.strip(),
            password_hash=self._hasher.hash(password),
        )
        await persist_with_retry(
            self._storage, CREDENTIALS_KEY, record.to_storage_json(), self._audit_logger
        )

        self._has_account = True
        self._current_user = record.username
        self._state = AuthState.AUTHENTICATED
        self._audit_logger.log(AuditEventBuilder.signup_completed(record.username))
        return self._state

    async def login(self, username: str, password: str) -> AuthState:
        """
        Sign in with the stored account.

        Raises:
            NoAccountError: No account is stored; the gate moves to SIGNUP
            InvalidCredentialsError: Username or password does not match
        """
        name = (username or "").strip()
        record = await self._load_record()

        if record is None:
            self._has_account = False
            self._current_user = None
            self._state = AuthState.SIGNUP
            self._audit_logger.log(AuditEventBuilder.login_failed(name, "no_account"))
            raise NoAccountError("No account found. Please sign up first.")

        self._has_account = True
        if name != record.username or not self._hasher.verify(password or "", record.password_hash):
            self._current_user = None
            self._state = AuthState.LOGIN
            self._audit_logger.log(AuditEventBuilder.login_failed(name, "invalid_credentials"))
            raise InvalidCredentialsError("Invalid username or password")

        self._current_user = record.username
        self._state = AuthState.AUTHENTICATED
        self._audit_logger.log(AuditEventBuilder.login_succeeded(record.username))
        return self._state

    def logout(self) -> AuthState:
        """Clear the session. The stored account is kept."""
        self._audit_logger.log(AuditEventBuilder.logout(self._current_user))
        self._current_user = None
        self._state = AuthState.LOGIN
        return self._state
