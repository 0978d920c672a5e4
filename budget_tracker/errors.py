"""
Domain Errors

Every error raised by the core derives from BudgetTrackerError so the
presentation layer can catch one type. None of them is fatal: the worst
outcome is stale or empty in-memory state.

Storage failures live with the storage interface
(budget_tracker.services.storage.interface).
"""


class BudgetTrackerError(Exception):
    """Base exception for budget tracker operations."""
    pass


class InputValidationError(BudgetTrackerError):
    """A required field is missing or malformed. No state was changed."""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field


class SetupRequiredError(InputValidationError):
    """Currency or budget has not been configured yet."""
    pass


class TransactionNotFoundError(BudgetTrackerError):
    """No transaction with the given id exists in the store."""

    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class AuthError(BudgetTrackerError):
    """Base class for credential failures. Always recoverable."""
    pass


class NoAccountError(AuthError):
    """Login attempted before any account was created."""
    pass


class InvalidCredentialsError(AuthError):
    """Username or password did not match the stored account."""
    pass


class AuthRequiredError(AuthError):
    """Operation needs an authenticated session."""
    pass
