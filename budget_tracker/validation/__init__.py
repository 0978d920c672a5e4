"""Input validation package."""

from budget_tracker.validation.validator import (
    TransactionInputValidator,
    validate_credentials,
)

__all__ = ["TransactionInputValidator", "validate_credentials"]
