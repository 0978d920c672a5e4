"""
Audit Models for Budget Tracker

Every significant action is recorded as an AuditEvent and written to the
structured log. This provides:
1. Traceability of every mutation of the transaction list
2. A record of persistence failures, which are never shown to the user
3. Debugging information for rejected input and failed logins

DESIGN DECISION: Events are immutable once built. Nothing edits a logged event.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REJECTED = "transaction_rejected"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    TRANSACTION_DELETED = "transaction_deleted"

    # Persistence
    TRANSACTIONS_LOADED = "transactions_loaded"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"

    # Setup
    CURRENCY_SELECTED = "currency_selected"
    BUDGET_SET = "budget_set"

    # Budget alerts
    BUDGET_WARNING = "budget_warning"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Account
    SIGNUP_COMPLETED = "signup_completed"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Transaction ids are time-derived strings, so entity_id is a string too.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'account', 'storage')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID or key of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(tx_id, "Coffee", -4.5, "Food & Dining")
        event = AuditEventBuilder.save_failed("transactions", "disk full")
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        desc: str,
        amount: float,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction added: {desc}",
            details={
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_rejected(
        operation: str,
        issues: list[dict],
        transaction_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction {operation} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        transaction_id: str,
        changes: dict[str, Any],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction updated",
            details={"changes": changes},
            is_user_action=True,
        )

    @staticmethod
    def transaction_not_found(
        transaction_id: str,
        operation: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Ignored {operation} of unknown transaction",
            details={"operation": operation},
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
            is_user_action=True,
        )

    @staticmethod
    def transactions_loaded(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOADED,
            entity_type="storage",
            entity_id="transactions",
            description=f"Loaded {count} transactions",
            details={"count": count},
        )

    @staticmethod
    def load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Could not load '{key}', falling back to default",
            error_message=error_message,
        )

    @staticmethod
    def save_failed(
        key: str,
        error_message: str,
        attempts: int = 1,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Could not save '{key}' after {attempts} attempts",
            error_message=error_message,
            details={"attempts": attempts},
        )

    @staticmethod
    def currency_selected(symbol: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_SELECTED,
            entity_type="preferences",
            entity_id="currency",
            description=f"Currency set to {symbol}",
            details={"currency": symbol},
            is_user_action=True,
        )

    @staticmethod
    def budget_set(raw_budget: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="preferences",
            entity_id="userBudget",
            description="Budget amount set",
            details={"budget_amount": raw_budget},
            is_user_action=True,
        )

    @staticmethod
    def budget_alert(
        exceeded: bool,
        percent: int,
        total_expense: float,
        budget_amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=(
                AuditEventType.BUDGET_EXCEEDED
                if exceeded
                else AuditEventType.BUDGET_WARNING
            ),
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            description=f"Expenses at {percent}% of budget",
            details={
                "percent": percent,
                "total_expense": total_expense,
                "budget_amount": budget_amount,
            },
        )

    @staticmethod
    def signup_completed(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGNUP_COMPLETED,
            entity_type="account",
            entity_id=username,
            description="Local account created",
            is_user_action=True,
        )

    @staticmethod
    def login_succeeded(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            entity_type="account",
            entity_id=username,
            description="User logged in",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(username: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            entity_id=username or None,
            description=f"Login failed: {reason}",
            details={"reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def logout(username: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGOUT,
            entity_type="account",
            entity_id=username,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
