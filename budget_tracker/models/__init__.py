"""
Data Models Package

This package contains all Pydantic models used in the Budget Tracker core.
All data flowing through the system must conform to these schemas.
"""

from budget_tracker.models.transaction import (
    DEFAULT_CATEGORY,
    AlertLevel,
    BudgetAlert,
    Category,
    CategoryTotal,
    CredentialRecord,
    Currency,
    Preferences,
    Transaction,
    TransactionList,
)
from budget_tracker.models.validation import ValidationIssue, ValidationResult
from budget_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Core models
    "DEFAULT_CATEGORY",
    "AlertLevel",
    "BudgetAlert",
    "Category",
    "CategoryTotal",
    "CredentialRecord",
    "Currency",
    "Preferences",
    "Transaction",
    "TransactionList",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
