"""Transaction storage package."""

from budget_tracker.transactions.ids import TransactionIdGenerator
from budget_tracker.transactions.store import TransactionStore

__all__ = ["TransactionIdGenerator", "TransactionStore"]
