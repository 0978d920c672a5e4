"""
Transaction Store

DESIGN DECISION: The store is the only owner of the transaction list.
Nothing else mutates it or writes the `transactions` key.

Every mutation:
1. Updates the in-memory list first
2. Rewrites the WHOLE list to storage (no deltas, no batching)

The full rewrite costs O(n) per mutation. That is fine for a personal
list; a larger data set would want an append-only log instead.

Writes are serialized through one lock and retried once. A write that
still fails is logged and reflected in `last_save_ok`; it is never
raised, so the in-memory list stays authoritative for the session.
"""

import asyncio
import json
from typing import Iterator, Optional

from pydantic import ValidationError

from budget_tracker.audit import AuditLogger
from budget_tracker.errors import TransactionNotFoundError
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.models.transaction import Transaction, TransactionList
from budget_tracker.services.storage import (
    TRANSACTIONS_KEY,
    KeyValueStorageInterface,
    StorageError,
    persist_with_retry,
)
from budget_tracker.transactions.ids import TransactionIdGenerator
from budget_tracker.validation import TransactionInputValidator


class TransactionStore:
    """
    Ordered collection of transactions with add / update / remove.

    Order is insertion order, which is also display order.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        id_generator: Optional[TransactionIdGenerator] = None,
        validator: Optional[TransactionInputValidator] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._ids = id_generator or TransactionIdGenerator()
        self._validator = validator or TransactionInputValidator()
        self._transactions: list[Transaction] = []
        self._write_lock = asyncio.Lock()
        self.last_save_ok = True

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of the list. Mutate only through add/update/remove."""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def get(self, transaction_id: str) -> Optional[Transaction]:
        index = self._index_of(transaction_id)
        return None if index is None else self._transactions[index]

    def _index_of(self, transaction_id: str) -> Optional[int]:
        for index, tx in enumerate(self._transactions):
            if tx.id == transaction_id:
                return index
        return None

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    async def load_all(self) -> list[Transaction]:
        """
        Replace the in-memory list with what storage holds.

        A missing key gives an empty list. An unreadable backend or a
        malformed value is logged and also gives an empty list.
        """
        try:
            raw = await self._storage.read(TRANSACTIONS_KEY)
        except StorageError as e:
            self._audit_logger.log_load_failed(TRANSACTIONS_KEY, str(e))
            raw = None

        transactions: list[Transaction] = []
        if raw is not None:
            try:
                transactions = TransactionList.validate_json(raw)
            except ValidationError as e:
                self._audit_logger.log_load_failed(TRANSACTIONS_KEY, str(e))
                transactions = []

        self._ids.seed(tx.id for tx in transactions)
        self._transactions = self._dedupe_ids(transactions)
        self._audit_logger.log(AuditEventBuilder.transactions_loaded(len(self._transactions)))
        return list(self._transactions)

    def _dedupe_ids(self, transactions: list[Transaction]) -> list[Transaction]:
        """Give later records that share an id a fresh one."""
        seen: set[str] = set()
        result = []
        for tx in transactions:
            if tx.id in seen:
                new_id = self._ids.next_id()
                self._audit_logger.log_error(
                    error_type="duplicate_transaction_id",
                    error_message=f"Stored id {tx.id} is not unique",
                    details={"old_id": tx.id, "new_id": new_id},
                )
                tx = tx.model_copy(update={"id": new_id})
            seen.add(tx.id)
            result.append(tx)
        return result

    def serialize(self) -> str:
        """The JSON array written under the `transactions` key."""
        return json.dumps(
            [tx.to_storage_dict() for tx in self._transactions],
            ensure_ascii=False,
        )

    async def _persist(self) -> bool:
        async with self._write_lock:
            self.last_save_ok = await persist_with_retry(
                self._storage,
                TRANSACTIONS_KEY,
                self.serialize(),
                self._audit_logger,
            )
            return self.last_save_ok

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def add(self, desc: str, raw_amount, category) -> Optional[Transaction]:
        """
        Append a new transaction.

        Returns None (and changes nothing) if any field is missing or the
        amount has no digits.
        """
        result = self._validator.validate(desc, raw_amount, category)
        if not result.is_valid:
            self._audit_logger.log(AuditEventBuilder.transaction_rejected(
                operation="add",
                issues=result.issues_as_dicts(),
            ))
            return None

        tx = Transaction(
            id=self._ids.next_id(),
            desc=result.desc,
            amount=result.amount,
            category=result.category,
        )
        self._transactions.append(tx)
        self._audit_logger.log(AuditEventBuilder.transaction_added(
            transaction_id=tx.id,
            desc=tx.desc,
            amount=tx.amount,
            category=tx.category.value,
        ))
        await self._persist()
        return tx

    async def update(
        self,
        transaction_id: str,
        desc: str,
        raw_amount,
        category,
    ) -> Optional[Transaction]:
        """
        Replace the fields of an existing transaction in place.

        The id and list position are kept.

        Raises:
            TransactionNotFoundError: If no transaction has this id
        """
        index = self._index_of(transaction_id)
        if index is None:
            self._audit_logger.log(AuditEventBuilder.transaction_not_found(
                transaction_id=transaction_id,
                operation="update",
            ))
            raise TransactionNotFoundError(transaction_id)

        result = self._validator.validate(desc, raw_amount, category)
        if not result.is_valid:
            self._audit_logger.log(AuditEventBuilder.transaction_rejected(
                operation="update",
                issues=result.issues_as_dicts(),
                transaction_id=transaction_id,
            ))
            return None

        current = self._transactions[index]
        new_values = {
            "desc": result.desc,
            "amount": result.amount,
            "category": result.category,
        }
        changes = {
            field: {"old": _plain(getattr(current, field)), "new": _plain(value)}
            for field, value in new_values.items()
            if getattr(current, field) != value
        }
        updated = current.model_copy(update=new_values)
        self._transactions[index] = updated

        self._audit_logger.log(AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changes=changes,
        ))
        await self._persist()
        return updated

    async def remove(self, transaction_id: str) -> bool:
        """
        Remove a transaction.

        Returns False without writing when the id is unknown.
        """
        index = self._index_of(transaction_id)
        if index is None:
            self._audit_logger.log(AuditEventBuilder.transaction_not_found(
                transaction_id=transaction_id,
                operation="remove",
            ))
            return False

        del self._transactions[index]
        self._audit_logger.log(AuditEventBuilder.transaction_deleted(transaction_id))
        await self._persist()
        return True


def _plain(value):
    return value.value if hasattr(value, "value") else value
