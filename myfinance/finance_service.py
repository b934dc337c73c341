"""Keeping, querying and changing users' transactions."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import replace

from .models import Transaction
from .storage import FinanceStorage

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class TransactionNotFoundError(LookupError):
    """Raised when no transaction has the requested id."""

    def __init__(self) -> None:
        super().__init__("transaction not found")


class StorageSaveError(RuntimeError):
    """Raised when the transactions could not be written to storage."""


def _parse_id(value: int | str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value)
    return int(text) if _ID_PATTERN.fullmatch(text) else 0


def _next_id(transactions: list[Transaction]) -> int:
    return max((transaction.id for transaction in transactions), default=0) + 1


class FinanceService:
    """In-memory list of transactions, written through to storage."""

    def __init__(self, storage: FinanceStorage) -> None:
        self.storage = storage
        self._lock = threading.Lock()
        try:
            transactions = list(storage.load())
        except (OSError, ValueError) as exc:
            logger.error("Error loading transactions: %s", exc)
            transactions = []
        self.transactions: list[Transaction] = transactions
        self.next_id = _next_id(transactions)

    def load_transactions(self) -> None:
        """Reload from storage; on failure start over with nothing."""
        with self._lock:
            try:
                transactions = list(self.storage.load())
            except (OSError, ValueError) as exc:
                logger.error("Error loading finance transactions: %s", exc)
                self.transactions = []
                self.next_id = 1
                return
            self.transactions = transactions
            self.next_id = _next_id(transactions)

    def save_transactions(self) -> None:
        """Write every transaction to storage."""
        try:
            self.storage.save(self.transactions)
        except (OSError, ValueError) as exc:
            raise StorageSaveError(f"Error saving finance transactions: {exc}") from exc

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Store a transaction under the next free id and return it."""
        with self._lock:
            added = replace(transaction, id=self.next_id)
            self.next_id += 1
            self.transactions.append(added)
            self.save_transactions()
            return added

    def transactions_for_user(self, user_id: int) -> list[Transaction]:
        with self._lock:
            return [t for t in self.transactions if t.user_id == user_id]

    def balance_for_user(self, user_id: int) -> float:
        """Income minus expenses for one user."""
        with self._lock:
            balance = 0.0
            for transaction in self.transactions:
                if transaction.user_id != user_id:
                    continue
                if transaction.type == "income":
                    balance += transaction.amount
                elif transaction.type == "expense":
                    balance -= transaction.amount
            return balance

    def delete_transaction(self, transaction_id: int | str) -> None:
        with self._lock:
            wanted = _parse_id(transaction_id)
            for index, transaction in enumerate(self.transactions):
                if transaction.id == wanted:
                    del self.transactions[index]
                    self.storage.save(self.transactions)
                    return
            raise TransactionNotFoundError()

    def update_transaction(self, transaction_id: int | str, updated: Transaction) -> None:
        with self._lock:
            wanted = _parse_id(transaction_id)
            for index, transaction in enumerate(self.transactions):
                if transaction.id == wanted:
                    self.transactions[index] = replace(updated, id=wanted)
                    self.storage.save(self.transactions)
                    return
            raise TransactionNotFoundError()