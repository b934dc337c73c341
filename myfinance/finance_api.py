"""HTTP endpoints for transactions and balances."""

from __future__ import annotations

import json
import re
from typing import Any

from flask import Blueprint, jsonify, request

from .finance_service import FinanceService, TransactionNotFoundError
from .models import ModelError, Transaction

TRANSACTION_TYPES = ("income", "expense")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _BindError(Exception):
    """The request body could not be turned into a transaction."""


def _atoi(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if _INT64_MIN <= value <= _INT64_MAX else None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _bind_transaction() -> Transaction:
    raw = request.get_data(as_text=True)
    if not raw.strip():
        raise _BindError("Invalid request data")
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise _BindError("Invalid JSON syntax") from None
    if data is None:
        data = {}
    try:
        return Transaction.from_dict(data)
    except ModelError as exc:
        if exc.field == "date":
            raise _BindError("Date must be in the format yyyy-mm-dd") from None
        raise _BindError("Invalid JSON syntax") from None


def finance_blueprint(service: FinanceService) -> Blueprint:
    """Build the routes that add, list, change and delete transactions."""
    blueprint = Blueprint("finance", __name__)

    @blueprint.post("/transactions")
    def add_transaction():
        try:
            transaction = _bind_transaction()
        except _BindError as exc:
            return _error(str(exc), 400)
        if transaction.type not in TRANSACTION_TYPES:
            return _error("Type must be 'income' or 'expense'", 400)
        try:
            added = service.add_transaction(transaction)
        except (OSError, ValueError, RuntimeError):
            return _error("Failed to add transaction", 500)
        return jsonify(added.to_dict()), 201

    @blueprint.get("/transactions/<item_id>")
    def get_transactions(item_id: str):
        user_id = _atoi(item_id)
        if user_id is None:
            return _error("Invalid user ID", 400)
        transactions = service.transactions_for_user(user_id)
        if not transactions:
            return jsonify(None), 200
        return jsonify([transaction.to_dict() for transaction in transactions]), 200

    @blueprint.get("/balance/<user_id>")
    def get_balance(user_id: str):
        wanted = _atoi(user_id)
        if wanted is None:
            return _error("Invalid user ID", 400)
        return jsonify({"balance": service.balance_for_user(wanted)}), 200

    @blueprint.put("/transactions/<item_id>")
    def update_transaction(item_id: str):
        try:
            updated = _bind_transaction()
        except _BindError as exc:
            return _error(str(exc), 400)
        if updated.type not in TRANSACTION_TYPES:
            return _error("Type must be 'income' or 'expense'", 400)
        try:
            service.update_transaction(item_id, updated)
        except TransactionNotFoundError:
            return _error("Transaction not found", 404)
        except (OSError, ValueError, RuntimeError):
            return _error("Failed to update transaction", 500)
        return jsonify({"message": "Transaction updated successfully"}), 200

    @blueprint.delete("/transactions/<item_id>")
    def delete_transaction(item_id: str):
        if _atoi(item_id) is None:
            return _error("Invalid transaction ID", 400)
        try:
            service.delete_transaction(item_id)
        except TransactionNotFoundError:
            return _error("Transaction not found", 404)
        except (OSError, ValueError, RuntimeError):
            return _error("Failed to delete transaction", 500)
        return jsonify({"message": "Transaction deleted successfully"}), 200

    return blueprint