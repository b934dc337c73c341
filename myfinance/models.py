"""Records exchanged by the finance API and their JSON forms."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class ModelError(ValueError):
    """Raised when incoming data does not fit a record."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def parse_date(text: str) -> date:
    """Parse a ``yyyy-mm-dd`` date, ignoring surrounding double quotes."""
    if not isinstance(text, str):
        raise ModelError(f"date must be a string in the format yyyy-mm-dd, got {text!r}", "date")
    stripped = text.strip('"')
    if not _DATE_PATTERN.fullmatch(stripped):
        raise ModelError(f"invalid date {stripped!r}: expected yyyy-mm-dd", "date")
    year, month, day = (int(part) for part in stripped.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ModelError(f"invalid date {stripped!r}: {exc}", "date") from exc


def format_date(value: date) -> str:
    """Render a date as ``yyyy-mm-dd``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ModelError(f"{kind} must be a JSON object")
    return data


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ModelError(f"field {key!r} must be a string", key)
    return value


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ModelError(f"field {key!r} must be an integer", key)
    return value


def _number(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ModelError(f"field {key!r} must be a number", key)
    return float(value)


def _boolean(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ModelError(f"field {key!r} must be a boolean", key)
    return value


@dataclass(frozen=True)
class Transaction:
    """A single income or expense entry belonging to a user."""

    id: int = 0
    type: str = ""
    amount: float = 0.0
    category: str = ""
    date: date = date.min
    description: str = ""
    user_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Transaction:
        data = _require_mapping(data, "transaction")
        when = parse_date(data["date"]) if "date" in data else date.min
        return cls(
            id=_integer(data, "id"),
            type=_string(data, "type"),
            amount=_number(data, "amount"),
            category=_string(data, "category"),
            date=when,
            description=_string(data, "description"),
            user_id=_integer(data, "user_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "amount": self.amount,
            "category": self.category,
            "date": format_date(self.date),
            "description": self.description,
            "user_id": self.user_id,
        }


@dataclass(frozen=True)
class User:
    """A registered account; inactive users have ``status`` set to False."""

    id: int = 0
    name: str = ""
    email: str = ""
    password: str = ""
    status: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        data = _require_mapping(data, "user")
        return cls(
            id=_integer(data, "id"),
            name=_string(data, "name"),
            email=_string(data, "email"),
            password=_string(data, "password"),
            status=_boolean(data, "status"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "status": self.status,
        }


@dataclass(frozen=True)
class EmailData:
    """A contact message submitted through the API."""

    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EmailData:
        data = _require_mapping(data, "email data")
        return cls(
            name=_string(data, "name"),
            email=_string(data, "email"),
            subject=_string(data, "subject"),
            message=_string(data, "message"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
        }