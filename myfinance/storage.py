"""JSON file persistence for transactions and users."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from .models import ModelError, Transaction, User

APP_DIR_NAME = "myfinance"


def default_data_dir() -> Path:
    """Return the application data directory in the user's home, creating it."""
    directory = Path.home() / APP_DIR_NAME
    directory.mkdir(parents=True, exist_ok=True)
    return directory


class FinanceStorage(Protocol):
    """Something that persists the full list of transactions."""

    def save(self, transactions: list[Transaction]) -> None:
        """Persist every transaction, replacing what was stored."""

    def load(self) -> list[Transaction]:
        """Return every stored transaction."""


class UserStorage(Protocol):
    """Something that persists the full list of users."""

    def save(self, users: list[User]) -> None:
        """Persist every user, replacing what was stored."""

    def load(self) -> list[User]:
        """Return every stored user."""


class FileStorage:
    """A single JSON document kept in a file."""

    def __init__(self, filename: str, directory: str | Path | None = None) -> None:
        if directory is None:
            base = default_data_dir()
        else:
            base = Path(directory)
            base.mkdir(parents=True, exist_ok=True)
        self.path = base / filename

    def save(self, data: Any) -> None:
        """Write ``data`` as JSON, replacing the file."""
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, separators=(",", ":"))
            handle.write("\n")

    def load(self) -> Any:
        """Return the stored JSON value, or None when the file does not exist."""
        try:
            handle = self.path.open(encoding="utf-8")
        except FileNotFoundError:
            return None
        with handle:
            return json.load(handle)


def _load_records(file: FileStorage, kind: str) -> list[Any]:
    records = file.load()
    if records is None:
        return []
    if not isinstance(records, list):
        raise ModelError(f"stored {kind} must be a JSON array")
    return records


class FileFinanceStorage:
    """Transactions kept in a JSON file."""

    def __init__(self, filename: str, directory: str | Path | None = None) -> None:
        self._file = FileStorage(filename, directory)

    @property
    def path(self) -> Path:
        return self._file.path

    def save(self, transactions: list[Transaction]) -> None:
        self._file.save([transaction.to_dict() for transaction in transactions])

    def load(self) -> list[Transaction]:
        return [Transaction.from_dict(record) for record in _load_records(self._file, "transactions")]


class FileUserStorage:
    """Users kept in a JSON file."""

    def __init__(self, filename: str, directory: str | Path | None = None) -> None:
        self._file = FileStorage(filename, directory)

    @property
    def path(self) -> Path:
        return self._file.path

    def save(self, users: list[User]) -> None:
        self._file.save([user.to_dict() for user in users])

    def load(self) -> list[User]:
        return [User.from_dict(record) for record in _load_records(self._file, "users")]