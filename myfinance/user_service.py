"""Registering, authenticating and deactivating users."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import replace

from .models import User
from .storage import UserStorage

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class EmailExistsError(ValueError):
    """Raised when registering an e-mail address that is already taken."""

    def __init__(self) -> None:
        super().__init__("email already exists")


class UserNotFoundError(LookupError):
    """Raised when no user has the requested id."""

    def __init__(self) -> None:
        super().__init__("user not found")


def _parse_id(value: int | str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value)
    return int(text) if _ID_PATTERN.fullmatch(text) else 0


def _next_id(users: list[User]) -> int:
    return max((user.id for user in users), default=0) + 1


class UserService:
    """In-memory list of users, written through to storage."""

    def __init__(self, storage: UserStorage) -> None:
        self.storage = storage
        self._lock = threading.Lock()
        try:
            users = list(storage.load())
        except (OSError, ValueError) as exc:
            logger.error("Error loading users: %s", exc)
            users = []
        self.users: list[User] = users
        self.next_id = _next_id(users)

    def _email_exists(self, email: str) -> bool:
        return any(user.email == email for user in self.users)

    def load_users(self) -> None:
        """Reload from storage; on failure start over with nothing."""
        with self._lock:
            try:
                users = list(self.storage.load())
            except (OSError, ValueError) as exc:
                logger.error("Error loading users file: %s", exc)
                self.users = []
                self.next_id = 1
                return
            self.users = users
            self.next_id = _next_id(users)

    def save_users(self) -> None:
        """Write every user to storage."""
        try:
            self.storage.save(self.users)
        except (OSError, ValueError) as exc:
            logger.error("Error saving users file: %s", exc)
            raise

    def add_user(self, user: User) -> User:
        """Register an active user under the next free id and return it."""
        with self._lock:
            if self._email_exists(user.email):
                raise EmailExistsError()
            added = replace(user, id=self.next_id, status=True)
            self.users.append(added)
            self.next_id += 1
            self.save_users()
            return added

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the matching active user without credentials, or None."""
        with self._lock:
            for user in self.users:
                if user.email == email and user.password == password and user.status:
                    return User(id=user.id, name=user.name, email=user.email)
            return None

    def delete_user(self, user_id: int | str) -> None:
        """Mark a user inactive."""
        with self._lock:
            wanted = _parse_id(user_id)
            for index, user in enumerate(self.users):
                if user.id == wanted:
                    self.users[index] = replace(user, status=False)
                    self.storage.save(self.users)
                    return
            raise UserNotFoundError()