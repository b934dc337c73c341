"""HTTP endpoints for registering, authenticating and removing users."""

from __future__ import annotations

import json
import re
from typing import Any

from flask import Blueprint, Response, jsonify, request

from .models import ModelError, User
from .user_service import UserNotFoundError, UserService

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+")


class _BindError(Exception):
    """The request body could not be read as expected."""


def _atoi(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if _INT64_MIN <= value <= _INT64_MAX else None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _read_json() -> Any:
    raw = request.get_data(as_text=True)
    if not raw.strip():
        raise _BindError("Invalid request data")
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise _BindError("Invalid JSON format") from None
    return {} if data is None else data


def _public(user: User) -> dict[str, Any]:
    return {"id": user.id, "name": user.name, "email": user.email}


def _login_fields(data: Any) -> tuple[str, str] | None:
    if not isinstance(data, dict):
        return None
    email = data.get("email")
    password = data.get("password")
    if not isinstance(email, str) or not isinstance(password, str):
        return None
    if not email or not password or not _EMAIL_PATTERN.fullmatch(email):
        return None
    return email, password


def user_blueprint(service: UserService) -> Blueprint:
    """Build the routes that register, authenticate and deactivate users."""
    blueprint = Blueprint("users", __name__)

    @blueprint.post("/users")
    def add_user():
        try:
            new_user = User.from_dict(_read_json())
        except _BindError as exc:
            return _error(str(exc), 400)
        except ModelError:
            return _error("Invalid JSON format", 400)
        try:
            user = service.add_user(new_user)
        except (OSError, ValueError, RuntimeError):
            return _error("Failed to add user", 500)
        return jsonify({"message": "Add users successful", "user": _public(user)}), 200

    @blueprint.post("/users/auth")
    def authenticate_user():
        try:
            fields = _login_fields(_read_json())
        except _BindError:
            fields = None
        if fields is None:
            return _error("Invalid login data", 400)
        user = service.authenticate(*fields)
        if user is None:
            return _error("Invalid credentials", 401)
        return jsonify({"message": "Authentication successful", "user": _public(user)}), 200

    @blueprint.delete("/users/<user_id>")
    def delete_user(user_id: str):
        if _atoi(user_id) is None:
            return _error("Invalid user ID", 400)
        try:
            service.delete_user(user_id)
        except UserNotFoundError:
            return _error("User not found", 404)
        except (OSError, ValueError, RuntimeError):
            return _error("Failed to delete user", 500)
        return Response(status=200)

    return blueprint