"""HTTP endpoint for contact messages."""

from __future__ import annotations

import json
from typing import Any

from flask import Blueprint, jsonify, request

from .email_service import EmailService
from .models import EmailData, ModelError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _bind_email() -> EmailData | None:
    raw = request.get_data(as_text=True)
    if not raw.strip():
        return None
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return None
    try:
        return EmailData.from_dict({} if data is None else data)
    except ModelError:
        return None


def email_blueprint(service: EmailService) -> Blueprint:
    """Build the route that forwards contact messages by e-mail."""
    blueprint = Blueprint("email", __name__)

    @blueprint.post("/send-email")
    def send_email():
        email_data = _bind_email()
        if email_data is None:
            return jsonify({"error": "Invalid email data"}), 400
        try:
            service.send_email(email_data)
        except (OSError, ValueError):
            return jsonify({"error": "Failed to send email"}), 500
        return jsonify({"message": "Email sent successfully"}), 200

    return blueprint