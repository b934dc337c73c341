"""Sending contact messages over SMTP."""

from __future__ import annotations

import smtplib
import ssl
from email.message import EmailMessage

from .models import EmailData

RECIPIENT = "youremail@example.com"
_IMPLICIT_TLS_PORT = 465
_TIMEOUT_SECONDS = 10.0


class EmailService:
    """Delivers contact messages through one SMTP server."""

    def __init__(self, host: str, port: int, username: str, password: str) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password

    def build_message(self, data: EmailData) -> EmailMessage:
        """Compose the plain-text message for a contact submission."""
        message = EmailMessage()
        message["From"] = data.email
        message["To"] = RECIPIENT
        message["Subject"] = data.subject
        message.set_content(f"De: {data.name}\n\n{data.message}")
        return message

    def send_email(self, data: EmailData) -> None:
        """Send the message; SMTP and network errors propagate."""
        message = self.build_message(data)
        context = ssl.create_default_context()
        if self.port == _IMPLICIT_TLS_PORT:
            client = smtplib.SMTP_SSL(self.host, self.port, timeout=_TIMEOUT_SECONDS, context=context)
        else:
            client = smtplib.SMTP(self.host, self.port, timeout=_TIMEOUT_SECONDS)
        with client as session:
            session.ehlo()
            if self.port != _IMPLICIT_TLS_PORT and session.has_extn("starttls"):
                session.starttls(context=context)
                session.ehlo()
            if self.username and session.has_extn("auth"):
                session.login(self.username, self.password)
            session.send_message(message)