from unittest import mock

import pytest
from flask import Flask

from myfinance.email_api import email_blueprint
from myfinance.email_service import EmailService


def make_client():
    service = EmailService("localhost", 25, "", "")
    app = Flask(__name__)
    app.register_blueprint(email_blueprint(service), url_prefix="/api/v1")
    return app.test_client()


MESSAGE = {
    "name": "Alice",
    "email": "alice@example.com",
    "subject": "Hello",
    "message": "Just checking in.",
}


def test_send_email_delivers_message():
    client = make_client()
    with mock.patch("smtplib.SMTP") as smtp:
        response = client.post("/api/v1/send-email", json=MESSAGE)
    assert response.status_code == 200
    assert response.get_json() == {"message": "Email sent successfully"}
    session = smtp.return_value.__enter__.return_value
    assert session.send_message.call_count == 1
    sent = session.send_message.call_args.args[0]
    assert sent["From"] == "alice@example.com"
    assert sent["To"] == "youremail@example.com"
    assert sent["Subject"] == "Hello"


def test_send_email_reports_connection_failure():
    client = make_client()
    with mock.patch("smtplib.SMTP", side_effect=ConnectionRefusedError("refused")):
        response = client.post("/api/v1/send-email", json=MESSAGE)
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to send email"}


@pytest.mark.parametrize("payload", ["", '{"name": ', '{"subject": 3}', "[]"])
def test_send_email_rejects_bad_data(payload):
    client = make_client()
    with mock.patch("smtplib.SMTP") as smtp:
        response = client.post("/api/v1/send-email", data=payload, content_type="application/json")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid email data"}
    assert smtp.call_count == 0