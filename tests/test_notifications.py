"""Tests for appointment email templates and delivery routing"""

import smtplib

import pytest

from salon import config, email_service
from salon.email_service import AppointmentNotifier
from salon.email_templates import appointment_email, format_appointment_date

APPOINTMENT = {"id": 4, "date": "2024-12-23", "time": "10:00", "status": "complete"}
CLIENT = {"id": 1, "name": "Alice", "email": "alice@x.com"}


def test_format_appointment_date():
    assert format_appointment_date("2024-12-23") == "December 23, 2024"
    assert format_appointment_date("2024-01-05") == "January 5, 2024"
    assert format_appointment_date("someday") == "someday"


def test_created_email(monkeypatch):
    monkeypatch.setattr(config, "SALON_NAME", "Glow Studio")

    subject, body = appointment_email("created", "Alice", APPOINTMENT, "Bob", "Haircut")

    assert subject == "✨ Appointment Confirmation - Glow Studio"
    assert body.startswith("Dear Alice,")
    assert "Date: December 23, 2024" in body
    assert "Time: 10:00" in body
    assert "Service: Haircut" in body
    assert "Staff: Bob" in body
    assert "Status: complete" in body
    assert "Thank you for choosing Glow Studio!" in body


def test_status_changed_email_mentions_new_status():
    subject, body = appointment_email("status_changed", "Alice", APPOINTMENT, "Bob", "Haircut")

    assert "Status Updated" in subject
    assert "updated to: complete" in body


def test_cancelled_email_omits_status():
    _, body = appointment_email("cancelled", "Alice", APPOINTMENT, "Bob", "Haircut")
    assert "Status:" not in body


def test_unknown_event_has_no_email():
    assert appointment_email("rescheduled", "Alice", APPOINTMENT, "Bob", "Haircut") is None


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    def capture(to, subject, body):
        sent.append({"to": to, "subject": subject, "body": body})
        return {"id": "test"}

    monkeypatch.setattr(config, "NOTIFICATIONS_ENABLED", True)
    monkeypatch.setattr(config, "SMTP_HOST", "smtp.test.local")
    monkeypatch.setattr(email_service, "send_via_smtp", capture)
    return sent


def test_notifier_sends_to_client(outbox):
    AppointmentNotifier().notify("created", APPOINTMENT, CLIENT)

    assert len(outbox) == 1
    assert outbox[0]["to"] == "alice@x.com"
    assert "Staff: Not assigned" in outbox[0]["body"]
    assert "Service: Not specified" in outbox[0]["body"]


def test_notifier_skips_client_without_email(outbox):
    assert AppointmentNotifier().notify("created", APPOINTMENT, {"name": "Alice", "email": ""}) is None
    assert outbox == []


def test_notifications_disabled(outbox, monkeypatch):
    monkeypatch.setattr(config, "NOTIFICATIONS_ENABLED", False)

    assert AppointmentNotifier().notify("created", APPOINTMENT, CLIENT) is None
    assert outbox == []


def test_resend_used_without_smtp(monkeypatch):
    sent = []
    monkeypatch.setattr(config, "NOTIFICATIONS_ENABLED", True)
    monkeypatch.setattr(config, "SMTP_HOST", None)
    monkeypatch.setattr(config, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(email_service, "send_via_resend", lambda to, subject, body: sent.append(to))

    AppointmentNotifier().deliver("alice@x.com", "Hello", "Body")

    assert sent == ["alice@x.com"]


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.closed = False
        self.sent = []
        FakeSMTP.instances.append(self)

    def starttls(self, context=None):
        raise smtplib.SMTPException("STARTTLS extension not supported by server")

    def login(self, username, password):
        pass

    def send_message(self, msg):
        self.sent.append(msg)

    def quit(self):
        self.closed = True

    def close(self):
        self.closed = True


def test_smtp_connection_closed_when_tls_fails(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(config, "SMTP_HOST", "smtp.test.local")
    monkeypatch.setattr(config, "SMTP_PORT", 587)
    monkeypatch.setattr(config, "SMTP_USE_TLS", True)
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)

    with pytest.raises(smtplib.SMTPException):
        email_service.send_via_smtp("alice@x.com", "Hello", "Body")

    assert len(FakeSMTP.instances) == 1
    assert FakeSMTP.instances[0].closed
    assert FakeSMTP.instances[0].sent == []


def test_smtp_sends_without_tls(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(config, "SMTP_HOST", "smtp.test.local")
    monkeypatch.setattr(config, "SMTP_PORT", 25)
    monkeypatch.setattr(config, "SMTP_USE_TLS", False)
    monkeypatch.setattr(config, "SMTP_USERNAME", None)
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)

    result = email_service.send_via_smtp("alice@x.com", "Hello", "Body")

    assert result["success"] is True
    assert result["id"].startswith("smtp-")
    assert len(FakeSMTP.instances[0].sent) == 1
    assert FakeSMTP.instances[0].closed
