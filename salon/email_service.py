"""
Appointment email notifications using custom SMTP or Resend (fallback).
Without either configured, emails are only logged (development mode).
"""

import logging
import smtplib
import ssl
from datetime import datetime, timezone
from email.message import EmailMessage
from typing import Optional

import resend

from . import config
from .email_templates import appointment_email

logger = logging.getLogger(__name__)

# Initialize Resend as fallback
resend.api_key = config.RESEND_API_KEY


def send_via_smtp(to: str, subject: str, body: str) -> dict:
    """Send a plain-text email through the configured SMTP server"""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = config.EMAIL_FROM_ADDRESS
    msg["To"] = to
    msg["Reply-To"] = config.EMAIL_REPLY_TO
    msg.set_content(body)

    if config.SMTP_PORT == 465:
        context = ssl.create_default_context()
        server = smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT, context=context, timeout=30)
    else:
        server = smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=30)

    try:
        if config.SMTP_PORT != 465 and config.SMTP_USE_TLS:
            server.starttls(context=ssl.create_default_context())
        if config.SMTP_USERNAME:
            server.login(config.SMTP_USERNAME, config.SMTP_PASSWORD or "")
        server.send_message(msg)
        server.quit()
    finally:
        # quit() already closed the socket on success
        server.close()

    logger.info(f"✅ Email sent via SMTP {config.SMTP_HOST} to {to}")
    return {"id": f"smtp-{datetime.now(timezone.utc).timestamp()}", "success": True}


def send_via_resend(to: str, subject: str, body: str) -> dict:
    response = resend.Emails.send(
        {
            "from": config.EMAIL_FROM_ADDRESS,
            "to": [to],
            "subject": subject,
            "text": body,
            "reply_to": config.EMAIL_REPLY_TO,
        }
    )
    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


class AppointmentNotifier:
    """
    Builds and delivers the email sent to a client after an appointment
    mutation. Delivery errors propagate; callers treat notification as
    best-effort.
    """

    def notify(
        self,
        event: str,
        appointment: dict,
        client: Optional[dict],
        staff: Optional[dict] = None,
        service: Optional[dict] = None,
    ) -> Optional[dict]:
        if not client or not client.get("email"):
            logger.debug(f"⚠️ No client email for appointment {appointment.get('id')}, skipping {event} email")
            return None

        built = appointment_email(
            event,
            client_name=client.get("name", ""),
            appointment=appointment,
            staff_name=staff["name"] if staff else "Not assigned",
            service_name=service["name"] if service else "Not specified",
        )
        if built is None:
            logger.warning(f"Unknown appointment event {event!r}, no email sent")
            return None

        subject, body = built
        return self.deliver(client["email"], subject, body)

    def deliver(self, to: str, subject: str, body: str) -> Optional[dict]:
        if not config.NOTIFICATIONS_ENABLED:
            logger.debug(f"Notifications disabled, not sending '{subject}' to {to}")
            return None

        if config.SMTP_HOST:
            return send_via_smtp(to, subject, body)

        if config.RESEND_API_KEY:
            logger.info(f"📧 Sending email via Resend to: {to}")
            return send_via_resend(to, subject, body)

        logger.info(f"📧 Email to: {to} | Subject: {subject} (no email provider configured, not sent)")
        return None


def get_notifier() -> AppointmentNotifier:
    """Dependency returning the appointment notifier"""
    return AppointmentNotifier()
