"""
Plain-text email templates for appointment notifications
"""

from datetime import datetime
from typing import Optional

from . import config


def format_appointment_date(date_str: str) -> str:
    """2024-12-23 -> December 23, 2024"""
    try:
        parsed = datetime.strptime(date_str, "%Y-%m-%d")
    except (TypeError, ValueError):
        return str(date_str)
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def _details(appointment: dict, staff_name: str, service_name: str, include_status: bool) -> str:
    lines = [
        f"Date: {format_appointment_date(appointment.get('date', ''))}",
        f"Time: {appointment.get('time', '')}",
        f"Service: {service_name}",
        f"Staff: {staff_name}",
    ]
    if include_status:
        lines.append(f"Status: {appointment.get('status', '')}")
    return "\n".join(lines) + "\n\n"


def _footer() -> str:
    return (
        f"Thank you for choosing {config.SALON_NAME}!\n"
        f"Best regards,\n{config.SALON_NAME} Management System"
    )


def appointment_email(
    event: str,
    client_name: str,
    appointment: dict,
    staff_name: str,
    service_name: str,
) -> Optional[tuple[str, str]]:
    """
    Build (subject, body) for an appointment event.

    Returns None for an unknown event so the caller can skip sending.
    """
    salon = config.SALON_NAME
    greeting = f"Dear {client_name},\n\n"

    if event == "created":
        subject = f"✨ Appointment Confirmation - {salon}"
        body = (
            greeting
            + "Your appointment has been successfully created!\n\n"
            + "APPOINTMENT DETAILS:\n"
            + _details(appointment, staff_name, service_name, include_status=True)
            + "We look forward to seeing you soon!\n\n"
        )
    elif event == "updated":
        subject = f"✨ Appointment Updated - {salon}"
        body = (
            greeting
            + "Your appointment has been updated.\n\n"
            + "UPDATED APPOINTMENT DETAILS:\n"
            + _details(appointment, staff_name, service_name, include_status=True)
            + "If you have any questions, please contact us.\n\n"
        )
    elif event == "cancelled":
        subject = f"✨ Appointment Cancelled - {salon}"
        body = (
            greeting
            + "Your appointment has been cancelled.\n\n"
            + "CANCELLED APPOINTMENT DETAILS:\n"
            + _details(appointment, staff_name, service_name, include_status=False)
            + "If you would like to reschedule, please contact us.\n\n"
        )
    elif event == "status_changed":
        subject = f"✨ Appointment Status Updated - {salon}"
        body = (
            greeting
            + f"Your appointment status has been updated to: {appointment.get('status', '')}\n\n"
            + "APPOINTMENT DETAILS:\n"
            + _details(appointment, staff_name, service_name, include_status=False)
        )
    else:
        return None

    return subject, body + _footer()
