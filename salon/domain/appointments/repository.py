"""Appointment repository - Storage operations for appointments"""

from typing import Optional

from ...database import Database, Record


class AppointmentRepository:
    """Repository for appointment storage operations"""

    @staticmethod
    def get_appointments(db: Database) -> list[Record]:
        return db.appointments.list()

    @staticmethod
    def get_appointment_by_id(db: Database, appointment_id: int) -> Optional[Record]:
        return db.appointments.get(appointment_id)

    @staticmethod
    def create_appointment(db: Database, **appointment_data) -> Record:
        return db.appointments.insert(appointment_data)

    @staticmethod
    def update_appointment(db: Database, appointment_id: int, **updates) -> Record:
        return db.appointments.update(appointment_id, updates)

    @staticmethod
    def delete_appointment(db: Database, appointment_id: int) -> None:
        db.appointments.remove(appointment_id)

    @staticmethod
    def get_related(db: Database, appointment: Record) -> tuple:
        """Client, staff member and service referenced by an appointment (None when dangling)"""
        return (
            db.clients.get(appointment.get("clientId")),
            db.staff.get(appointment.get("staffId")),
            db.services.get(appointment.get("serviceId")),
        )
