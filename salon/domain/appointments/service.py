"""
Appointment service - Bookings and their side effects

Every mutation runs as a short saga:
1. persist the appointment
2. create or retract its income record (failures are raised to the caller)
3. email the client (failures are logged and never affect the result)
The steps are not transactional; a failure in step 2 leaves the appointment
saved without its income mirror.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ...database import Database, Record
from ...email_service import AppointmentNotifier
from ...exceptions import NotFound
from ...shared.validators import parse_id, parse_payload
from ..incomes.service import IncomeService
from .repository import AppointmentRepository
from .schemas import (
    COMPLETE,
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)

logger = logging.getLogger(__name__)


@dataclass
class AppointmentChange:
    """Outcome of an appointment mutation"""

    appointment: Record
    income_created: bool = False
    income_deleted: bool = False


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Database, notifier: Optional[AppointmentNotifier] = None):
        self.db = db
        self.repo = AppointmentRepository()
        self.incomes = IncomeService(db)
        self.notifier = notifier

    def get_appointments(self) -> list[Record]:
        return self.repo.get_appointments(self.db)

    def get_appointment(self, appointment_id: int) -> Record:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")
        return appointment

    def create_appointment(self, data: dict) -> AppointmentChange:
        payload = parse_payload(AppointmentCreate, data)
        appointment = self.repo.create_appointment(
            self.db, **payload.model_dump(include={"clientId", "staffId", "serviceId", "date", "time", "status"})
        )
        logger.info(f"📅 Appointment {appointment['id']} booked for {appointment['date']} {appointment['time']}")

        return self._finish(
            "created",
            appointment,
            lambda: self._sync_income(None, appointment),
        )

    def update_appointment(self, data: dict) -> AppointmentChange:
        payload = parse_payload(AppointmentUpdate, data)
        prior = self.get_appointment(payload.id)

        try:
            appointment = self.repo.update_appointment(
                self.db,
                payload.id,
                **payload.model_dump(include={"clientId", "staffId", "serviceId", "date", "time", "status"}),
            )
        except NotFound:
            raise NotFound("Appointment not found") from None

        return self._finish(
            "updated",
            appointment,
            lambda: self._sync_income(prior.get("status"), appointment),
        )

    def update_status(self, data: dict) -> AppointmentChange:
        payload = parse_payload(AppointmentStatusUpdate, data)
        prior = self.get_appointment(payload.id)

        try:
            appointment = self.repo.update_appointment(self.db, payload.id, status=payload.status)
        except NotFound:
            raise NotFound("Appointment not found") from None
        logger.info(f"Appointment {payload.id} status: {prior.get('status')} → {payload.status}")

        return self._finish(
            "status_changed",
            appointment,
            lambda: self._sync_income(prior.get("status"), appointment),
        )

    def delete_appointment(self, appointment_id) -> AppointmentChange:
        """
        Delete an appointment. A completed appointment's income record is
        retracted as well, so no income outlives its appointment.
        """
        appointment = self.get_appointment(parse_id(appointment_id))

        try:
            self.repo.delete_appointment(self.db, appointment["id"])
        except NotFound:
            raise NotFound("Appointment not found") from None
        logger.info(f"Deleted appointment {appointment['id']}")

        def retract() -> tuple[bool, bool]:
            if appointment.get("status") != COMPLETE:
                return False, False
            return False, self.incomes.retract_by_appointment_id(appointment["id"])

        return self._finish("cancelled", appointment, retract)

    def _sync_income(self, prior_status: Optional[str], appointment: Record) -> tuple[bool, bool]:
        """Keep the income record in step with completion; returns (created, deleted)"""
        was_complete = prior_status == COMPLETE
        is_complete = appointment.get("status") == COMPLETE

        if is_complete and not was_complete:
            client, staff, service = self.repo.get_related(self.db, appointment)
            self.incomes.record_completion(appointment, client, staff, service)
            return True, False

        if was_complete and not is_complete:
            return False, self.incomes.retract_by_appointment_id(appointment["id"])

        return False, False

    def _finish(
        self,
        event: str,
        appointment: Record,
        income_step: Callable[[], tuple[bool, bool]],
    ) -> AppointmentChange:
        change = AppointmentChange(appointment=appointment)
        income_error = None

        try:
            change.income_created, change.income_deleted = income_step()
        except Exception as e:
            logger.error(
                f"❌ Appointment {appointment['id']} saved but its income record could not be updated: {e}"
            )
            income_error = e

        self._notify(event, appointment)

        if income_error is not None:
            raise income_error
        return change

    def _notify(self, event: str, appointment: Record) -> None:
        if self.notifier is None:
            return
        try:
            client, staff, service = self.repo.get_related(self.db, appointment)
            if not client:
                logger.warning(
                    f"⚠️ Client {appointment.get('clientId')} not found, skipping {event} email "
                    f"for appointment {appointment['id']}"
                )
                return
            self.notifier.notify(event, appointment, client, staff, service)
        except Exception as e:
            logger.error(f"❌ Failed to send {event} email for appointment {appointment['id']}: {e}")
