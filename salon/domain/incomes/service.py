"""Income service - Income records mirroring completed appointments"""

import logging
import math
from datetime import datetime
from typing import Optional

from ...database import Database, Record
from ...exceptions import Conflict, NotFound
from ...shared.validators import parse_id, parse_payload
from ...utils.sanitization import sanitize_string
from ..appointments.schemas import COMPLETE
from .repository import IncomeRepository
from .schemas import IncomeCreate, IncomeFilters, IncomeUpdate
from .summary import summarize_incomes

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class IncomeService:
    """
    Maintains one income record per completed appointment and computes
    income aggregates on demand.
    """

    def __init__(self, db: Database):
        self.db = db
        self.repo = IncomeRepository()

    def _resolve_name(self, store, record_id) -> Optional[str]:
        if record_id is None:
            return None
        record = store.get(record_id)
        return record.get("name") if record else None

    def list_incomes(self, filters: Optional[dict] = None) -> list[Record]:
        """
        Income records matching the filters, most recent first.

        staffId / serviceId are resolved to the current staff / service name
        and matched against the name snapshots on the records.
        """
        criteria = parse_payload(IncomeFilters, filters or {})

        # Snapshots are stored escaped, so compare escaped names
        staff_name = sanitize_string(criteria.staffName) or self._resolve_name(
            self.db.staff, criteria.staffId
        )
        service_name = sanitize_string(criteria.serviceName) or self._resolve_name(
            self.db.services, criteria.serviceId
        )
        if criteria.staffId is not None and staff_name is None:
            return []
        if criteria.serviceId is not None and service_name is None:
            return []

        def matches(income: Record) -> bool:
            income_date = str(income.get("date", ""))
            if criteria.dateFrom and income_date < criteria.dateFrom:
                return False
            if criteria.dateTo and income_date > criteria.dateTo:
                return False
            if criteria.paymentMethod and income.get("paymentMethod") != criteria.paymentMethod:
                return False
            if staff_name and income.get("staffName") != staff_name:
                return False
            if service_name and income.get("serviceName") != service_name:
                return False
            return True

        incomes = [i for i in self.repo.get_incomes(self.db) if matches(i)]
        incomes.sort(key=lambda i: (str(i.get("date", "")), str(i.get("time", ""))), reverse=True)
        return incomes

    def get_income(self, income_id: int) -> Record:
        income = self.repo.get_income_by_id(self.db, income_id)
        if not income:
            raise NotFound("Income record not found")
        return income

    def get_income_for_appointment(self, appointment_id: int) -> Optional[Record]:
        return self.repo.get_income_by_appointment_id(self.db, appointment_id)

    def record_completion(
        self,
        appointment: Record,
        client: Optional[Record],
        staff: Optional[Record],
        service: Optional[Record],
        payment_method: str = "cash",
        notes: str = "",
    ) -> Record:
        """
        Create the income record for a completed appointment.

        The amount is the service's current price; names are snapshotted so
        the record outlives the client, staff member and service.
        Raises Conflict if the appointment already has an income record.
        """
        amount = 0.0
        if service:
            try:
                price = float(service.get("price", 0))
            except (TypeError, ValueError):
                price = math.nan
            if math.isfinite(price):
                amount = round(price, 2)
            else:
                logger.warning(f"Service {service.get('id')} has an invalid price, recording 0")

        income = self.repo.create_income(
            self.db,
            {
                "appointmentId": appointment["id"],
                "clientName": client["name"] if client else UNKNOWN,
                "staffName": staff["name"] if staff else UNKNOWN,
                "serviceName": service["name"] if service else UNKNOWN,
                "amount": amount,
                "date": appointment.get("date", ""),
                "time": appointment.get("time", ""),
                "status": "completed",
                "paymentMethod": payment_method,
                "notes": notes,
                "completedAt": datetime.now().strftime("%Y-%m-%dT%H:%M:%S"),
            },
        )
        logger.info(
            f"💰 Income {income['id']} recorded for appointment {appointment['id']}: {amount:.2f}"
        )
        return income

    def retract_by_appointment_id(self, appointment_id: int) -> bool:
        """Delete the appointment's income record; no-op if there is none"""
        removed = self.repo.delete_by_appointment_id(self.db, appointment_id)
        if removed:
            logger.info(f"Income retracted for appointment {appointment_id}")
        return bool(removed)

    def create_income(self, data: dict) -> Record:
        """
        Record an income manually.

        Only a completed appointment may carry an income, so this is how an
        income deleted without reverting its appointment gets re-entered.
        """
        payload = parse_payload(IncomeCreate, data)

        appointment = self.db.appointments.get(payload.appointmentId)
        if not appointment:
            raise NotFound("Appointment not found")
        if appointment.get("status") != COMPLETE:
            raise Conflict("Income can only be recorded for a completed appointment")

        income = self.repo.create_income(
            self.db,
            {
                "appointmentId": payload.appointmentId,
                "clientName": sanitize_string(payload.clientName),
                "staffName": sanitize_string(payload.staffName),
                "serviceName": sanitize_string(payload.serviceName),
                "amount": payload.amount,
                "date": payload.date,
                "time": payload.time,
                "status": "completed",
                "paymentMethod": payload.paymentMethod,
                "notes": sanitize_string(payload.notes),
                "completedAt": datetime.now().strftime("%Y-%m-%dT%H:%M:%S"),
            },
        )
        logger.info(f"💰 Income {income['id']} added for appointment {payload.appointmentId}")
        return income

    def update_income(self, data: dict) -> Record:
        """Partial update: only the supplied payment method / notes change"""
        payload = parse_payload(IncomeUpdate, data)

        updates = {}
        if payload.paymentMethod is not None:
            updates["paymentMethod"] = payload.paymentMethod
        if payload.notes is not None:
            updates["notes"] = sanitize_string(payload.notes)

        try:
            return self.repo.update_income(self.db, payload.id, **updates)
        except NotFound:
            raise NotFound("Income record not found") from None

    def delete_income(self, income_id) -> Record:
        """
        Hard delete an income record and return it.

        Reverting the linked appointment is the caller's separate step.
        """
        income = self.get_income(parse_id(income_id))
        try:
            self.repo.delete_income(self.db, income["id"])
        except NotFound:
            raise NotFound("Income record not found") from None
        logger.info(f"Deleted income {income['id']} (appointment {income.get('appointmentId')})")
        return income

    def summarize(self, now: Optional[datetime] = None) -> dict:
        now = now or datetime.now()
        return summarize_incomes(self.repo.get_incomes(self.db), now.date())
