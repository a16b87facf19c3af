"""Income router - FastAPI endpoint for income actions"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from ...database import Database, get_db
from ...exceptions import SalonError
from ...shared.actions import ActionRequest, dispatch, envelope
from ...shared.validators import parse_flag
from ..appointments.router import get_appointment_service
from ..appointments.schemas import COMPLETE, PENDING
from ..appointments.service import AppointmentService
from .service import IncomeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/incomes", tags=["Incomes"])


def get_income_service(db: Database = Depends(get_db)) -> IncomeService:
    """Dependency injection for IncomeService"""
    return IncomeService(db)


def revert_appointment(appointments: AppointmentService, income: dict) -> bool:
    """
    Second step of deleting an income: move its completed appointment back
    to pending. Not transactional with the delete; a failure here leaves the
    appointment complete without an income record and is only logged.
    """
    appointment_id = income.get("appointmentId")
    try:
        appointment = appointments.get_appointment(appointment_id)
        if appointment.get("status") != COMPLETE:
            return False
        appointments.update_status({"id": appointment_id, "status": PENDING})
        return True
    except SalonError as e:
        logger.warning(
            f"⚠️ Income {income['id']} deleted but appointment {appointment_id} "
            f"was not reverted to pending: {e.message}"
        )
        return False


def build_handlers(incomes: IncomeService, appointments: AppointmentService) -> dict:
    def list_incomes(req: ActionRequest):
        return envelope(incomes.list_incomes(req.params))

    def add_income(req: ActionRequest):
        return envelope(incomes.create_income(req.data))

    def edit_income(req: ActionRequest):
        return envelope(incomes.update_income(req.data))

    def delete_income(req: ActionRequest):
        income = incomes.delete_income(req.get("id"))
        reverted = False
        if parse_flag(req.get("revertAppointment"), default=True):
            reverted = revert_appointment(appointments, income)
        return envelope(None, appointmentReverted=reverted)

    def get_summary(req: ActionRequest):
        return envelope(incomes.summarize(datetime.now()))

    return {
        "list": list_incomes,
        "add": add_income,
        "edit": edit_income,
        "delete": delete_income,
        "getSummary": get_summary,
    }


@router.api_route("", methods=["GET", "POST"])
async def incomes_endpoint(
    request: Request,
    incomes: IncomeService = Depends(get_income_service),
    appointments: AppointmentService = Depends(get_appointment_service),
):
    """Income actions: list, add, edit, delete, getSummary"""
    return await dispatch(request, build_handlers(incomes, appointments))
