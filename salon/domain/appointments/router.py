"""Appointment router - FastAPI endpoint for appointment actions"""

from fastapi import APIRouter, Depends, Request

from ...database import Database, get_db
from ...email_service import AppointmentNotifier, get_notifier
from ...shared.actions import ActionRequest, dispatch, envelope
from .service import AppointmentChange, AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(
    db: Database = Depends(get_db),
    notifier: AppointmentNotifier = Depends(get_notifier),
) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db, notifier)


def change_envelope(change: AppointmentChange, include_data: bool = True) -> dict:
    return envelope(
        change.appointment if include_data else None,
        incomeCreated=change.income_created,
        incomeDeleted=change.income_deleted,
    )


def build_handlers(service: AppointmentService) -> dict:
    def list_appointments(req: ActionRequest):
        return envelope(service.get_appointments())

    def add_appointment(req: ActionRequest):
        return change_envelope(service.create_appointment(req.data))

    def edit_appointment(req: ActionRequest):
        return change_envelope(service.update_appointment(req.data))

    def delete_appointment(req: ActionRequest):
        return change_envelope(service.delete_appointment(req.get("id")), include_data=False)

    def update_status(req: ActionRequest):
        fields = {key: req.get(key) for key in ("id", "status") if req.get(key) is not None}
        return change_envelope(service.update_status(fields))

    return {
        "list": list_appointments,
        "add": add_appointment,
        "edit": edit_appointment,
        "delete": delete_appointment,
        "updateStatus": update_status,
    }


@router.api_route("", methods=["GET", "POST"])
async def appointments_endpoint(
    request: Request,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointment actions: list, add, edit, delete, updateStatus"""
    return await dispatch(request, build_handlers(service))
