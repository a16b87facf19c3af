"""Staff router - FastAPI endpoint for staff actions"""

from fastapi import APIRouter, Depends, Request

from ...database import Database, get_db
from ...shared.actions import ActionRequest, dispatch, envelope
from .service import StaffService

router = APIRouter(prefix="/staff", tags=["Staff"])


def get_staff_service(db: Database = Depends(get_db)) -> StaffService:
    """Dependency injection for StaffService"""
    return StaffService(db)


def build_handlers(service: StaffService) -> dict:
    def delete_staff(req: ActionRequest):
        service.delete_staff(req.get("id"))
        return envelope(None)

    return {
        "list": lambda req: envelope(service.get_staff()),
        "add": lambda req: envelope(service.create_staff(req.data)),
        "edit": lambda req: envelope(service.update_staff(req.data)),
        "delete": delete_staff,
    }


@router.api_route("", methods=["GET", "POST"])
async def staff_endpoint(
    request: Request,
    service: StaffService = Depends(get_staff_service),
):
    """Staff actions: list, add, edit, delete"""
    return await dispatch(request, build_handlers(service))
