"""Service catalog router - FastAPI endpoint for salon service actions"""

from fastapi import APIRouter, Depends, Request

from ...database import Database, get_db
from ...shared.actions import ActionRequest, dispatch, envelope
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(db: Database = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


def build_handlers(service: CatalogService) -> dict:
    def delete_service(req: ActionRequest):
        service.delete_service(req.get("id"))
        return envelope(None)

    return {
        "list": lambda req: envelope(service.get_services()),
        "add": lambda req: envelope(service.create_service(req.data)),
        "edit": lambda req: envelope(service.update_service(req.data)),
        "delete": delete_service,
    }


@router.api_route("", methods=["GET", "POST"])
async def services_endpoint(
    request: Request,
    service: CatalogService = Depends(get_catalog_service),
):
    """Service actions: list, add, edit, delete"""
    return await dispatch(request, build_handlers(service))
