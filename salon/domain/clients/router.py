"""Client router - FastAPI endpoint for client actions"""

from fastapi import APIRouter, Depends, Request

from ...database import Database, get_db
from ...shared.actions import ActionRequest, dispatch, envelope
from .service import ClientService

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Database = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def build_handlers(service: ClientService) -> dict:
    def list_clients(req: ActionRequest):
        return envelope(service.get_clients())

    def add_client(req: ActionRequest):
        return envelope(service.create_client(req.data))

    def edit_client(req: ActionRequest):
        return envelope(service.update_client(req.data))

    def delete_client(req: ActionRequest):
        service.delete_client(req.get("id"))
        return envelope(None)

    return {
        "list": list_clients,
        "add": add_client,
        "edit": edit_client,
        "delete": delete_client,
    }


@router.api_route("", methods=["GET", "POST"])
async def clients_endpoint(
    request: Request,
    service: ClientService = Depends(get_client_service),
):
    """Client actions: list, add, edit, delete"""
    return await dispatch(request, build_handlers(service))
