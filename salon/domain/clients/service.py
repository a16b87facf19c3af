"""Client service - Business logic for client operations"""

import logging

from ...database import Database, Record
from ...exceptions import NotFound
from ...shared.validators import parse_id, parse_payload
from ...utils.sanitization import sanitize_dict
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Database):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self) -> list[Record]:
        return self.repo.get_clients(self.db)

    def get_client(self, client_id: int) -> Record:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFound("Client not found")
        return client

    def create_client(self, data: dict) -> Record:
        """Create a new client with validation"""
        payload = parse_payload(ClientCreate, data)

        client_data = sanitize_dict(
            {
                "name": payload.name,
                "email": payload.email,
                "phone": payload.phone,
                "notes": payload.notes,
            }
        )
        client_data.update(
            {
                "isVIP": payload.isVIP,
                "isBadClient": payload.isBadClient,
                "appointments": [],
            }
        )

        client = self.repo.create_client(self.db, **client_data)
        logger.info(f"Created client {client['id']}")
        return client

    def update_client(self, data: dict) -> Record:
        """Replace a client's editable fields, keeping its appointment history"""
        payload = parse_payload(ClientUpdate, data)
        existing = self.get_client(payload.id)

        updates = sanitize_dict(
            {
                "name": payload.name,
                "email": payload.email,
                "phone": payload.phone,
                "notes": payload.notes,
            }
        )
        updates["isVIP"] = payload.isVIP
        updates["isBadClient"] = payload.isBadClient
        if payload.appointments is not None:
            updates["appointments"] = payload.appointments
        else:
            updates["appointments"] = existing.get("appointments", [])

        return self.repo.update_client(self.db, payload.id, **updates)

    def delete_client(self, client_id) -> None:
        client_id = parse_id(client_id)
        try:
            self.repo.delete_client(self.db, client_id)
        except NotFound:
            raise NotFound("Client not found") from None
        logger.info(f"Deleted client {client_id}")
