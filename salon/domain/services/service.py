"""Service catalog service - Business logic for salon services"""

import logging

from ...database import Database, Record
from ...exceptions import NotFound
from ...shared.validators import parse_id, parse_payload
from ...utils.sanitization import sanitize_string
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the salon service catalog"""

    def __init__(self, db: Database):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self) -> list[Record]:
        return self.repo.get_services(self.db)

    def get_service(self, service_id: int) -> Record:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFound("Service not found")
        return service

    def create_service(self, data: dict) -> Record:
        payload = parse_payload(ServiceCreate, data)
        service = self.repo.create_service(
            self.db,
            name=sanitize_string(payload.name),
            duration=payload.duration,
            price=payload.price,
        )
        logger.info(f"Created service {service['id']} at {service['price']:.2f}")
        return service

    def update_service(self, data: dict) -> Record:
        payload = parse_payload(ServiceUpdate, data)
        try:
            return self.repo.update_service(
                self.db,
                payload.id,
                name=sanitize_string(payload.name),
                duration=payload.duration,
                price=payload.price,
            )
        except NotFound:
            raise NotFound("Service not found") from None

    def delete_service(self, service_id) -> None:
        service_id = parse_id(service_id)
        try:
            self.repo.delete_service(self.db, service_id)
        except NotFound:
            raise NotFound("Service not found") from None
        logger.info(f"Deleted service {service_id}")
