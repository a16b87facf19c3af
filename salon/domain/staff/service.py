"""Staff service - Business logic for staff operations"""

import logging

from ...database import Database, Record
from ...exceptions import NotFound
from ...shared.validators import parse_id, parse_payload
from ...utils.sanitization import sanitize_dict
from .repository import StaffRepository
from .schemas import StaffCreate, StaffUpdate

logger = logging.getLogger(__name__)


class StaffService:
    """Service layer for staff business logic"""

    def __init__(self, db: Database):
        self.db = db
        self.repo = StaffRepository()

    def get_staff(self) -> list[Record]:
        return self.repo.get_staff(self.db)

    def get_staff_member(self, staff_id: int) -> Record:
        member = self.repo.get_staff_by_id(self.db, staff_id)
        if not member:
            raise NotFound("Staff member not found")
        return member

    def create_staff(self, data: dict) -> Record:
        payload = parse_payload(StaffCreate, data)
        member = self.repo.create_staff(
            self.db, **sanitize_dict(payload.model_dump(include={"name", "role", "email"}))
        )
        logger.info(f"Created staff member {member['id']} ({member['role']})")
        return member

    def update_staff(self, data: dict) -> Record:
        payload = parse_payload(StaffUpdate, data)
        updates = sanitize_dict(payload.model_dump(include={"name", "role", "email"}))
        try:
            return self.repo.update_staff(self.db, payload.id, **updates)
        except NotFound:
            raise NotFound("Staff member not found") from None

    def delete_staff(self, staff_id) -> None:
        staff_id = parse_id(staff_id)
        try:
            self.repo.delete_staff(self.db, staff_id)
        except NotFound:
            raise NotFound("Staff member not found") from None
        logger.info(f"Deleted staff member {staff_id}")
