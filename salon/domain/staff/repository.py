"""Staff repository - Storage operations for staff members"""

from typing import Optional

from ...database import Database, Record


class StaffRepository:
    """Repository for staff storage operations"""

    @staticmethod
    def get_staff(db: Database) -> list[Record]:
        return db.staff.list()

    @staticmethod
    def get_staff_by_id(db: Database, staff_id: int) -> Optional[Record]:
        return db.staff.get(staff_id)

    @staticmethod
    def create_staff(db: Database, **staff_data) -> Record:
        return db.staff.insert(staff_data)

    @staticmethod
    def update_staff(db: Database, staff_id: int, **updates) -> Record:
        return db.staff.update(staff_id, updates)

    @staticmethod
    def delete_staff(db: Database, staff_id: int) -> None:
        db.staff.remove(staff_id)
