"""Service catalog repository - Storage operations for salon services"""

from typing import Optional

from ...database import Database, Record


class ServiceRepository:
    """Repository for salon service storage operations"""

    @staticmethod
    def get_services(db: Database) -> list[Record]:
        return db.services.list()

    @staticmethod
    def get_service_by_id(db: Database, service_id: int) -> Optional[Record]:
        return db.services.get(service_id)

    @staticmethod
    def create_service(db: Database, **service_data) -> Record:
        return db.services.insert(service_data)

    @staticmethod
    def update_service(db: Database, service_id: int, **updates) -> Record:
        return db.services.update(service_id, updates)

    @staticmethod
    def delete_service(db: Database, service_id: int) -> None:
        db.services.remove(service_id)
