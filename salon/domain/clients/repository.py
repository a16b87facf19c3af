"""Client repository - Storage operations for clients"""

from typing import Optional

from ...database import Database, Record


class ClientRepository:
    """Repository for client storage operations"""

    @staticmethod
    def get_clients(db: Database) -> list[Record]:
        """Get all clients in insertion order"""
        return db.clients.list()

    @staticmethod
    def get_client_by_id(db: Database, client_id: int) -> Optional[Record]:
        return db.clients.get(client_id)

    @staticmethod
    def create_client(db: Database, **client_data) -> Record:
        return db.clients.insert(client_data)

    @staticmethod
    def update_client(db: Database, client_id: int, **updates) -> Record:
        return db.clients.update(client_id, updates)

    @staticmethod
    def delete_client(db: Database, client_id: int) -> None:
        db.clients.remove(client_id)
