"""Income repository - Storage operations for income records"""

from typing import Optional

from ...database import Database, Record
from ...exceptions import Conflict


def _unique_appointment(appointment_id: int):
    def guard(records: list[Record]) -> None:
        if any(r.get("appointmentId") == appointment_id for r in records):
            raise Conflict("Income record already exists for this appointment")

    return guard


class IncomeRepository:
    """Repository for income storage operations"""

    @staticmethod
    def get_incomes(db: Database) -> list[Record]:
        return db.incomes.list()

    @staticmethod
    def get_income_by_id(db: Database, income_id: int) -> Optional[Record]:
        return db.incomes.get(income_id)

    @staticmethod
    def get_income_by_appointment_id(db: Database, appointment_id: int) -> Optional[Record]:
        for income in db.incomes.list():
            if income.get("appointmentId") == appointment_id:
                return income
        return None

    @staticmethod
    def create_income(db: Database, income_data: Record) -> Record:
        """Insert an income record; at most one may exist per appointment"""
        return db.incomes.insert(
            income_data, guard=_unique_appointment(income_data["appointmentId"])
        )

    @staticmethod
    def update_income(db: Database, income_id: int, **updates) -> Record:
        return db.incomes.update(income_id, updates)

    @staticmethod
    def delete_income(db: Database, income_id: int) -> None:
        db.incomes.remove(income_id)

    @staticmethod
    def delete_by_appointment_id(db: Database, appointment_id: int) -> list[Record]:
        return db.incomes.remove_where(lambda r: r.get("appointmentId") == appointment_id)
