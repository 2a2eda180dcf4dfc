from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .db_models import Employee
from .schemas import EmployeeIn

class EmployeeStore:
    """Employee persistence over a request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, record: EmployeeIn) -> Employee:
        """Insert a new employee; the returned row carries the assigned id."""
        employee = Employee(
            name=record.name,
            last_name=record.last_name,
            date_of_birth=record.date_of_birth,
        )
        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def find_all(self) -> List[Employee]:
        return list(self.db.scalars(select(Employee).order_by(Employee.id)).all())

    def find_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.db.get(Employee, employee_id)

    def delete_by_id(self, employee_id: int) -> bool:
        employee = self.find_by_id(employee_id)
        if employee is None:
            return False
        self.db.delete(employee)
        self.db.commit()
        return True
