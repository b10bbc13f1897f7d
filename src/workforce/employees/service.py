from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_non_negative_amount
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Employee, EmployeeStats
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage the employee registry (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to manage employees")

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(
        self,
        *,
        current_role: Role,
        name: str,
        last_name: str = "",
        email: Optional[str] = None,
        phone: Optional[str] = None,
        position: Optional[str] = None,
        salary=None,
    ) -> int:
        self._require_admin(current_role)

        employee_id = self._employees.create(
            name=require_non_empty(name, "Name"),
            last_name=(last_name or "").strip(),
            email=optional_text(email),
            phone=optional_text(phone),
            position=optional_text(position),
            salary=require_non_negative_amount(salary, "Salary"),
        )
        logger.info("Employee %s created", employee_id)
        return employee_id

    def update_employee(self, *, current_role: Role, employee_id: int, **changes) -> Employee:
        self._require_admin(current_role)
        self.get(employee_id)

        fields: dict = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "Name")
        if "last_name" in changes:
            fields["last_name"] = (changes["last_name"] or "").strip()
        for key in ("email", "phone", "position"):
            if key in changes:
                fields[key] = optional_text(changes[key])
        if "salary" in changes:
            fields["salary"] = require_non_negative_amount(changes["salary"], "Salary")

        if fields:
            self._employees.update(int(employee_id), **fields)
            logger.info("Employee %s updated (%s)", employee_id, ", ".join(sorted(fields)))
        return self.get(employee_id)

    def delete_employee(self, *, current_role: Role, employee_id: int) -> None:
        self._require_admin(current_role)
        if not self._employees.delete_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted", employee_id)

    def stats(self) -> EmployeeStats:
        employees = self._employees.list_all()
        total = len(employees)
        total_salary = sum((e.salary or Decimal("0") for e in employees), Decimal("0"))
        average = total_salary / total if total else Decimal("0")
        return EmployeeStats(total=total, average_salary=average, total_salary=total_salary)
