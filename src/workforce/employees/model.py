from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: a person on the payroll.

    ``salary`` is the daily rate.
    """

    employee_id: int
    name: str
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    salary: Decimal = Decimal("0")
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.last_name}".strip()


@dataclass(frozen=True)
class EmployeeStats:
    total: int
    average_salary: Decimal
    total_salary: Decimal
