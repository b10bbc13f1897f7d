from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    ``is_double_day`` only means something when ``attended``;
    ``justified`` only when not attended.
    """

    attendance_id: int
    employee_id: int
    attendance_date: date
    attended: bool
    status: AttendanceStatus
    is_double_day: bool = False
    justified: bool = False
    work_description: Optional[str] = None
    hours_worked: Decimal = Decimal("0")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employee_name: Optional[str] = None
