from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Availability:
    """An employee's declared availability for one calendar day."""

    availability_id: int
    employee_id: int
    work_date: date
    available: bool
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None
