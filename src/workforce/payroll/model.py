from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class PayrollPeriod:
    start_date: date
    end_date: date


@dataclass(frozen=True)
class PayrollRecord:
    """Per-employee payroll line, derived from approved attendance."""

    employee_id: int
    employee_name: str
    regular_days: int
    double_days: int
    justified_absences: int
    total_days_worked: int
    daily_salary: Decimal
    total_pay: Decimal
    attendances: tuple[AttendanceRecord, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class PayrollReport:
    period: PayrollPeriod
    total_employees: int
    total_days_worked: int
    total_payroll: Decimal
    records: tuple[PayrollRecord, ...]
