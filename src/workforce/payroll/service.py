from __future__ import annotations

import logging
import unicodedata
from collections import Counter, defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus, DayKind
from ..core.exceptions import PayrollReportError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .classification import classify_day
from .model import PayrollPeriod, PayrollRecord, PayrollReport

logger = logging.getLogger(__name__)


def name_sort_key(name: str) -> tuple[str, str]:
    """Collation key: accents and case folded first, raw name breaks ties."""

    decomposed = unicodedata.normalize("NFKD", name or "")
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, name or ""


class PayrollReportService:
    """Builds payroll reports from the roster and approved attendance.

    Pure read-and-compute: nothing is persisted, every call starts from scratch.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    def generate_report(self, start_date: date, end_date: date) -> PayrollReport:
        # Range ordering is validated by callers.
        try:
            employees = self._employees.list_all()
            rows = self._attendance.list_approved_in_range(start_date, end_date)
        except Exception as e:
            logger.exception("Payroll report %s..%s failed while reading the store", start_date, end_date)
            raise PayrollReportError(str(e) or "Failed to generate the payroll report") from e

        by_employee: dict[int, list[AttendanceRecord]] = defaultdict(list)
        for row in rows or ():
            if row.status != AttendanceStatus.APPROVED:
                continue
            by_employee[row.employee_id].append(row)

        records = [self._build_record(e, by_employee.get(e.employee_id, [])) for e in employees or ()]
        records.sort(key=lambda r: name_sort_key(r.employee_name))

        report = PayrollReport(
            period=PayrollPeriod(start_date=start_date, end_date=end_date),
            total_employees=len(records),
            total_days_worked=sum(r.total_days_worked for r in records),
            total_payroll=sum((r.total_pay for r in records), Decimal("0")),
            records=tuple(records),
        )
        logger.info(
            "Payroll report %s..%s: %s employees, %s days, total %s",
            start_date,
            end_date,
            report.total_employees,
            report.total_days_worked,
            report.total_payroll,
        )
        return report

    def _build_record(self, employee: Employee, rows: Sequence[AttendanceRecord]) -> PayrollRecord:
        kinds = [classify_day(r) for r in rows]
        counts = Counter(kinds)

        days_worked = sum(self._calculator.day_equivalents(k) for k in kinds)
        salary = employee.salary if employee.salary is not None else Decimal("0")

        return PayrollRecord(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            regular_days=counts[DayKind.REGULAR],
            double_days=counts[DayKind.DOUBLE],
            justified_absences=counts[DayKind.JUSTIFIED_ABSENCE],
            total_days_worked=days_worked,
            daily_salary=salary,
            total_pay=self._calculator.total_pay(days_worked, salary),
            attendances=tuple(rows),
        )
