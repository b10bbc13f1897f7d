from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        attended: bool,
        work_description: Optional[str],
        is_double_day: bool,
        justified: bool,
        status: AttendanceStatus,
        now: datetime,
    ) -> int:
        raise NotImplementedError

    def update_mark(
        self,
        *,
        attendance_id: int,
        attended: bool,
        work_description: Optional[str],
        is_double_day: bool,
        justified: bool,
        now: datetime,
    ) -> bool:
        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: AttendanceStatus, now: datetime) -> bool:
        raise NotImplementedError

    def update_description(self, *, attendance_id: int, work_description: str, now: datetime) -> bool:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_all(self, *, status: Optional[AttendanceStatus] = None) -> Sequence[AttendanceRecord]:
        """Newest first, optionally filtered by review status."""

        raise NotImplementedError

    def list_approved_in_range(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Approved rows with ``start_date <= attendance_date <= end_date``, oldest first."""

        raise NotImplementedError
