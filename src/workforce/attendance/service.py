from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import SessionUser
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily attendance: employees mark their day, admins review it."""

    def __init__(self, attendance: AttendanceRepository, *, timezone: str = DEFAULT_TIMEZONE):
        self._attendance = attendance
        self._timezone = timezone

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or now_local(self._timezone)

    def today(self, *, now: Optional[datetime] = None) -> date:
        return self._now(now).date()

    @staticmethod
    def _resolve_employee(current_user: SessionUser, employee_id: Optional[int]) -> int:
        if current_user.role == Role.EMPLOYEE:
            if not current_user.employee_id:
                raise ValidationError("Your account is not linked to an employee")
            if employee_id and int(employee_id) != int(current_user.employee_id):
                raise AuthorizationError("You can only mark your own attendance")
            return int(current_user.employee_id)

        if not employee_id:
            raise ValidationError("Employee is required")
        return int(employee_id)

    def mark_attendance(
        self,
        *,
        current_user: SessionUser,
        employee_id: Optional[int],
        attendance_date: Optional[date] = None,
        attended: bool,
        work_description: Optional[str] = None,
        is_double_day: bool = False,
        justified: bool = False,
        now: Optional[datetime] = None,
    ) -> int:
        """Create or update the (employee, date) row.

        A double day only applies to attended days and a justification only
        to absences; the other flag is cleared. New rows start as pending, and a
        reviewed row re-marked by an employee goes back to pending.
        """

        now = self._now(now)
        target = self._resolve_employee(current_user, employee_id)
        attendance_date = attendance_date or now.date()

        attended = bool(attended)
        is_double_day = bool(is_double_day) if attended else False
        justified = False if attended else bool(justified)
        description = optional_text(work_description)

        existing = self._attendance.get_for_employee_and_date(target, attendance_date)
        if existing:
            self._attendance.update_mark(
                attendance_id=existing.attendance_id,
                attended=attended,
                work_description=description,
                is_double_day=is_double_day,
                justified=justified,
                now=now,
            )
            if current_user.role == Role.EMPLOYEE and existing.status != AttendanceStatus.PENDING:
                self._attendance.update_status(
                    attendance_id=existing.attendance_id, status=AttendanceStatus.PENDING, now=now
                )
            logger.info("Attendance %s updated for employee %s on %s", existing.attendance_id, target, attendance_date)
            return existing.attendance_id

        attendance_id = self._attendance.create(
            employee_id=target,
            attendance_date=attendance_date,
            attended=attended,
            work_description=description,
            is_double_day=is_double_day,
            justified=justified,
            status=AttendanceStatus.PENDING,
            now=now,
        )
        logger.info("Attendance %s created for employee %s on %s", attendance_id, target, attendance_date)
        return attendance_id

    def today_record(self, employee_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), self.today(now=now))

    def my_attendances(self, current_user: SessionUser) -> Sequence[AttendanceRecord]:
        if not current_user.employee_id:
            return []
        return self._attendance.list_for_employee(int(current_user.employee_id))

    def list_all(self, *, current_role: Role, status: Optional[AttendanceStatus] = None) -> Sequence[AttendanceRecord]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to review attendance")
        return self._attendance.list_all(status=status)

    def list_by_status(self, *, current_role: Role, status: AttendanceStatus) -> Sequence[AttendanceRecord]:
        return self.list_all(current_role=current_role, status=status)

    def list_pending(self, *, current_role: Role) -> Sequence[AttendanceRecord]:
        return self.list_all(current_role=current_role, status=AttendanceStatus.PENDING)

    def update_status(
        self,
        *,
        current_role: Role,
        attendance_id: int,
        status: AttendanceStatus,
        now: Optional[datetime] = None,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to review attendance")
        if status not in (AttendanceStatus.APPROVED, AttendanceStatus.REJECTED):
            raise ValidationError("Status must be approved or rejected")

        if not self._attendance.get_by_id(int(attendance_id)):
            raise NotFoundError("Attendance record not found")

        self._attendance.update_status(attendance_id=int(attendance_id), status=status, now=self._now(now))
        logger.info("Attendance %s marked %s", attendance_id, status.value)

    def update_description(
        self,
        *,
        current_role: Role,
        attendance_id: int,
        description: str,
        now: Optional[datetime] = None,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to edit attendance")

        if not self._attendance.get_by_id(int(attendance_id)):
            raise NotFoundError("Attendance record not found")

        self._attendance.update_description(
            attendance_id=int(attendance_id),
            work_description=(description or "").strip(),
            now=self._now(now),
        )
