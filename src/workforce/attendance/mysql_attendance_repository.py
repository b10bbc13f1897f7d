from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.employee_id, a.attendance_date, a.attended, a.work_description,
           a.hours_worked, a.is_double_day, a.justified, a.status, a.created_at, a.updated_at,
           TRIM(CONCAT(e.name, ' ', e.last_name)) AS employee_name
    FROM attendances a
    JOIN employees e ON e.employee_id = a.employee_id
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        attendance_date=r["attendance_date"],
        attended=bool(r["attended"]),
        status=AttendanceStatus(r["status"]),
        is_double_day=bool(r.get("is_double_day")),
        justified=bool(r.get("justified")),
        work_description=r.get("work_description"),
        hours_worked=to_decimal(r.get("hours_worked")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        employee_name=r.get("employee_name"),
    )


def _naive(value: datetime) -> datetime:
    # DATETIME columns hold business-local wall time.
    return value.replace(tzinfo=None)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s AND a.attendance_date=%s",
                (int(employee_id), attendance_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendances(
                    employee_id, attendance_date, attended, work_description, hours_worked,
                    is_double_day, justified, status, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,0,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    attendance_date,
                    int(attended),
                    work_description,
                    int(is_double_day),
                    int(justified),
                    status.value,
                    _naive(now),
                    _naive(now),
                ),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendances
                SET attended=%s, work_description=%s, is_double_day=%s, justified=%s, updated_at=%s
                WHERE attendance_id=%s
                """,
                (int(attended), work_description, int(is_double_day), int(justified), _naive(now), int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_status(self, *, attendance_id: int, status: AttendanceStatus, now: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendances SET status=%s, updated_at=%s WHERE attendance_id=%s",
                (status.value, _naive(now), int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_description(self, *, attendance_id: int, work_description: str, now: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendances SET work_description=%s, updated_at=%s WHERE attendance_id=%s",
                (work_description, _naive(now), int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s ORDER BY a.attendance_date DESC",
                (int(employee_id),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_all(self, *, status: Optional[AttendanceStatus] = None) -> Sequence[AttendanceRecord]:
        sql = _SELECT
        params: tuple = ()
        if status is not None:
            sql += " WHERE a.status=%s"
            params = (status.value,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY a.attendance_date DESC, a.attendance_id DESC", params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_approved_in_range(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE a.status=%s AND a.attendance_date BETWEEN %s AND %s
                ORDER BY a.attendance_date ASC
                """,
                (AttendanceStatus.APPROVED.value, start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
