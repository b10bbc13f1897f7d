from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Availability
from .repository import AvailabilityRepository

_SELECT = """
    SELECT a.availability_id, a.employee_id, a.work_date, a.available, a.created_at,
           TRIM(CONCAT(e.name, ' ', e.last_name)) AS employee_name
    FROM availabilities a
    JOIN employees e ON e.employee_id = a.employee_id
"""


def _row_to_availability(r: dict) -> Availability:
    return Availability(
        availability_id=int(r["availability_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        available=bool(r["available"]),
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLAvailabilityRepository(AvailabilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, availability_id: int) -> Optional[Availability]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.availability_id=%s", (int(availability_id),))
            r = fetchone(cur)
            return _row_to_availability(r) if r else None

    def existing_dates(self, *, employee_id: int, dates: Iterable[date]) -> set[date]:
        dates = list(dates)
        if not dates:
            return set()

        placeholders = ",".join(["%s"] * len(dates))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT work_date FROM availabilities WHERE employee_id=%s AND work_date IN ({placeholders})",
                (int(employee_id), *dates),
            )
            return {r["work_date"] for r in fetchall(cur)}

    def create_many(self, *, employee_id: int, dates: Sequence[date], available: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO availabilities(employee_id, work_date, available) VALUES(%s,%s,%s)",
                [(int(employee_id), d, int(bool(available))) for d in dates],
            )
            return len(dates)

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[Availability]:
        clauses = ["a.work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY a.work_date ASC, e.name ASC", tuple(params))
            return [_row_to_availability(r) for r in fetchall(cur)]

    def delete(self, *, availability_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM availabilities WHERE availability_id=%s", (int(availability_id),))
            return cur.rowcount > 0
