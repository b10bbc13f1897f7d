from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, last_name, email, phone, position, salary, created_at"
_UPDATABLE = ("name", "last_name", "email", "phone", "position", "salary")


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        last_name=r.get("last_name") or "",
        email=r.get("email"),
        phone=r.get("phone"),
        position=r.get("position"),
        salary=to_decimal(r.get("salary")),
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def create(
        self,
        *,
        name: str,
        last_name: str,
        email: Optional[str],
        phone: Optional[str],
        position: Optional[str],
        salary: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, last_name, email, phone, position, salary)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, last_name, email, phone, position, salary),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, **fields) -> bool:
        columns = [c for c in _UPDATABLE if c in fields]
        if not columns:
            return False

        assignments = ", ".join(f"{c}=%s" for c in columns)
        params = [fields[c] for c in columns] + [int(employee_id)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE employees SET {assignments} WHERE employee_id=%s", tuple(params))
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
