from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_SELECT = """
    SELECT u.user_id, u.username, u.password_hash, u.role, u.employee_id, u.created_at,
           TRIM(CONCAT(e.name, ' ', e.last_name)) AS employee_name
    FROM users u
    LEFT JOIN employees e ON e.employee_id = u.employee_id
"""


def _row_to_user(r: dict) -> User:
    return User(
        user_id=int(r["user_id"]),
        username=r["username"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        employee_id=int(r["employee_id"]) if r.get("employee_id") is not None else None,
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, role, employee_id)
                VALUES(%s,%s,%s,%s)
                """,
                (username, password_hash, role.value, employee_id),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self, *, role: Optional[Role] = None) -> Sequence[User]:
        sql = _SELECT
        params: tuple = ()
        if role is not None:
            sql += " WHERE u.role=%s"
            params = (role.value,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY u.created_at DESC, u.user_id DESC", params)
            return [_row_to_user(r) for r in fetchall(cur)]
