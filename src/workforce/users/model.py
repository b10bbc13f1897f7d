from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Employee accounts are linked to exactly one Employee through ``employee_id``.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    employee_id: Optional[int] = None
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None
