from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the employee roster.

    Services depend on this interface, never on a concrete database.
    """

    def list_all(self) -> Sequence[Employee]:
        """Full roster ordered by name."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, employee_id: int, **fields) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
