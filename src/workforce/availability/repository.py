from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import Availability


class AvailabilityRepository(Protocol):
    def get_by_id(self, availability_id: int) -> Optional[Availability]:
        raise NotImplementedError

    def existing_dates(self, *, employee_id: int, dates: Iterable[date]) -> set[date]:
        """Subset of ``dates`` already registered for the employee."""

        raise NotImplementedError

    def create_many(self, *, employee_id: int, dates: Sequence[date], available: bool) -> int:
        """Insert one row per date. Returns the number of rows created."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[Availability]:
        raise NotImplementedError

    def delete(self, *, availability_id: int) -> bool:
        raise NotImplementedError
