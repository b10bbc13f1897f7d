from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import SessionUser
from .model import Availability
from .repository import AvailabilityRepository

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Use case: employees declare which days they can work."""

    def __init__(self, availability: AvailabilityRepository):
        self._availability = availability

    @staticmethod
    def _resolve_employee(current_user: SessionUser, employee_id: Optional[int]) -> int:
        # Employees always act on their own record.
        if current_user.role == Role.EMPLOYEE:
            if not current_user.employee_id:
                raise ValidationError("Your account is not linked to an employee")
            if employee_id and int(employee_id) != int(current_user.employee_id):
                raise AuthorizationError("You can only register your own availability")
            return int(current_user.employee_id)

        if not employee_id:
            raise ValidationError("Employee is required")
        return int(employee_id)

    def register(
        self,
        *,
        current_user: SessionUser,
        employee_id: Optional[int],
        dates: Iterable[date],
        available: bool = True,
    ) -> int:
        target = self._resolve_employee(current_user, employee_id)

        unique_dates = sorted(set(dates))
        if not unique_dates:
            raise ValidationError("Select at least one date")

        duplicates = self._availability.existing_dates(employee_id=target, dates=unique_dates)
        if duplicates:
            listed = ", ".join(d.isoformat() for d in sorted(duplicates))
            raise ValidationError(f"Availability already registered for: {listed}")

        created = self._availability.create_many(employee_id=target, dates=unique_dates, available=bool(available))
        logger.info("Availability registered for employee %s on %s day(s)", target, created)
        return created

    def list_range(
        self,
        *,
        current_user: SessionUser,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[Availability]:
        if start > end:
            raise ValidationError("Start date must be on or before end date")
        if current_user.role == Role.EMPLOYEE:
            if not current_user.employee_id:
                return []
            employee_id = current_user.employee_id
        return self._availability.list_range(start=start, end=end, employee_id=employee_id)

    def delete(self, *, current_user: SessionUser, availability_id: int) -> None:
        record = self._availability.get_by_id(int(availability_id))
        if not record:
            raise NotFoundError("Availability not found")

        if current_user.role != Role.ADMIN and record.employee_id != current_user.employee_id:
            raise AuthorizationError("You can only delete your own availability")

        self._availability.delete(availability_id=int(availability_id))
        logger.info("Availability %s deleted", availability_id)
