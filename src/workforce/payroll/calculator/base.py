from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...core.enums import DayKind


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def day_equivalents(self, kind: DayKind) -> int:
        """Paid day-equivalents contributed by one day of ``kind``."""

        raise NotImplementedError

    def total_pay(self, days_worked: int, daily_salary: Decimal) -> Decimal:
        return Decimal(days_worked) * daily_salary
