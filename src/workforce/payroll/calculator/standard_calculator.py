from __future__ import annotations

from ...core.enums import DayKind
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: a double day pays two days, absences pay nothing."""

    WEIGHTS = {
        DayKind.DOUBLE: 2,
        DayKind.REGULAR: 1,
        DayKind.JUSTIFIED_ABSENCE: 0,
        DayKind.UNEXCUSED_ABSENCE: 0,
    }

    def day_equivalents(self, kind: DayKind) -> int:
        return self.WEIGHTS[kind]
