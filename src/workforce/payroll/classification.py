from __future__ import annotations

from ..attendance.model import AttendanceRecord
from ..core.enums import DayKind


def classify_day(record: AttendanceRecord) -> DayKind:
    """Put an attendance row in exactly one payroll bucket.

    Attendance wins over the justification flag: an attended row is
    DOUBLE or REGULAR whatever ``justified`` says, and ``is_double_day``
    is ignored on absences.
    """

    if record.attended:
        return DayKind.DOUBLE if record.is_double_day else DayKind.REGULAR
    if record.justified:
        return DayKind.JUSTIFIED_ABSENCE
    return DayKind.UNEXCUSED_ABSENCE
