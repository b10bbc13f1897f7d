from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Review state of a daily attendance row."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DayKind(str, Enum):
    """Payroll classification of a single attendance row."""

    DOUBLE = "double"
    REGULAR = "regular"
    JUSTIFIED_ABSENCE = "justified_absence"
    UNEXCUSED_ABSENCE = "unexcused_absence"
