from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DATE_FORMAT, DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current time in the business timezone.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(ZoneInfo(tz_name))


def today_local(tz_name: str = DEFAULT_TIMEZONE) -> date:
    return now_local(tz_name).date()


def current_month_period(today: Optional[date] = None) -> tuple[date, date]:
    """First and last day of the month containing ``today``."""
    today = today or today_local()
    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def previous_month_period(today: Optional[date] = None) -> tuple[date, date]:
    """First and last day of the month before the one containing ``today``."""
    today = today or today_local()
    end = today.replace(day=1) - timedelta(days=1)
    return end.replace(day=1), end
