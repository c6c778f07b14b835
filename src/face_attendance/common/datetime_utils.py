from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_clock_time(value: str) -> time:
    """Parse an HH:MM (or HH:MM:SS) time-of-day setting."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time of day (HH:MM): {value!r}")


def start_of_day(day: date | datetime) -> datetime:
    if isinstance(day, datetime):
        return day.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(day, time.min)


def end_of_day(day: date | datetime) -> datetime:
    """Last millisecond of the calendar day (23:59:59.999)."""
    if isinstance(day, datetime):
        return day.replace(hour=23, minute=59, second=59, microsecond=999000)
    return datetime.combine(day, END_OF_DAY)


def now_local() -> datetime:
    """Current local wall-clock time; patched in tests."""
    return datetime.now()
