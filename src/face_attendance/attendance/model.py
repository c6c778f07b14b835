from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

from ..common.datetime_utils import end_of_day, start_of_day
from ..core.constants import DATE_FORMAT, TIME_OF_DAY_FORMAT
from ..core.enums import EventKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one raw clock-in or clock-out stamp.

    Events are append-only; nothing in this package mutates or deletes them.
    ``date`` and ``time_of_day`` are the local wall-clock values recorded at
    stamping time, ``timestamp`` is the absolute instant used for ordering.
    """

    event_id: Optional[int]
    employee_id: str
    employee_name: str
    date: date
    time_of_day: time
    kind: EventKind
    timestamp: datetime
    user_id: Optional[int] = None


@dataclass(frozen=True)
class DailySummary:
    """Read-model: first clock-in, last clock-out and lateness for one employee-day."""

    employee_id: str
    employee_name: str
    date: date
    first_clock_in: Optional[time]
    last_clock_out: Optional[time]
    late_minutes: Optional[int]

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "date": self.date.strftime(DATE_FORMAT),
            "first_clock_in": self.first_clock_in.strftime(TIME_OF_DAY_FORMAT) if self.first_clock_in else None,
            "last_clock_out": self.last_clock_out.strftime(TIME_OF_DAY_FORMAT) if self.last_clock_out else None,
            "late_minutes": self.late_minutes,
        }


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range; ``end`` defaults to ``start``."""

    start: Union[date, datetime]
    end: Optional[Union[date, datetime]] = None

    def __post_init__(self) -> None:
        # Days are local calendar days, the same convention as event timestamps.
        for value in (self.start, self.end):
            if isinstance(value, datetime) and value.tzinfo is not None:
                raise ValidationError("Date range bounds must be local dates without a UTC offset")

    def bounds(self) -> tuple[datetime, datetime]:
        """(00:00:00.000 of start's day, 23:59:59.999 of end's day)."""
        return start_of_day(self.start), end_of_day(self.end if self.end is not None else self.start)
