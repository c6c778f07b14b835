"""Reduce raw clock-in/clock-out events into one summary per employee-day."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..core.enums import EventKind
from ..core.exceptions import MalformedEventError
from ..settings.model import ScheduleSetting
from .model import AttendanceEvent, DailySummary, DateRange

_HALF_MINUTE = timedelta(seconds=30)
_MINUTE = timedelta(minutes=1)


def _checked_timestamp(event: AttendanceEvent) -> datetime:
    """Timestamps are naive local wall-clock; anything else is malformed."""

    value = event.timestamp
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise MalformedEventError(f"Unparseable timestamp {event.timestamp!r}", event_id=event.event_id) from None
    if not isinstance(value, datetime):
        raise MalformedEventError(f"Unparseable timestamp {value!r}", event_id=event.event_id)
    if value.tzinfo is not None:
        raise MalformedEventError(
            f"Timestamp {event.timestamp!r} carries a UTC offset; expected local time",
            event_id=event.event_id,
        )
    return value


def _checked_kind(event: AttendanceEvent) -> EventKind:
    try:
        return EventKind(event.kind)
    except ValueError:
        raise MalformedEventError(f"Unknown event kind {event.kind!r}", event_id=event.event_id) from None


def late_minutes(clock_in: datetime, schedule: ScheduleSetting) -> int:
    """Whole minutes after the deadline on clock_in's day, rounded half up; 0 if on time."""

    deadline = datetime.combine(clock_in.date(), schedule.clock_in_deadline)
    if clock_in <= deadline:
        return 0
    return (clock_in - deadline + _HALF_MINUTE) // _MINUTE


def summarize_daily(
    events: Iterable[AttendanceEvent],
    *,
    date_range: Optional[DateRange] = None,
    schedule: Optional[ScheduleSetting] = None,
) -> list[DailySummary]:
    """Build one DailySummary per (employee_id, date) present in ``events``.

    Events are filtered by timestamp to ``date_range`` (inclusive, whole
    days), processed in ascending timestamp order, and the result is sorted
    by date descending. Only the first clock-in of a day counts; the latest
    clock-out wins. Raises MalformedEventError on events that cannot be
    ordered or classified.
    """

    checked = [(_checked_timestamp(e), _checked_kind(e), e) for e in events]

    if date_range is not None:
        lower, upper = date_range.bounds()
        checked = [c for c in checked if lower <= c[0] <= upper]

    checked.sort(key=lambda c: c[0])

    summary_map: dict[tuple[str, date], dict] = {}
    for ts, kind, event in checked:
        key = (event.employee_id, event.date)
        s = summary_map.get(key)
        if s is None:
            s = {
                "employee_id": event.employee_id,
                "employee_name": event.employee_name,
                "date": event.date,
                "first_clock_in": None,
                "last_clock_out": None,
                "late_minutes": None,
            }
            summary_map[key] = s

        if kind == EventKind.CLOCK_IN:
            if s["first_clock_in"] is None:
                s["first_clock_in"] = event.time_of_day
                if schedule is not None:
                    s["late_minutes"] = late_minutes(ts, schedule)
        else:
            s["last_clock_out"] = event.time_of_day

    summaries = [DailySummary(**s) for s in summary_map.values()]
    summaries.sort(key=lambda s: s.employee_id)
    summaries.sort(key=lambda s: s.date, reverse=True)
    return summaries
