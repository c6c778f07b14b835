from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import EventKind
from .model import AttendanceEvent


class AttendanceEventRepository(Protocol):
    """Append-only attendance event log."""

    def append(
        self,
        *,
        user_id: int,
        employee_id: str,
        employee_name: str,
        event_date: date,
        time_of_day: time,
        kind: EventKind,
        timestamp: datetime,
    ) -> int:
        raise NotImplementedError

    def latest_for_user(self, user_id: int) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_range(self, *, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
