from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import EventKind
from ..core.exceptions import MalformedEventError, ValidationError
from ..geo.model import GeoPoint, LocationCheck
from ..geo.service import GeofenceService
from ..settings.service import SettingsService
from ..users.repository import UserRepository
from .model import DailySummary, DateRange
from .repository import AttendanceEventRepository
from .summarizer import summarize_daily

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        events: AttendanceEventRepository,
        users: UserRepository,
        geofences: GeofenceService,
        settings: SettingsService,
    ):
        self._events = events
        self._users = users
        self._geofences = geofences
        self._settings = settings

    def current_status(self, user_id: int) -> Optional[str]:
        """'in' / 'out' from the latest event, None if the user never stamped."""

        latest = self._events.latest_for_user(user_id)
        if not latest:
            return None
        if not isinstance(latest.kind, EventKind):
            raise MalformedEventError(f"Unknown event kind {latest.kind!r}", event_id=latest.event_id)
        return "in" if latest.kind == EventKind.CLOCK_IN else "out"

    def _stamp(self, user_id: int, point: GeoPoint, kind: EventKind, now: Optional[datetime]) -> LocationCheck:
        now = now or now_local()

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        if not user.employee_id:
            raise ValidationError("User has no employee ID")

        status = self.current_status(user_id)
        if kind == EventKind.CLOCK_IN and status == "in":
            raise ValidationError("You are already clocked in")
        if kind == EventKind.CLOCK_OUT and status != "in":
            raise ValidationError("You are not clocked in")

        check = self._geofences.require_in_range(user_id, point)

        self._events.append(
            user_id=user.user_id,
            employee_id=user.employee_id,
            employee_name=user.full_name,
            event_date=now.date(),
            time_of_day=now.time().replace(microsecond=0),
            kind=kind,
            timestamp=now,
        )
        self._users.update_last_location(user.user_id, point)
        logger.info("%s: user=%s employee=%s at %s", kind.value, user.user_id, user.employee_id, now.isoformat())
        return check

    def clock_in(self, user_id: int, point: GeoPoint, *, now: Optional[datetime] = None) -> LocationCheck:
        return self._stamp(user_id, point, EventKind.CLOCK_IN, now)

    def clock_out(self, user_id: int, point: GeoPoint, *, now: Optional[datetime] = None) -> LocationCheck:
        return self._stamp(user_id, point, EventKind.CLOCK_OUT, now)

    def daily_summaries(
        self,
        employee_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[DailySummary]:
        date_range = DateRange(start=start, end=end) if start else None
        if date_range:
            lower, upper = date_range.bounds()
            events = self._events.list_for_employee(employee_id, start=lower, end=upper)
        else:
            events = self._events.list_for_employee(employee_id)

        return summarize_daily(events, date_range=date_range, schedule=self._settings.schedule())

    def all_daily_summaries(self, *, start: date, end: Optional[date] = None) -> list[DailySummary]:
        date_range = DateRange(start=start, end=end)
        lower, upper = date_range.bounds()
        events = self._events.list_range(start=lower, end=upper)
        return summarize_daily(events, date_range=date_range, schedule=self._settings.schedule())
