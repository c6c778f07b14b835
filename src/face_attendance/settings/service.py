from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import parse_clock_time
from ..common.validators import require_number
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..geo.model import GeoPoint
from .model import GlobalSettings, ScheduleSetting
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

LOCATION_KEY = "location"
SCHEDULE_KEY = "schedule"
ANNOUNCEMENT_KEY = "announcement"

ChangeListener = Callable[[GlobalSettings], None]


def parse_schedule(raw: Optional[dict]) -> Optional[ScheduleSetting]:
    """Stored schedule -> ScheduleSetting, or None when no deadline is set."""

    if not raw:
        return None
    clock_in = (raw.get("clock_in_time") or "").strip()
    if not clock_in:
        return None
    clock_out = (raw.get("clock_out_time") or "").strip()
    try:
        return ScheduleSetting(
            clock_in_deadline=parse_clock_time(clock_in),
            clock_out_time=parse_clock_time(clock_out) if clock_out else None,
        )
    except ValidationError:
        logger.warning("Ignoring unparseable schedule setting: %r", raw)
        return None


class SettingsService:
    """Use case: read and update the global settings record.

    Reads are pull-based (``current()``); listeners registered with
    ``on_change`` are called after every successful update.
    """

    def __init__(self, settings: SettingsRepository):
        self._settings = settings
        self._listeners: list[ChangeListener] = []

    def current(self) -> GlobalSettings:
        announcement = self._settings.get(ANNOUNCEMENT_KEY) or {}
        return GlobalSettings(
            location=self._settings.get(LOCATION_KEY),
            schedule=parse_schedule(self._settings.get(SCHEDULE_KEY)),
            announcement=(announcement.get("text") or "").strip() or None,
        )

    def global_location(self) -> Optional[dict]:
        return self._settings.get(LOCATION_KEY)

    def schedule(self) -> Optional[ScheduleSetting]:
        return parse_schedule(self._settings.get(SCHEDULE_KEY))

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.current()
        for listener in list(self._listeners):
            listener(snapshot)

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin permission required")

    def update_location(
        self,
        *,
        current_role: Role,
        latitude,
        longitude,
        radius,
        name: Optional[str] = None,
    ) -> None:
        self._require_admin(current_role)

        lat = require_number(latitude, "Latitude")
        lon = require_number(longitude, "Longitude")
        rad = require_number(radius, "Radius")
        GeoPoint(latitude=lat, longitude=lon)
        if rad <= 0:
            raise ValidationError("Radius must be greater than 0")

        value = {"latitude": lat, "longitude": lon, "radius": rad}
        if name and name.strip():
            value["name"] = name.strip()
        self._settings.put(LOCATION_KEY, value)
        logger.info("Global location updated: %s", value)
        self._notify()

    def update_schedule(self, *, current_role: Role, clock_in_time: str, clock_out_time: str) -> None:
        self._require_admin(current_role)

        if not (clock_in_time or "").strip() or not (clock_out_time or "").strip():
            raise ValidationError("Both clock-in and clock-out times are required")
        clock_in = parse_clock_time(clock_in_time)
        clock_out = parse_clock_time(clock_out_time)

        self._settings.put(
            SCHEDULE_KEY,
            {"clock_in_time": clock_in.strftime("%H:%M"), "clock_out_time": clock_out.strftime("%H:%M")},
        )
        logger.info("Schedule updated: in=%s out=%s", clock_in, clock_out)
        self._notify()

    def reset_schedule(self, *, current_role: Role) -> None:
        self._require_admin(current_role)
        self._settings.put(SCHEDULE_KEY, {"clock_in_time": "", "clock_out_time": ""})
        logger.info("Schedule reset")
        self._notify()

    def update_announcement(self, *, current_role: Role, text: str) -> None:
        self._require_admin(current_role)
        self._settings.put(ANNOUNCEMENT_KEY, {"text": (text or "").strip()})
        self._notify()
