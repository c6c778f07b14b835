from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class ScheduleSetting:
    """Daily schedule. Only the clock-in deadline drives lateness."""

    clock_in_deadline: time
    clock_out_time: Optional[time] = None


@dataclass(frozen=True)
class GlobalSettings:
    """Snapshot of the global settings record.

    ``location`` is the raw global geofence mapping (validated by the
    resolver, not here).
    """

    location: Optional[dict] = None
    schedule: Optional[ScheduleSetting] = None
    announcement: Optional[str] = None
