from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EventKind(str, Enum):
    """Kind of a raw attendance event as stored in the event log."""

    CLOCK_IN = "Clocked In"
    CLOCK_OUT = "Clocked Out"


class GeofenceSource(str, Enum):
    """Where an effective geofence came from, in precedence order."""

    USER = "user"
    DEPARTMENT = "department"
    GLOBAL = "global"


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    ANNUAL = "ANNUAL"
    SICK = "SICK"
    SPECIAL = "SPECIAL"
