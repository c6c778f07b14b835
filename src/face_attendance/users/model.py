from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..geo.model import GeoPoint


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access. ``location_override`` is the raw
    per-user geofence as stored; it is validated only when resolved.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    employee_id: Optional[str]
    department: Optional[str]
    location_override: Optional[dict] = None
    last_location: Optional[GeoPoint] = None
    is_active: bool = True
