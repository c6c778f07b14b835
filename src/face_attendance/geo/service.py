from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import OutOfRangeError, ValidationError
from ..settings.service import SettingsService
from ..users.department_repository import DepartmentRepository
from ..users.repository import UserRepository
from .distance import haversine_distance
from .model import GeofenceSetting, GeoPoint, LocationCheck
from .resolver import resolve_geofence

logger = logging.getLogger(__name__)


class GeofenceService:
    """Use case: decide where a user may clock in from.

    Fetches the user, department and global settings, then hands the
    snapshots to the pure resolver.
    """

    def __init__(self, users: UserRepository, departments: DepartmentRepository, settings: SettingsService):
        self._users = users
        self._departments = departments
        self._settings = settings

    def _department_location(self, dept_name: str) -> Optional[dict]:
        department = self._departments.get_by_name(dept_name)
        return department.location if department else None

    def effective_geofence(self, user_id: int) -> Optional[GeofenceSetting]:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")

        return resolve_geofence(
            user_override=user.location_override,
            department_name=user.department,
            department_lookup=self._department_location,
            global_lookup=self._settings.global_location,
        )

    def check_position(self, user_id: int, point: GeoPoint) -> LocationCheck:
        geofence = self.effective_geofence(user_id)
        if geofence is None:
            return LocationCheck(geofence=None, distance_meters=None, in_range=True)

        distance = haversine_distance(point, geofence.origin)
        return LocationCheck(geofence=geofence, distance_meters=distance, in_range=distance <= geofence.radius_meters)

    def require_in_range(self, user_id: int, point: GeoPoint) -> LocationCheck:
        check = self.check_position(user_id, point)
        if not check.in_range:
            logger.info(
                "User %s out of range of %r: %.0f m > %.0f m",
                user_id,
                check.geofence.label,
                check.distance_meters,
                check.geofence.radius_meters,
            )
            raise OutOfRangeError(
                f"You are {check.distance_meters:.0f} m from {check.geofence.label}; "
                f"allowed radius is {check.geofence.radius_meters:.0f} m",
                distance_meters=check.distance_meters,
                radius_meters=check.geofence.radius_meters,
            )
        return check
