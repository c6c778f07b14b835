from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_METERS
from .model import GeofenceSetting, GeoPoint


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in meters."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(max(h, 0.0), 1.0)
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def is_within(point: GeoPoint, geofence: GeofenceSetting) -> bool:
    """Inclusive boundary: a point exactly on the radius is in range."""
    return haversine_distance(point, geofence.origin) <= geofence.radius_meters
