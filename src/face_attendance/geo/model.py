from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.enums import GeofenceSource
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValidationError("Coordinates must be finite numbers")
        if not (-90 <= self.latitude <= 90):
            raise ValidationError("Latitude must be between -90 and 90")
        if not (-180 <= self.longitude <= 180):
            raise ValidationError("Longitude must be between -180 and 180")


@dataclass(frozen=True)
class GeofenceSetting:
    """Circular area (origin + radius) inside which clock-in is allowed."""

    origin: GeoPoint
    radius_meters: float
    label: str
    source: GeofenceSource

    def to_dict(self) -> dict:
        return {
            "latitude": self.origin.latitude,
            "longitude": self.origin.longitude,
            "radius": self.radius_meters,
            "name": self.label,
            "source": self.source.value,
            "is_specific": self.source == GeofenceSource.USER,
        }


@dataclass(frozen=True)
class LocationCheck:
    """Outcome of comparing a device position against the effective geofence."""

    geofence: Optional[GeofenceSetting]
    distance_meters: Optional[float]
    in_range: bool

    @property
    def restricted(self) -> bool:
        return self.geofence is not None

    def to_dict(self) -> dict:
        return {
            "restricted": self.restricted,
            "in_range": self.in_range,
            "distance_meters": None if self.distance_meters is None else round(self.distance_meters, 1),
            "geofence": self.geofence.to_dict() if self.geofence else None,
        }
