"""Effective geofence resolution.

Precedence is an explicit ordered list of candidate providers evaluated with
one validity predicate: user-specific override, then the user's department,
then the global default. The first valid candidate wins; when none is valid
the result is None, meaning "no restriction configured".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from ..common.validators import coerce_number
from ..core.constants import DEFAULT_GLOBAL_GEOFENCE_LABEL, USER_GEOFENCE_LABEL
from ..core.enums import GeofenceSource
from ..core.exceptions import ValidationError
from .model import GeofenceSetting, GeoPoint

logger = logging.getLogger(__name__)

RawGeofence = Mapping[str, Any]
DepartmentLookup = Callable[[str], Optional[RawGeofence]]
GlobalLookup = Callable[[], Optional[RawGeofence]]


def coerce_geofence(raw: Optional[RawGeofence], *, label: str, source: GeofenceSource) -> Optional[GeofenceSetting]:
    """Validity predicate shared by every source.

    Latitude, longitude and radius must all be present and numeric, the
    point must be within coordinate bounds and the radius positive. Anything
    else yields None; partial geofences are never partially applied.
    """

    if not raw:
        return None

    latitude = coerce_number(raw.get("latitude"))
    longitude = coerce_number(raw.get("longitude"))
    radius = coerce_number(raw.get("radius"))
    if latitude is None or longitude is None or radius is None or radius <= 0:
        return None

    try:
        origin = GeoPoint(latitude=latitude, longitude=longitude)
    except ValidationError:
        return None

    return GeofenceSetting(origin=origin, radius_meters=radius, label=label, source=source)


@dataclass(frozen=True)
class GeofenceCandidate:
    """One precedence level: where to fetch a raw geofence and how to label it."""

    source: GeofenceSource
    fetch: Callable[[], Optional[RawGeofence]]
    label: Callable[[RawGeofence], str]

    def evaluate(self) -> Optional[GeofenceSetting]:
        raw = self.fetch()
        if not raw:
            return None
        return coerce_geofence(raw, label=self.label(raw), source=self.source)


def build_candidates(
    *,
    user_override: Optional[RawGeofence],
    department_name: Optional[str],
    department_lookup: DepartmentLookup,
    global_lookup: GlobalLookup,
) -> list[GeofenceCandidate]:
    candidates = [
        GeofenceCandidate(
            source=GeofenceSource.USER,
            fetch=lambda: user_override,
            label=lambda _raw: USER_GEOFENCE_LABEL,
        )
    ]

    if department_name:
        candidates.append(
            GeofenceCandidate(
                source=GeofenceSource.DEPARTMENT,
                fetch=lambda: department_lookup(department_name),
                label=lambda _raw: department_name,
            )
        )

    candidates.append(
        GeofenceCandidate(
            source=GeofenceSource.GLOBAL,
            fetch=global_lookup,
            label=lambda raw: str(raw.get("name") or "").strip() or DEFAULT_GLOBAL_GEOFENCE_LABEL,
        )
    )
    return candidates


def resolve_first(candidates: Iterable[GeofenceCandidate]) -> Optional[GeofenceSetting]:
    for candidate in candidates:
        geofence = candidate.evaluate()
        if geofence is not None:
            return geofence
        logger.debug("No valid %s geofence, falling through", candidate.source.value)
    return None


def resolve_geofence(
    *,
    user_override: Optional[RawGeofence],
    department_name: Optional[str],
    department_lookup: DepartmentLookup,
    global_lookup: GlobalLookup,
) -> Optional[GeofenceSetting]:
    return resolve_first(
        build_candidates(
            user_override=user_override,
            department_name=department_name,
            department_lookup=department_lookup,
            global_lookup=global_lookup,
        )
    )
