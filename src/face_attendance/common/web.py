from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from .datetime_utils import parse_iso_date
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    MalformedEventError,
    OutOfRangeError,
    ValidationError,
)
from ..geo.model import GeoPoint
from .validators import require_number

logger = logging.getLogger(__name__)


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Forbidden"}), 403
        return f(*args, **kwargs)

    return decorated_function


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def error_response(e: DomainError):
    status = 400
    if isinstance(e, AuthenticationError):
        status = 401
    elif isinstance(e, AuthorizationError):
        status = 403
    elif isinstance(e, MalformedEventError):
        logger.error("Attendance data integrity error: %s", e)
        status = 500

    body = {"success": False, "message": str(e)}
    if isinstance(e, OutOfRangeError):
        body["distance_meters"] = round(e.distance_meters, 1)
        body["radius_meters"] = e.radius_meters
    return jsonify(body), status


def parse_point(payload: dict) -> GeoPoint:
    return GeoPoint(
        latitude=require_number(payload.get("latitude"), "Latitude"),
        longitude=require_number(payload.get("longitude"), "Longitude"),
    )


def parse_optional_date(value):
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}") from None
