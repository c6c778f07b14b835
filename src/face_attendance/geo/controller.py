from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user_id, error_response, login_required, parse_point
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/location", methods=["GET"], endpoint="api_location")
    @login_required
    def effective_location():
        try:
            geofence = container.geofence_service.effective_geofence(current_user_id())
        except DomainError as e:
            return error_response(e)
        # None means no clock-in restriction is configured.
        return jsonify({"success": True, "geofence": geofence.to_dict() if geofence else None})

    @app.route("/api/location/check", methods=["POST"], endpoint="api_location_check")
    @login_required
    def check_location():
        try:
            point = parse_point(request.get_json(silent=True) or {})
            check = container.geofence_service.check_position(current_user_id(), point)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, **check.to_dict()})
