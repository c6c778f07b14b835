from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="api_settings")
    @login_required
    def get_settings():
        current = container.settings_service.current()
        schedule = current.schedule
        return jsonify(
            {
                "success": True,
                "location": current.location,
                "schedule": (
                    {
                        "clock_in_time": schedule.clock_in_deadline.strftime("%H:%M"),
                        "clock_out_time": schedule.clock_out_time.strftime("%H:%M") if schedule.clock_out_time else None,
                    }
                    if schedule
                    else None
                ),
                "announcement": current.announcement,
            }
        )

    @app.route("/api/settings/location", methods=["PUT"], endpoint="api_settings_location")
    @admin_required
    def update_location():
        payload = request.get_json(silent=True) or {}
        try:
            container.settings_service.update_location(
                current_role=current_role(),
                latitude=payload.get("latitude"),
                longitude=payload.get("longitude"),
                radius=payload.get("radius"),
                name=payload.get("name"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/settings/schedule", methods=["PUT"], endpoint="api_settings_schedule")
    @admin_required
    def update_schedule():
        payload = request.get_json(silent=True) or {}
        try:
            container.settings_service.update_schedule(
                current_role=current_role(),
                clock_in_time=payload.get("clock_in_time", ""),
                clock_out_time=payload.get("clock_out_time", ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/settings/schedule", methods=["DELETE"], endpoint="api_settings_schedule_reset")
    @admin_required
    def reset_schedule():
        container.settings_service.reset_schedule(current_role=current_role())
        return jsonify({"success": True})

    @app.route("/api/settings/announcement", methods=["PUT"], endpoint="api_settings_announcement")
    @admin_required
    def update_announcement():
        payload = request.get_json(silent=True) or {}
        container.settings_service.update_announcement(current_role=current_role(), text=payload.get("text", ""))
        return jsonify({"success": True})
