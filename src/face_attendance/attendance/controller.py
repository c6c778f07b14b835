from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request, session

from ..common.web import (
    admin_required,
    current_user_id,
    error_response,
    login_required,
    parse_optional_date,
    parse_point,
)
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .export import summaries_to_csv


def register(app: Flask, container: Container) -> None:
    def _stamp(action):
        try:
            point = parse_point(request.get_json(silent=True) or {})
            check = action(current_user_id(), point)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "location": check.to_dict()}), 200

    @app.route("/api/clock-in", methods=["POST"], endpoint="api_clock_in")
    @login_required
    def clock_in():
        return _stamp(container.attendance_service.clock_in)

    @app.route("/api/clock-out", methods=["POST"], endpoint="api_clock_out")
    @login_required
    def clock_out():
        return _stamp(container.attendance_service.clock_out)

    @app.route("/api/attendance/status", methods=["GET"], endpoint="api_attendance_status")
    @login_required
    def attendance_status():
        return jsonify({"success": True, "status": container.attendance_service.current_status(current_user_id())})

    def _range_args():
        start = parse_optional_date(request.args.get("start"))
        end = parse_optional_date(request.args.get("end"))
        if end and not start:
            raise ValidationError("End date requires a start date")
        if start and end and end < start:
            raise ValidationError("End date must be on or after start date")
        return start, end

    @app.route("/api/attendance/me", methods=["GET"], endpoint="api_my_attendance")
    @login_required
    def my_attendance():
        employee_id = session.get("employee_id")
        if not employee_id:
            return jsonify({"success": True, "summaries": []})
        try:
            start, end = _range_args()
            summaries = container.attendance_service.daily_summaries(employee_id, start=start, end=end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "summaries": [s.to_dict() for s in summaries]})

    @app.route("/api/employees/<employee_id>/attendance", methods=["GET"], endpoint="api_employee_attendance")
    @admin_required
    def employee_attendance(employee_id: str):
        try:
            start, end = _range_args()
            summaries = container.attendance_service.daily_summaries(employee_id, start=start, end=end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "summaries": [s.to_dict() for s in summaries]})

    @app.route("/api/employees/<employee_id>/attendance.csv", methods=["GET"], endpoint="api_employee_attendance_csv")
    @admin_required
    def employee_attendance_csv(employee_id: str):
        try:
            start, end = _range_args()
            summaries = container.attendance_service.daily_summaries(employee_id, start=start, end=end)
        except DomainError as e:
            return error_response(e)

        period = start.strftime("%Y-%m-%d") if start else "all"
        filename = f"attendance_{employee_id}_{period}.csv"
        csv_bytes = summaries_to_csv(summaries).encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    @admin_required
    def attendance_report():
        try:
            start, end = _range_args()
            start = start or date.today()
            summaries = container.attendance_service.all_daily_summaries(start=start, end=end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "summaries": [s.to_dict() for s in summaries]})
