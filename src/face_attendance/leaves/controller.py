from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    error_response,
    login_required,
    parse_optional_date,
)
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import DomainError, ValidationError


def _leave_view(r) -> dict:
    return {
        "request_id": r.request_id,
        "user_id": r.user_id,
        "leave_type": r.leave_type.value,
        "reason": r.reason,
        "start_date": r.start_date.strftime("%Y-%m-%d"),
        "end_date": r.end_date.strftime("%Y-%m-%d"),
        "status": r.status.value,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "acknowledged": r.acknowledged,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="api_my_leaves")
    @login_required
    def my_leaves():
        leaves = container.leave_service.list_mine(user_id=current_user_id())
        return jsonify({"success": True, "leaves": [_leave_view(r) for r in leaves]})

    @app.route("/api/leaves", methods=["POST"], endpoint="api_leave_create")
    @login_required
    def create_leave():
        payload = request.get_json(silent=True) or {}
        try:
            start_date = parse_optional_date(payload.get("start_date"))
            if not start_date:
                raise ValidationError("Start date is required")
            request_id = container.leave_service.create_leave(
                current_role=current_role(),
                user_id=current_user_id(),
                leave_type=payload.get("leave_type", ""),
                reason=payload.get("reason", ""),
                start_date=start_date,
                end_date=parse_optional_date(payload.get("end_date")),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "request_id": request_id}), 201

    @app.route("/api/leaves/notifications", methods=["GET"], endpoint="api_leave_notifications")
    @login_required
    def leave_notifications():
        decided = container.leave_service.unacknowledged_decisions(user_id=current_user_id())
        return jsonify({"success": True, "leaves": [_leave_view(r) for r in decided]})

    @app.route("/api/leaves/<int:request_id>/acknowledge", methods=["POST"], endpoint="api_leave_acknowledge")
    @login_required
    def acknowledge_leave(request_id: int):
        try:
            container.leave_service.acknowledge(user_id=current_user_id(), request_id=request_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="api_admin_leaves")
    @admin_required
    def admin_leaves():
        status = request.args.get("status")
        try:
            status_filter = RequestStatus(status.upper()) if status else None
            leaves = container.leave_service.list_all(current_role=current_role(), status=status_filter)
        except ValueError:
            return error_response(ValidationError("Unknown status"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "leaves": [_leave_view(r) for r in leaves]})

    @app.route("/api/admin/leaves/<int:request_id>/approve", methods=["POST"], endpoint="api_leave_approve")
    @admin_required
    def approve_leave(request_id: int):
        try:
            container.leave_service.approve_leave(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                request_id=request_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/admin/leaves/<int:request_id>/reject", methods=["POST"], endpoint="api_leave_reject")
    @admin_required
    def reject_leave(request_id: int):
        try:
            container.leave_service.reject_leave(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                request_id=request_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})
