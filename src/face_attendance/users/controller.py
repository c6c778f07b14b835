from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, current_role, error_response, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import DomainError


def _employee_view(user) -> dict:
    return {
        "user_id": user.user_id,
        "full_name": user.full_name,
        "email": user.email,
        "employee_id": user.employee_id,
        "department": user.department,
        "location_override": user.location_override,
        "last_location": (
            {"latitude": user.last_location.latitude, "longitude": user.last_location.longitude}
            if user.last_location
            else None
        ),
    }


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or request.form
        try:
            s_user = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))
        except DomainError as e:
            return error_response(e)

        session.permanent = bool(payload.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["employee_id"] = s_user.employee_id
        session["department"] = s_user.department
        return jsonify({"success": True, "user": {"name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": session["user_id"],
                    "name": session.get("name"),
                    "role": session.get("role"),
                    "employee_id": session.get("employee_id"),
                    "department": session.get("department"),
                },
            }
        )

    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    @admin_required
    def list_employees():
        users = container.user_service.list_employees(current_role=current_role())
        return jsonify({"success": True, "employees": [_employee_view(u) for u in users]})

    @app.route("/api/employees", methods=["POST"], endpoint="api_employee_create")
    @admin_required
    def create_employee():
        payload = request.get_json(silent=True) or {}
        try:
            user_id = container.user_service.register_employee(
                current_role=current_role(),
                full_name=payload.get("full_name", ""),
                email=payload.get("email", ""),
                password=payload.get("password", ""),
                employee_id=payload.get("employee_id", ""),
                department=payload.get("department"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/employees/<int:user_id>", methods=["PUT"], endpoint="api_employee_update")
    @admin_required
    def update_employee(user_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            container.user_service.update_employee(
                current_role=current_role(),
                user_id=user_id,
                full_name=payload.get("full_name", ""),
                employee_id=payload.get("employee_id", ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/employees/<int:user_id>", methods=["DELETE"], endpoint="api_employee_delete")
    @admin_required
    def delete_employee(user_id: int):
        try:
            container.user_service.delete_employee(current_role=current_role(), user_id=user_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/employees/<int:user_id>/location", methods=["PUT"], endpoint="api_employee_location")
    @admin_required
    def set_employee_location(user_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            container.user_service.set_location_override(
                current_role=current_role(),
                user_id=user_id,
                latitude=payload.get("latitude"),
                longitude=payload.get("longitude"),
                radius=payload.get("radius"),
                name=payload.get("name"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/employees/<int:user_id>/location", methods=["DELETE"], endpoint="api_employee_location_clear")
    @admin_required
    def clear_employee_location(user_id: int):
        try:
            container.user_service.clear_location_override(current_role=current_role(), user_id=user_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/employees/<int:user_id>/department", methods=["PUT"], endpoint="api_employee_department")
    @admin_required
    def set_employee_department(user_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            container.user_service.assign_department(
                current_role=current_role(),
                user_id=user_id,
                department=payload.get("department"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/departments", methods=["GET"], endpoint="api_departments")
    @login_required
    def list_departments():
        departments = container.department_service.list_all()
        return jsonify(
            {
                "success": True,
                "departments": [
                    {"dept_id": d.dept_id, "dept_name": d.dept_name, "location": d.location} for d in departments
                ],
            }
        )

    @app.route("/api/departments", methods=["POST"], endpoint="api_department_create")
    @admin_required
    def create_department():
        payload = request.get_json(silent=True) or {}
        try:
            dept_id = container.department_service.create(
                current_role=current_role(),
                dept_name=payload.get("dept_name", ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "dept_id": dept_id}), 201

    @app.route("/api/departments/<int:dept_id>", methods=["DELETE"], endpoint="api_department_delete")
    @admin_required
    def delete_department(dept_id: int):
        try:
            container.department_service.delete(current_role=current_role(), dept_id=dept_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/departments/<int:dept_id>/location", methods=["PUT"], endpoint="api_department_location")
    @admin_required
    def set_department_location(dept_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            container.department_service.set_location(
                current_role=current_role(),
                dept_id=dept_id,
                latitude=payload.get("latitude"),
                longitude=payload.get("longitude"),
                radius=payload.get("radius"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/departments/<int:dept_id>/location", methods=["DELETE"], endpoint="api_department_location_clear")
    @admin_required
    def clear_department_location(dept_id: int):
        try:
            container.department_service.clear_location(current_role=current_role(), dept_id=dept_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})
