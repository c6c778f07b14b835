from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_number
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..geo.model import GeoPoint
from .department_repository import DepartmentRepository
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role
    employee_id: Optional[str]
    department: Optional[str]


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin permission required")


def _validated_geofence(latitude, longitude, radius) -> tuple[float, float, float]:
    lat = require_number(latitude, "Latitude")
    lon = require_number(longitude, "Longitude")
    rad = require_number(radius, "Radius")
    GeoPoint(latitude=lat, longitude=lon)
    if rad <= 0:
        raise ValidationError("Radius must be greater than 0")
    return lat, lon, rad


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Wrong email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Wrong email or password")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            role=user.role,
            employee_id=user.employee_id,
            department=user.department,
        )


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository, departments: DepartmentRepository):
        self._users = users
        self._departments = departments

    def _require_department(self, department: Optional[str]) -> Optional[str]:
        department = (department or "").strip() or None
        if department and not self._departments.get_by_name(department):
            raise ValidationError("Department does not exist")
        return department

    def register_employee(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        password: str,
        employee_id: str,
        department: Optional[str] = None,
    ) -> int:
        _require_admin(current_role)

        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        employee_id = require_non_empty(employee_id, "Employee ID")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
            employee_id=employee_id,
            department=self._require_department(department),
        )
        logger.info("Registered employee %s (%s)", employee_id, email)
        return user_id

    def list_employees(self, *, current_role: Role):
        _require_admin(current_role)
        return self._users.list_employees()

    def _require_employee(self, user_id: int):
        user = self._users.get_by_id(int(user_id))
        if not user or user.role != Role.EMPLOYEE:
            raise ValidationError("Employee not found")
        return user

    def update_employee(self, *, current_role: Role, user_id: int, full_name: str, employee_id: str) -> None:
        _require_admin(current_role)

        full_name = require_non_empty(full_name, "Full name")
        employee_id = require_non_empty(employee_id, "Employee ID")
        self._require_employee(user_id)
        self._users.update_profile(int(user_id), full_name=full_name, employee_id=employee_id)

    def delete_employee(self, *, current_role: Role, user_id: int) -> None:
        """Remove the account. Recorded attendance events stay in the log."""

        _require_admin(current_role)

        user = self._require_employee(user_id)
        self._users.delete(int(user_id))
        logger.info("Deleted employee %s (%s)", user.employee_id, user.email)

    def set_location_override(
        self,
        *,
        current_role: Role,
        user_id: int,
        latitude,
        longitude,
        radius,
        name: Optional[str] = None,
    ) -> None:
        _require_admin(current_role)

        lat, lon, rad = _validated_geofence(latitude, longitude, radius)
        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("User not found")
        self._users.set_location_override(
            int(user_id),
            latitude=lat,
            longitude=lon,
            radius=rad,
            name=(name or "").strip() or None,
        )

    def clear_location_override(self, *, current_role: Role, user_id: int) -> None:
        _require_admin(current_role)

        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("User not found")
        self._users.set_location_override(int(user_id), latitude=None, longitude=None, radius=None, name=None)

    def assign_department(self, *, current_role: Role, user_id: int, department: Optional[str]) -> None:
        _require_admin(current_role)

        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("User not found")
        self._users.set_department(int(user_id), department=self._require_department(department))


class DepartmentService:
    """Use case: manage departments and their clock-in locations (admin)."""

    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_all(self):
        return self._departments.list_all()

    def create(self, *, current_role: Role, dept_name: str) -> int:
        _require_admin(current_role)

        dept_name = require_non_empty(dept_name, "Department name")
        if self._departments.get_by_name(dept_name):
            raise ValidationError("Department already exists")
        return self._departments.create(dept_name=dept_name)

    def delete(self, *, current_role: Role, dept_id: int) -> None:
        _require_admin(current_role)

        if not self._departments.delete(int(dept_id)):
            raise ValidationError("Department not found")

    def set_location(self, *, current_role: Role, dept_id: int, latitude, longitude, radius) -> None:
        _require_admin(current_role)

        lat, lon, rad = _validated_geofence(latitude, longitude, radius)
        if not self._departments.get_by_id(int(dept_id)):
            raise ValidationError("Department not found")
        self._departments.set_location(int(dept_id), latitude=lat, longitude=lon, radius=rad)

    def clear_location(self, *, current_role: Role, dept_id: int) -> None:
        _require_admin(current_role)

        if not self._departments.get_by_id(int(dept_id)):
            raise ValidationError("Department not found")
        self._departments.set_location(int(dept_id), latitude=None, longitude=None, radius=None)
