from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from ..geo.model import GeoPoint
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        employee_id: str,
        department: Optional[str],
    ) -> int:
        raise NotImplementedError

    def list_employees(self) -> Sequence[User]:
        raise NotImplementedError

    def set_location_override(
        self,
        user_id: int,
        *,
        latitude: Optional[float],
        longitude: Optional[float],
        radius: Optional[float],
        name: Optional[str] = None,
    ) -> bool:
        """Store (or clear, with all None) the per-user geofence."""

        raise NotImplementedError

    def set_department(self, user_id: int, *, department: Optional[str]) -> bool:
        raise NotImplementedError

    def update_last_location(self, user_id: int, point: GeoPoint) -> bool:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, full_name: str, employee_id: str) -> bool:
        raise NotImplementedError

    def delete(self, user_id: int) -> bool:
        raise NotImplementedError
