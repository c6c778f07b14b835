from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, raw_location
from ..geo.model import GeoPoint
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, full_name, email, password_hash, role, employee_id, department,
    loc_latitude, loc_longitude, loc_radius, loc_name,
    last_latitude, last_longitude, is_active
"""


def _to_user(row: Dict[str, Any]) -> User:
    last_location = None
    if row.get("last_latitude") is not None and row.get("last_longitude") is not None:
        last_location = GeoPoint(latitude=float(row["last_latitude"]), longitude=float(row["last_longitude"]))

    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        employee_id=row.get("employee_id"),
        department=row.get("department"),
        location_override=raw_location(row, prefix="loc_", with_name=True),
        last_location=last_location,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email.strip().lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, email, password_hash, role, employee_id, department)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (full_name, email.strip().lower(), password_hash, role.value, employee_id, department),
            )
            return int(cur.lastrowid)

    def list_employees(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE role=%s ORDER BY full_name",
                (Role.EMPLOYEE.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def set_location_override(
        self,
        user_id: int,
        *,
        latitude: Optional[float],
        longitude: Optional[float],
        radius: Optional[float],
        name: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET loc_latitude=%s, loc_longitude=%s, loc_radius=%s, loc_name=%s
                WHERE user_id=%s
                """,
                (latitude, longitude, radius, name, int(user_id)),
            )
            return cur.rowcount > 0

    def set_department(self, user_id: int, *, department: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET department=%s WHERE user_id=%s", (department, int(user_id)))
            return cur.rowcount > 0

    def update_last_location(self, user_id: int, point: GeoPoint) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET last_latitude=%s, last_longitude=%s WHERE user_id=%s",
                (point.latitude, point.longitude, int(user_id)),
            )
            return cur.rowcount > 0

    def update_profile(self, user_id: int, *, full_name: str, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET full_name=%s, employee_id=%s WHERE user_id=%s",
                (full_name, employee_id, int(user_id)),
            )
            return cur.rowcount > 0

    def delete(self, user_id: int) -> bool:
        # attendance_events keep their rows (user_id set NULL); leave requests cascade.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s AND role=%s", (int(user_id), Role.EMPLOYEE.value))
            return cur.rowcount > 0
