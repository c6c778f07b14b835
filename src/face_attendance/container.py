from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .geo.service import GeofenceService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SettingsService
from .users.mysql_department_repository import MySQLDepartmentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, DepartmentService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    departments_repo: MySQLDepartmentRepository
    settings_repo: MySQLSettingsRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository

    auth_service: AuthService
    user_service: UserService
    department_service: DepartmentService
    settings_service: SettingsService
    geofence_service: GeofenceService
    attendance_service: AttendanceService
    leave_service: LeaveService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    users_repo = MySQLUserRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)

    settings_service = SettingsService(settings_repo)
    geofence_service = GeofenceService(users_repo, departments_repo, settings_service)

    return Container(
        conn=conn,
        users_repo=users_repo,
        departments_repo=departments_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, departments_repo),
        department_service=DepartmentService(departments_repo),
        settings_service=settings_service,
        geofence_service=geofence_service,
        attendance_service=AttendanceService(attendance_repo, users_repo, geofence_service, settings_service),
        leave_service=LeaveService(leaves_repo),
    )
