from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, raw_location
from .department_model import Department
from .department_repository import DepartmentRepository


def _to_department(row) -> Department:
    return Department(dept_id=int(row["dept_id"]), dept_name=row["dept_name"], location=raw_location(row))


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name, latitude, longitude, radius FROM departments ORDER BY dept_name")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT dept_id, dept_name, latitude, longitude, radius FROM departments WHERE dept_id=%s",
                (int(dept_id),),
            )
            row = fetchone(cur)
            return _to_department(row) if row else None

    def get_by_name(self, dept_name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT dept_id, dept_name, latitude, longitude, radius FROM departments WHERE dept_name=%s",
                (dept_name,),
            )
            row = fetchone(cur)
            return _to_department(row) if row else None

    def create(self, *, dept_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(dept_name) VALUES(%s)", (dept_name,))
            return int(cur.lastrowid)

    def delete(self, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (int(dept_id),))
            return cur.rowcount > 0

    def set_location(
        self,
        dept_id: int,
        *,
        latitude: Optional[float],
        longitude: Optional[float],
        radius: Optional[float],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET latitude=%s, longitude=%s, radius=%s WHERE dept_id=%s",
                (latitude, longitude, radius, int(dept_id)),
            )
            return cur.rowcount > 0
