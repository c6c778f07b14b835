from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceEvent
from .repository import AttendanceEventRepository

_EVENT_COLUMNS = "event_id, user_id, employee_id, employee_name, event_date, time_of_day, kind, created_at"


def _to_event(row: Dict[str, Any]) -> AttendanceEvent:
    # kind/created_at are passed through untouched; the summarizer rejects bad values loudly.
    kind = row["kind"]
    try:
        kind = EventKind(kind)
    except ValueError:
        pass

    return AttendanceEvent(
        event_id=int(row["event_id"]),
        user_id=row.get("user_id"),
        employee_id=row["employee_id"],
        employee_name=row["employee_name"],
        date=row["event_date"],
        time_of_day=normalize_mysql_time(row["time_of_day"]),
        kind=kind,
        timestamp=row["created_at"],
    )


class MySQLAttendanceRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        user_id: int,
        employee_id: str,
        employee_name: str,
        event_date: date,
        time_of_day: time,
        kind: EventKind,
        timestamp: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(user_id, employee_id, employee_name, event_date, time_of_day, kind, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, employee_id, employee_name, event_date, time_of_day, kind.value, timestamp),
            )
            return int(cur.lastrowid)

    def latest_for_user(self, user_id: int) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM attendance_events
                WHERE user_id=%s
                ORDER BY created_at DESC, event_id DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_event(row) if row else None

    def list_for_employee(
        self,
        employee_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["employee_id=%s"]
        params: list[object] = [employee_id]
        if start is not None:
            clauses.append("created_at >= %s")
            params.append(start)
        if end is not None:
            clauses.append("created_at <= %s")
            params.append(end)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EVENT_COLUMNS} FROM attendance_events WHERE {where} ORDER BY created_at ASC",
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_range(self, *, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM attendance_events
                WHERE created_at BETWEEN %s AND %s
                ORDER BY created_at ASC
                """,
                (start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]
