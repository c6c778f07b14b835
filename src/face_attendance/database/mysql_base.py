from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, roll back on any error."""

    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        logger.warning("Rolling back transaction", exc_info=True)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as time, timedelta or 'HH:MM:SS' depending on the connector."""

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        whole = int(value.total_seconds()) % 86400
        return time(whole // 3600, (whole % 3600) // 60, whole % 60, value.microseconds)

    if isinstance(value, str):
        hh, mm, *rest = value.strip().split(":")
        if not rest or not rest[0]:
            return time(int(hh), int(mm))
        seconds, _, fraction = rest[0].partition(".")
        return time(int(hh), int(mm), int(seconds), int(fraction.ljust(6, "0")[:6] or 0))

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def raw_location(row: Dict[str, Any], *, prefix: str = "", with_name: bool = False) -> Optional[dict]:
    """Collect nullable geofence columns into the raw mapping the resolver reads.

    Returns None when every column is NULL; partially filled rows are kept
    as-is so the resolver can reject them.
    """

    raw = {
        "latitude": row.get(f"{prefix}latitude"),
        "longitude": row.get(f"{prefix}longitude"),
        "radius": row.get(f"{prefix}radius"),
    }
    if with_name:
        raw["name"] = row.get(f"{prefix}name")
    if all(v is None for v in raw.values()):
        return None
    return raw
