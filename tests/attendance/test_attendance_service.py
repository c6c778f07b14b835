from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from face_attendance.attendance.model import AttendanceEvent
from face_attendance.attendance.service import AttendanceService
from face_attendance.core.enums import EventKind, Role
from face_attendance.core.exceptions import MalformedEventError, OutOfRangeError, ValidationError
from face_attendance.geo.model import GeoPoint
from face_attendance.geo.service import GeofenceService
from face_attendance.settings.service import LOCATION_KEY, SCHEDULE_KEY, SettingsService
from face_attendance.users.model import User

OFFICE = {"latitude": 10.7769, "longitude": 106.7009, "radius": 100}
AT_OFFICE = GeoPoint(latitude=10.7769, longitude=106.7009)
FAR_AWAY = GeoPoint(latitude=10.8769, longitude=106.7009)


class InMemoryUsers:
    def __init__(self, *users: User):
        self._by_id = {u.user_id: u for u in users}
        self.last_locations: dict[int, GeoPoint] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def update_last_location(self, user_id: int, point: GeoPoint) -> bool:
        self.last_locations[user_id] = point
        return True


class InMemoryDepartments:
    def get_by_name(self, dept_name: str):
        return None


class InMemorySettings:
    def __init__(self, values: dict):
        self.values = dict(values)

    def get(self, key):
        return self.values.get(key)

    def put(self, key, value):
        self.values[key] = value


class InMemoryEvents:
    def __init__(self):
        self.events: list[AttendanceEvent] = []

    def append(self, *, user_id, employee_id, employee_name, event_date, time_of_day, kind, timestamp) -> int:
        event_id = len(self.events) + 1
        self.events.append(
            AttendanceEvent(
                event_id=event_id,
                employee_id=employee_id,
                employee_name=employee_name,
                date=event_date,
                time_of_day=time_of_day,
                kind=kind,
                timestamp=timestamp,
                user_id=user_id,
            )
        )
        return event_id

    def latest_for_user(self, user_id: int) -> Optional[AttendanceEvent]:
        mine = [e for e in self.events if e.user_id == user_id]
        return max(mine, key=lambda e: e.timestamp) if mine else None

    def list_for_employee(self, employee_id, *, start=None, end=None):
        return [
            e
            for e in self.events
            if e.employee_id == employee_id and (start is None or start <= e.timestamp) and (end is None or e.timestamp <= end)
        ]

    def list_range(self, *, start, end):
        return [e for e in self.events if start <= e.timestamp <= end]


EMPLOYEE = User(
    user_id=1,
    full_name="Alice",
    email="alice@example.com",
    password_hash="x",
    role=Role.EMPLOYEE,
    employee_id="E1",
    department=None,
)


def _build(*, location=OFFICE, users=(EMPLOYEE,)):
    events = InMemoryEvents()
    user_repo = InMemoryUsers(*users)
    values = {SCHEDULE_KEY: {"clock_in_time": "09:00", "clock_out_time": "17:30"}}
    if location:
        values[LOCATION_KEY] = location
    settings = SettingsService(InMemorySettings(values))
    geofences = GeofenceService(user_repo, InMemoryDepartments(), settings)
    return AttendanceService(events, user_repo, geofences, settings), events, user_repo


def test_clock_in_then_out_records_events():
    svc, events, users = _build()

    check = svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 9, 1, 15, 500000))
    assert check.in_range and check.restricted
    assert svc.current_status(1) == "in"

    svc.clock_out(1, AT_OFFICE, now=datetime(2024, 7, 22, 17, 35, 10))
    assert svc.current_status(1) == "out"

    assert [e.kind for e in events.events] == [EventKind.CLOCK_IN, EventKind.CLOCK_OUT]
    assert events.events[0].time_of_day == time(9, 1, 15)
    assert users.last_locations[1] == AT_OFFICE


def test_status_is_none_before_first_stamp():
    svc, _, _ = _build()
    assert svc.current_status(1) is None


def test_double_clock_in_is_rejected():
    svc, events, _ = _build()
    svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 9, 0))

    with pytest.raises(ValidationError):
        svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 9, 5))
    assert len(events.events) == 1


def test_clock_out_without_clock_in_is_rejected():
    svc, _, _ = _build()
    with pytest.raises(ValidationError):
        svc.clock_out(1, AT_OFFICE, now=datetime(2024, 7, 22, 17, 0))


def test_out_of_range_clock_in_records_nothing():
    svc, events, users = _build()

    with pytest.raises(OutOfRangeError):
        svc.clock_in(1, FAR_AWAY, now=datetime(2024, 7, 22, 9, 0))

    assert events.events == []
    assert users.last_locations == {}


def test_unrestricted_when_no_geofence_configured():
    svc, events, _ = _build(location=None)

    check = svc.clock_in(1, FAR_AWAY, now=datetime(2024, 7, 22, 9, 0))

    assert check.in_range and not check.restricted
    assert len(events.events) == 1


def test_user_without_employee_id_cannot_stamp():
    svc, _, _ = _build(users=(replace(EMPLOYEE, employee_id=None),))
    with pytest.raises(ValidationError):
        svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 9, 0))


def test_daily_summaries_use_configured_schedule():
    svc, _, _ = _build()
    svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 9, 1, 15))
    svc.clock_out(1, AT_OFFICE, now=datetime(2024, 7, 22, 17, 35, 10))
    svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 23, 9, 20))

    summaries = svc.daily_summaries("E1")
    assert [(s.date, s.late_minutes) for s in summaries] == [(date(2024, 7, 23), 20), (date(2024, 7, 22), 1)]

    only_first_day = svc.daily_summaries("E1", start=date(2024, 7, 22), end=date(2024, 7, 22))
    assert [s.last_clock_out for s in only_first_day] == [time(17, 35, 10)]


def test_all_daily_summaries_covers_every_employee():
    bob = replace(EMPLOYEE, user_id=2, full_name="Bob", email="bob@example.com", employee_id="E2")
    svc, _, _ = _build(users=(EMPLOYEE, bob))
    svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 8, 55))
    svc.clock_in(2, AT_OFFICE, now=datetime(2024, 7, 22, 9, 10))

    summaries = svc.all_daily_summaries(start=date(2024, 7, 22))

    assert [(s.employee_id, s.late_minutes) for s in summaries] == [("E1", 0), ("E2", 10)]


def test_stamps_use_current_local_time(fixed_now):
    svc, events, _ = _build()

    svc.clock_in(1, AT_OFFICE)

    [event] = events.events
    assert event.timestamp == fixed_now
    assert event.date == fixed_now.date()
    assert [s.late_minutes for s in svc.daily_summaries("E1")] == [1]


def test_unknown_stored_kind_fails_status_loudly():
    svc, events, _ = _build()
    svc.clock_in(1, AT_OFFICE, now=datetime(2024, 7, 22, 9, 0))
    events.events[0] = replace(events.events[0], kind="Lunch Break")

    with pytest.raises(MalformedEventError) as exc:
        svc.current_status(1)

    assert exc.value.event_id == 1
