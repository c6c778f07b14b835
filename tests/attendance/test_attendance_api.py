from __future__ import annotations

from datetime import date, time
from types import SimpleNamespace

import pytest
from flask import Flask

from face_attendance.attendance.controller import register
from face_attendance.attendance.model import DailySummary
from face_attendance.core.enums import Role
from face_attendance.core.exceptions import MalformedEventError, OutOfRangeError
from face_attendance.geo.model import LocationCheck


class StubAttendanceService:
    def __init__(self):
        self.stamped = []
        self.fail_with = None

    def clock_in(self, user_id, point):
        if self.fail_with:
            raise self.fail_with
        self.stamped.append((user_id, point))
        return LocationCheck(geofence=None, distance_meters=None, in_range=True)

    clock_out = clock_in

    def current_status(self, user_id):
        return "in" if self.stamped else None

    def daily_summaries(self, employee_id, *, start=None, end=None):
        if self.fail_with:
            raise self.fail_with
        return [DailySummary(employee_id, "Alice", date(2024, 7, 22), time(9, 1, 15), time(17, 35, 10), 1)]

    def all_daily_summaries(self, *, start, end=None):
        return self.daily_summaries("E1")


@pytest.fixture()
def service():
    return StubAttendanceService()


@pytest.fixture()
def client(service):
    app = Flask(__name__)
    app.secret_key = "test"
    register(app, SimpleNamespace(attendance_service=service))
    return app.test_client()


def _login(client, role=Role.EMPLOYEE):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["role"] = role.value
        sess["employee_id"] = "E1"


def test_requires_login(client):
    assert client.post("/api/clock-in", json={"latitude": 10, "longitude": 106}).status_code == 401


def test_clock_in_ok(client, service):
    _login(client)

    resp = client.post("/api/clock-in", json={"latitude": 10, "longitude": 106})

    assert resp.status_code == 200
    assert resp.get_json()["location"]["restricted"] is False
    assert service.stamped[0][1].latitude == 10


def test_missing_coordinates_is_bad_request(client):
    _login(client)
    resp = client.post("/api/clock-in", json={"latitude": 10})
    assert resp.status_code == 400


def test_out_of_range_reports_distance(client, service):
    _login(client)
    service.fail_with = OutOfRangeError("too far", distance_meters=1234.56, radius_meters=100)

    resp = client.post("/api/clock-out", json={"latitude": 10, "longitude": 106})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["distance_meters"] == 1234.6
    assert body["radius_meters"] == 100


def test_malformed_data_is_server_error(client, service):
    _login(client)
    service.fail_with = MalformedEventError("Unknown event kind 'x'", event_id=3)

    resp = client.get("/api/attendance/me")

    assert resp.status_code == 500
    assert "event_id=3" in resp.get_json()["message"]


def test_employee_report_is_admin_only(client):
    _login(client)
    assert client.get("/api/employees/E1/attendance").status_code == 403


def test_csv_export(client):
    _login(client, Role.ADMIN)

    resp = client.get("/api/employees/E1/attendance.csv?start=2024-07-01&end=2024-07-31")

    assert resp.status_code == 200
    assert "attendance_E1_2024-07-01.csv" in resp.headers["Content-Disposition"]
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[1] == "2024-07-22,09:01:15,17:35:10,1 min"


def test_bad_range_is_rejected(client):
    _login(client, Role.ADMIN)
    assert client.get("/api/employees/E1/attendance?start=2024-07-10&end=2024-07-01").status_code == 400
    assert client.get("/api/employees/E1/attendance?start=July").status_code == 400
