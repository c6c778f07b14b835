from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture()
def fixed_now(monkeypatch):
    """Freeze the clock the attendance service stamps events with."""

    now = datetime(2024, 7, 22, 9, 1, 15)
    monkeypatch.setattr("face_attendance.attendance.service.now_local", lambda: now)
    return now
