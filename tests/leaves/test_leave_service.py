from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from face_attendance.core.enums import LeaveType, RequestStatus, Role
from face_attendance.core.exceptions import AuthorizationError, ValidationError
from face_attendance.leaves.model import LeaveRequest
from face_attendance.leaves.service import LeaveService


class FakeLeavesRepo:
    def __init__(self):
        self._next_id = 1
        self.leaves: dict[int, LeaveRequest] = {}

    def create_leave(self, *, user_id, leave_type, reason, start_date, end_date):
        rid = self._next_id
        self._next_id += 1
        self.leaves[rid] = LeaveRequest(
            request_id=rid,
            user_id=user_id,
            leave_type=leave_type,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            status=RequestStatus.PENDING,
            created_at=datetime(2024, 7, 1, 10, 0, 0),
        )
        return rid

    def get_leave(self, *, request_id):
        return self.leaves.get(int(request_id))

    def list_leave_requests(self, *, status=None, user_id=None, limit=200):
        items = [
            r
            for r in self.leaves.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ]
        return sorted(items, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide_leave(self, *, request_id, status, decided_by):
        req = self.leaves.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.leaves[req.request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=datetime(2024, 7, 2, 9, 0), acknowledged=False
        )
        return True

    def mark_acknowledged(self, *, request_id):
        req = self.leaves[int(request_id)]
        self.leaves[req.request_id] = replace(req, acknowledged=True)
        return True


@pytest.fixture()
def repo():
    return FakeLeavesRepo()


@pytest.fixture()
def svc(repo):
    return LeaveService(repo)


def _request(svc, **kwargs):
    data = dict(
        current_role=Role.EMPLOYEE,
        user_id=5,
        leave_type="sick",
        reason="Flu",
        start_date=date(2024, 7, 10),
    )
    data.update(kwargs)
    return svc.create_leave(**data)


def test_create_leave_defaults_end_to_start(repo, svc):
    rid = _request(svc)

    req = repo.leaves[rid]
    assert req.leave_type == LeaveType.SICK
    assert req.end_date == date(2024, 7, 10)
    assert req.status == RequestStatus.PENDING


def test_create_leave_validation(svc):
    with pytest.raises(AuthorizationError):
        _request(svc, current_role=Role.ADMIN)
    with pytest.raises(ValidationError):
        _request(svc, leave_type="holiday")
    with pytest.raises(ValidationError):
        _request(svc, end_date=date(2024, 7, 9))
    with pytest.raises(ValidationError):
        _request(svc, reason="   ")


def test_approve_then_cannot_decide_again(repo, svc):
    rid = _request(svc)

    svc.approve_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=rid)
    assert repo.leaves[rid].status == RequestStatus.APPROVED
    assert repo.leaves[rid].decided_by == 1

    with pytest.raises(ValidationError):
        svc.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=rid)


def test_only_admin_decides(svc):
    rid = _request(svc)
    with pytest.raises(AuthorizationError):
        svc.approve_leave(current_role=Role.EMPLOYEE, admin_user_id=5, request_id=rid)
    with pytest.raises(ValidationError):
        svc.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=999)


def test_list_mine_and_all(svc):
    _request(svc)
    _request(svc, user_id=6, leave_type="ANNUAL", end_date=date(2024, 7, 12))

    assert [r.user_id for r in svc.list_mine(user_id=5)] == [5]
    assert len(svc.list_all(current_role=Role.ADMIN)) == 2
    assert svc.list_all(current_role=Role.ADMIN, status=RequestStatus.APPROVED) == []
    with pytest.raises(AuthorizationError):
        svc.list_all(current_role=Role.EMPLOYEE)


def test_decision_notifications_until_acknowledged(svc):
    pending = _request(svc)
    decided = _request(svc, reason="Dentist")
    svc.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=decided)

    assert [r.request_id for r in svc.unacknowledged_decisions(user_id=5)] == [decided]
    assert pending not in [r.request_id for r in svc.unacknowledged_decisions(user_id=5)]

    with pytest.raises(ValidationError):
        svc.acknowledge(user_id=6, request_id=decided)

    svc.acknowledge(user_id=5, request_id=decided)
    assert svc.unacknowledged_decisions(user_id=5) == []
