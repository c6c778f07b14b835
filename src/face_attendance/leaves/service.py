from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LEAVE_LIST_LIMIT
from ..core.enums import LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .repository import LeaveRepository


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def create_leave(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: str,
        reason: str,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request leave")

        try:
            kind = LeaveType(str(leave_type).upper())
        except ValueError:
            raise ValidationError("Unknown leave type") from None

        end_date = end_date or start_date
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        reason = require_non_empty(reason, "Reason")
        return self._leaves.create_leave(
            user_id=int(user_id),
            leave_type=kind,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
        )

    def _decide(self, *, current_role: Role, admin_user_id: int, request_id: int, status: RequestStatus) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin permission required")

        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Leave request was already decided")

        if not self._leaves.decide_leave(request_id=int(request_id), status=status, decided_by=int(admin_user_id)):
            raise ValidationError("Updating the leave request failed")

    def approve_leave(self, *, current_role: Role, admin_user_id: int, request_id: int) -> None:
        self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            status=RequestStatus.APPROVED,
        )

    def reject_leave(self, *, current_role: Role, admin_user_id: int, request_id: int) -> None:
        self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            status=RequestStatus.REJECTED,
        )

    def list_mine(self, *, user_id: int):
        return self._leaves.list_leave_requests(user_id=int(user_id), limit=DEFAULT_LEAVE_LIST_LIMIT)

    def list_all(self, *, current_role: Role, status: Optional[RequestStatus] = None):
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin permission required")
        return self._leaves.list_leave_requests(status=status, limit=DEFAULT_LEAVE_LIST_LIMIT)

    def unacknowledged_decisions(self, *, user_id: int):
        """Decided requests the employee has not been notified about yet."""

        return [
            r
            for r in self._leaves.list_leave_requests(user_id=int(user_id), limit=DEFAULT_LEAVE_LIST_LIMIT)
            if r.status != RequestStatus.PENDING and not r.acknowledged
        ]

    def acknowledge(self, *, user_id: int, request_id: int) -> None:
        req = self._leaves.get_leave(request_id=int(request_id))
        if not req or req.user_id != int(user_id):
            raise ValidationError("Leave request not found")
        self._leaves.mark_acknowledged(request_id=int(request_id))
