from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.datetime_utils import iter_dates, now_local
from ..common.permissions import require_admin, require_self_or_admin
from ..common.validators import optional_text
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import DecisionOutcome, LeaveStatus, LeaveType
from ..core.exceptions import InvalidRange, MissingReason, NotPending, StorageError, ValidationError
from ..users.model import SessionUser
from ..users.repository import EmployeeRepository
from .model import CascadeResult, DecisionResult, LeaveRequest
from .notifications import DecisionNotification, Notifier, NullNotifier
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave request lifecycle: pending -> approved | rejected (one-shot)."""

    def __init__(
        self,
        leaves: LeaveRepository,
        attendance: AttendanceService,
        employees: EmployeeRepository,
        *,
        notifier: Notifier | None = None,
    ):
        self._leaves = leaves
        self._attendance = attendance
        self._employees = employees
        self._notifier = notifier or NullNotifier()

    @staticmethod
    def _parse_leave_type(value: LeaveType | str) -> LeaveType:
        try:
            return LeaveType(value)
        except ValueError:
            raise ValidationError("Leave type must be one of: paid, sick, unpaid")

    @staticmethod
    def _parse_outcome(value: DecisionOutcome | str) -> DecisionOutcome:
        try:
            return DecisionOutcome(value)
        except ValueError:
            raise ValidationError("Decision must be approved or rejected")

    def _get_or_fail(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        return req

    def submit(
        self,
        actor: SessionUser,
        *,
        leave_type: LeaveType | str,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> LeaveRequest:
        kind = self._parse_leave_type(leave_type)
        if from_date > to_date:
            raise InvalidRange("From date cannot be after To date")
        reason = (reason or "").strip()
        if not reason:
            raise MissingReason("Please provide a reason for the leave")

        request_id = self._leaves.create_leave(
            employee_id=actor.employee_id,
            leave_type=kind,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
        )
        logger.info("Employee %s requested %s leave %s..%s", actor.employee_id, kind.value, from_date, to_date)
        return self._get_or_fail(request_id)

    def decide(
        self,
        actor: SessionUser,
        *,
        request_id: int,
        outcome: DecisionOutcome | str,
        comment: Optional[str] = None,
        now: datetime | None = None,
    ) -> DecisionResult:
        require_admin(actor)
        outcome = self._parse_outcome(outcome)

        req = self._get_or_fail(request_id)
        if req.status != LeaveStatus.PENDING:
            raise NotPending(f"Leave request has already been {req.status.value}")

        decided = self._leaves.decide_leave(
            request_id=req.request_id,
            status=outcome.to_leave_status(),
            decided_by=actor.employee_id,
            decided_at=now or now_local(),
            admin_comment=optional_text(comment),
        )
        if not decided:
            # A concurrent decision won the conditional update.
            raise NotPending("Leave request has already been decided")

        req = self._get_or_fail(req.request_id)
        logger.info("Admin %s %s leave request %s", actor.employee_id, req.status.value, req.request_id)

        cascade = CascadeResult()
        if req.status == LeaveStatus.APPROVED:
            cascade = self._apply_cascade(req)

        queued = self._notify(req)
        return DecisionResult(request=req, cascade=cascade, notification_queued=queued)

    def approve(self, actor: SessionUser, *, request_id: int, comment: Optional[str] = None) -> DecisionResult:
        return self.decide(actor, request_id=request_id, outcome=DecisionOutcome.APPROVED, comment=comment)

    def reject(self, actor: SessionUser, *, request_id: int, comment: Optional[str] = None) -> DecisionResult:
        return self.decide(actor, request_id=request_id, outcome=DecisionOutcome.REJECTED, comment=comment)

    def resume_cascade(self, actor: SessionUser, *, request_id: int) -> CascadeResult:
        """Re-apply leave days for an approved request (safe to repeat)."""

        require_admin(actor)
        req = self._get_or_fail(request_id)
        if req.status != LeaveStatus.APPROVED:
            raise ValidationError("Only approved leave can be applied to attendance")
        return self._apply_cascade(req)

    def _apply_cascade(self, req: LeaveRequest) -> CascadeResult:
        applied: list[date] = []
        failed: list[date] = []
        for day in iter_dates(req.from_date, req.to_date):
            try:
                self._attendance.mark_leave_day(employee_id=req.employee_id, work_date=day)
            except StorageError:
                logger.exception("Could not mark %s as leave for employee %s", day, req.employee_id)
                failed.append(day)
            else:
                applied.append(day)

        if failed:
            logger.warning(
                "Leave request %s applied to %s of %s days; resume to finish",
                req.request_id,
                len(applied),
                req.days,
            )
        return CascadeResult(applied_dates=tuple(applied), failed_dates=tuple(failed))

    def _notify(self, req: LeaveRequest) -> bool:
        try:
            employee = self._employees.get_by_id(req.employee_id)
            if employee is None:
                logger.warning("No employee %s for leave request %s, skipping notification", req.employee_id, req.request_id)
                return False
            return self._notifier.enqueue(
                DecisionNotification(
                    employee_code=employee.employee_code,
                    name=employee.full_name,
                    email=employee.email,
                    leave_type=req.leave_type,
                    from_date=req.from_date,
                    to_date=req.to_date,
                    status=req.status,
                    admin_comment=req.admin_comment,
                )
            )
        except Exception:
            logger.exception("Could not queue notification for leave request %s", req.request_id)
            return False

    def get(self, actor: SessionUser, *, request_id: int) -> LeaveRequest:
        req = self._get_or_fail(request_id)
        require_self_or_admin(actor, req.employee_id)
        return req

    def list_mine(self, actor: SessionUser, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        return self._leaves.list_leaves(employee_id=actor.employee_id, limit=limit)

    def list_all(
        self,
        actor: SessionUser,
        *,
        status: LeaveStatus | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        require_admin(actor)
        return self._leaves.list_leaves(status=status, limit=limit)
