from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_portal.hr_portal.container import wire
from src.hr_portal.hr_portal.core.enums import AttendanceStatus, DecisionOutcome, LeaveStatus, LeaveType, Role
from src.hr_portal.hr_portal.core.exceptions import (
    AuthorizationError,
    InvalidRange,
    MissingReason,
    NotPending,
    ValidationError,
)
from src.hr_portal.hr_portal.users.model import SessionUser

from tests.fakes import FlakyAttendanceRepo, RecordingNotifier

DECIDED_AT = datetime(2024, 1, 9, 10, 0, 0)


@pytest.fixture
def svc(container):
    return container.leave_service


def _submit(svc, actor, **overrides):
    fields = dict(
        leave_type=LeaveType.PAID,
        from_date=date(2024, 1, 10),
        to_date=date(2024, 1, 12),
        reason="Family trip",
    )
    fields.update(overrides)
    return svc.submit(actor, **fields)


def test_submit_creates_pending_request(svc, employee):
    req = _submit(svc, employee)

    assert req.status == LeaveStatus.PENDING
    assert req.employee_id == employee.employee_id
    assert req.days == 3


def test_submit_rejects_inverted_range(svc, employee, leaves_repo):
    with pytest.raises(InvalidRange):
        _submit(svc, employee, from_date=date(2024, 2, 5), to_date=date(2024, 2, 3))

    assert leaves_repo.rows == {}


def test_submit_single_day_is_allowed(svc, employee):
    req = _submit(svc, employee, from_date=date(2024, 2, 5), to_date=date(2024, 2, 5))

    assert req.days == 1


def test_submit_requires_reason(svc, employee):
    with pytest.raises(MissingReason):
        _submit(svc, employee, reason="   ")


def test_submit_rejects_unknown_leave_type(svc, employee):
    with pytest.raises(ValidationError):
        _submit(svc, employee, leave_type="vacation")


def test_approve_writes_leave_for_every_day_and_overwrites_attendance(
    svc, admin, employee, attendance_repo, notifier
):
    attendance_repo.put(
        employee_id=employee.employee_id,
        work_date=date(2024, 1, 11),
        status=AttendanceStatus.PRESENT,
        check_in=datetime(2024, 1, 11, 9, 0),
        check_out=datetime(2024, 1, 11, 17, 0),
        working_hours=Decimal("8.00"),
    )
    req = _submit(svc, employee)

    result = svc.decide(admin, request_id=req.request_id, outcome=DecisionOutcome.APPROVED, comment="ok", now=DECIDED_AT)

    assert result.request.status == LeaveStatus.APPROVED
    assert result.request.decided_by == admin.employee_id
    assert result.request.decided_at == DECIDED_AT
    assert result.request.admin_comment == "ok"
    assert result.cascade.complete
    assert result.cascade.applied_dates == (date(2024, 1, 10), date(2024, 1, 11), date(2024, 1, 12))

    rows = attendance_repo.list_for_employee(employee.employee_id, start_date=date(2024, 1, 10), end_date=date(2024, 1, 12))
    assert [r.status for r in rows] == [AttendanceStatus.LEAVE] * 3
    assert all(r.check_in is None and r.working_hours == Decimal("0") for r in rows)
    assert len(attendance_repo.rows) == 3

    assert result.notification_queued
    payload = notifier.sent[0].to_payload()
    assert payload["status"] == "approved"
    assert payload["employee_id"] == "EMP0002"
    assert payload["from_date"] == "2024-01-10"


def test_reject_leaves_attendance_untouched(svc, admin, employee, attendance_repo, notifier):
    req = _submit(svc, employee)

    result = svc.reject(admin, request_id=req.request_id, comment="Busy week")

    assert result.request.status == LeaveStatus.REJECTED
    assert result.cascade.applied_dates == ()
    assert attendance_repo.rows == {}
    assert notifier.sent[0].to_payload()["admin_comment"] == "Busy week"


def test_decision_is_one_shot(svc, admin, employee):
    req = _submit(svc, employee)
    svc.approve(admin, request_id=req.request_id)

    with pytest.raises(NotPending):
        svc.reject(admin, request_id=req.request_id)
    with pytest.raises(NotPending):
        svc.approve(admin, request_id=req.request_id)


def test_lost_conditional_update_is_not_pending(svc, admin, employee, leaves_repo, attendance_repo, monkeypatch):
    req = _submit(svc, employee)
    monkeypatch.setattr(leaves_repo, "decide_leave", lambda **kwargs: False)

    with pytest.raises(NotPending):
        svc.approve(admin, request_id=req.request_id)
    assert attendance_repo.rows == {}


def test_only_admin_can_decide(svc, employee):
    req = _submit(svc, employee)

    with pytest.raises(AuthorizationError):
        svc.approve(employee, request_id=req.request_id)


def test_unknown_outcome_is_rejected(svc, admin, employee):
    req = _submit(svc, employee)

    with pytest.raises(ValidationError):
        svc.decide(admin, request_id=req.request_id, outcome="maybe")


def test_partial_cascade_is_reported_and_resumable(employees_repo, leaves_repo, payroll_repo, admin, employee):
    flaky = FlakyAttendanceRepo(employees_repo, failing_dates={date(2024, 1, 11)})
    svc = wire(
        employees_repo=employees_repo,
        attendance_repo=flaky,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
    ).leave_service
    req = _submit(svc, employee)

    result = svc.approve(admin, request_id=req.request_id)

    assert result.request.status == LeaveStatus.APPROVED
    assert not result.cascade.complete
    assert result.cascade.failed_dates == (date(2024, 1, 11),)
    assert result.cascade.applied_dates == (date(2024, 1, 10), date(2024, 1, 12))

    flaky.heal()
    resumed = svc.resume_cascade(admin, request_id=req.request_id)

    assert resumed.complete
    assert len(flaky.rows) == 3
    assert {r.status for r in flaky.rows.values()} == {AttendanceStatus.LEAVE}


def test_resume_cascade_requires_approved_request(svc, admin, employee):
    req = _submit(svc, employee)

    with pytest.raises(ValidationError):
        svc.resume_cascade(admin, request_id=req.request_id)


def test_notification_failure_does_not_affect_decision(employees_repo, attendance_repo, leaves_repo, payroll_repo, admin, employee):
    svc = wire(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        notifier=RecordingNotifier(fail=True),
    ).leave_service
    req = _submit(svc, employee)

    result = svc.approve(admin, request_id=req.request_id)

    assert result.request.status == LeaveStatus.APPROVED
    assert not result.notification_queued
    assert leaves_repo.get_leave(request_id=req.request_id).status == LeaveStatus.APPROVED
    assert len(attendance_repo.rows) == 3


def test_listing_scopes(svc, admin, employee):
    first = _submit(svc, employee)
    _submit(svc, employee, from_date=date(2024, 3, 1), to_date=date(2024, 3, 1))
    svc.approve(admin, request_id=first.request_id)

    assert len(svc.list_mine(employee)) == 2
    assert [r.request_id for r in svc.list_all(admin, status=LeaveStatus.PENDING)] == [2]
    with pytest.raises(AuthorizationError):
        svc.list_all(employee)
    with pytest.raises(AuthorizationError):
        svc.get(
            SessionUser(employee_id=99, full_name="Other", email="other@example.com", role=Role.EMPLOYEE),
            request_id=first.request_id,
        )
