from __future__ import annotations

from decimal import Decimal

import pytest

from src.hr_portal.hr_portal.container import wire
from src.hr_portal.hr_portal.core.enums import Role
from src.hr_portal.hr_portal.users.model import SessionUser

from tests.fakes import (
    FakeAttendanceRepo,
    FakeEmployeeRepo,
    FakeLeaveRepo,
    FakePayrollRepo,
    RecordingNotifier,
)

ADMIN_ID = 1
EMPLOYEE_ID = 2


@pytest.fixture
def employees_repo():
    repo = FakeEmployeeRepo()
    repo.add(
        employee_id=ADMIN_ID,
        full_name="Admin Demo",
        email="admin@example.com",
        employee_code="ADM0001",
        role=Role.ADMIN,
        department="HR",
    )
    repo.add(
        employee_id=EMPLOYEE_ID,
        full_name="Jane Employee",
        email="jane@example.com",
        department="Engineering",
        designation="Developer",
        salary=Decimal("50000"),
    )
    return repo


@pytest.fixture
def attendance_repo(employees_repo):
    return FakeAttendanceRepo(employees_repo)


@pytest.fixture
def leaves_repo():
    return FakeLeaveRepo()


@pytest.fixture
def payroll_repo():
    return FakePayrollRepo()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(employees_repo, attendance_repo, leaves_repo, payroll_repo, notifier):
    return wire(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        notifier=notifier,
    )


@pytest.fixture
def admin():
    return SessionUser(employee_id=ADMIN_ID, full_name="Admin Demo", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def employee():
    return SessionUser(employee_id=EMPLOYEE_ID, full_name="Jane Employee", email="jane@example.com", role=Role.EMPLOYEE)
