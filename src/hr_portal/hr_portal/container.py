from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import HALF_DAY_THRESHOLD_HOURS, WEEKLY_REST_DAY
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.notifications import Notifier, NullNotifier
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.service import ReportService
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository
from .users.service import AuthService, EmployeeService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository
    notifier: Notifier

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    report_service: ReportService


def wire(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    notifier: Optional[Notifier] = None,
    half_day_threshold: Decimal = HALF_DAY_THRESHOLD_HOURS,
    rest_weekday: int = WEEKLY_REST_DAY,
) -> Container:
    """Build services over any repository implementations (MySQL or in-memory)."""

    notifier = notifier or NullNotifier()
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        strategy_factory=AttendanceStrategyFactory(half_day_threshold=Decimal(str(half_day_threshold))),
        rest_weekday=rest_weekday,
    )

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        notifier=notifier,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=attendance_service,
        leave_service=LeaveService(leaves_repo, attendance_service, employees_repo, notifier=notifier),
        payroll_service=PayrollService(payroll_repo, employees_repo),
        report_service=ReportService(attendance_repo, leaves_repo, payroll_repo, employees_repo),
    )


def build_container(
    *,
    db_config: dict,
    notifier: Optional[Notifier] = None,
    half_day_threshold: Decimal = HALF_DAY_THRESHOLD_HOURS,
    rest_weekday: int = WEEKLY_REST_DAY,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        notifier=notifier,
        half_day_threshold=half_day_threshold,
        rest_weekday=rest_weekday,
    )
