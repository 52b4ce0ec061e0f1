from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, now_local, shift_month
from ..common.permissions import require_admin, require_self_or_admin
from ..common.validators import require_period
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_PAYROLL_HISTORY_MONTHS
from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..leaves.repository import LeaveRepository
from ..payroll.model import PayrollRecord
from ..payroll.repository import PayrollRepository
from ..users.model import SessionUser
from ..users.repository import EmployeeRepository
from . import aggregates, exporter


@dataclass(frozen=True)
class EmployeeReport:
    year: int
    month: int
    attendance: dict[AttendanceStatus, int]
    average_attendance: int
    leave_types: dict[LeaveType, int]
    leave_statuses: dict[LeaveStatus, int]
    payroll_history: list[PayrollRecord]


@dataclass(frozen=True)
class OrganizationReport:
    year: int
    month: int
    total_employees: int
    attendance: dict[AttendanceStatus, int]
    average_attendance: int
    leave_types: dict[LeaveType, int]
    leave_statuses: dict[LeaveStatus, int]
    total_leaves: int
    # Net salary over the payroll window ending at (year, month).
    payroll_by_month: dict[tuple[int, int], Decimal]
    total_payroll: Decimal


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    present_today: int
    total_leave_requests: int
    pending_leaves: int
    attendance_this_month: dict[AttendanceStatus, int]
    leave_types: dict[LeaveType, int]


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class ReportService:
    """Read-only reporting. Nothing here writes to the store."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._payroll = payroll
        self._employees = employees

    def _month_attendance(self, employee_id: Optional[int], year: int, month: int) -> list[AttendanceRecord]:
        start, end = month_bounds(year, month)
        if employee_id is None:
            return list(self._attendance.list_for_period(start_date=start, end_date=end))
        return list(self._attendance.list_for_employee(employee_id, start_date=start, end_date=end))

    def employee_report(
        self,
        actor: SessionUser,
        *,
        year: int,
        month: int,
        employee_id: int | None = None,
    ) -> EmployeeReport:
        target = actor.employee_id if employee_id is None else int(employee_id)
        require_self_or_admin(actor, target)
        month, year = require_period(month, year)

        records = self._month_attendance(target, year, month)
        leaves = list(self._leaves.list_leaves(employee_id=target, limit=DEFAULT_LIST_LIMIT))
        payroll = list(self._payroll.list_for_employee(target, limit=DEFAULT_PAYROLL_HISTORY_MONTHS))

        return EmployeeReport(
            year=year,
            month=month,
            attendance=aggregates.attendance_status_histogram(records),
            average_attendance=aggregates.average_attendance_percentage(records),
            leave_types=aggregates.leave_type_histogram(leaves),
            leave_statuses=aggregates.leave_status_histogram(leaves),
            payroll_history=payroll,
        )

    def organization_report(self, actor: SessionUser, *, year: int, month: int) -> OrganizationReport:
        require_admin(actor)
        month, year = require_period(month, year)

        records = self._month_attendance(None, year, month)
        leaves = list(self._leaves.list_leaves(limit=DEFAULT_LIST_LIMIT))
        start_year, start_month = shift_month(year, month, 1 - DEFAULT_PAYROLL_HISTORY_MONTHS)
        payroll = list(
            self._payroll.list_between_periods(
                start_year=start_year, start_month=start_month, end_year=year, end_month=month
            )
        )

        return OrganizationReport(
            year=year,
            month=month,
            total_employees=self._employees.count_active(),
            attendance=aggregates.attendance_status_histogram(records),
            average_attendance=aggregates.average_attendance_percentage(records),
            leave_types=aggregates.leave_type_histogram(leaves),
            leave_statuses=aggregates.leave_status_histogram(leaves),
            total_leaves=len(leaves),
            payroll_by_month=aggregates.latest_periods(
                aggregates.payroll_totals_by_month(payroll), DEFAULT_PAYROLL_HISTORY_MONTHS
            ),
            total_payroll=aggregates.total_net_salary(payroll),
        )

    def dashboard(self, actor: SessionUser, *, today: date | None = None) -> DashboardStats:
        require_admin(actor)
        today = today or now_local().date()

        todays = self._attendance.list_for_period(start_date=today, end_date=today)
        month_records = self._month_attendance(None, today.year, today.month)
        leaves = list(self._leaves.list_leaves(limit=DEFAULT_LIST_LIMIT))
        statuses = aggregates.leave_status_histogram(leaves)
        attendance_today = aggregates.attendance_status_histogram(todays)

        return DashboardStats(
            total_employees=self._employees.count_active(),
            present_today=attendance_today[AttendanceStatus.PRESENT] + attendance_today[AttendanceStatus.HALF_DAY],
            total_leave_requests=len(leaves),
            pending_leaves=statuses[LeaveStatus.PENDING],
            attendance_this_month=aggregates.attendance_status_histogram(month_records),
            leave_types=aggregates.leave_type_histogram(leaves),
        )

    def export(
        self,
        actor: SessionUser,
        *,
        kind: str,
        year: int,
        month: int,
        employee_id: int | None = None,
    ) -> CsvExport:
        target = actor.employee_id if employee_id is None else int(employee_id)
        require_self_or_admin(actor, target)
        month, year = require_period(month, year)

        if kind == "attendance":
            content = exporter.attendance_csv(self._month_attendance(target, year, month))
            return CsvExport(filename=f"attendance_{year}-{month:02d}.csv", content=content)
        if kind == "leaves":
            content = exporter.leave_csv(self._leaves.list_leaves(employee_id=target, limit=DEFAULT_LIST_LIMIT))
            return CsvExport(filename="leaves_report.csv", content=content)
        if kind == "payroll":
            content = exporter.payroll_csv(self._payroll.list_for_employee(target, limit=DEFAULT_PAYROLL_HISTORY_MONTHS))
            return CsvExport(filename="salary_report.csv", content=content)
        raise ValidationError("Export type must be attendance, leaves or payroll")
