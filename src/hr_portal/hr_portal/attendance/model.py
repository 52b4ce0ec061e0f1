from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, date)."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    working_hours: Decimal = Decimal("0")

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    @property
    def is_closed(self) -> bool:
        return self.check_in is not None and self.check_out is not None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for the admin day view (joined with the employee)."""

    employee_id: int
    full_name: str
    employee_code: str
    department: Optional[str]
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    working_hours: Decimal


@dataclass(frozen=True)
class DayView:
    """Calendar cell. `status` is None for rest days, today and the future
    when nothing has been recorded."""

    work_date: date
    status: Optional[AttendanceStatus]
    is_rest_day: bool
    record: Optional[AttendanceRecord] = None

    @property
    def is_derived(self) -> bool:
        return self.record is None and self.status is not None
