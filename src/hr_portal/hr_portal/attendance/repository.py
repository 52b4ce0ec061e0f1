from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_period(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_report_rows(self, *, work_date: date) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> bool:
        """Upsert keyed by (employee, date).

        Must not touch a row that already has a check-in; returns False in that case.
        """

        raise NotImplementedError

    def close_checkout(
        self,
        *,
        attendance_id: int,
        expected_check_in: datetime,
        check_out: datetime,
        status: AttendanceStatus,
        working_hours: Decimal,
    ) -> bool:
        """Conditional update: only an open row whose check-in is still `expected_check_in`."""

        raise NotImplementedError

    def upsert_leave_day(self, *, employee_id: int, work_date: date) -> None:
        """Idempotent leave write: status=leave, check-in/out cleared, hours reset."""

        raise NotImplementedError
