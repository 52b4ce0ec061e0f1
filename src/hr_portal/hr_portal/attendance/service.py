from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import hours_between, iter_dates, month_bounds, now_local
from ..common.permissions import require_admin, require_self_or_admin
from ..core.constants import DEFAULT_HISTORY_LIMIT, WEEKLY_REST_DAY
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn, NoOpenCheckIn, ValidationError
from ..users.model import SessionUser
from ..users.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceReportRow, DayView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in/check-out state machine.

    NoRecord -> CheckedIn (check_in) -> Closed (check_out). Closed is terminal for
    the day. Approved leave overwrites the day through `mark_leave_day`.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        rest_weekday: int = WEEKLY_REST_DAY,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._rest_weekday = int(rest_weekday)

    def _require_active(self, employee_id: int) -> None:
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise ValidationError("Employee not found or inactive")

    def _reload(self, employee_id: int, work_date: date) -> AttendanceRecord:
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if record is None:
            raise ValidationError("Attendance record not found")
        return record

    def check_in(self, actor: SessionUser, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        self._require_active(actor.employee_id)

        existing = self._attendance.get_for_employee_and_date(actor.employee_id, today)
        if existing and existing.is_open:
            raise AlreadyCheckedIn("You have already checked in today")
        if existing and existing.is_closed:
            raise AlreadyCheckedIn("Attendance for today is already closed")

        decision = self._factory.for_checkin().decide_checkin()
        created = self._attendance.create_checkin(
            employee_id=actor.employee_id,
            work_date=today,
            check_in=now,
            status=decision.status,
        )
        if not created:
            # Another request checked in between our read and write.
            raise AlreadyCheckedIn("You have already checked in today")

        logger.info("Employee %s checked in at %s", actor.employee_id, now.isoformat())
        return self._reload(actor.employee_id, today)

    def check_out(self, actor: SessionUser, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(actor.employee_id, today)
        if not record or not record.is_open:
            raise NoOpenCheckIn("You have not checked in today")

        working_hours = hours_between(record.check_in, now)
        strategy = self._factory.for_checkout(working_hours=working_hours)
        decision = strategy.decide_checkout(working_hours=working_hours)

        closed = self._attendance.close_checkout(
            attendance_id=record.attendance_id,
            expected_check_in=record.check_in,
            check_out=now,
            status=decision.status,
            working_hours=decision.working_hours,
        )
        if not closed:
            raise NoOpenCheckIn("Today's attendance changed, please refresh and try again")

        logger.info(
            "Employee %s checked out after %s hours (%s)",
            actor.employee_id,
            decision.working_hours,
            decision.status.value,
        )
        return self._reload(actor.employee_id, today)

    def mark_leave_day(self, *, employee_id: int, work_date: date) -> None:
        """Leave cascade write. Overwrites whatever is stored for the day."""

        self._attendance.upsert_leave_day(employee_id=int(employee_id), work_date=work_date)

    def get_today_record(self, actor: SessionUser, *, today: date | None = None) -> Optional[AttendanceRecord]:
        today = today or now_local().date()
        return self._attendance.get_for_employee_and_date(actor.employee_id, today)

    def get_history(self, actor: SessionUser, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_employee(actor.employee_id, int(limit))

    def is_rest_day(self, day: date) -> bool:
        return day.weekday() == self._rest_weekday

    def day_status(self, record: Optional[AttendanceRecord], *, work_date: date, today: date) -> Optional[AttendanceStatus]:
        """Stored status, or a virtual ABSENT for past working days with no row."""

        if record is not None:
            return record.status
        if work_date < today and not self.is_rest_day(work_date):
            return AttendanceStatus.ABSENT
        return None

    def month_calendar(
        self,
        actor: SessionUser,
        *,
        year: int,
        month: int,
        employee_id: int | None = None,
        today: date | None = None,
    ) -> list[DayView]:
        target = actor.employee_id if employee_id is None else int(employee_id)
        require_self_or_admin(actor, target)
        today = today or now_local().date()

        start, end = month_bounds(int(year), int(month))
        by_date = {r.work_date: r for r in self._attendance.list_for_employee(target, start_date=start, end_date=end)}

        return [
            DayView(
                work_date=day,
                status=self.day_status(by_date.get(day), work_date=day, today=today),
                is_rest_day=self.is_rest_day(day),
                record=by_date.get(day),
            )
            for day in iter_dates(start, end)
        ]

    def admin_day_view(self, actor: SessionUser, *, work_date: date) -> Sequence[AttendanceReportRow]:
        require_admin(actor)
        return self._attendance.get_report_rows(work_date=work_date)
