"""In-memory repositories used by the service and controller tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from src.hr_portal.hr_portal.attendance.model import AttendanceRecord, AttendanceReportRow
from src.hr_portal.hr_portal.core.enums import AttendanceStatus, LeaveStatus, PayrollStatus, Role
from src.hr_portal.hr_portal.core.exceptions import StorageError
from src.hr_portal.hr_portal.leaves.model import LeaveRequest
from src.hr_portal.hr_portal.leaves.notifications import DecisionNotification
from src.hr_portal.hr_portal.payroll.model import PayrollRecord
from src.hr_portal.hr_portal.users.model import Employee


class FakeEmployeeRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Employee] = {}

    def add(self, **fields) -> Employee:
        employee_id = fields.pop("employee_id", None) or self._next_id
        self._next_id = max(self._next_id, employee_id) + 1
        fields.setdefault("employee_code", f"EMP{employee_id:04d}")
        fields.setdefault("password_hash", "x")
        fields.setdefault("role", Role.EMPLOYEE)
        employee = Employee(employee_id=employee_id, **fields)
        self.rows[employee_id] = employee
        return employee

    def get_by_id(self, employee_id):
        return self.rows.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self.rows.values() if e.email == email), None)

    def create_employee(self, *, full_name, email, password_hash, role):
        return self.add(full_name=full_name, email=email, password_hash=password_hash, role=role).employee_id

    def update_profile(self, *, employee_id, full_name, department, designation, phone_number):
        e = self.rows[int(employee_id)]
        self.rows[e.employee_id] = replace(
            e, full_name=full_name, department=department, designation=designation, phone_number=phone_number
        )
        return True

    def update_employment(self, *, employee_id, department, designation, phone_number, salary):
        e = self.rows[int(employee_id)]
        self.rows[e.employee_id] = replace(
            e, department=department, designation=designation, phone_number=phone_number, salary=salary
        )
        return True

    def set_active(self, employee_id, *, is_active):
        e = self.rows[int(employee_id)]
        self.rows[e.employee_id] = replace(e, is_active=bool(is_active))
        return True

    def list_employees(self, *, active_only=False, role=None):
        rows = sorted(self.rows.values(), key=lambda e: e.employee_id)
        if active_only:
            rows = [e for e in rows if e.is_active]
        if role is not None:
            rows = [e for e in rows if e.role == role]
        return rows

    def count_active(self, *, role=Role.EMPLOYEE):
        return len(self.list_employees(active_only=True, role=role))


class FakeAttendanceRepo:
    def __init__(self, employees: Optional[FakeEmployeeRepo] = None):
        self._next_id = 1
        self._employees = employees
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}

    def _new_id(self) -> int:
        rid = self._next_id
        self._next_id += 1
        return rid

    def put(self, *, employee_id, work_date, status, check_in=None, check_out=None, working_hours=Decimal("0")):
        existing = self.rows.get((employee_id, work_date))
        record = AttendanceRecord(
            attendance_id=existing.attendance_id if existing else self._new_id(),
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
            working_hours=working_hours,
        )
        self.rows[(employee_id, work_date)] = record
        return record

    def get_for_employee_and_date(self, employee_id, work_date):
        return self.rows.get((int(employee_id), work_date))

    def get_recent_for_employee(self, employee_id, limit):
        rows = [r for r in self.rows.values() if r.employee_id == int(employee_id)]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)[:limit]

    def list_for_employee(self, employee_id, *, start_date, end_date):
        return sorted(
            (r for r in self.rows.values() if r.employee_id == int(employee_id) and start_date <= r.work_date <= end_date),
            key=lambda r: r.work_date,
        )

    def list_for_period(self, *, start_date, end_date):
        return sorted(
            (r for r in self.rows.values() if start_date <= r.work_date <= end_date),
            key=lambda r: (r.work_date, r.employee_id),
        )

    def get_report_rows(self, *, work_date):
        out = []
        for r in self.list_for_period(start_date=work_date, end_date=work_date):
            e = self._employees.get_by_id(r.employee_id) if self._employees else None
            out.append(
                AttendanceReportRow(
                    employee_id=r.employee_id,
                    full_name=e.full_name if e else "",
                    employee_code=e.employee_code if e else "",
                    department=e.department if e else None,
                    work_date=r.work_date,
                    check_in=r.check_in,
                    check_out=r.check_out,
                    status=r.status,
                    working_hours=r.working_hours,
                )
            )
        return out

    def create_checkin(self, *, employee_id, work_date, check_in, status):
        existing = self.rows.get((employee_id, work_date))
        if existing and existing.check_in is not None:
            return False
        self.put(employee_id=employee_id, work_date=work_date, status=status, check_in=check_in)
        return True

    def close_checkout(self, *, attendance_id, expected_check_in, check_out, status, working_hours):
        for key, r in self.rows.items():
            if r.attendance_id == attendance_id:
                if r.check_out is not None or r.check_in != expected_check_in:
                    return False
                self.rows[key] = replace(r, check_out=check_out, status=status, working_hours=working_hours)
                return True
        return False

    def upsert_leave_day(self, *, employee_id, work_date):
        self.put(employee_id=employee_id, work_date=work_date, status=AttendanceStatus.LEAVE)


class FlakyAttendanceRepo(FakeAttendanceRepo):
    """Fails the leave write for the given dates until `heal()` is called."""

    def __init__(self, employees=None, *, failing_dates=()):
        super().__init__(employees)
        self.failing_dates = set(failing_dates)

    def heal(self):
        self.failing_dates.clear()

    def upsert_leave_day(self, *, employee_id, work_date):
        if work_date in self.failing_dates:
            raise StorageError("Storage operation failed, please retry")
        super().upsert_leave_day(employee_id=employee_id, work_date=work_date)


class FakeLeaveRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    def create_leave(self, *, employee_id, leave_type, from_date, to_date, reason):
        rid = self._next_id
        self._next_id += 1
        self.rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=int(employee_id),
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=datetime(2024, 1, 2, 9, 0, 0),
        )
        return rid

    def get_leave(self, *, request_id):
        return self.rows.get(int(request_id))

    def list_leaves(self, *, status=None, employee_id=None, limit=200):
        rows = sorted(self.rows.values(), key=lambda r: r.request_id, reverse=True)
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == int(employee_id)]
        return rows[:limit]

    def decide_leave(self, *, request_id, status, decided_by, decided_at, admin_comment=None):
        req = self.rows.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.rows[req.request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=decided_at, admin_comment=admin_comment
        )
        return True


class FakePayrollRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, PayrollRecord] = {}

    def get_by_id(self, payroll_id):
        return self.rows.get(int(payroll_id))

    def get_for_period(self, *, employee_id, month, year):
        return next(
            (r for r in self.rows.values() if (r.employee_id, r.month, r.year) == (int(employee_id), month, year)),
            None,
        )

    def list_for_period(self, *, month, year):
        return [r for r in self.rows.values() if (r.month, r.year) == (month, year)]

    def list_for_employee(self, employee_id, *, limit):
        rows = [r for r in self.rows.values() if r.employee_id == int(employee_id)]
        return sorted(rows, key=lambda r: (r.year, r.month), reverse=True)[:limit]

    def list_between_periods(self, *, start_year, start_month, end_year, end_month):
        lo, hi = start_year * 12 + start_month, end_year * 12 + end_month
        rows = [r for r in self.rows.values() if lo <= r.year * 12 + r.month <= hi]
        return sorted(rows, key=lambda r: (r.year, r.month, r.employee_id))

    def upsert_pending(self, *, employee_id, month, year, basic_salary, deductions, bonuses, net_salary):
        existing = self.get_for_period(employee_id=employee_id, month=month, year=year)
        if existing and existing.status == PayrollStatus.PAID:
            return
        if existing:
            self.rows[existing.payroll_id] = replace(
                existing, basic_salary=basic_salary, deductions=deductions, bonuses=bonuses, net_salary=net_salary
            )
            return
        pid = self._next_id
        self._next_id += 1
        self.rows[pid] = PayrollRecord(
            payroll_id=pid,
            employee_id=int(employee_id),
            month=month,
            year=year,
            basic_salary=basic_salary,
            deductions=deductions,
            bonuses=bonuses,
            net_salary=net_salary,
            status=PayrollStatus.PENDING,
            created_at=datetime(2024, 1, 31, 12, 0, 0),
        )

    def mark_paid(self, *, payroll_id, paid_at):
        r = self.rows.get(int(payroll_id))
        if not r or r.status != PayrollStatus.PENDING:
            return False
        self.rows[r.payroll_id] = replace(r, status=PayrollStatus.PAID, paid_at=paid_at)
        return True


class RecordingNotifier:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.sent: list[DecisionNotification] = []

    def enqueue(self, notification):
        if self.fail:
            raise RuntimeError("notification backend down")
        self.sent.append(notification)
        return True

    def close(self, timeout=None):
        return None
