from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..leaves.model import LeaveRequest
from ..payroll.model import PayrollRecord

ATTENDANCE_HEADER = ("Date", "Check In", "Check Out", "Status", "Working Hours")
LEAVE_HEADER = ("Type", "From", "To", "Reason", "Status")
PAYROLL_HEADER = ("Month", "Year", "Basic", "Deductions", "Bonuses", "Net Salary", "Status")


def _to_csv(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def attendance_csv(records: Iterable[AttendanceRecord]) -> str:
    return _to_csv(
        ATTENDANCE_HEADER,
        (
            (
                r.work_date.isoformat(),
                r.check_in.strftime("%H:%M") if r.check_in else "-",
                r.check_out.strftime("%H:%M") if r.check_out else "-",
                r.status.value,
                str(r.working_hours),
            )
            for r in records
        ),
    )


def leave_csv(leaves: Iterable[LeaveRequest]) -> str:
    return _to_csv(
        LEAVE_HEADER,
        (
            (
                leave.leave_type.value,
                leave.from_date.isoformat(),
                leave.to_date.isoformat(),
                leave.reason,
                leave.status.value,
            )
            for leave in leaves
        ),
    )


def payroll_csv(records: Iterable[PayrollRecord]) -> str:
    return _to_csv(
        PAYROLL_HEADER,
        (
            (
                str(r.month),
                str(r.year),
                str(r.basic_salary),
                str(r.deductions),
                str(r.bonuses),
                str(r.net_salary),
                r.status.value,
            )
            for r in records
        ),
    )
