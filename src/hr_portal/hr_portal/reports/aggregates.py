"""Read-only rollups over attendance, leave and payroll rows.

Every function is pure: it takes already-loaded rows and returns counts or sums.
"""

from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ..leaves.model import LeaveRequest
from ..payroll.model import PayrollRecord

_ATTENDED = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY})


def attendance_status_histogram(records: Iterable[AttendanceRecord]) -> dict[AttendanceStatus, int]:
    counts = Counter(r.status for r in records)
    return {status: counts.get(status, 0) for status in AttendanceStatus}


def average_attendance_percentage(records: Iterable[AttendanceRecord]) -> int:
    """(present + half_day) / rows, as a whole percentage; 0 when there are no rows."""

    rows = list(records)
    attended = sum(1 for r in rows if r.status in _ATTENDED)
    divisor = len(rows) or 1
    pct = Decimal(attended * 100) / Decimal(divisor)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def leave_type_histogram(leaves: Iterable[LeaveRequest]) -> dict[LeaveType, int]:
    counts = Counter(leave.leave_type for leave in leaves)
    return {kind: counts.get(kind, 0) for kind in LeaveType}


def leave_status_histogram(leaves: Iterable[LeaveRequest]) -> dict[LeaveStatus, int]:
    counts = Counter(leave.status for leave in leaves)
    return {status: counts.get(status, 0) for status in LeaveStatus}


def payroll_totals_by_month(records: Iterable[PayrollRecord]) -> dict[tuple[int, int], Decimal]:
    """Sum of net salary per (year, month), oldest period first."""

    totals: dict[tuple[int, int], Decimal] = {}
    for r in records:
        key = (r.year, r.month)
        totals[key] = totals.get(key, Decimal("0")) + r.net_salary
    return dict(sorted(totals.items()))


def payroll_totals_by_employee(records: Iterable[PayrollRecord]) -> dict[int, Decimal]:
    totals: dict[int, Decimal] = {}
    for r in records:
        totals[r.employee_id] = totals.get(r.employee_id, Decimal("0")) + r.net_salary
    return totals


def total_net_salary(records: Iterable[PayrollRecord]) -> Decimal:
    return sum((r.net_salary for r in records), Decimal("0"))


def latest_periods(totals: dict[tuple[int, int], Decimal], count: int) -> dict[tuple[int, int], Decimal]:
    keys = sorted(totals)[-count:] if count > 0 else []
    return {k: totals[k] for k in keys}
