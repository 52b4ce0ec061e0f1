from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus
from ..users.model import Employee


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: one payroll row per (employee, month, year)."""

    payroll_id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    deductions: Decimal
    bonuses: Decimal
    net_salary: Decimal
    status: PayrollStatus
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.status == PayrollStatus.PAID


@dataclass(frozen=True)
class PayrollSheetRow:
    """Payroll screen row: the stored record, or defaults taken from the
    employee's base salary (shown, not persisted)."""

    employee: Employee
    month: int
    year: int
    basic_salary: Decimal
    deductions: Decimal
    bonuses: Decimal
    net_salary: Decimal
    record: Optional[PayrollRecord] = None

    @property
    def status(self) -> Optional[PayrollStatus]:
        return self.record.status if self.record else None
