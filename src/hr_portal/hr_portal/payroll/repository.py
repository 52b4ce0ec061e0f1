from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int) -> Sequence[PayrollRecord]:
        """Most recent periods first."""

        raise NotImplementedError

    def list_between_periods(
        self, *, start_year: int, start_month: int, end_year: int, end_month: int
    ) -> Sequence[PayrollRecord]:
        """Rows whose period falls in the inclusive range, oldest period first."""

        raise NotImplementedError

    def upsert_pending(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        basic_salary: Decimal,
        deductions: Decimal,
        bonuses: Decimal,
        net_salary: Decimal,
    ) -> None:
        """Create the period row, or overwrite it while it is still pending.

        A paid row is left untouched.
        """

        raise NotImplementedError

    def mark_paid(self, *, payroll_id: int, paid_at: datetime) -> bool:
        """Conditional update; returns False unless the row was still pending."""

        raise NotImplementedError
