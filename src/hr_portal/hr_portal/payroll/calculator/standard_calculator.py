from __future__ import annotations

from decimal import Decimal

from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: basic - deductions + bonuses, not clamped at 0."""

    def net_salary(self, *, basic_salary: Decimal, deductions: Decimal, bonuses: Decimal) -> Decimal:
        return basic_salary - deductions + bonuses
