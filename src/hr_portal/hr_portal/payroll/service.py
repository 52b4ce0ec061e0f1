from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.permissions import require_admin, require_self_or_admin
from ..common.validators import require_amount, require_period
from ..core.constants import DEFAULT_PAYROLL_HISTORY_MONTHS, MAX_MONEY_AMOUNT
from ..core.enums import Role
from ..core.exceptions import AlreadyPaid, PayrollLocked, ValidationError
from ..users.model import Employee, SessionUser
from ..users.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRecord, PayrollSheetRow
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Monthly payroll: pending rows are editable, paid rows are locked."""

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def _get_or_fail(self, payroll_id: int) -> PayrollRecord:
        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise ValidationError("Payroll record not found")
        return record

    def net_salary(self, *, basic_salary: Decimal, deductions: Decimal, bonuses: Decimal) -> Decimal:
        return self._calculator.net_salary(basic_salary=basic_salary, deductions=deductions, bonuses=bonuses)

    def upsert(
        self,
        actor: SessionUser,
        *,
        employee_id: int,
        month: int,
        year: int,
        basic_salary: object,
        deductions: object = Decimal("0"),
        bonuses: object = Decimal("0"),
    ) -> PayrollRecord:
        require_admin(actor)
        month, year = require_period(month, year)
        basic = require_amount(basic_salary, "Basic salary")
        deduct = require_amount(deductions, "Deductions")
        bonus = require_amount(bonuses, "Bonuses")
        self._get_employee(employee_id)

        existing = self._payroll.get_for_period(employee_id=int(employee_id), month=month, year=year)
        if existing and existing.is_paid:
            raise PayrollLocked(f"Payroll for {month:02d}/{year} is already paid and cannot be edited")

        net = self.net_salary(basic_salary=basic, deductions=deduct, bonuses=bonus)
        if abs(net) >= MAX_MONEY_AMOUNT:
            raise ValidationError("Net salary is too large")
        self._payroll.upsert_pending(
            employee_id=int(employee_id),
            month=month,
            year=year,
            basic_salary=basic,
            deductions=deduct,
            bonuses=bonus,
            net_salary=net,
        )

        record = self._payroll.get_for_period(employee_id=int(employee_id), month=month, year=year)
        if record is None:
            raise ValidationError("Payroll record could not be saved")
        if record.is_paid:
            # Paid between our read and write; the guarded upsert left it alone.
            raise PayrollLocked(f"Payroll for {month:02d}/{year} is already paid and cannot be edited")

        logger.info("Payroll %s saved for employee %s %02d/%s: net=%s", record.payroll_id, employee_id, month, year, net)
        return record

    def mark_paid(self, actor: SessionUser, *, payroll_id: int, now: datetime | None = None) -> PayrollRecord:
        require_admin(actor)
        record = self._get_or_fail(payroll_id)
        if record.is_paid:
            raise AlreadyPaid("Payroll is already marked as paid")

        if not self._payroll.mark_paid(payroll_id=record.payroll_id, paid_at=now or now_local()):
            raise AlreadyPaid("Payroll is already marked as paid")

        logger.info("Payroll %s marked paid by admin %s", record.payroll_id, actor.employee_id)
        return self._get_or_fail(record.payroll_id)

    def default_basic_salary(self, *, employee_id: int, month: int, year: int) -> Decimal:
        """Stored basic for the period, else the employee's base salary (not persisted)."""

        record = self._payroll.get_for_period(employee_id=int(employee_id), month=int(month), year=int(year))
        if record:
            return record.basic_salary
        return self._get_employee(employee_id).salary

    def payroll_sheet(self, actor: SessionUser, *, month: int, year: int) -> list[PayrollSheetRow]:
        require_admin(actor)
        month, year = require_period(month, year)

        records = {r.employee_id: r for r in self._payroll.list_for_period(month=month, year=year)}
        rows: list[PayrollSheetRow] = []
        for employee in self._employees.list_employees(active_only=True, role=Role.EMPLOYEE):
            record = records.get(employee.employee_id)
            if record:
                rows.append(
                    PayrollSheetRow(
                        employee=employee,
                        month=month,
                        year=year,
                        basic_salary=record.basic_salary,
                        deductions=record.deductions,
                        bonuses=record.bonuses,
                        net_salary=record.net_salary,
                        record=record,
                    )
                )
            else:
                rows.append(
                    PayrollSheetRow(
                        employee=employee,
                        month=month,
                        year=year,
                        basic_salary=employee.salary,
                        deductions=Decimal("0"),
                        bonuses=Decimal("0"),
                        net_salary=self.net_salary(basic_salary=employee.salary, deductions=Decimal("0"), bonuses=Decimal("0")),
                    )
                )
        return rows

    def list_for_employee(
        self,
        actor: SessionUser,
        *,
        employee_id: int | None = None,
        limit: int = DEFAULT_PAYROLL_HISTORY_MONTHS,
    ) -> Sequence[PayrollRecord]:
        target = actor.employee_id if employee_id is None else int(employee_id)
        require_self_or_admin(actor, target)
        return self._payroll.list_for_employee(target, limit=int(limit))
