from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, employee_id, month, year, basic_salary, deductions, bonuses,
    net_salary, status, created_at, paid_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=as_decimal(r["basic_salary"]),
        deductions=as_decimal(r["deductions"]),
        bonuses=as_decimal(r["bonuses"]),
        net_salary=as_decimal(r["net_salary"]),
        status=PayrollStatus(r["status"]),
        created_at=r.get("created_at"),
        paid_at=r.get("paid_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE employee_id=%s AND month=%s AND year=%s",
                (int(employee_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE month=%s AND year=%s ORDER BY employee_id ASC",
                (int(month), int(year)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int, *, limit: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE employee_id=%s
                ORDER BY year DESC, month DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_between_periods(
        self, *, start_year: int, start_month: int, end_year: int, end_month: int
    ) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE (year * 12 + month) BETWEEN %s AND %s
                ORDER BY year ASC, month ASC, employee_id ASC
                """,
                (int(start_year) * 12 + int(start_month), int(end_year) * 12 + int(end_month)),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_records(
                    employee_id, month, year, basic_salary, deductions, bonuses, net_salary, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    basic_salary=IF(status='pending', VALUES(basic_salary), basic_salary),
                    deductions=IF(status='pending', VALUES(deductions), deductions),
                    bonuses=IF(status='pending', VALUES(bonuses), bonuses),
                    net_salary=IF(status='pending', VALUES(net_salary), net_salary)
                """,
                (
                    int(employee_id),
                    int(month),
                    int(year),
                    basic_salary,
                    deductions,
                    bonuses,
                    net_salary,
                    PayrollStatus.PENDING.value,
                ),
            )

    def mark_paid(self, *, payroll_id: int, paid_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET status=%s, paid_at=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (PayrollStatus.PAID.value, paid_at, int(payroll_id), PayrollStatus.PENDING.value),
            )
            return cur.rowcount > 0
