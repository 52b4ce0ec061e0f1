from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, check_in, check_out, status, working_hours"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        working_hours=as_decimal(r.get("working_hours")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_period(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, employee_id ASC
                """,
                (start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_report_rows(self, *, work_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.employee_id, e.full_name, e.employee_code, e.department,
                    ar.work_date, ar.check_in, ar.check_out, ar.status, ar.working_hours
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                WHERE ar.work_date=%s
                ORDER BY e.full_name ASC
                """,
                (work_date,),
            )
            return [
                AttendanceReportRow(
                    employee_id=int(r["employee_id"]),
                    full_name=r["full_name"],
                    employee_code=r["employee_code"],
                    department=r.get("department"),
                    work_date=r["work_date"],
                    check_in=r.get("check_in"),
                    check_out=r.get("check_out"),
                    status=AttendanceStatus(r["status"]),
                    working_hours=as_decimal(r.get("working_hours")),
                )
                for r in fetchall(cur)
            ]

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Assignments run left to right; check_in goes last so the guards
            # above it still see the stored value.
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in, check_out, status, working_hours)
                VALUES(%s,%s,%s,NULL,%s,0)
                ON DUPLICATE KEY UPDATE
                    status=IF(check_in IS NULL, VALUES(status), status),
                    check_out=IF(check_in IS NULL, NULL, check_out),
                    working_hours=IF(check_in IS NULL, 0, working_hours),
                    check_in=IF(check_in IS NULL, VALUES(check_in), check_in)
                """,
                (int(employee_id), work_date, check_in, status.value),
            )
            return cur.rowcount > 0

    def close_checkout(
        self,
        *,
        attendance_id: int,
        expected_check_in: datetime,
        check_out: datetime,
        status: AttendanceStatus,
        working_hours: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, status=%s, working_hours=%s
                WHERE attendance_id=%s AND check_out IS NULL AND check_in=%s
                """,
                (check_out, status.value, working_hours, int(attendance_id), expected_check_in),
            )
            return cur.rowcount > 0

    def upsert_leave_day(self, *, employee_id: int, work_date: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in, check_out, status, working_hours)
                VALUES(%s,%s,NULL,NULL,%s,0)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), check_in=NULL, check_out=NULL, working_hours=0
                """,
                (int(employee_id), work_date, AttendanceStatus.LEAVE.value),
            )
