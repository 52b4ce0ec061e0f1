from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, full_name, email, employee_code, password_hash, role,
    department, designation, phone_number, salary, is_active
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        email=r["email"],
        employee_code=r["employee_code"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        department=r.get("department"),
        designation=r.get("designation"),
        phone_number=r.get("phone_number"),
        salary=as_decimal(r.get("salary")),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def create_employee(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # Placeholder code keeps the UNIQUE constraint happy until the id is known.
            cur.execute(
                """
                INSERT INTO employees(full_name, email, employee_code, password_hash, role)
                VALUES(%s,%s,UUID(),%s,%s)
                """,
                (full_name, email, password_hash, role.value),
            )
            new_id = int(cur.lastrowid)
            cur.execute(
                "UPDATE employees SET employee_code=%s WHERE employee_id=%s",
                (f"EMP{new_id:04d}", new_id),
            )
            return new_id

    def update_profile(
        self,
        *,
        employee_id: int,
        full_name: str,
        department: Optional[str],
        designation: Optional[str],
        phone_number: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, department=%s, designation=%s, phone_number=%s
                WHERE employee_id=%s
                """,
                (full_name, department, designation, phone_number, int(employee_id)),
            )
            return cur.rowcount > 0

    def update_employment(
        self,
        *,
        employee_id: int,
        department: Optional[str],
        designation: Optional[str],
        phone_number: Optional[str],
        salary: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET department=%s, designation=%s, phone_number=%s, salary=%s
                WHERE employee_id=%s
                """,
                (department, designation, phone_number, salary, int(employee_id)),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s WHERE employee_id=%s",
                (1 if is_active else 0, int(employee_id)),
            )
            return cur.rowcount > 0

    def list_employees(self, *, active_only: bool = False, role: Optional[Role] = None) -> Sequence[Employee]:
        clauses = ["1=1"]
        params: list[object] = []
        if active_only:
            clauses.append("is_active=1")
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE {' AND '.join(clauses)} ORDER BY full_name ASC",
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_active(self, *, role: Role = Role.EMPLOYEE) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE is_active=1 AND role=%s", (role.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
