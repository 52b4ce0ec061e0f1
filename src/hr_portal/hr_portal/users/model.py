from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee profile.

    Note: Plain data object (no DB access). Employees are deactivated, never deleted.
    """

    employee_id: int
    full_name: str
    email: str
    employee_code: str
    password_hash: str
    role: Role
    department: Optional[str] = None
    designation: Optional[str] = None
    phone_number: Optional[str] = None
    salary: Decimal = Decimal("0")
    is_active: bool = True


@dataclass(frozen=True)
class SessionUser:
    """Authenticated identity handed explicitly to every service call."""

    employee_id: int
    full_name: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
