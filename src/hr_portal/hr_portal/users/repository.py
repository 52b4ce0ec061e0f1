from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create_employee(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
    ) -> int:
        """Insert and assign the next employee code; returns the new id."""

        raise NotImplementedError

    def update_profile(
        self,
        *,
        employee_id: int,
        full_name: str,
        department: Optional[str],
        designation: Optional[str],
        phone_number: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def update_employment(
        self,
        *,
        employee_id: int,
        department: Optional[str],
        designation: Optional[str],
        phone_number: Optional[str],
        salary: Decimal,
    ) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def list_employees(self, *, active_only: bool = False, role: Optional[Role] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def count_active(self, *, role: Role = Role.EMPLOYEE) -> int:
        raise NotImplementedError
