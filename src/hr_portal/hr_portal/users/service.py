from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.permissions import require_admin
from ..common.validators import (
    optional_text,
    require_amount,
    require_email,
    require_min_length,
    require_non_empty,
)
from ..core.constants import MIN_LOGIN_PASSWORD_LENGTH, MIN_SIGNUP_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Employee, SessionUser
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def to_session_user(employee: Employee) -> SessionUser:
    return SessionUser(
        employee_id=employee.employee_id,
        full_name=employee.full_name,
        email=employee.email,
        role=employee.role,
    )


class AuthService:
    """Use case: authenticate an employee (login) and self signup."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_email(email)
        require_min_length(password, "Password", MIN_LOGIN_PASSWORD_LENGTH)

        employee = self._employees.get_by_email(email)
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(employee.password_hash, password)
        except ValueError:
            # placeholder or corrupted hash values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        return to_session_user(employee)

    def signup(self, *, full_name: str, email: str, password: str, confirm_password: str) -> SessionUser:
        full_name = require_non_empty(full_name, "Full name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_SIGNUP_PASSWORD_LENGTH)
        if password != confirm_password:
            raise ValidationError("Passwords don't match")

        if self._employees.get_by_email(email):
            raise ValidationError("This email is already registered")

        employee_id = self._employees.create_employee(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
        )
        logger.info("Employee %s signed up", employee_id)
        return SessionUser(employee_id=employee_id, full_name=full_name, email=email, role=Role.EMPLOYEE)


class EmployeeService:
    """Use case: self-service profile and admin employee management."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def _get_or_fail(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def get_profile(self, actor: SessionUser) -> Employee:
        return self._get_or_fail(actor.employee_id)

    def update_own_profile(
        self,
        actor: SessionUser,
        *,
        full_name: str,
        department: Optional[str] = None,
        designation: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> Employee:
        full_name = require_non_empty(full_name, "Full name")
        self._get_or_fail(actor.employee_id)
        self._employees.update_profile(
            employee_id=actor.employee_id,
            full_name=full_name,
            department=optional_text(department),
            designation=optional_text(designation),
            phone_number=optional_text(phone_number),
        )
        return self._get_or_fail(actor.employee_id)

    def list_employees(self, actor: SessionUser, *, active_only: bool = False) -> Sequence[Employee]:
        require_admin(actor)
        return self._employees.list_employees(active_only=active_only, role=Role.EMPLOYEE)

    def update_employee(
        self,
        actor: SessionUser,
        *,
        employee_id: int,
        department: Optional[str] = None,
        designation: Optional[str] = None,
        phone_number: Optional[str] = None,
        salary: object = Decimal("0"),
    ) -> Employee:
        require_admin(actor)
        amount = require_amount(salary, "Salary")
        self._get_or_fail(employee_id)

        self._employees.update_employment(
            employee_id=int(employee_id),
            department=optional_text(department),
            designation=optional_text(designation),
            phone_number=optional_text(phone_number),
            salary=amount,
        )
        logger.info("Admin %s updated employee %s", actor.employee_id, employee_id)
        return self._get_or_fail(employee_id)

    def toggle_active(self, actor: SessionUser, *, employee_id: int) -> Employee:
        require_admin(actor)
        employee = self._get_or_fail(employee_id)
        if employee.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deactivated here")

        self._employees.set_active(employee.employee_id, is_active=not employee.is_active)
        logger.info(
            "Admin %s %s employee %s",
            actor.employee_id,
            "deactivated" if employee.is_active else "activated",
            employee.employee_id,
        )
        return self._get_or_fail(employee_id)
