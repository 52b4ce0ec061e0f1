from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from ..core.constants import MAX_EMAIL_LENGTH, MAX_MONEY_AMOUNT, MONEY_QUANTUM
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email) or len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError("Please enter a valid email")
    return email


def require_amount(value: object, field_name: str) -> Decimal:
    """Coerce to Decimal. Input money is non-negative, whole cents, and fits DECIMAL(12,2)."""
    try:
        amount = Decimal(str(value).strip()) if value is not None and str(value).strip() else Decimal("0")
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if amount >= MAX_MONEY_AMOUNT:
        raise ValidationError(f"{field_name} is too large")
    cents = amount.quantize(MONEY_QUANTUM)
    if cents != amount:
        raise ValidationError(f"{field_name} cannot have more than 2 decimal places")
    return cents


def require_period(month: int, year: int) -> tuple[int, int]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1900 <= int(year) <= 9999:
        raise ValidationError("Year is out of range")
    return int(month), int(year)


def optional_text(value: str | None) -> str | None:
    return (value or "").strip() or None
