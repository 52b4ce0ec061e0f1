"""Shared plumbing for the JSON controllers: session auth, payload parsing
and the domain-error to HTTP status mapping."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    StateConflictError,
    ValidationError,
)
from ..users.model import SessionUser

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong, please retry"


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return jsonify(error="Please log in to continue"), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return jsonify(error="Please log in to continue"), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify(error="Admin access required"), 403
        return view(*args, **kwargs)

    return wrapper


def start_session(user: SessionUser) -> None:
    session.clear()
    session["employee_id"] = user.employee_id
    session["name"] = user.full_name
    session["email"] = user.email
    session["role"] = user.role.value


def current_actor() -> SessionUser:
    return SessionUser(
        employee_id=int(session["employee_id"]),
        full_name=session.get("name", ""),
        email=session.get("email", ""),
        role=Role(session.get("role")),
    )


def payload() -> dict:
    """Request body as a dict: JSON when sent, form fields otherwise."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def to_jsonable(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {_key(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def _key(key) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    if isinstance(key, tuple):
        # (year, month) payroll periods
        return "-".join(f"{part:02d}" if i else str(part) for i, part in enumerate(key))
    return str(key)


def employee_json(employee) -> dict:
    data = to_jsonable(employee)
    data.pop("password_hash", None)
    return data


def _status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, StateConflictError):
        return 409
    return 500


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = _status_for(error)
        if status == 500:
            logger.error(
                "%s on %s %s: %s (cause: %r)",
                type(error).__name__,
                request.method,
                request.path,
                error,
                error.__cause__,
            )
            return jsonify(error=GENERIC_ERROR), 500
        return jsonify(error=str(error), kind=type(error).__name__), status

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify(error=error.description), error.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify(error=f"{GENERIC_ERROR}: {error}"), 500
        return jsonify(error=GENERIC_ERROR), 500
