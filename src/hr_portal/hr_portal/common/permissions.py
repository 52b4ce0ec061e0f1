from __future__ import annotations

from ..core.exceptions import AuthorizationError
from ..users.model import SessionUser


def require_admin(actor: SessionUser) -> SessionUser:
    if not actor.is_admin:
        raise AuthorizationError("Admin access required")
    return actor


def require_self_or_admin(actor: SessionUser, employee_id: int) -> SessionUser:
    if not actor.is_admin and actor.employee_id != int(employee_id):
        raise AuthorizationError("You can only access your own records")
    return actor
