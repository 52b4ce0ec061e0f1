from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_comment: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1


@dataclass(frozen=True)
class CascadeResult:
    """Outcome of the per-date attendance writes for one approval."""

    applied_dates: tuple[date, ...] = ()
    failed_dates: tuple[date, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.failed_dates


@dataclass(frozen=True)
class DecisionResult:
    request: LeaveRequest
    cascade: CascadeResult = field(default_factory=CascadeResult)
    notification_queued: bool = False
