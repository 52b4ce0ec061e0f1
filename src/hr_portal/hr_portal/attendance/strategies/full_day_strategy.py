from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class FullDayStrategy(AttendanceStrategy):
    """Check-in, or a check-out at or above the half-day threshold."""

    def decide_checkin(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, working_hours: Decimal) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, working_hours=working_hours)
