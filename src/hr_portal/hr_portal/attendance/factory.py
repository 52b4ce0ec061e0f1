from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.constants import HALF_DAY_THRESHOLD_HOURS
from .strategies.base import AttendanceStrategy
from .strategies.full_day_strategy import FullDayStrategy
from .strategies.half_day_strategy import HalfDayStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on worked hours."""

    half_day_threshold: Decimal = HALF_DAY_THRESHOLD_HOURS

    def for_checkin(self) -> AttendanceStrategy:
        return FullDayStrategy()

    def for_checkout(self, *, working_hours: Decimal) -> AttendanceStrategy:
        # Strict: exactly the threshold is a full day.
        if working_hours < self.half_day_threshold:
            return HalfDayStrategy()
        return FullDayStrategy()
