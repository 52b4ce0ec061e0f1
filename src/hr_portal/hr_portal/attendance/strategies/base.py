from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    working_hours: Decimal = Decimal("0")


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, working_hours: Decimal) -> StatusDecision:
        raise NotImplementedError
