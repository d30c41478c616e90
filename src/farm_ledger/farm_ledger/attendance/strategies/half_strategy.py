from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    def decide(self, *, other_groups_total: float) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.UNMARKED)
