from __future__ import annotations

from ...core.constants import HALF_DAY_VALUE
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Absent moves to half day, or clears when a half day would break the cap."""

    def decide(self, *, other_groups_total: float) -> StatusDecision:
        if other_groups_total <= HALF_DAY_VALUE:
            return StatusDecision(status=AttendanceStatus.HALF)
        return StatusDecision(status=AttendanceStatus.UNMARKED, note="daily cap reached")
