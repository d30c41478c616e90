from __future__ import annotations

from ...core.constants import HALF_DAY_VALUE
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class UnmarkedStrategy(AttendanceStrategy):
    """First mark of the day: the largest value that still fits under the cap."""

    def decide(self, *, other_groups_total: float) -> StatusDecision:
        if other_groups_total == 0:
            return StatusDecision(status=AttendanceStatus.PRESENT)
        if other_groups_total <= HALF_DAY_VALUE:
            return StatusDecision(status=AttendanceStatus.HALF, note="present elsewhere")
        return StatusDecision(status=AttendanceStatus.ABSENT, note="daily cap reached")
