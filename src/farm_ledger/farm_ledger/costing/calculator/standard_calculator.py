from __future__ import annotations

from .base import CostCalculator
from ...common.validators import as_amount
from ...core.constants import HALF_DAY_RATE_FACTOR
from ...core.enums import AttendanceStatus
from ...workers.model import Worker


class StandardCostCalculator(CostCalculator):
    """Standard rule: full rate for present, half rate for a half day, nothing otherwise."""

    def day_value(self, status: AttendanceStatus) -> float:
        return AttendanceStatus.parse(status).value_in_days

    def day_cost(self, worker: Worker, status: AttendanceStatus) -> float:
        status = AttendanceStatus.parse(status)
        rate = as_amount(worker.daily_rate)
        if status == AttendanceStatus.PRESENT:
            return rate
        if status == AttendanceStatus.HALF:
            return rate * HALF_DAY_RATE_FACTOR
        return 0.0
