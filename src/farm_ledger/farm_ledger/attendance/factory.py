from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.half_strategy import HalfDayStrategy
from .strategies.present_strategy import PresentStrategy
from .strategies.unmarked_strategy import UnmarkedStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the cycling strategy for the current mark."""

    def for_status(self, current: AttendanceStatus) -> AttendanceStrategy:
        current = AttendanceStatus.parse(current)
        if current == AttendanceStatus.PRESENT:
            return PresentStrategy()
        if current == AttendanceStatus.ABSENT:
            return AbsentStrategy()
        if current == AttendanceStatus.HALF:
            return HalfDayStrategy()
        return UnmarkedStrategy()


_DEFAULT_FACTORY = AttendanceStrategyFactory()


def next_status(current: AttendanceStatus, other_groups_total: float) -> AttendanceStatus:
    """Next mark in the P -> A -> H -> '' ring, skipping marks over the daily cap."""
    strategy = _DEFAULT_FACTORY.for_status(current)
    return strategy.decide(other_groups_total=float(other_groups_total)).status
