from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: decide the next mark from the current one.

    ``other_groups_total`` is the worker's attendance value already recorded
    in every other group instance for the same date.
    """

    @abstractmethod
    def decide(self, *, other_groups_total: float) -> StatusDecision:
        raise NotImplementedError
