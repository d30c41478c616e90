from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import AttendanceStatus
from ...workers.model import Worker


class CostCalculator(ABC):
    """Calculator interface (Strategy Pattern for labour cost)."""

    @abstractmethod
    def day_value(self, status: AttendanceStatus) -> float:
        """Days credited for one mark."""
        raise NotImplementedError

    @abstractmethod
    def day_cost(self, worker: Worker, status: AttendanceStatus) -> float:
        """Money owed to a worker for one mark."""
        raise NotImplementedError
