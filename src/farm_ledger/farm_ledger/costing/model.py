from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import HALF_DAY_VALUE


@dataclass(frozen=True)
class WorkerCost:
    worker_id: str
    worker_name: str
    daily_rate: float
    days_worked: int = 0
    half_days: int = 0
    total_cost: float = 0.0

    @property
    def total_days(self) -> float:
        return self.days_worked + self.half_days * HALF_DAY_VALUE


@dataclass(frozen=True)
class ActivityCost:
    activity_code: str
    activity_name: str
    total_cost: float = 0.0
    total_days: float = 0.0


@dataclass(frozen=True)
class AreaCost:
    area_code: str
    area_name: str
    total_cost: float = 0.0
    total_days: float = 0.0


@dataclass(frozen=True)
class GroupCost:
    group_id: str
    group_name: str
    local_name: Optional[str] = None
    total_cost: float = 0.0
    total_days: float = 0.0


@dataclass(frozen=True)
class GroupLabourCost:
    """Read-model for the per-group drill-down (group total plus worker rows)."""

    group_id: str
    group_name: str
    local_name: Optional[str] = None
    workers: list[WorkerCost] = field(default_factory=list)
    total_days: float = 0.0
    total_cost: float = 0.0


@dataclass(frozen=True)
class MonthlyReport:
    month: str
    workers: list[WorkerCost] = field(default_factory=list)
    total_cost: float = 0.0
    total_days: float = 0.0
