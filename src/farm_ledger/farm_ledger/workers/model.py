from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Worker:
    """Domain entity: farm worker paid by the day.

    Note: plain data object. Cost is computed on read from the current
    daily_rate; nothing derived from it is stored.
    """

    worker_id: str
    name: str
    daily_rate: float
    status: RecordStatus = RecordStatus.ACTIVE
    local_name: Optional[str] = None
    deleted: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE and not self.deleted
