from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Group:
    """Domain entity: master work group, activated per month as an instance."""

    group_id: str
    name: str
    order: int = 0
    status: RecordStatus = RecordStatus.ACTIVE
    local_name: Optional[str] = None
    deleted: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE and not self.deleted


def sort_by_order(groups):
    return sorted(groups, key=lambda g: g.order)
