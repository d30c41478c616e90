from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Activity:
    """Work activity a group-day can be tagged with (e.g. weeding)."""

    code: str
    name: str
    local_code: Optional[str] = None
    local_name: Optional[str] = None
    category: Optional[str] = None
    deleted: bool = False


@dataclass(frozen=True)
class Area:
    """Farm plot a group-day can be tagged with."""

    code: str
    name: str
    local_code: Optional[str] = None
    local_name: Optional[str] = None
    group_id: Optional[str] = None
    deleted: bool = False


@dataclass(frozen=True)
class ExpenseCategory:
    category_id: str
    code: str
    name: str
    status: RecordStatus = RecordStatus.ACTIVE
    local_name: Optional[str] = None
    deleted: bool = False
