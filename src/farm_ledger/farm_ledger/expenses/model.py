from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Allocation:
    """Share of a shared expense charged to one group.

    ``fixed_amount`` wins over ``percentage`` when both are set.
    """

    group_id: str
    percentage: Optional[float] = None
    fixed_amount: Optional[float] = None


@dataclass(frozen=True)
class Expense:
    """Sundry expense, charged to one group or shared across several."""

    expense_id: str
    date: str
    month: str
    amount: float
    description: str = ""
    category_id: Optional[str] = None
    group_id: Optional[str] = None
    is_shared: bool = False
    allocations: tuple[Allocation, ...] = ()
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    deleted: bool = False

    @property
    def accounting_month(self) -> str:
        return self.month or (self.date or "")[:7]
