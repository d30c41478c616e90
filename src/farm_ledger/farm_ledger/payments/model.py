from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PaymentFor


@dataclass(frozen=True)
class Payment:
    """Money paid to one group, for labour or against an expense. Never shared."""

    payment_id: str
    date: str
    month: str
    amount: float
    group_id: str
    payment_for: PaymentFor = PaymentFor.LABOUR
    expense_id: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    deleted: bool = False

    @property
    def accounting_month(self) -> str:
        return self.month or (self.date or "")[:7]
