from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MonthBalance:
    """Derived per group per month; always recomputed, never stored.

    Positive balances are amounts still owed to the group.
    """

    group_id: str
    month: str
    group_name: str = ""
    local_name: Optional[str] = None
    opening_balance: float = 0.0
    labour_cost: float = 0.0
    expense_cost: float = 0.0
    total_payments: float = 0.0

    @property
    def total_cost(self) -> float:
        return self.labour_cost + self.expense_cost

    @property
    def current_month_balance(self) -> float:
        return self.total_cost - self.total_payments

    @property
    def closing_balance(self) -> float:
        return self.opening_balance + self.current_month_balance

    @property
    def is_trivial(self) -> bool:
        return self.opening_balance == 0 and self.total_cost == 0 and self.total_payments == 0

    def as_dict(self) -> dict:
        return {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "local_name": self.local_name,
            "month": self.month,
            "opening_balance": self.opening_balance,
            "labour_cost": self.labour_cost,
            "expense_cost": self.expense_cost,
            "total_cost": self.total_cost,
            "total_payments": self.total_payments,
            "current_month_balance": self.current_month_balance,
            "closing_balance": self.closing_balance,
        }
