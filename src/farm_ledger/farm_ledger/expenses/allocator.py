from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from ..common.validators import as_amount
from ..groups.model import Group
from .model import Allocation, Expense

logger = logging.getLogger(__name__)


class ExpenseAllocator:
    """Resolve one expense into ``{group_id: amount}``.

    Percentages are passed through as stored: no normalisation when they do
    not add up to 100.
    """

    def allocate(self, expense: Expense, groups: Optional[Iterable[Group]] = None) -> dict[str, float]:
        known = None if groups is None else {g.group_id for g in groups if not g.deleted}
        amount = as_amount(expense.amount)

        if not expense.is_shared:
            if not expense.group_id:
                # counts toward the period total, but toward no group
                return {}
            if known is not None and expense.group_id not in known:
                logger.warning("[expenses] expense %s names unknown group %s", expense.expense_id, expense.group_id)
                return {}
            return {expense.group_id: amount}

        out: dict[str, float] = {}
        for allocation in expense.allocations:
            if known is not None and allocation.group_id not in known:
                logger.warning(
                    "[expenses] skipping allocation of expense %s to unknown group %s",
                    expense.expense_id,
                    allocation.group_id,
                )
                continue
            out[allocation.group_id] = out.get(allocation.group_id, 0.0) + self.resolve(amount, allocation)
        return out

    @staticmethod
    def resolve(amount: float, allocation: Allocation) -> float:
        if allocation.fixed_amount is not None:
            return as_amount(allocation.fixed_amount)
        if allocation.percentage is None:
            return 0.0
        return amount * as_amount(allocation.percentage) / 100

    def amount_for_group(self, expense: Expense, group_id: str, groups: Optional[Iterable[Group]] = None) -> float:
        return self.allocate(expense, groups).get(group_id, 0.0)


def default_allocations(groups: Sequence[Group]) -> tuple[Allocation, ...]:
    """Starting split when an expense is first marked shared: equal whole percentages."""
    active = [g for g in groups if g.is_active]
    if not active:
        return ()
    share = math.floor(100 / len(active))
    return tuple(Allocation(group_id=g.group_id, percentage=share) for g in active)


def allocation_percentage_total(expense: Expense) -> float:
    """Sum of stored percentages, for a caller-side 'not 100%' warning."""
    return sum(as_amount(a.percentage) for a in expense.allocations if a.percentage is not None)
