from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..catalog.model import ExpenseCategory
from ..common.validators import as_amount
from ..groups.model import Group
from .allocator import ExpenseAllocator, allocation_percentage_total
from .model import Expense

UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class ExpenseSummary:
    month: str
    total: float = 0.0
    ungrouped_total: float = 0.0
    by_category: dict[str, float] = field(default_factory=dict)
    by_group: dict[str, float] = field(default_factory=dict)
    unbalanced_shared: list[str] = field(default_factory=list)


def summarize_expenses(
    expenses: Sequence[Expense],
    month: str,
    *,
    groups: Sequence[Group],
    categories: Optional[Sequence[ExpenseCategory]] = None,
    allocator: Optional[ExpenseAllocator] = None,
) -> ExpenseSummary:
    allocator = allocator or ExpenseAllocator()
    known_categories = {c.category_id for c in categories or () if not c.deleted}

    total = 0.0
    ungrouped = 0.0
    by_category: dict[str, float] = {}
    by_group: dict[str, float] = {}
    unbalanced: list[str] = []

    for expense in expenses:
        if expense.deleted or expense.accounting_month != month:
            continue

        amount = as_amount(expense.amount)
        total += amount

        key = expense.category_id if expense.category_id in known_categories else UNCATEGORIZED
        by_category[key] = by_category.get(key, 0.0) + amount

        shares = allocator.allocate(expense, groups)
        if not shares:
            ungrouped += amount
        for group_id, share in shares.items():
            by_group[group_id] = by_group.get(group_id, 0.0) + share

        if expense.is_shared and any(a.percentage is not None for a in expense.allocations):
            if allocation_percentage_total(expense) != 100:
                unbalanced.append(expense.expense_id)

    return ExpenseSummary(
        month=month,
        total=total,
        ungrouped_total=ungrouped,
        by_category=by_category,
        by_group=by_group,
        unbalanced_shared=unbalanced,
    )
