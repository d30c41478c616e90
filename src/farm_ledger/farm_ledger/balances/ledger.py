from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..attendance.model import MonthSheet
from ..common.validators import as_amount
from ..core.exceptions import UnknownReferenceError
from ..costing.aggregator import CostAggregator
from ..expenses.allocator import ExpenseAllocator
from ..expenses.model import Expense
from ..groups.model import Group, sort_by_order
from ..payments.model import Payment
from .model import MonthBalance

logger = logging.getLogger(__name__)

LABOUR, EXPENSE, PAID = 0, 1, 2


class BalanceLedger:
    """Opening -> labour + expense - payments -> closing, per group per month.

    Balances are a left fold over each group's active months in ascending
    order, carrying the closing balance forward. A month in which nothing
    was recorded for a group carries the balance unchanged.
    """

    def __init__(self, aggregator: CostAggregator, *, allocator: Optional[ExpenseAllocator] = None):
        self._aggregator = aggregator
        self._allocator = allocator or ExpenseAllocator()

    def _flows(
        self,
        groups: Sequence[Group],
        through_month: str,
        sheets: Iterable[MonthSheet],
        expenses: Iterable[Expense],
        payments: Iterable[Payment],
    ) -> dict[str, dict[str, list[float]]]:
        """group_id -> month -> [labour, expense, payments] for months <= through_month."""
        known = {g.group_id for g in groups}
        flows: dict[str, dict[str, list[float]]] = defaultdict(lambda: defaultdict(lambda: [0.0, 0.0, 0.0]))

        for sheet in sheets:
            if sheet.month > through_month:
                continue
            active = {inst.group_id for inst in sheet.groups}
            for cost in self._aggregator.cost_per_group(groups, [sheet]):
                if cost.group_id in active:
                    flows[cost.group_id][sheet.month][LABOUR] += cost.total_cost

        for expense in expenses:
            month = expense.accounting_month
            if expense.deleted or not month or month > through_month:
                continue
            for group_id, amount in self._allocator.allocate(expense).items():
                if group_id in known:
                    flows[group_id][month][EXPENSE] += amount

        for payment in payments:
            month = payment.accounting_month
            if payment.deleted or not month or month > through_month:
                continue
            if payment.group_id not in known:
                logger.debug("[balances] skipping payment %s for unknown group %s", payment.payment_id, payment.group_id)
                continue
            flows[payment.group_id][month][PAID] += as_amount(payment.amount)

        return flows

    @staticmethod
    def _fold(group: Group, through_month: str, by_month: dict[str, list[float]]) -> list[MonthBalance]:
        history: list[MonthBalance] = []
        closing = 0.0
        for month in sorted(m for m in by_month if m <= through_month):
            labour, expense, paid = by_month[month]
            row = MonthBalance(
                group_id=group.group_id,
                month=month,
                group_name=group.name,
                local_name=group.local_name,
                opening_balance=closing,
                labour_cost=labour,
                expense_cost=expense,
                total_payments=paid,
            )
            history.append(row)
            closing = row.closing_balance

        if not history or history[-1].month != through_month:
            history.append(
                MonthBalance(
                    group_id=group.group_id,
                    month=through_month,
                    group_name=group.name,
                    local_name=group.local_name,
                    opening_balance=closing,
                )
            )
        return history

    @staticmethod
    def _resolve_group(group_id: str, groups: Sequence[Group]) -> Group:
        for group in groups:
            if group.group_id == group_id and not group.deleted:
                return group
        raise UnknownReferenceError(f"Unknown group: {group_id}")

    def balance_history(
        self,
        group_id: str,
        through_month: str,
        *,
        groups: Sequence[Group],
        sheets: Iterable[MonthSheet],
        expenses: Iterable[Expense],
        payments: Iterable[Payment],
    ) -> list[MonthBalance]:
        """Every month with activity for the group up to through_month, plus through_month itself."""
        group = self._resolve_group(group_id, groups)
        flows = self._flows([group], through_month, sheets, expenses, payments)
        return self._fold(group, through_month, flows.get(group.group_id, {}))

    def compute_month_balance(
        self,
        group_id: str,
        month: str,
        *,
        groups: Sequence[Group],
        sheets: Iterable[MonthSheet],
        expenses: Iterable[Expense],
        payments: Iterable[Payment],
    ) -> MonthBalance:
        history = self.balance_history(
            group_id,
            month,
            groups=groups,
            sheets=sheets,
            expenses=expenses,
            payments=payments,
        )
        return history[-1]

    def balance_report(
        self,
        month: str,
        *,
        groups: Sequence[Group],
        sheets: Iterable[MonthSheet],
        expenses: Iterable[Expense],
        payments: Iterable[Payment],
    ) -> list[MonthBalance]:
        """MonthBalance for every group; one pass over the data, one fold per group."""
        listed = sort_by_order(g for g in groups if not g.deleted)
        flows = self._flows(listed, month, sheets, expenses, payments)
        return [self._fold(g, month, flows.get(g.group_id, {}))[-1] for g in listed]


def grand_totals(balances: Iterable[MonthBalance]) -> dict:
    keys = (
        "opening_balance",
        "labour_cost",
        "expense_cost",
        "total_cost",
        "total_payments",
        "current_month_balance",
        "closing_balance",
    )
    totals = {k: 0.0 for k in keys}
    for row in balances:
        for k in keys:
            totals[k] += getattr(row, k)
    return totals
