from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..balances.ledger import BalanceLedger, grand_totals
from ..balances.model import MonthBalance
from ..catalog.repository import CatalogRepository
from ..common.validators import require_month_key, require_month_range
from ..core.exceptions import UnknownReferenceError
from ..costing.aggregator import CostAggregator
from ..costing.calculator.base import CostCalculator
from ..costing.model import ActivityCost, AreaCost, GroupCost, GroupLabourCost, MonthlyReport, WorkerCost
from ..expenses.allocator import ExpenseAllocator
from ..expenses.repository import ExpenseRepository
from ..expenses.summary import ExpenseSummary, summarize_expenses
from ..groups.repository import GroupRepository
from ..payments.repository import PaymentRepository
from ..payments.summary import PaymentSummary, summarize_payments
from ..workers.repository import WorkerRepository


@dataclass(frozen=True)
class BalanceReport:
    month: str
    groups: list[MonthBalance]
    totals: dict


class LedgerReportService:
    """Loads one consistent snapshot per request and runs the pure ledger engine over it."""

    def __init__(
        self,
        *,
        workers: WorkerRepository,
        groups: GroupRepository,
        catalog: CatalogRepository,
        attendance: AttendanceRepository,
        expenses: ExpenseRepository,
        payments: PaymentRepository,
        calculator: Optional[CostCalculator] = None,
        allocator: Optional[ExpenseAllocator] = None,
    ):
        self._workers = workers
        self._groups = groups
        self._catalog = catalog
        self._attendance = attendance
        self._expenses = expenses
        self._payments = payments
        self._calculator = calculator
        self._allocator = allocator or ExpenseAllocator()

    def _aggregator(self) -> CostAggregator:
        return CostAggregator(self._workers.list_all(include_deleted=True), calculator=self._calculator)

    # ---------- labour cost ----------
    def worker_costs(self, *, start: str, end: str, only_with_cost: bool = False) -> list[WorkerCost]:
        require_month_range(start, end)
        sheets = self._attendance.list_month_sheets(start=start, end=end)
        rows = self._aggregator().cost_per_worker_for_period(sheets)
        if only_with_cost:
            rows = [r for r in rows if r.total_cost > 0]
        return rows

    def monthly_report(self, month: str) -> MonthlyReport:
        require_month_key(month)
        return self._aggregator().monthly_report(self._attendance.get_month_sheet(month), month=month)

    def activity_costs(self, *, start: str, end: str) -> list[ActivityCost]:
        require_month_range(start, end)
        sheets = self._attendance.list_month_sheets(start=start, end=end)
        return self._aggregator().cost_per_activity(self._catalog.list_activities(), sheets)

    def area_costs(self, *, start: str, end: str) -> list[AreaCost]:
        require_month_range(start, end)
        sheets = self._attendance.list_month_sheets(start=start, end=end)
        return self._aggregator().cost_per_area(self._catalog.list_areas(), sheets)

    def group_costs(self, *, start: str, end: str) -> list[GroupCost]:
        require_month_range(start, end)
        sheets = self._attendance.list_month_sheets(start=start, end=end)
        return self._aggregator().cost_per_group(self._groups.list_all(), sheets)

    def labour_cost_by_group(self, month: str) -> list[GroupLabourCost]:
        require_month_key(month)
        sheet = self._attendance.get_month_sheet(month)
        return self._aggregator().labour_cost_by_group(self._groups.list_all(), sheet)

    # ---------- expenses / payments ----------
    def expense_summary(self, month: str) -> ExpenseSummary:
        require_month_key(month)
        return summarize_expenses(
            self._expenses.list_expenses(start=month, end=month),
            month,
            groups=self._groups.list_all(),
            categories=self._catalog.list_expense_categories(),
            allocator=self._allocator,
        )

    def expense_allocation(self, expense_id: str) -> dict[str, float]:
        expense = self._expenses.get_by_id(expense_id)
        if not expense or expense.deleted:
            raise UnknownReferenceError(f"Unknown expense: {expense_id}")
        return self._allocator.allocate(expense, self._groups.list_all())

    def payment_summary(self, month: str) -> PaymentSummary:
        require_month_key(month)
        return summarize_payments(self._payments.list_payments(start=month, end=month), month)

    # ---------- balances ----------
    def _ledger_inputs(self, month: str) -> dict:
        return {
            "groups": self._groups.list_all(),
            "sheets": self._attendance.list_month_sheets(end=month),
            "expenses": self._expenses.list_expenses(end=month),
            "payments": self._payments.list_payments(end=month),
        }

    def month_balance(self, group_id: str, month: str) -> MonthBalance:
        require_month_key(month)
        ledger = BalanceLedger(self._aggregator(), allocator=self._allocator)
        return ledger.compute_month_balance(group_id, month, **self._ledger_inputs(month))

    def balance_history(self, group_id: str, month: str) -> list[MonthBalance]:
        require_month_key(month)
        ledger = BalanceLedger(self._aggregator(), allocator=self._allocator)
        return ledger.balance_history(group_id, month, **self._ledger_inputs(month))

    def balance_report(self, month: str, *, include_trivial: bool = False) -> BalanceReport:
        require_month_key(month)
        ledger = BalanceLedger(self._aggregator(), allocator=self._allocator)
        rows = ledger.balance_report(month, **self._ledger_inputs(month))
        if not include_trivial:
            rows = [r for r in rows if not r.is_trivial]
        return BalanceReport(month=month, groups=rows, totals=grand_totals(rows))
