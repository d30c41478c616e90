from __future__ import annotations

import pytest

from src.farm_ledger.farm_ledger.attendance.model import DayEntry, MonthGroupInstance, MonthSheet
from src.farm_ledger.farm_ledger.balances.ledger import BalanceLedger, grand_totals
from src.farm_ledger.farm_ledger.core.enums import AttendanceStatus, PaymentFor
from src.farm_ledger.farm_ledger.core.exceptions import UnknownReferenceError
from src.farm_ledger.farm_ledger.costing.aggregator import CostAggregator
from src.farm_ledger.farm_ledger.expenses.model import Allocation, Expense
from src.farm_ledger.farm_ledger.payments.model import Payment

P = AttendanceStatus.PRESENT


def _sheet(month, group_id, dates, **marks):
    days = tuple(DayEntry(date=d, attendance=dict(marks)) for d in dates)
    return MonthSheet(month=month, groups=(MonthGroupInstance(instance_id=f"{month}-{group_id}", group_id=group_id, days=days),))


def _expense(expense_id, month, amount, **kwargs):
    return Expense(expense_id=expense_id, date=f"{month}-05", month=month, amount=amount, **kwargs)


def _payment(payment_id, month, amount, group_id="gA", **kwargs):
    return Payment(payment_id=payment_id, date=f"{month}-28", month=month, amount=amount, group_id=group_id, **kwargs)


@pytest.fixture
def ledger(workers) -> BalanceLedger:
    return BalanceLedger(CostAggregator(workers))


@pytest.fixture
def data(groups):
    # November: 500 expense only. December: w1 @400 x5 days, 300 expense, 1800 paid.
    return {
        "groups": groups,
        "sheets": [_sheet("2024-12", "gA", [f"2024-12-0{i}" for i in range(1, 6)], w1=P)],
        "expenses": [
            _expense("e-nov", "2024-11", 500, group_id="gA"),
            _expense("e-dec", "2024-12", 300, group_id="gA"),
            _expense("e-del", "2024-12", 9999, group_id="gA", deleted=True),
        ],
        "payments": [
            _payment("p-dec", "2024-12", 1800),
            _payment("p-del", "2024-12", 9999, deleted=True),
        ],
    }


def test_month_balance_rolls_forward(ledger, data):
    row = ledger.compute_month_balance("gA", "2024-12", **data)

    assert row.opening_balance == 500
    assert row.labour_cost == 2000
    assert row.expense_cost == 300
    assert row.total_cost == 2300
    assert row.total_payments == 1800
    assert row.current_month_balance == 500
    assert row.closing_balance == 1000


def test_opening_equals_previous_closing(ledger, data):
    data["payments"].append(_payment("p-jan", "2025-01", 1000, payment_for=PaymentFor.LABOUR))

    history = ledger.balance_history("gA", "2025-01", **data)

    assert [r.month for r in history] == ["2024-11", "2024-12", "2025-01"]
    for prev, cur in zip(history, history[1:]):
        assert cur.opening_balance == prev.closing_balance
    assert history[-1].closing_balance == 0


def test_gap_month_carries_balance_unchanged(ledger, data):
    row = ledger.compute_month_balance("gA", "2025-03", **data)

    assert row.month == "2025-03"
    assert row.opening_balance == 1000
    assert row.total_cost == 0
    assert row.closing_balance == 1000


def test_first_month_opens_at_zero(ledger, data):
    row = ledger.compute_month_balance("gA", "2024-11", **data)

    assert row.opening_balance == 0
    assert row.closing_balance == 500


def test_later_months_are_ignored(ledger, data):
    data["payments"].append(_payment("p-future", "2025-06", 10_000))

    assert ledger.compute_month_balance("gA", "2024-12", **data).closing_balance == 1000


def test_shared_expense_is_split_between_groups(ledger, data):
    data["expenses"].append(
        _expense(
            "e-shared",
            "2024-12",
            1000,
            is_shared=True,
            allocations=(Allocation("gA", percentage=60), Allocation("gB", percentage=40)),
        )
    )

    a = ledger.compute_month_balance("gA", "2024-12", **data)
    b = ledger.compute_month_balance("gB", "2024-12", **data)

    assert a.expense_cost == 300 + 600
    assert b.expense_cost == 400
    assert b.labour_cost == 0
    assert b.closing_balance == 400


def test_unknown_or_deleted_group_raises(ledger, data):
    with pytest.raises(UnknownReferenceError):
        ledger.compute_month_balance("nope", "2024-12", **data)
    with pytest.raises(UnknownReferenceError):
        ledger.balance_history("gX", "2024-12", **data)


def test_balance_report_and_grand_totals(ledger, data):
    data["payments"].append(_payment("p-b", "2024-12", 100, group_id="gB"))

    rows = ledger.balance_report("2024-12", **data)

    assert [r.group_id for r in rows] == ["gA", "gB"]
    assert rows[1].closing_balance == -100

    totals = grand_totals(rows)
    assert totals["total_cost"] == 2300
    assert totals["total_payments"] == 1900
    assert totals["closing_balance"] == 900
    assert totals["closing_balance"] == sum(r.closing_balance for r in rows)


def test_balance_report_is_repeatable(ledger, data):
    assert ledger.balance_report("2024-12", **data) == ledger.balance_report("2024-12", **data)
