from __future__ import annotations

import pytest

from src.farm_ledger.farm_ledger.attendance.model import DayEntry, MonthGroupInstance, MonthSheet
from src.farm_ledger.farm_ledger.catalog.model import Activity, Area, ExpenseCategory
from src.farm_ledger.farm_ledger.core.enums import AttendanceStatus, PaymentFor, RecordStatus
from src.farm_ledger.farm_ledger.expenses.model import Allocation, Expense
from src.farm_ledger.farm_ledger.groups.model import Group
from src.farm_ledger.farm_ledger.payments.model import Payment
from src.farm_ledger.farm_ledger.workers.model import Worker
from tests.fakes import (
    InMemoryAttendance,
    InMemoryCatalog,
    InMemoryExpenses,
    InMemoryGroups,
    InMemoryPayments,
    InMemoryWorkers,
)


@pytest.fixture
def workers() -> list[Worker]:
    return [
        Worker(worker_id="w1", name="Sunita", daily_rate=400),
        Worker(worker_id="w2", name="Anil", daily_rate=300),
        Worker(worker_id="w3", name="Ganesh", daily_rate=500, status=RecordStatus.INACTIVE),
        Worker(worker_id="w4", name="Deleted Dev", daily_rate=999, deleted=True),
    ]


@pytest.fixture
def groups() -> list[Group]:
    return [
        Group(group_id="gB", name="Spraying Team", order=2),
        Group(group_id="gA", name="Team A", order=1),
        Group(group_id="gX", name="Old Team", order=0, deleted=True),
    ]


@pytest.fixture
def repos(workers, groups) -> dict:
    """Fake repositories holding a small two-month ledger for groups gA/gB."""
    P = AttendanceStatus.PRESENT
    H = AttendanceStatus.HALF
    december = MonthSheet(
        month="2024-12",
        groups=(
            MonthGroupInstance(
                instance_id="dec-a",
                group_id="gA",
                days=tuple(
                    DayEntry(date=f"2024-12-0{i}", attendance={"w1": P}, activity_code="WD", area_code="N1")
                    for i in range(1, 6)
                ),
            ),
            MonthGroupInstance(
                instance_id="dec-b",
                group_id="gB",
                days=(DayEntry(date="2024-12-02", attendance={"w2": H}),),
            ),
        ),
    )
    january = MonthSheet(
        month="2025-01",
        groups=(MonthGroupInstance(instance_id="jan-a", group_id="gA"),),
    )

    return {
        "workers_repo": InMemoryWorkers({w.worker_id: w for w in workers}),
        "groups_repo": InMemoryGroups({g.group_id: g for g in groups}),
        "catalog_repo": InMemoryCatalog(
            activities=[Activity(code="WD", name="Weeding"), Activity(code="SP", name="Spraying")],
            areas=[Area(code="N1", name="North plot")],
            categories=[ExpenseCategory(category_id="c-fuel", code="FUEL", name="Fuel")],
        ),
        "attendance_repo": InMemoryAttendance([december, january]),
        "expenses_repo": InMemoryExpenses(
            [
                Expense(expense_id="e-nov", date="2024-11-20", month="2024-11", amount=500, group_id="gA"),
                Expense(expense_id="e-dec", date="2024-12-10", month="2024-12", amount=300, group_id="gA", category_id="c-fuel"),
                Expense(
                    expense_id="e-shared",
                    date="2024-12-15",
                    month="2024-12",
                    amount=1000,
                    is_shared=True,
                    allocations=(Allocation("gA", percentage=60), Allocation("gB", percentage=40)),
                ),
            ]
        ),
        "payments_repo": InMemoryPayments(
            [
                Payment(payment_id="p-dec", date="2024-12-31", month="2024-12", amount=1800, group_id="gA"),
                Payment(
                    payment_id="p-exp",
                    date="2024-12-31",
                    month="2024-12",
                    amount=400,
                    group_id="gB",
                    payment_for=PaymentFor.EXPENSE,
                    expense_id="e-shared",
                ),
            ]
        ),
    }
