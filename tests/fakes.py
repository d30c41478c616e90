"""In-memory repositories shared by the service and API tests."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from src.farm_ledger.farm_ledger.attendance.model import DayEntry, MonthGroupInstance, MonthSheet
from src.farm_ledger.farm_ledger.catalog.model import Activity, Area, ExpenseCategory
from src.farm_ledger.farm_ledger.core.enums import AttendanceStatus
from src.farm_ledger.farm_ledger.expenses.model import Expense
from src.farm_ledger.farm_ledger.groups.model import Group
from src.farm_ledger.farm_ledger.payments.model import Payment
from src.farm_ledger.farm_ledger.workers.model import Worker


def _in_range(month: str, start: Optional[str], end: Optional[str]) -> bool:
    return (start is None or month >= start) and (end is None or month <= end)


@dataclass
class InMemoryWorkers:
    by_id: dict[str, Worker]

    def list_all(self, *, include_deleted: bool = False):
        return [w for w in self.by_id.values() if include_deleted or not w.deleted]

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        return self.by_id.get(worker_id)


@dataclass
class InMemoryGroups:
    by_id: dict[str, Group]

    def list_all(self, *, include_deleted: bool = False):
        return [g for g in self.by_id.values() if include_deleted or not g.deleted]

    def get_by_id(self, group_id: str) -> Optional[Group]:
        return self.by_id.get(group_id)


@dataclass
class InMemoryCatalog:
    activities: list[Activity] = field(default_factory=list)
    areas: list[Area] = field(default_factory=list)
    categories: list[ExpenseCategory] = field(default_factory=list)

    def list_activities(self):
        return list(self.activities)

    def list_areas(self):
        return list(self.areas)

    def list_expense_categories(self):
        return list(self.categories)


@dataclass
class InMemoryExpenses:
    items: list[Expense] = field(default_factory=list)

    def list_expenses(self, *, start=None, end=None, include_deleted=False):
        return [
            e
            for e in self.items
            if _in_range(e.accounting_month, start, end) and (include_deleted or not e.deleted)
        ]

    def get_by_id(self, expense_id):
        return next((e for e in self.items if e.expense_id == expense_id), None)


@dataclass
class InMemoryPayments:
    items: list[Payment] = field(default_factory=list)

    def list_payments(self, *, start=None, end=None, group_id=None, include_deleted=False):
        return [
            p
            for p in self.items
            if _in_range(p.accounting_month, start, end)
            and (group_id is None or p.group_id == group_id)
            and (include_deleted or not p.deleted)
        ]


class InMemoryAttendance:
    def __init__(self, sheets=()):
        self.sheets: dict[str, MonthSheet] = {s.month: s for s in sheets}
        self.saved_marks: list[tuple] = []
        self.saved_tags: list[tuple] = []

    def get_month_sheet(self, month):
        return self.sheets.get(month)

    def list_month_sheets(self, *, start=None, end=None):
        return [self.sheets[m] for m in sorted(self.sheets) if _in_range(m, start, end)]

    def create_instance(self, *, month, group_id, instance_id):
        sheet = self.sheets.get(month) or MonthSheet(month=month)
        inst = MonthGroupInstance(instance_id=instance_id, group_id=group_id)
        self.sheets[month] = replace(sheet, groups=sheet.groups + (inst,))

    def _replace_day(self, instance_id, date, fn):
        for month, sheet in self.sheets.items():
            groups = []
            for inst in sheet.groups:
                if inst.instance_id == instance_id:
                    days = [d for d in inst.days if d.date != date]
                    days.append(fn(inst.day(date) or DayEntry(date=date)))
                    inst = replace(inst, days=tuple(sorted(days, key=lambda d: d.date)))
                groups.append(inst)
            self.sheets[month] = replace(sheet, groups=tuple(groups))

    def save_mark(self, *, instance_id, date, worker_id, status):
        self.saved_marks.append((instance_id, date, worker_id, status))

        def apply(entry):
            attendance = dict(entry.attendance)
            if status == AttendanceStatus.UNMARKED:
                attendance.pop(worker_id, None)
            else:
                attendance[worker_id] = status
            return replace(entry, attendance=attendance)

        self._replace_day(instance_id, date, apply)

    def save_day_tags(self, *, instance_id, date, activity_code=None, area_code=None):
        self.saved_tags.append((instance_id, date, activity_code, area_code))
        self._replace_day(instance_id, date, lambda e: replace(e, activity_code=activity_code, area_code=area_code))
