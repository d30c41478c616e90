from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..attendance.model import DayEntry, MonthSheet
from ..catalog.model import Activity, Area
from ..common.datetime_utils import in_month_range
from ..core.enums import AttendanceStatus
from ..groups.model import Group, sort_by_order
from ..workers.model import Worker
from .calculator.base import CostCalculator
from .calculator.standard_calculator import StandardCostCalculator
from .model import ActivityCost, AreaCost, GroupCost, GroupLabourCost, MonthlyReport, WorkerCost

logger = logging.getLogger(__name__)


def months_in_range(sheets: Iterable[MonthSheet], start: Optional[str], end: Optional[str]) -> list[MonthSheet]:
    """Sheets whose month key lies in [start, end] (inclusive, string compare)."""
    return sorted((s for s in sheets if in_month_range(s.month, start, end)), key=lambda s: s.month)


class CostAggregator:
    """Read-only reductions of attendance sheets into money and days.

    Pure: the same inputs always give the same outputs and nothing is cached
    between calls. Unknown or soft-deleted workers contribute zero.
    """

    def __init__(self, workers: Sequence[Worker], *, calculator: Optional[CostCalculator] = None):
        self._workers = {w.worker_id: w for w in workers if not w.deleted}
        self._all_workers = list(workers)
        self._calculator = calculator or StandardCostCalculator()

    def _day_totals(self, entry: DayEntry) -> tuple[float, float]:
        """(cost, days) of every marked worker on one day entry."""
        cost = 0.0
        days = 0.0
        for worker_id, status in entry.marked():
            worker = self._workers.get(worker_id)
            if not worker:
                logger.debug("[costing] skipping unknown worker %s on %s", worker_id, entry.date)
                continue
            cost += self._calculator.day_cost(worker, status)
            days += self._calculator.day_value(status)
        return cost, days

    def _worker_cost(self, worker: Worker, entries: Iterable[DayEntry]) -> WorkerCost:
        days_worked = 0
        half_days = 0
        total_cost = 0.0
        if not worker.deleted:
            for entry in entries:
                status = entry.status_of(worker.worker_id)
                if status == AttendanceStatus.PRESENT:
                    days_worked += 1
                elif status == AttendanceStatus.HALF:
                    half_days += 1
                else:
                    continue
                total_cost += self._calculator.day_cost(worker, status)

        return WorkerCost(
            worker_id=worker.worker_id,
            worker_name=worker.name,
            daily_rate=worker.daily_rate,
            days_worked=days_worked,
            half_days=half_days,
            total_cost=total_cost,
        )

    def cost_per_worker(self, worker: Worker, sheets: Iterable[MonthSheet]) -> WorkerCost:
        entries = (entry for sheet in sheets for entry in sheet.all_days())
        return self._worker_cost(worker, entries)

    def cost_per_worker_for_period(self, sheets: Iterable[MonthSheet]) -> list[WorkerCost]:
        """cost_per_worker for every active worker; zero-cost workers included."""
        sheets = list(sheets)
        return [self.cost_per_worker(w, sheets) for w in self._all_workers if w.is_active]

    def monthly_report(self, sheet: Optional[MonthSheet], *, month: str = "") -> MonthlyReport:
        sheets = [sheet] if sheet else []
        workers = self.cost_per_worker_for_period(sheets)
        return MonthlyReport(
            month=sheet.month if sheet else month,
            workers=workers,
            total_cost=sum(w.total_cost for w in workers),
            total_days=sum(w.total_days for w in workers),
        )

    def cost_per_activity(self, activities: Sequence[Activity], sheets: Iterable[MonthSheet]) -> list[ActivityCost]:
        listed = [a for a in activities if not a.deleted]
        totals = self._totals_by_tag(sheets, {a.code for a in listed}, lambda e: e.activity_code)
        return [
            ActivityCost(
                activity_code=a.code,
                activity_name=a.name,
                total_cost=totals[a.code][0],
                total_days=totals[a.code][1],
            )
            for a in listed
        ]

    def cost_per_area(self, areas: Sequence[Area], sheets: Iterable[MonthSheet]) -> list[AreaCost]:
        listed = [a for a in areas if not a.deleted]
        totals = self._totals_by_tag(sheets, {a.code for a in listed}, lambda e: e.area_code)
        return [
            AreaCost(
                area_code=a.code,
                area_name=a.name,
                total_cost=totals[a.code][0],
                total_days=totals[a.code][1],
            )
            for a in listed
        ]

    def _totals_by_tag(self, sheets, codes: set[str], tag_of) -> dict[str, list[float]]:
        totals = {code: [0.0, 0.0] for code in codes}
        for sheet in sheets:
            for entry in sheet.all_days():
                code = tag_of(entry)
                # untagged days and unknown codes are not attributed anywhere
                if not code or code not in totals:
                    continue
                cost, days = self._day_totals(entry)
                totals[code][0] += cost
                totals[code][1] += days
        return totals

    def cost_per_group(self, groups: Sequence[Group], sheets: Iterable[MonthSheet]) -> list[GroupCost]:
        listed = sort_by_order(g for g in groups if not g.deleted)
        totals = {g.group_id: [0.0, 0.0] for g in listed}

        for sheet in sheets:
            for inst in sheet.groups:
                bucket = totals.get(inst.group_id)
                if bucket is None:
                    logger.debug("[costing] skipping instance %s of unknown group %s", inst.instance_id, inst.group_id)
                    continue
                for entry in inst.days:
                    cost, days = self._day_totals(entry)
                    bucket[0] += cost
                    bucket[1] += days

        return [
            GroupCost(
                group_id=g.group_id,
                group_name=g.name,
                local_name=g.local_name,
                total_cost=totals[g.group_id][0],
                total_days=totals[g.group_id][1],
            )
            for g in listed
        ]

    def group_labour_cost(self, group: Group, sheet: Optional[MonthSheet]) -> float:
        """Labour cost of exactly one group in exactly one month."""
        if not sheet or group.deleted:
            return 0.0
        return self.cost_per_group([group], [sheet])[0].total_cost

    def worker_breakdown_per_group(self, group: Group, sheet: Optional[MonthSheet]) -> list[WorkerCost]:
        """Per-worker subtotals inside one group for one month, sorted by name."""
        if not sheet or group.deleted:
            return []

        entries = [entry for inst in sheet.groups if inst.group_id == group.group_id for entry in inst.days]
        worker_ids = {worker_id for entry in entries for worker_id, _ in entry.marked()}

        rows = []
        for worker_id in worker_ids:
            worker = self._workers.get(worker_id)
            if not worker:
                continue
            rows.append(self._worker_cost(worker, entries))

        rows.sort(key=lambda r: r.worker_name)
        return rows

    def labour_cost_by_group(self, groups: Sequence[Group], sheet: Optional[MonthSheet]) -> list[GroupLabourCost]:
        """Drill-down for every group with attendance in the month, in group order."""
        out = []
        for group in sort_by_order(g for g in groups if not g.deleted):
            rows = self.worker_breakdown_per_group(group, sheet)
            if not rows:
                continue
            out.append(
                GroupLabourCost(
                    group_id=group.group_id,
                    group_name=group.name,
                    local_name=group.local_name,
                    workers=rows,
                    total_days=sum(r.total_days for r in rows),
                    total_cost=sum(r.total_cost for r in rows),
                )
            )
        return out
