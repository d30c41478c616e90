from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import in_month_range, is_month_key, month_of
from ..core.constants import DAILY_ATTENDANCE_CAP
from ..core.enums import AttendanceStatus
from ..workers.model import Worker
from .factory import AttendanceStrategyFactory
from .model import DayEntry, MonthGroupInstance, MonthSheet

logger = logging.getLogger(__name__)


class AttendanceMatrix:
    """In-memory month -> group instance -> date -> worker attendance matrix.

    Records are frozen; every write swaps in a new ``MonthSheet`` for the
    month it touches. Callers serialize writes; reads never mutate.
    """

    def __init__(self, sheets: Iterable[MonthSheet] = ()):
        self._sheets: dict[str, MonthSheet] = {}
        for sheet in sheets:
            if not is_month_key(sheet.month):
                logger.warning("[attendance] skipping sheet with bad month key %r", sheet.month)
                continue
            self._sheets[sheet.month] = sheet

    # ---------- reads ----------
    def sheet(self, month: str) -> Optional[MonthSheet]:
        return self._sheets.get(month)

    def sheets(self) -> list[MonthSheet]:
        return [self._sheets[m] for m in sorted(self._sheets)]

    def sheets_in_range(self, start: Optional[str], end: Optional[str]) -> list[MonthSheet]:
        return [s for s in self.sheets() if in_month_range(s.month, start, end)]

    def instance(self, month: str, instance_id: str) -> Optional[MonthGroupInstance]:
        sheet = self._sheets.get(month)
        return sheet.instance(instance_id) if sheet else None

    def status(self, month: str, instance_id: str, date: str, worker_id: str) -> AttendanceStatus:
        inst = self.instance(month, instance_id)
        entry = inst.day(date) if inst else None
        return entry.status_of(worker_id) if entry else AttendanceStatus.UNMARKED

    def worker_day_total(self, month: str, date: str, worker_id: str) -> float:
        sheet = self._sheets.get(month)
        if not sheet:
            return 0.0
        total = 0.0
        for inst in sheet.groups:
            entry = inst.day(date)
            if entry:
                total += entry.status_of(worker_id).value_in_days
        return total

    def other_groups_total(self, month: str, instance_id: str, date: str, worker_id: str) -> float:
        own = self.status(month, instance_id, date, worker_id).value_in_days
        return self.worker_day_total(month, date, worker_id) - own

    def has_exceeded_limit(self, month: str, date: str, worker_id: str) -> bool:
        """Soft cap check; over-cap marks are flagged for display, never rejected."""
        return self.worker_day_total(month, date, worker_id) > DAILY_ATTENDANCE_CAP

    def roster(self, month: str, instance_id: str, workers: Sequence[Worker]) -> list[Worker]:
        """Workers shown on one group's sheet.

        Month roster = sheet.worker_ids or every active worker; the instance's
        own worker_ids narrows it further.
        """
        active = [w for w in workers if w.is_active]
        sheet = self._sheets.get(month)
        if sheet and sheet.worker_ids:
            allowed = set(sheet.worker_ids)
            active = [w for w in active if w.worker_id in allowed]
        inst = sheet.instance(instance_id) if sheet else None
        if inst and inst.worker_ids:
            allowed = set(inst.worker_ids)
            active = [w for w in active if w.worker_id in allowed]
        return active

    # ---------- writes ----------
    def activate_group(self, month: str, group_id: str, *, instance_id: Optional[str] = None) -> MonthGroupInstance:
        """Return the month's instance for a master group, creating it if missing."""
        sheet = self._sheets.get(month) or MonthSheet(month=month)
        existing = sheet.instance_for_group(group_id)
        if existing:
            return existing

        inst = MonthGroupInstance(instance_id=instance_id or str(uuid.uuid4()), group_id=group_id)
        self._sheets[month] = replace(sheet, groups=sheet.groups + (inst,))
        return inst

    def set_mark(self, month: str, instance_id: str, date: str, worker_id: str, status: AttendanceStatus) -> bool:
        """Replace-or-insert one worker's mark. Returns False (no-op) on a bad key."""
        status = AttendanceStatus.parse(status)

        def apply(entry: Optional[DayEntry]) -> DayEntry:
            attendance = dict(entry.attendance) if entry else {}
            if status == AttendanceStatus.UNMARKED:
                attendance.pop(worker_id, None)
            else:
                attendance[worker_id] = status
            if entry:
                return replace(entry, attendance=attendance)
            return DayEntry(date=date, attendance=attendance)

        return self._update_day(month, instance_id, date, apply)

    def set_day_tags(
        self,
        month: str,
        instance_id: str,
        date: str,
        *,
        activity_code: Optional[str] = None,
        area_code: Optional[str] = None,
    ) -> bool:
        activity_code = activity_code or None
        area_code = area_code or None

        def apply(entry: Optional[DayEntry]) -> DayEntry:
            if entry:
                return replace(entry, activity_code=activity_code, area_code=area_code)
            return DayEntry(date=date, activity_code=activity_code, area_code=area_code)

        return self._update_day(month, instance_id, date, apply)

    def cycle(
        self,
        month: str,
        instance_id: str,
        date: str,
        worker_id: str,
        *,
        factory: Optional[AttendanceStrategyFactory] = None,
    ) -> Optional[AttendanceStatus]:
        """Advance one worker's mark in one group; returns the new mark or None on a no-op."""
        if not self._writable(month, instance_id, date):
            return None

        current = self.status(month, instance_id, date, worker_id)
        other = self.other_groups_total(month, instance_id, date, worker_id)
        decision = (factory or AttendanceStrategyFactory()).for_status(current).decide(other_groups_total=other)
        if decision.note:
            logger.debug("[attendance] %s on %s: %s -> %s (%s)", worker_id, date, current.value, decision.status.value, decision.note)
        self.set_mark(month, instance_id, date, worker_id, decision.status)
        return decision.status

    def _writable(self, month: str, instance_id: str, date: str) -> bool:
        if month_of(date) != month:
            logger.warning("[attendance] ignoring write for date %r outside month %r", date, month)
            return False
        if not self.instance(month, instance_id):
            logger.warning("[attendance] ignoring write for unknown instance %r in %s", instance_id, month)
            return False
        return True

    def _update_day(self, month, instance_id, date, apply) -> bool:
        if not self._writable(month, instance_id, date):
            return False

        sheet = self._sheets[month]
        groups = []
        for inst in sheet.groups:
            if inst.instance_id == instance_id:
                days = list(inst.days)
                for i, entry in enumerate(days):
                    if entry.date == date:
                        days[i] = apply(entry)
                        break
                else:
                    days.append(apply(None))
                inst = replace(inst, days=tuple(days))
            groups.append(inst)

        self._sheets[month] = replace(sheet, groups=tuple(groups))
        return True
