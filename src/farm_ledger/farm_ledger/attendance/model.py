from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DayEntry:
    """One date of one group instance: optional tags plus the attendance map.

    Unmarked workers are simply absent from ``attendance``.
    """

    date: str
    attendance: Mapping[str, AttendanceStatus] = field(default_factory=dict)
    activity_code: Optional[str] = None
    area_code: Optional[str] = None

    def status_of(self, worker_id: str) -> AttendanceStatus:
        return AttendanceStatus.parse(self.attendance.get(worker_id))

    def marked(self):
        """(worker_id, status) pairs carrying a non-zero attendance value."""
        for worker_id, raw in self.attendance.items():
            status = AttendanceStatus.parse(raw)
            if status.value_in_days > 0:
                yield worker_id, status


@dataclass(frozen=True)
class MonthGroupInstance:
    """A master group activated within one month, owning its day entries."""

    instance_id: str
    group_id: str
    days: tuple[DayEntry, ...] = ()
    worker_ids: Optional[tuple[str, ...]] = None

    def day(self, date: str) -> Optional[DayEntry]:
        for entry in self.days:
            if entry.date == date:
                return entry
        return None


@dataclass(frozen=True)
class MonthSheet:
    """All group instances of one calendar month (``YYYY-MM``)."""

    month: str
    groups: tuple[MonthGroupInstance, ...] = ()
    worker_ids: Optional[tuple[str, ...]] = None

    def instance(self, instance_id: str) -> Optional[MonthGroupInstance]:
        for inst in self.groups:
            if inst.instance_id == instance_id:
                return inst
        return None

    def instance_for_group(self, group_id: str) -> Optional[MonthGroupInstance]:
        for inst in self.groups:
            if inst.group_id == group_id:
                return inst
        return None

    def all_days(self):
        for inst in self.groups:
            yield from inst.days


@dataclass(frozen=True)
class MarkResult:
    """Outcome of one attendance cycle, returned to the UI layer."""

    status: AttendanceStatus
    day_total: float
    exceeded: bool
