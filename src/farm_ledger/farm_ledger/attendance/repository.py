from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import MonthSheet


class AttendanceRepository(Protocol):
    def get_month_sheet(self, month: str) -> Optional[MonthSheet]:
        raise NotImplementedError

    def list_month_sheets(self, *, start: Optional[str] = None, end: Optional[str] = None) -> Sequence[MonthSheet]:
        """Month sheets with start <= month <= end, ascending by month."""

        raise NotImplementedError

    def create_instance(self, *, month: str, group_id: str, instance_id: str) -> None:
        raise NotImplementedError

    def save_mark(
        self,
        *,
        instance_id: str,
        date: str,
        worker_id: str,
        status: AttendanceStatus,
    ) -> None:
        """Upsert one mark; UNMARKED removes the stored row."""

        raise NotImplementedError

    def save_day_tags(
        self,
        *,
        instance_id: str,
        date: str,
        activity_code: Optional[str] = None,
        area_code: Optional[str] = None,
    ) -> None:
        raise NotImplementedError
