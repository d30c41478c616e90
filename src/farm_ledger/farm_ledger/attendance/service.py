from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import month_of
from ..common.validators import require_attendance_status, require_day_key, require_month_key
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..groups.repository import GroupRepository
from ..workers.repository import WorkerRepository
from .factory import AttendanceStrategyFactory
from .matrix import AttendanceMatrix
from .model import MarkResult, MonthGroupInstance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: mark attendance on a group's monthly sheet."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        groups: GroupRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._workers = workers
        self._groups = groups
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _load_matrix(self, month: str) -> AttendanceMatrix:
        return AttendanceMatrix(self._attendance.list_month_sheets(start=month, end=month))

    def _check_target(self, matrix: AttendanceMatrix, month: str, instance_id: str, date: str) -> None:
        require_month_key(month)
        require_day_key(date)
        if month_of(date) != month:
            raise ValidationError(f"Date {date} is not in month {month}")
        if not matrix.instance(month, instance_id):
            raise ValidationError("Group is not active for this month")

    def _check_worker(self, worker_id: str) -> None:
        worker = self._workers.get_by_id(worker_id)
        if not worker or worker.deleted:
            raise ValidationError("Worker does not exist")

    def activate_group(self, month: str, group_id: str) -> MonthGroupInstance:
        require_month_key(month)
        group = self._groups.get_by_id(group_id)
        if not group or group.deleted:
            raise ValidationError("Group does not exist")

        matrix = self._load_matrix(month)
        existing = matrix.sheet(month).instance_for_group(group_id) if matrix.sheet(month) else None
        if existing:
            return existing

        inst = matrix.activate_group(month, group_id)
        self._attendance.create_instance(month=month, group_id=group_id, instance_id=inst.instance_id)
        logger.info("[attendance] activated group %s for %s as %s", group_id, month, inst.instance_id)
        return inst

    def cycle_attendance(self, *, month: str, instance_id: str, date: str, worker_id: str) -> MarkResult:
        matrix = self._load_matrix(month)
        self._check_target(matrix, month, instance_id, date)
        self._check_worker(worker_id)

        status = matrix.cycle(month, instance_id, date, worker_id, factory=self._factory)
        self._attendance.save_mark(instance_id=instance_id, date=date, worker_id=worker_id, status=status)
        return self._result(matrix, month, date, worker_id, status)

    def set_attendance(
        self,
        *,
        month: str,
        instance_id: str,
        date: str,
        worker_id: str,
        status: AttendanceStatus,
    ) -> MarkResult:
        """Direct write (bulk entry / import). Not cap-checked; over-cap is only flagged."""
        matrix = self._load_matrix(month)
        self._check_target(matrix, month, instance_id, date)
        self._check_worker(worker_id)
        status = require_attendance_status(status)

        matrix.set_mark(month, instance_id, date, worker_id, status)
        self._attendance.save_mark(instance_id=instance_id, date=date, worker_id=worker_id, status=status)
        return self._result(matrix, month, date, worker_id, status)

    def set_day_tags(
        self,
        *,
        month: str,
        instance_id: str,
        date: str,
        activity_code: Optional[str] = None,
        area_code: Optional[str] = None,
    ) -> None:
        matrix = self._load_matrix(month)
        self._check_target(matrix, month, instance_id, date)

        matrix.set_day_tags(month, instance_id, date, activity_code=activity_code, area_code=area_code)
        entry = matrix.instance(month, instance_id).day(date)
        self._attendance.save_day_tags(
            instance_id=instance_id,
            date=date,
            activity_code=entry.activity_code,
            area_code=entry.area_code,
        )

    def exceeded_marks(self, month: str) -> list[dict]:
        """Every (date, worker) whose combined value is over the daily cap."""
        require_month_key(month)
        matrix = self._load_matrix(month)
        sheet = matrix.sheet(month)
        if not sheet:
            return []

        seen: set[tuple[str, str]] = set()
        for entry in sheet.all_days():
            for worker_id in entry.attendance:
                seen.add((entry.date, worker_id))

        out = []
        for date, worker_id in sorted(seen):
            if matrix.has_exceeded_limit(month, date, worker_id):
                out.append(
                    {
                        "date": date,
                        "worker_id": worker_id,
                        "day_total": matrix.worker_day_total(month, date, worker_id),
                    }
                )
        return out

    def _result(self, matrix: AttendanceMatrix, month: str, date: str, worker_id: str, status) -> MarkResult:
        day_total = matrix.worker_day_total(month, date, worker_id)
        exceeded = matrix.has_exceeded_limit(month, date, worker_id)
        if exceeded:
            logger.warning("[attendance] worker %s over daily cap on %s (total=%s)", worker_id, date, day_total)
        return MarkResult(status=status, day_total=day_total, exceeded=exceeded)
