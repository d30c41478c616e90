from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    load_id_list,
    month_clauses,
    normalize_mysql_date,
    where_sql,
)
from .model import DayEntry, MonthGroupInstance, MonthSheet
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_month_sheet(self, month: str) -> Optional[MonthSheet]:
        sheets = self.list_month_sheets(start=month, end=month)
        return sheets[0] if sheets else None

    def list_month_sheets(self, *, start: Optional[str] = None, end: Optional[str] = None) -> Sequence[MonthSheet]:
        clauses, params = month_clauses("g.month", start=start, end=end)
        sheet_clauses, sheet_params = month_clauses("month", start=start, end=end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT month, worker_ids FROM month_sheets {where_sql(sheet_clauses)}",
                tuple(sheet_params),
            )
            rosters = {r["month"]: load_id_list(r.get("worker_ids")) for r in fetchall(cur)}

            cur.execute(
                f"""
                SELECT g.instance_id, g.month, g.group_id, g.worker_ids
                FROM month_group_instances g
                {where_sql(clauses)}
                ORDER BY g.month ASC, g.instance_id ASC
                """,
                tuple(params),
            )
            instances = fetchall(cur)

            cur.execute(
                f"""
                SELECT d.instance_id, d.work_date, d.activity_code, d.area_code
                FROM day_entries d
                JOIN month_group_instances g ON g.instance_id = d.instance_id
                {where_sql(clauses)}
                ORDER BY d.work_date ASC
                """,
                tuple(params),
            )
            day_rows = fetchall(cur)

            cur.execute(
                f"""
                SELECT m.instance_id, m.work_date, m.worker_id, m.status
                FROM attendance_marks m
                JOIN month_group_instances g ON g.instance_id = m.instance_id
                {where_sql(clauses)}
                """,
                tuple(params),
            )
            mark_rows = fetchall(cur)

        marks: dict[tuple[str, str], dict[str, AttendanceStatus]] = defaultdict(dict)
        for r in mark_rows:
            status = AttendanceStatus.parse(r["status"])
            if status != AttendanceStatus.UNMARKED:
                marks[(r["instance_id"], normalize_mysql_date(r["work_date"]))][str(r["worker_id"])] = status

        days: dict[str, list[DayEntry]] = defaultdict(list)
        for r in day_rows:
            date = normalize_mysql_date(r["work_date"])
            days[r["instance_id"]].append(
                DayEntry(
                    date=date,
                    attendance=marks.get((r["instance_id"], date), {}),
                    activity_code=r.get("activity_code") or None,
                    area_code=r.get("area_code") or None,
                )
            )

        by_month: dict[str, list[MonthGroupInstance]] = defaultdict(list)
        for r in instances:
            by_month[r["month"]].append(
                MonthGroupInstance(
                    instance_id=r["instance_id"],
                    group_id=str(r["group_id"]),
                    days=tuple(days.get(r["instance_id"], [])),
                    worker_ids=load_id_list(r.get("worker_ids")),
                )
            )

        months = sorted(set(rosters) | set(by_month))
        return [
            MonthSheet(month=m, groups=tuple(by_month.get(m, [])), worker_ids=rosters.get(m))
            for m in months
        ]

    def create_instance(self, *, month: str, group_id: str, instance_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT IGNORE INTO month_sheets(month) VALUES(%s)", (month,))
            cur.execute(
                """
                INSERT IGNORE INTO month_group_instances(instance_id, month, group_id)
                VALUES(%s,%s,%s)
                """,
                (instance_id, month, group_id),
            )

    def save_mark(self, *, instance_id: str, date: str, worker_id: str, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            # day entries are created on first write and never deleted
            cur.execute("INSERT IGNORE INTO day_entries(instance_id, work_date) VALUES(%s,%s)", (instance_id, date))
            if status == AttendanceStatus.UNMARKED:
                cur.execute(
                    "DELETE FROM attendance_marks WHERE instance_id=%s AND work_date=%s AND worker_id=%s",
                    (instance_id, date, worker_id),
                )
                return
            cur.execute(
                """
                INSERT INTO attendance_marks(instance_id, work_date, worker_id, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (instance_id, date, worker_id, status.value),
            )

    def save_day_tags(
        self,
        *,
        instance_id: str,
        date: str,
        activity_code: Optional[str] = None,
        area_code: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO day_entries(instance_id, work_date, activity_code, area_code)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE activity_code=VALUES(activity_code), area_code=VALUES(area_code)
                """,
                (instance_id, date, activity_code, area_code),
            )
