from __future__ import annotations

from typing import Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Activity, Area, ExpenseCategory
from .repository import CatalogRepository


class MySQLCatalogRepository(CatalogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_activities(self) -> Sequence[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code, name, local_code, local_name, category
                FROM activities
                WHERE deleted=0
                ORDER BY sort_order ASC, code ASC
                """
            )
            return [
                Activity(
                    code=r["code"],
                    name=r["name"],
                    local_code=r.get("local_code"),
                    local_name=r.get("local_name"),
                    category=r.get("category"),
                )
                for r in fetchall(cur)
            ]

    def list_areas(self) -> Sequence[Area]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code, name, local_code, local_name, group_id
                FROM areas
                WHERE deleted=0
                ORDER BY sort_order ASC, code ASC
                """
            )
            return [
                Area(
                    code=r["code"],
                    name=r["name"],
                    local_code=r.get("local_code"),
                    local_name=r.get("local_name"),
                    group_id=r.get("group_id"),
                )
                for r in fetchall(cur)
            ]

    def list_expense_categories(self) -> Sequence[ExpenseCategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT category_id, code, name, local_name, status
                FROM expense_categories
                WHERE deleted=0
                ORDER BY name ASC
                """
            )
            return [
                ExpenseCategory(
                    category_id=str(r["category_id"]),
                    code=r["code"],
                    name=r["name"],
                    local_name=r.get("local_name"),
                    status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
                )
                for r in fetchall(cur)
            ]
