from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    as_optional_float,
    db_cursor,
    fetchall,
    month_clauses,
    normalize_mysql_date,
    where_sql,
)
from .model import Allocation, Expense
from .repository import ExpenseRepository

_COLUMNS = """
    e.expense_id, e.expense_date, e.month, e.category_id, e.description, e.amount,
    e.group_id, e.is_shared, e.notes, e.created_at, e.modified_at, e.deleted
"""


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, clauses: list[str], params: list[object]) -> list[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM expenses e {where_sql(clauses)} ORDER BY e.expense_date ASC",
                tuple(params),
            )
            rows = fetchall(cur)

            cur.execute(
                f"""
                SELECT a.expense_id, a.group_id, a.percentage, a.fixed_amount
                FROM expense_allocations a
                JOIN expenses e ON e.expense_id = a.expense_id
                {where_sql(clauses)}
                ORDER BY a.group_id ASC
                """,
                tuple(params),
            )
            allocation_rows = fetchall(cur)

        allocations: dict[str, list[Allocation]] = defaultdict(list)
        for r in allocation_rows:
            allocations[r["expense_id"]].append(
                Allocation(
                    group_id=str(r["group_id"]),
                    percentage=as_optional_float(r.get("percentage")),
                    fixed_amount=as_optional_float(r.get("fixed_amount")),
                )
            )

        return [
            Expense(
                expense_id=r["expense_id"],
                date=normalize_mysql_date(r["expense_date"]),
                month=r["month"],
                amount=float(r["amount"]),
                description=r.get("description") or "",
                category_id=r.get("category_id"),
                group_id=r.get("group_id"),
                is_shared=bool(r.get("is_shared")),
                allocations=tuple(allocations.get(r["expense_id"], [])),
                notes=r.get("notes"),
                created_at=r.get("created_at"),
                modified_at=r.get("modified_at"),
                deleted=bool(r.get("deleted")),
            )
            for r in rows
        ]

    def list_expenses(
        self,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
        include_deleted: bool = False,
    ) -> Sequence[Expense]:
        clauses, params = month_clauses("e.month", start=start, end=end)
        if not include_deleted:
            clauses.append("e.deleted=0")
        return self._query(clauses, params)

    def get_by_id(self, expense_id: str) -> Optional[Expense]:
        found = self._query(["e.expense_id=%s"], [expense_id])
        return found[0] if found else None
