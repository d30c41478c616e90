from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PaymentFor
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, month_clauses, normalize_mysql_date, where_sql
from .model import Payment
from .repository import PaymentRepository


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_payments(
        self,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
        group_id: Optional[str] = None,
        include_deleted: bool = False,
    ) -> Sequence[Payment]:
        clauses, params = month_clauses("month", start=start, end=end)
        if group_id is not None:
            clauses.append("group_id=%s")
            params.append(group_id)
        if not include_deleted:
            clauses.append("deleted=0")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT payment_id, payment_date, month, amount, payment_for, group_id,
                       expense_id, description, created_at, modified_at, deleted
                FROM payments
                {where_sql(clauses)}
                ORDER BY payment_date ASC
                """,
                tuple(params),
            )
            return [
                Payment(
                    payment_id=r["payment_id"],
                    date=normalize_mysql_date(r["payment_date"]),
                    month=r["month"],
                    amount=float(r["amount"]),
                    group_id=str(r["group_id"]),
                    payment_for=PaymentFor(r.get("payment_for") or PaymentFor.LABOUR.value),
                    expense_id=r.get("expense_id"),
                    description=r.get("description"),
                    created_at=r.get("created_at"),
                    modified_at=r.get("modified_at"),
                    deleted=bool(r.get("deleted")),
                )
                for r in fetchall(cur)
            ]
