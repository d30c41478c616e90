from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def month_clauses(column: str, *, start: Optional[str], end: Optional[str]) -> tuple[list[str], list[object]]:
    """WHERE fragments for an inclusive YYYY-MM range on a CHAR(7) column."""
    clauses: list[str] = []
    params: list[object] = []
    if start:
        clauses.append(f"{column} >= %s")
        params.append(start)
    if end:
        clauses.append(f"{column} <= %s")
        params.append(end)
    return clauses, params


def where_sql(clauses: Sequence[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""


def normalize_mysql_date(value: Any) -> Optional[str]:
    """Normalize MySQL DATE values to a YYYY-MM-DD key.

    mysql-connector can return DATE as datetime.date, datetime.datetime or string.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip()[:10]
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")


def load_id_list(value: Any) -> Optional[tuple[str, ...]]:
    """Decode a JSON array column of ids; NULL or empty means 'no override'."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    items = json.loads(value) if isinstance(value, str) else value
    if not items:
        return None
    return tuple(str(i) for i in items)


def as_optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)
