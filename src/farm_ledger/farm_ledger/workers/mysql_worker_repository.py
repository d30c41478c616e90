from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = "worker_id, name, local_name, daily_rate, status, deleted"


def _to_worker(r: dict) -> Worker:
    return Worker(
        worker_id=str(r["worker_id"]),
        name=r["name"],
        local_name=r.get("local_name"),
        daily_rate=float(r["daily_rate"]),
        status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
        deleted=bool(r.get("deleted")),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, include_deleted: bool = False) -> Sequence[Worker]:
        where = "" if include_deleted else "WHERE deleted=0"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers {where} ORDER BY name ASC")
            return [_to_worker(r) for r in fetchall(cur)]

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (worker_id,))
            r = fetchone(cur)
            return _to_worker(r) if r else None
