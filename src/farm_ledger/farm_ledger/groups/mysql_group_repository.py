from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Group
from .repository import GroupRepository

_COLUMNS = "group_id, name, local_name, sort_order, status, deleted"


def _to_group(r: dict) -> Group:
    return Group(
        group_id=str(r["group_id"]),
        name=r["name"],
        local_name=r.get("local_name"),
        order=int(r.get("sort_order") or 0),
        status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
        deleted=bool(r.get("deleted")),
    )


class MySQLGroupRepository(GroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, include_deleted: bool = False) -> Sequence[Group]:
        where = "" if include_deleted else "WHERE deleted=0"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_groups {where} ORDER BY sort_order ASC, name ASC")
            return [_to_group(r) for r in fetchall(cur)]

    def get_by_id(self, group_id: str) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_groups WHERE group_id=%s", (group_id,))
            r = fetchone(cur)
            return _to_group(r) if r else None
