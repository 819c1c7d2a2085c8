from __future__ import annotations

from typing import Any, Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewStaffMember, StaffMember
from .repository import StaffRepository


def _row_to_staff(r: Dict[str, Any]) -> StaffMember:
    return StaffMember(
        staff_id=int(r["id"]),
        name=r["name"],
        role=r["role"],
        avatar=r.get("avatar") or "",
        block_assignment=r.get("block_assignment") or "",
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, role, avatar, block_assignment FROM staff_members ORDER BY id")
            return [_row_to_staff(r) for r in fetchall(cur)]

    def insert(self, staff: NewStaffMember) -> StaffMember:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO staff_members(name, role, avatar, block_assignment) VALUES(%s,%s,%s,%s)",
                (staff.name, staff.role, staff.avatar, staff.block_assignment),
            )
            new_id = int(cur.lastrowid)
            cur.execute("SELECT id, name, role, avatar, block_assignment FROM staff_members WHERE id=%s", (new_id,))
            return _row_to_staff(fetchone(cur))
