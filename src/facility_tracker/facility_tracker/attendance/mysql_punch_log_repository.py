from __future__ import annotations

import uuid
from typing import Any, Dict, Sequence

from ..core.enums import PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewPunch, PunchLog
from .repository import PunchLogRepository


def _row_to_punch(r: Dict[str, Any]) -> PunchLog:
    return PunchLog(
        punch_id=str(r["id"]),
        staff_id=int(r["staff_id"]),
        punch_type=PunchType(r["type"]),
        timestamp=int(r["timestamp"]),
    )


class MySQLPunchLogRepository(PunchLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent(self) -> Sequence[PunchLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, staff_id, type, timestamp FROM punch_logs ORDER BY timestamp DESC")
            return [_row_to_punch(r) for r in fetchall(cur)]

    def insert(self, punch: NewPunch) -> PunchLog:
        punch_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO punch_logs(id, staff_id, type, timestamp) VALUES(%s,%s,%s,%s)",
                (punch_id, int(punch.staff_id), punch.punch_type.value, int(punch.timestamp)),
            )
            cur.execute("SELECT id, staff_id, type, timestamp FROM punch_logs WHERE id=%s", (punch_id,))
            return _row_to_punch(fetchone(cur))
