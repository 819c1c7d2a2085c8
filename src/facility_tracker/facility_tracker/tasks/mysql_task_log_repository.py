from __future__ import annotations

import uuid
from typing import Any, Dict, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int, optional_str
from .model import NewTaskLog, TaskLog
from .repository import TaskLogRepository

_COLUMNS = "id, task_id, staff_id, timestamp, status, image_url, ai_feedback, ai_rating, block, floor, flat"


def _row_to_log(r: Dict[str, Any]) -> TaskLog:
    rating = r.get("ai_rating")
    return TaskLog(
        log_id=str(r["id"]),
        task_type=r["task_id"],
        staff_id=int(r["staff_id"]),
        timestamp=int(r["timestamp"]),
        status=TaskStatus(r["status"]),
        image_url=optional_str(r.get("image_url")),
        ai_feedback=optional_str(r.get("ai_feedback")),
        ai_rating=float(rating) if rating else None,
        block=optional_int(r.get("block")),
        floor=optional_int(r.get("floor")),
        flat=optional_str(r.get("flat")),
    )


class MySQLTaskLogRepository(TaskLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent(self) -> Sequence[TaskLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM task_logs ORDER BY timestamp DESC")
            return [_row_to_log(r) for r in fetchall(cur)]

    def insert(self, log: NewTaskLog) -> TaskLog:
        log_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_logs(
                    id, task_id, staff_id, timestamp, status,
                    image_url, ai_feedback, ai_rating, block, floor, flat
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    log_id,
                    log.task_type,
                    int(log.staff_id),
                    int(log.timestamp),
                    log.status.value,
                    log.image_url or None,
                    log.ai_feedback or None,
                    log.ai_rating or None,
                    log.block or None,
                    log.floor or None,
                    log.flat or None,
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM task_logs WHERE id=%s", (log_id,))
            return _row_to_log(fetchone(cur))
