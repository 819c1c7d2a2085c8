from __future__ import annotations

import uuid
from typing import Any, Dict, Sequence

from ..core.enums import SupplyStatus, Urgency
from ..core.exceptions import RemoteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewSupplyRequest, SupplyRequest
from .repository import SupplyRequestRepository

_COLUMNS = "id, item, quantity, urgency, status, requester_id, timestamp"


def _row_to_request(r: Dict[str, Any]) -> SupplyRequest:
    return SupplyRequest(
        request_id=str(r["id"]),
        item=r["item"],
        quantity=r["quantity"],
        urgency=Urgency(r["urgency"]),
        status=SupplyStatus(r["status"]),
        requester_id=int(r["requester_id"]),
        timestamp=int(r["timestamp"]),
    )


class MySQLSupplyRequestRepository(SupplyRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent(self) -> Sequence[SupplyRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM supply_requests ORDER BY timestamp DESC")
            return [_row_to_request(r) for r in fetchall(cur)]

    def insert(self, request: NewSupplyRequest) -> SupplyRequest:
        request_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO supply_requests(id, item, quantity, urgency, status, requester_id, timestamp)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_id,
                    request.item,
                    request.quantity,
                    request.urgency.value,
                    request.status.value,
                    int(request.requester_id),
                    int(request.timestamp),
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM supply_requests WHERE id=%s", (request_id,))
            return _row_to_request(fetchone(cur))

    def update_status(self, request_id: str, status: SupplyStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE supply_requests SET status=%s WHERE id=%s", (status.value, str(request_id)))
            if cur.rowcount > 0:
                return
            # rowcount is also 0 when the status was already set.
            cur.execute("SELECT id FROM supply_requests WHERE id=%s", (str(request_id),))
            if not fetchone(cur):
                raise RemoteError(f"Supply request {request_id} not found")
