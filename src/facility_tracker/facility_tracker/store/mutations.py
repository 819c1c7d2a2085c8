"""Optimistic writes against the backend.

Creations fall back to a locally-synthesized record when the remote insert
fails, so the caller always sees its action reflected. Supply decisions are
applied locally whatever the remote outcome.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, TypeVar

from ..attendance.model import NewPunch, PunchLog
from ..common.ids import new_local_id
from ..core.enums import SupplyStatus
from ..core.exceptions import RemoteError, ValidationError
from ..supplies.model import NewSupplyRequest, SupplyRequest
from ..tasks.model import NewTaskLog, TaskLog
from .event_store import EventStore

logger = logging.getLogger(__name__)

N = TypeVar("N")
R = TypeVar("R")


class MutationHandler:
    def __init__(self, store: EventStore):
        self._store = store

    @staticmethod
    def _create(
        new: N,
        *,
        kind: str,
        remote_insert: Callable[[N], R],
        build_local: Callable[[str, N], R],
        prepend: Callable[[R], None],
        existing_ids: Collection[str],
    ) -> R:
        try:
            record = remote_insert(new)
        except RemoteError as e:
            local_id = new_local_id(existing_ids)
            logger.warning("Remote insert of %s failed, keeping local record %s: %s", kind, local_id, e)
            record = build_local(local_id, new)
        prepend(record)
        return record

    def log_task(self, new: NewTaskLog) -> TaskLog:
        return self._create(
            new,
            kind="task log",
            remote_insert=self._store.task_log_repo.insert,
            build_local=lambda local_id, n: TaskLog.from_new(local_id, n, is_local=True),
            prepend=self._store.prepend_task_log,
            existing_ids=self._store.task_log_ids(),
        )

    def punch(self, new: NewPunch) -> PunchLog:
        return self._create(
            new,
            kind="punch",
            remote_insert=self._store.punch_log_repo.insert,
            build_local=lambda local_id, n: PunchLog.from_new(local_id, n, is_local=True),
            prepend=self._store.prepend_punch,
            existing_ids=self._store.punch_ids(),
        )

    def request_supply(self, new: NewSupplyRequest) -> SupplyRequest:
        return self._create(
            new,
            kind="supply request",
            remote_insert=self._store.supply_repo.insert,
            build_local=lambda local_id, n: SupplyRequest.from_new(local_id, n, is_local=True),
            prepend=self._store.prepend_supply_request,
            existing_ids=self._store.supply_request_ids(),
        )

    def _decide_supply(self, request_id: str, status: SupplyStatus) -> SupplyRequest:
        if self._store.get_supply_request(request_id) is None:
            raise ValidationError("Supply request not found")

        try:
            self._store.supply_repo.update_status(request_id, status)
            self._store.clear_status_pending(request_id)
        except RemoteError as e:
            logger.warning("Remote status update of %s to %s failed, applying locally: %s", request_id, status.value, e)
            self._store.mark_status_pending(request_id, status)

        self._store.set_supply_status(request_id, status)
        return self._store.get_supply_request(request_id)

    def approve_supply(self, request_id: str) -> SupplyRequest:
        return self._decide_supply(request_id, SupplyStatus.FULFILLED)

    def reject_supply(self, request_id: str) -> SupplyRequest:
        return self._decide_supply(request_id, SupplyStatus.REJECTED)
