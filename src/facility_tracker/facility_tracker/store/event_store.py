"""In-memory working set of the four backend collections.

The store is owned by the application container and is the only place the
collections are mutated. Records synthesized after a failed remote write are
tagged ``is_local`` and survive ``refresh()`` until ``reconcile()`` manages to
push them to the backend.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from ..attendance.model import PunchLog
from ..attendance.repository import PunchLogRepository
from ..core.enums import SupplyStatus
from ..core.exceptions import RemoteError
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository
from ..supplies.model import SupplyRequest
from ..supplies.repository import SupplyRequestRepository
from ..tasks.model import TaskLog
from ..tasks.repository import TaskLogRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReconcileReport:
    synced: int
    still_pending: int


def _fetch(name: str, loader: Callable[[], Sequence[T]]) -> list[T]:
    try:
        return list(loader())
    except RemoteError as e:
        logger.warning("Fetching %s failed, continuing without data: %s", name, e)
        return []


class EventStore:
    def __init__(
        self,
        *,
        staff: StaffRepository,
        task_logs: TaskLogRepository,
        punch_logs: PunchLogRepository,
        supply_requests: SupplyRequestRepository,
    ):
        self.staff_repo = staff
        self.task_log_repo = task_logs
        self.punch_log_repo = punch_logs
        self.supply_repo = supply_requests

        self._staff: list[StaffMember] = []
        self._task_logs: list[TaskLog] = []
        self._punch_logs: list[PunchLog] = []
        self._supply_requests: list[SupplyRequest] = []
        # Status writes the backend has not acknowledged yet.
        self._pending_status: dict[str, SupplyStatus] = {}
        # _lock guards the collections and is never held across a remote call;
        # _sync_lock serializes refresh and reconcile.
        self._lock = threading.RLock()
        self._sync_lock = threading.Lock()

    # -------- Accessors --------
    @property
    def staff(self) -> tuple[StaffMember, ...]:
        with self._lock:
            return tuple(self._staff)

    @property
    def task_logs(self) -> tuple[TaskLog, ...]:
        with self._lock:
            return tuple(self._task_logs)

    @property
    def punch_logs(self) -> tuple[PunchLog, ...]:
        with self._lock:
            return tuple(self._punch_logs)

    @property
    def supply_requests(self) -> tuple[SupplyRequest, ...]:
        with self._lock:
            return tuple(self._supply_requests)

    @property
    def pending_status_count(self) -> int:
        with self._lock:
            return len(self._pending_status)

    def get_staff(self, staff_id: int) -> Optional[StaffMember]:
        return next((m for m in self.staff if m.staff_id == staff_id), None)

    def get_supply_request(self, request_id: str) -> Optional[SupplyRequest]:
        return next((r for r in self.supply_requests if r.request_id == request_id), None)

    def punches_for(self, staff_id: int, *, since: int) -> list[PunchLog]:
        return [p for p in self.punch_logs if p.staff_id == staff_id and p.timestamp >= since]

    def local_record_count(self) -> int:
        with self._lock:
            return sum(
                1
                for rec in (*self._task_logs, *self._punch_logs, *self._supply_requests)
                if rec.is_local
            )

    def task_log_ids(self) -> set[str]:
        return {log.log_id for log in self.task_logs}

    def punch_ids(self) -> set[str]:
        return {p.punch_id for p in self.punch_logs}

    def supply_request_ids(self) -> set[str]:
        return {r.request_id for r in self.supply_requests}

    # -------- Mutations (called by MutationHandler) --------
    def prepend_task_log(self, log: TaskLog) -> None:
        with self._lock:
            self._task_logs.insert(0, log)

    def prepend_punch(self, punch: PunchLog) -> None:
        with self._lock:
            self._punch_logs.insert(0, punch)

    def prepend_supply_request(self, request: SupplyRequest) -> None:
        with self._lock:
            self._supply_requests.insert(0, request)

    def add_staff(self, member: StaffMember) -> None:
        with self._lock:
            self._staff.append(member)
            self._staff.sort(key=lambda s: s.staff_id)

    def set_supply_status(self, request_id: str, status: SupplyStatus) -> bool:
        with self._lock:
            for i, req in enumerate(self._supply_requests):
                if req.request_id == request_id:
                    self._supply_requests[i] = req.with_status(status)
                    return True
            return False

    def mark_status_pending(self, request_id: str, status: SupplyStatus) -> None:
        with self._lock:
            self._pending_status[request_id] = status

    def clear_status_pending(self, request_id: str) -> None:
        with self._lock:
            self._pending_status.pop(request_id, None)

    # -------- Refresh / reconcile --------
    def refresh(self) -> None:
        """Reload every collection from the backend.

        A failed fetch yields an empty collection. Unsynced local records are
        kept at the front and unacknowledged status changes are re-applied.
        """
        with self._sync_lock:
            staff = _fetch("staff", self.staff_repo.list_all)
            task_logs = _fetch("task logs", self.task_log_repo.list_recent)
            punch_logs = _fetch("punch logs", self.punch_log_repo.list_recent)
            supply_requests = _fetch("supply requests", self.supply_repo.list_recent)

            with self._lock:
                local_tasks = [log for log in self._task_logs if log.is_local]
                local_punches = [p for p in self._punch_logs if p.is_local]
                local_supplies = [r for r in self._supply_requests if r.is_local]

                self._staff = staff
                self._task_logs = local_tasks + task_logs
                self._punch_logs = local_punches + punch_logs
                self._supply_requests = local_supplies + supply_requests

                for request_id, status in self._pending_status.items():
                    self.set_supply_status(request_id, status)

        logger.info(
            "Store refreshed: staff=%d tasks=%d punches=%d supplies=%d (local=%d)",
            len(staff),
            len(local_tasks) + len(task_logs),
            len(local_punches) + len(punch_logs),
            len(local_supplies) + len(supply_requests),
            len(local_tasks) + len(local_punches) + len(local_supplies),
        )

    def _push_locals(
        self,
        kind: str,
        collection: str,
        record_id: Callable[[T], str],
        insert: Callable[[object], T],
        on_synced: Optional[Callable[[T, T], None]] = None,
    ) -> int:
        """Insert every local record of ``collection`` and swap it for the saved one.

        The swap finds the local record again by id, since other requests may
        have changed the collection while the insert was in flight.
        """
        with self._lock:
            pending = [rec for rec in getattr(self, collection) if rec.is_local]

        synced = 0
        for local in pending:
            try:
                saved = insert(local.to_new())
            except RemoteError as e:
                logger.warning("%s %s still unsynced: %s", kind, record_id(local), e)
                continue

            with self._lock:
                records = getattr(self, collection)
                for i, current in enumerate(records):
                    if current.is_local and record_id(current) == record_id(local):
                        records[i] = saved
                        break
                else:
                    records.insert(0, saved)
                if on_synced is not None:
                    on_synced(local, saved)
            synced += 1
        return synced

    def _carry_pending_status(self, local: SupplyRequest, saved: SupplyRequest) -> None:
        # A decision taken while the request was still local travels to its new id.
        status = self._pending_status.pop(local.request_id, None)
        if status is not None and status != saved.status:
            self._pending_status[saved.request_id] = status
            self.set_supply_status(saved.request_id, status)

    def reconcile(self) -> ReconcileReport:
        """Retry every write the backend has not acknowledged."""
        with self._sync_lock:
            synced = self._push_locals("Task log", "_task_logs", lambda r: r.log_id, self.task_log_repo.insert)
            synced += self._push_locals("Punch", "_punch_logs", lambda r: r.punch_id, self.punch_log_repo.insert)
            # The insert carries the current status, so any local decision goes with it.
            synced += self._push_locals(
                "Supply request",
                "_supply_requests",
                lambda r: r.request_id,
                self.supply_repo.insert,
                on_synced=self._carry_pending_status,
            )

            with self._lock:
                statuses = list(self._pending_status.items())
            for request_id, status in statuses:
                try:
                    self.supply_repo.update_status(request_id, status)
                except RemoteError as e:
                    logger.warning("Status %s for %s still unsynced: %s", status.value, request_id, e)
                    continue
                with self._lock:
                    if self._pending_status.get(request_id) == status:
                        del self._pending_status[request_id]
                synced += 1

        report = ReconcileReport(synced=synced, still_pending=self.local_record_count() + self.pending_status_count)
        logger.info("Reconcile finished: synced=%d pending=%d", report.synced, report.still_pending)
        return report
