from __future__ import annotations

import logging
from typing import Optional

from ..billing.client import PaymentStatusClient
from ..billing.model import ActiveFlatMap
from ..common.datetime_utils import now_ms
from ..store.event_store import EventStore
from ..topology.catalog import TaskCatalog
from ..topology.model import BuildingTopology
from . import aggregator
from .model import CompletionCount, DailyProgress, LogStats

logger = logging.getLogger(__name__)


class ProgressService:
    """Feeds the store snapshot and billing data into the aggregator."""

    def __init__(
        self,
        store: EventStore,
        billing: PaymentStatusClient,
        topology: BuildingTopology,
        catalog: TaskCatalog,
    ):
        self._store = store
        self._billing = billing
        self._topology = topology
        self._catalog = catalog
        self._active = ActiveFlatMap.unavailable()

    def active_flats(self) -> ActiveFlatMap:
        """Last snapshot from billing; never goes to the network."""
        return self._active

    def reload_active_flats(self) -> ActiveFlatMap:
        """Ask billing again. Called on startup and on store refresh."""
        fresh = self._billing.fetch_active_flats()
        if fresh.loaded:
            logger.info("Loaded %d flat payment flags", len(fresh.flags))
            self._active = fresh
        elif self._active.loaded:
            logger.warning("Billing unavailable, keeping previous flat payment snapshot")
        return self._active

    def _todays_logs(self, now: Optional[int]):
        return aggregator.todays_logs(self._store.task_logs, now if now is not None else now_ms())

    def daily(self, *, now: Optional[int] = None) -> DailyProgress:
        return aggregator.compute_daily_progress(
            self._topology,
            self._catalog,
            self.active_flats(),
            self._todays_logs(now),
        )

    def block(self, block_id: int, *, now: Optional[int] = None) -> CompletionCount:
        return aggregator.block_completion(self._topology, self._catalog, self._todays_logs(now), block_id)

    def floor(self, block_id: int, floor: int, *, now: Optional[int] = None) -> CompletionCount:
        return aggregator.floor_completion(self._topology, self._catalog, self._todays_logs(now), block_id, floor)

    def navigation(self, *, now: Optional[int] = None) -> dict:
        """Per-block rings plus common-area tiles for the staff task view."""
        logs = self._todays_logs(now)
        return {
            "blocks": [
                {
                    "block": b.block_id,
                    "label": b.label,
                    "progress": aggregator.block_completion(self._topology, self._catalog, logs, b.block_id),
                }
                for b in self._topology.blocks
            ],
            "common": [
                {
                    "task_type": t.task_type,
                    "label": t.label,
                    "area": t.area,
                    "done": aggregator.common_task_done(logs, t.task_type),
                }
                for t in self._catalog.common
            ],
            "completed_today": len(logs),
        }

    def log_stats(self, *, staff_id: Optional[int] = None, now: Optional[int] = None) -> LogStats:
        return aggregator.staff_log_stats(
            self._store.task_logs,
            self._catalog,
            now=now if now is not None else now_ms(),
            staff_id=staff_id,
        )
