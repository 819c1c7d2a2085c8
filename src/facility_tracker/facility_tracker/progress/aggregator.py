"""Daily progress aggregation over the building topology and today's logs.

Two views are computed here and they deliberately disagree:

* the dashboard aggregate (``compute_daily_progress``) only counts flats the
  billing collaborator reports as active, on both sides of the ratio;
* the navigation counters (``block_completion`` / ``floor_completion``)
  count every flat and treat any matching log as done.

All functions are pure; callers recompute them on every state change.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..billing.model import ActiveFlatMap
from ..common.datetime_utils import days_ago_ms, start_of_day_ms
from ..core.constants import DEFAULT_STATS_DAYS
from ..core.enums import TaskCategory, TaskScope, TaskStatus
from ..tasks.model import TaskLog
from ..topology.catalog import TaskCatalog
from ..topology.model import BuildingTopology
from .model import CategoryBreakdown, CompletionCount, DailyProgress, LogStats, round_percent


def todays_logs(logs: Iterable[TaskLog], now: int) -> list[TaskLog]:
    start = start_of_day_ms(now)
    return [log for log in logs if log.timestamp >= start]


def expected_total(topology: BuildingTopology, catalog: TaskCatalog, active: ActiveFlatMap) -> int:
    per_flat = len(catalog.per_flat)
    per_floor = len(catalog.per_floor)
    per_block = len(catalog.per_block)

    total = len(catalog.common)
    for block in topology.blocks:
        total += per_block
        for floor in topology.floors:
            active_flats = active.active_flats(block.block_id, floor, block.flats(floor))
            total += per_flat * len(active_flats)
            total += per_floor
    return total


def _counts_as_completed(log: TaskLog, active: ActiveFlatMap) -> bool:
    if log.status != TaskStatus.COMPLETED:
        return False
    if log.has_full_location and active.is_usable:
        return active.is_active_key(log.location_key)
    # Common-area logs, or billing data still loading: count leniently.
    return True


def completed_total(logs: Iterable[TaskLog], active: ActiveFlatMap) -> int:
    """Distinct completed slots; repeat logs of one slot count once."""
    return len({log.slot for log in logs if _counts_as_completed(log, active)})


def category_progress(
    topology: BuildingTopology,
    catalog: TaskCatalog,
    active: ActiveFlatMap,
    logs: Iterable[TaskLog],
    category: TaskCategory,
) -> CompletionCount:
    per_flat = catalog.count(TaskScope.PER_FLAT, category)
    per_floor = catalog.count(TaskScope.PER_FLOOR, category)

    total = catalog.count(TaskScope.COMMON, category)
    total += catalog.count(TaskScope.PER_BLOCK, category) * len(topology.blocks)
    for block, floor, flats in topology.iter_floors():
        total += per_flat * len(active.active_flats(block.block_id, floor, flats))
        total += per_floor

    done = set()
    for log in logs:
        definition = catalog.get(log.task_type)
        if log.status != TaskStatus.COMPLETED or definition is None or definition.category != category:
            continue
        if log.has_full_location:
            # No leniency here: a flat log only counts once billing confirms it.
            if active.is_active_key(log.location_key):
                done.add(log.slot)
        elif not definition.per_flat:
            done.add(log.slot)
    return CompletionCount(done=len(done), total=total)


def compute_daily_progress(
    topology: BuildingTopology,
    catalog: TaskCatalog,
    active: ActiveFlatMap,
    logs: Sequence[TaskLog],
) -> DailyProgress:
    """Dashboard progress for ``logs``, which must already be today's logs."""
    expected = expected_total(topology, catalog, active)
    completed = completed_total(logs, active)
    breakdown = CategoryBreakdown(
        garbage=category_progress(topology, catalog, active, logs, TaskCategory.GARBAGE),
        brooming=category_progress(topology, catalog, active, logs, TaskCategory.BROOMING),
    )
    return DailyProgress(
        total_expected=expected,
        total_completed=completed,
        percent=round_percent(completed, expected),
        breakdown=breakdown,
        payment_status_loaded=active.loaded,
    )


def is_task_done(
    logs: Iterable[TaskLog],
    *,
    block: int,
    floor: int,
    task_type: str,
    flat: Optional[str] = None,
) -> bool:
    for log in logs:
        if log.block != block or log.floor != floor or log.task_type != task_type:
            continue
        if (log.flat == flat) if flat else not log.flat:
            return True
    return False


def floor_completion(
    topology: BuildingTopology,
    catalog: TaskCatalog,
    logs: Sequence[TaskLog],
    block_id: int,
    floor: int,
) -> CompletionCount:
    block = topology.get_block(block_id)
    if block is None:
        return CompletionCount(done=0, total=0)

    flats = block.flats(floor)
    total = 0
    done = 0
    for task in catalog.per_flat:
        total += len(flats)
        done += sum(1 for f in flats if is_task_done(logs, block=block_id, floor=floor, task_type=task.task_type, flat=f))
    for task in catalog.per_floor:
        total += 1
        if is_task_done(logs, block=block_id, floor=floor, task_type=task.task_type):
            done += 1
    return CompletionCount(done=done, total=total)


def block_completion(
    topology: BuildingTopology,
    catalog: TaskCatalog,
    logs: Sequence[TaskLog],
    block_id: int,
) -> CompletionCount:
    if topology.get_block(block_id) is None:
        return CompletionCount(done=0, total=0)

    done = 0
    total = 0
    for floor in topology.floors:
        count = floor_completion(topology, catalog, logs, block_id, floor)
        done += count.done
        total += count.total
    return CompletionCount(done=done, total=total)


def common_task_done(logs: Iterable[TaskLog], task_type: str) -> bool:
    return any(log.task_type == task_type for log in logs)


def staff_log_stats(
    logs: Iterable[TaskLog],
    catalog: TaskCatalog,
    *,
    now: int,
    staff_id: Optional[int] = None,
    days: int = DEFAULT_STATS_DAYS,
) -> LogStats:
    """Counts for the logs view: today, last ``days`` days, and by category."""
    selected = [log for log in logs if staff_id is None or log.staff_id == staff_id]
    today_start = start_of_day_ms(now)
    week_start = days_ago_ms(now, days)

    by_category = {c: 0 for c in TaskCategory}
    for log in selected:
        by_category[catalog.category_of(log.task_type)] += 1

    garbage = by_category[TaskCategory.GARBAGE]
    brooming = by_category[TaskCategory.BROOMING]
    mopping = by_category[TaskCategory.MOPPING]
    return LogStats(
        today_count=sum(1 for log in selected if log.timestamp >= today_start),
        week_count=sum(1 for log in selected if log.timestamp >= week_start),
        garbage=garbage,
        brooming=brooming,
        mopping=mopping,
        other=len(selected) - garbage - brooming - mopping,
    )
