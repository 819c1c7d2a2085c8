from __future__ import annotations

from src.facility_tracker.facility_tracker.billing.model import ActiveFlatMap
from src.facility_tracker.facility_tracker.core.enums import TaskCategory, TaskScope, TaskStatus
from src.facility_tracker.facility_tracker.progress.aggregator import (
    compute_daily_progress,
    expected_total,
    todays_logs,
)
from src.facility_tracker.facility_tracker.tasks.model import TaskLog
from src.facility_tracker.facility_tracker.topology.building import (
    BROOMING,
    DEFAULT_CATALOG,
    DEFAULT_TOPOLOGY,
    DRIVEWAY,
    ROUTINE_HOUSEKEEPING,
)
from src.facility_tracker.facility_tracker.topology.catalog import TaskCatalog, TaskDefinition
from src.facility_tracker.facility_tracker.topology.model import Block, BuildingTopology, flat_key
from tests.fakes import ms

NOW = ms(2026, 3, 2, 15, 0)
TODAY = ms(2026, 3, 2, 9, 0)

GARBAGE_ONLY = TaskCatalog(
    definitions=(TaskDefinition("Garbage", "Garbage", "trash", TaskScope.PER_FLAT, TaskCategory.GARBAGE),)
)
ONE_FLOOR = BuildingTopology(blocks=(Block(1, "Block 1", lambda floor: ["A", "B"]),), floors=(1,))


def _log(i, task_type, *, block=None, floor=None, flat=None, status=TaskStatus.COMPLETED, ts=TODAY):
    return TaskLog(
        log_id=f"l{i}",
        task_type=task_type,
        staff_id=1,
        timestamp=ts,
        status=status,
        block=block,
        floor=floor,
        flat=flat,
    )


def _every_other_flat_active(topology):
    flags = {}
    for block, floor, flats in topology.iter_floors():
        for i, flat in enumerate(flats):
            flags[flat_key(block.block_id, flat, floor)] = i % 2 == 0
    return ActiveFlatMap(flags=flags)


def _brute_force_expected(topology, catalog, active):
    combos = set()
    for task in catalog.common:
        combos.add((None, None, None, task.task_type))
    for block in topology.blocks:
        for task in catalog.per_block:
            combos.add((block.block_id, None, None, task.task_type))
        for floor in topology.floors:
            for task in catalog.per_floor:
                combos.add((block.block_id, floor, None, task.task_type))
            for flat in block.flats(floor):
                if not active.is_active(block.block_id, flat, floor):
                    continue
                for task in catalog.per_flat:
                    combos.add((block.block_id, floor, flat, task.task_type))
    return len(combos)


def test_expected_matches_brute_force_enumeration():
    for active in (
        _every_other_flat_active(DEFAULT_TOPOLOGY),
        ActiveFlatMap(flags={}),
        ActiveFlatMap(flags={"1A1": True, "6D12": True, "2Z3": True}),
    ):
        assert expected_total(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active) == _brute_force_expected(
            DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active
        )


def test_expected_without_active_flats_counts_floor_block_and_common_tasks():
    # 6 blocks * (1 block task + 12 floors * 3 floor tasks) + 1 common task
    assert expected_total(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, ActiveFlatMap(flags={})) == 6 * (1 + 12 * 3) + 1


def test_only_active_flat_is_expected_and_inactive_completion_is_ignored():
    active = ActiveFlatMap(flags={"1A1": True, "1B1": False})

    progress = compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, active, [_log(1, "Garbage", block=1, floor=1, flat="B")])
    assert progress.total_expected == 1
    assert progress.total_completed == 0
    assert progress.percent == 0

    progress = compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, active, [_log(2, "Garbage", block=1, floor=1, flat="A")])
    assert progress.total_completed == 1
    assert progress.percent == 100


def test_flat_without_billing_record_is_excluded():
    active = ActiveFlatMap(flags={"1A1": True})
    progress = compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, active, [_log(1, "Garbage", block=1, floor=1, flat="B")])
    assert progress.total_expected == 1
    assert progress.total_completed == 0


def test_unloaded_billing_counts_all_completed_logs():
    logs = [_log(1, "Garbage", block=1, floor=1, flat="A"), _log(2, "Garbage", block=1, floor=1, flat="B")]
    progress = compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, ActiveFlatMap.unavailable(), logs)
    assert progress.total_completed == 2
    # Nothing is expected while billing is unknown, so completed may exceed expected.
    assert progress.total_expected == 0
    assert progress.percent == 0


def test_common_area_logs_always_count():
    active = _every_other_flat_active(DEFAULT_TOPOLOGY)
    progress = compute_daily_progress(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active, [_log(1, DRIVEWAY)])
    assert progress.total_completed == 1


def test_only_completed_status_counts():
    active = ActiveFlatMap(flags={"1A1": True})
    logs = [
        _log(1, "Garbage", block=1, floor=1, flat="A", status=TaskStatus.PENDING),
        _log(2, "Garbage", block=1, floor=1, flat="A", status=TaskStatus.REJECTED),
    ]
    assert compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, active, logs).total_completed == 0


def test_completed_never_exceeds_expected_once_billing_is_loaded():
    active = _every_other_flat_active(DEFAULT_TOPOLOGY)
    logs = []
    for block, floor, flats in DEFAULT_TOPOLOGY.iter_floors():
        for flat in flats:
            logs.append(_log(len(logs), ROUTINE_HOUSEKEEPING, block=block.block_id, floor=floor, flat=flat))
        logs.append(_log(len(logs), BROOMING, block=block.block_id, floor=floor))

    progress = compute_daily_progress(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active, logs)
    assert progress.total_completed <= progress.total_expected


def test_computing_twice_gives_identical_results():
    active = _every_other_flat_active(DEFAULT_TOPOLOGY)
    logs = [
        _log(1, ROUTINE_HOUSEKEEPING, block=2, floor=3, flat="A"),
        _log(2, BROOMING, block=2, floor=3),
        _log(3, DRIVEWAY),
    ]
    first = compute_daily_progress(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active, logs)
    second = compute_daily_progress(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active, logs)
    assert first == second


def test_percent_rounds_half_up():
    topology = BuildingTopology(blocks=(Block(1, "Block 1", lambda floor: ["A"]),), floors=(1,))
    catalog = TaskCatalog(
        definitions=tuple(
            TaskDefinition(f"t{i}", f"t{i}", "x", TaskScope.PER_FLOOR, TaskCategory.OTHER) for i in range(8)
        )
    )
    logs = [_log(i, f"t{i}", block=1, floor=1) for i in range(1)]
    # 1 / 8 = 12.5%
    assert compute_daily_progress(topology, catalog, ActiveFlatMap(flags={}), logs).percent == 13


def test_category_breakdown_for_garbage_and_brooming():
    active = ActiveFlatMap(flags={"1A1": True, "1B1": True, "1C1": False})
    logs = [
        _log(1, ROUTINE_HOUSEKEEPING, block=1, floor=1, flat="A"),
        _log(2, ROUTINE_HOUSEKEEPING, block=1, floor=1, flat="C"),
        _log(3, BROOMING, block=1, floor=1),
        _log(4, BROOMING, block=1, floor=2, status=TaskStatus.PENDING),
    ]
    breakdown = compute_daily_progress(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active, logs).breakdown

    assert breakdown.garbage.total == 2
    assert breakdown.garbage.done == 1
    assert breakdown.garbage.percent == 50
    assert breakdown.brooming.total == 6 * 12
    assert breakdown.brooming.done == 1


def test_todays_logs_drops_yesterday():
    logs = [_log(1, DRIVEWAY, ts=ms(2026, 3, 1, 23, 59)), _log(2, DRIVEWAY, ts=ms(2026, 3, 2, 0, 0))]
    assert [log.log_id for log in todays_logs(logs, NOW)] == ["l2"]


def test_repeat_logs_of_one_slot_count_once():
    active = ActiveFlatMap(flags={"1A1": True, "1B1": False})
    logs = [
        _log(1, "Garbage", block=1, floor=1, flat="A"),
        _log(2, "Garbage", block=1, floor=1, flat="A", ts=TODAY + 60_000),
    ]
    progress = compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, active, logs)

    assert (progress.total_completed, progress.total_expected, progress.percent) == (1, 1, 100)
    assert (progress.breakdown.garbage.done, progress.breakdown.garbage.total) == (1, 1)


def test_repeat_floor_logs_do_not_inflate_brooming():
    active = ActiveFlatMap(flags={"1A1": True})
    logs = [_log(i, BROOMING, block=1, floor=1) for i in range(3)]
    progress = compute_daily_progress(DEFAULT_TOPOLOGY, DEFAULT_CATALOG, active, logs)
    assert progress.breakdown.brooming.done == 1
    assert progress.total_completed == 1


def test_progress_reports_whether_billing_answered():
    assert compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, ActiveFlatMap(flags={"1A1": True}), []).payment_status_loaded
    assert not compute_daily_progress(ONE_FLOOR, GARBAGE_ONLY, ActiveFlatMap.unavailable(), []).payment_status_loaded
