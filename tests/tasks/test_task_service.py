from __future__ import annotations

import pytest

from src.facility_tracker.facility_tracker.core.enums import TaskStatus
from src.facility_tracker.facility_tracker.core.exceptions import ValidationError
from src.facility_tracker.facility_tracker.store.mutations import MutationHandler
from src.facility_tracker.facility_tracker.tasks.model import TaskLog
from src.facility_tracker.facility_tracker.tasks.service import TaskService
from src.facility_tracker.facility_tracker.topology.building import (
    BROOMING,
    DEFAULT_CATALOG,
    DEFAULT_TOPOLOGY,
    DRIVEWAY,
    GLASS_ENTRANCE,
    ROUTINE_HOUSEKEEPING,
)
from tests.fakes import FakeStamper, FakeTaskLogRepo, make_store, ms

NOW = ms(2026, 3, 2, 10, 0)


def _service(repo=None, stamper=None):
    store = make_store(task_logs=repo or FakeTaskLogRepo())
    store.refresh()
    return store, TaskService(store, MutationHandler(store), DEFAULT_TOPOLOGY, DEFAULT_CATALOG, stamper=stamper)


def test_flat_task_is_logged_with_full_location():
    store, svc = _service()

    log = svc.complete_task(staff_id=1, task_type=ROUTINE_HOUSEKEEPING, block=1, floor=3, flat="b", now=NOW)

    assert (log.block, log.floor, log.flat) == (1, 3, "B")
    assert log.location_key == "1B3"
    assert log.status == TaskStatus.COMPLETED
    assert store.task_logs[0] == log


def test_floor_task_has_no_flat():
    _, svc = _service()
    log = svc.complete_task(staff_id=1, task_type=BROOMING, block=2, floor=5, now=NOW)
    assert (log.block, log.floor, log.flat) == (2, 5, None)

    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type=BROOMING, block=2, floor=5, flat="A", now=NOW)


def test_block_and_common_tasks():
    _, svc = _service()
    glass = svc.complete_task(staff_id=1, task_type=GLASS_ENTRANCE, block=4, now=NOW)
    assert (glass.block, glass.floor) == (4, None)

    driveway = svc.complete_task(staff_id=1, task_type=DRIVEWAY, now=NOW)
    assert (driveway.block, driveway.floor, driveway.flat) == (None, None, None)

    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type=DRIVEWAY, block=1, now=NOW)


@pytest.mark.parametrize(
    "block, floor, flat",
    [
        (None, 1, "A"),
        (9, 1, "A"),
        (1, 13, "A"),
        (1, 10, "E"),  # block 1 has only A-C above floor 8
        (2, 1, None),
    ],
)
def test_invalid_flat_location_is_rejected(block, floor, flat):
    repo = FakeTaskLogRepo()
    _, svc = _service(repo)

    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type=ROUTINE_HOUSEKEEPING, block=block, floor=floor, flat=flat, now=NOW)
    assert repo.inserted == []


def test_unknown_task_is_rejected():
    _, svc = _service()
    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type="Window Washing", block=1, now=NOW)


def test_offline_completion_still_shows_in_history():
    _, svc = _service(FakeTaskLogRepo(fail_writes=True))

    log = svc.complete_task(staff_id=7, task_type=BROOMING, block=1, floor=1, now=NOW)

    assert log.is_local
    assert svc.history(staff_id=7) == [log]


def test_history_is_newest_first_and_filtered():
    logs = [
        TaskLog("a", BROOMING, 1, NOW - 2000, TaskStatus.COMPLETED, block=1, floor=1),
        TaskLog("b", BROOMING, 2, NOW - 1000, TaskStatus.COMPLETED, block=1, floor=2),
        TaskLog("c", BROOMING, 1, NOW, TaskStatus.COMPLETED, block=1, floor=3),
    ]
    _, svc = _service(FakeTaskLogRepo(logs))

    assert [log.log_id for log in svc.history()] == ["c", "b", "a"]
    assert [log.log_id for log in svc.history(staff_id=1, limit=1)] == ["c"]


def test_same_flat_cannot_be_completed_twice_in_a_day():
    repo = FakeTaskLogRepo()
    store, svc = _service(repo)
    svc.complete_task(staff_id=1, task_type=ROUTINE_HOUSEKEEPING, block=1, floor=1, flat="A", now=NOW)

    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=2, task_type=ROUTINE_HOUSEKEEPING, block=1, floor=1, flat="a", now=NOW + 60_000)

    assert len(repo.inserted) == 1
    assert len(store.task_logs) == 1


def test_repeat_guard_covers_floor_block_and_common_tasks():
    _, svc = _service()
    svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=1, now=NOW)
    svc.complete_task(staff_id=1, task_type=GLASS_ENTRANCE, block=1, now=NOW)
    svc.complete_task(staff_id=1, task_type=DRIVEWAY, now=NOW)

    for kwargs in (
        dict(task_type=BROOMING, block=1, floor=1),
        dict(task_type=GLASS_ENTRANCE, block=1),
        dict(task_type=DRIVEWAY),
    ):
        with pytest.raises(ValidationError):
            svc.complete_task(staff_id=2, now=NOW + 1000, **kwargs)

    # Other locations of the same task are still open.
    svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=2, now=NOW)


def test_slot_opens_again_the_next_day():
    _, svc = _service()
    svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=1, now=NOW)
    log = svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=1, now=ms(2026, 3, 3, 9, 0))
    assert log.timestamp == ms(2026, 3, 3, 9, 0)


@pytest.mark.parametrize(
    "field, value",
    [
        ("ai_rating", "great"),
        ("ai_rating", 11),
        ("ai_rating", -1),
        ("ai_rating", True),
        ("ai_feedback", {"text": "ok"}),
        ("image_url", 42),
    ],
)
def test_malformed_extras_are_rejected_before_any_write(field, value):
    repo = FakeTaskLogRepo()
    _, svc = _service(repo)

    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=1, now=NOW, **{field: value})
    assert repo.inserted == []


def test_non_text_flat_is_rejected():
    repo = FakeTaskLogRepo()
    _, svc = _service(repo)
    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type=ROUTINE_HOUSEKEEPING, block=1, floor=1, flat=7, now=NOW)
    assert repo.inserted == []


def test_rating_is_stored_as_number():
    _, svc = _service()
    log = svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=1, ai_rating="8.5", now=NOW)
    assert log.ai_rating == 8.5


def test_photo_is_uploaded_only_after_validation():
    stamper = FakeStamper("https://cdn.example/a.jpg")
    _, svc = _service(stamper=stamper)

    with pytest.raises(ValidationError):
        svc.complete_task(staff_id=1, task_type=BROOMING, block=1, photo=b"img", now=NOW)
    assert stamper.received == []

    log = svc.complete_task(staff_id=1, task_type=BROOMING, block=1, floor=1, photo=b"img", now=NOW)
    assert log.image_url == "https://cdn.example/a.jpg"
    assert stamper.received == [b"img"]
