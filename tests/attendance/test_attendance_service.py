from __future__ import annotations

from src.facility_tracker.facility_tracker.attendance.model import PunchLog
from src.facility_tracker.facility_tracker.attendance.service import AttendanceService
from src.facility_tracker.facility_tracker.core.enums import DutyState, PunchType, TaskStatus
from src.facility_tracker.facility_tracker.staff.model import StaffMember
from src.facility_tracker.facility_tracker.store.mutations import MutationHandler
from src.facility_tracker.facility_tracker.tasks.model import TaskLog
from tests.fakes import FakePunchRepo, FakeStaffRepo, FakeTaskLogRepo, make_store, ms


def _service(**repos):
    store = make_store(**repos)
    store.refresh()
    return store, AttendanceService(store, MutationHandler(store))


def test_punch_toggles_between_in_and_out():
    store, svc = _service()

    first = svc.punch(1, now=ms(2026, 3, 2, 9, 0))
    second = svc.punch(1, now=ms(2026, 3, 2, 13, 0))
    third = svc.punch(1, now=ms(2026, 3, 2, 14, 0))

    assert [first.punch_type, second.punch_type, third.punch_type] == [PunchType.IN, PunchType.OUT, PunchType.IN]
    assert store.punch_logs[0] == third


def test_new_day_starts_off_duty():
    yesterday = PunchLog("p1", 1, PunchType.IN, ms(2026, 3, 1, 20, 0))
    _, svc = _service(punches=FakePunchRepo([yesterday]))

    punch = svc.punch(1, now=ms(2026, 3, 2, 8, 0))
    assert punch.punch_type == PunchType.IN


def test_punch_when_backend_is_down_still_records_locally():
    store, svc = _service(punches=FakePunchRepo(fail_writes=True))

    punch = svc.punch(1, now=ms(2026, 3, 2, 9, 0))
    assert punch.is_local
    assert svc.summary(1, now=ms(2026, 3, 2, 10, 0)).duty_state == DutyState.ON_DUTY


def test_summary_reports_worked_time_and_percent():
    punches = [
        PunchLog("p1", 1, PunchType.IN, ms(2026, 3, 2, 9, 0)),
        PunchLog("p2", 1, PunchType.OUT, ms(2026, 3, 2, 13, 0)),
    ]
    _, svc = _service(punches=FakePunchRepo(punches))

    summary = svc.summary(1, now=ms(2026, 3, 2, 15, 0))
    assert summary.duty_state == DutyState.OFF_DUTY
    assert (summary.worked.hours, summary.worked.minutes) == (4, 0)
    assert summary.work_percent == 50
    assert [p.punch_id for p in summary.punches] == ["p2", "p1"]


def test_roster_lists_every_staff_member():
    staff = [StaffMember(1, "Asha", "Housekeeper", "", "Block 1"), StaffMember(2, "Ravi", "Housekeeper", "", "Block 2")]
    punches = [PunchLog("p1", 1, PunchType.IN, ms(2026, 3, 2, 9, 0))]
    logs = [TaskLog("l1", "Brooming", 1, ms(2026, 3, 2, 9, 30), TaskStatus.COMPLETED, block=1, floor=1)]
    _, svc = _service(staff=FakeStaffRepo(staff), punches=FakePunchRepo(punches), task_logs=FakeTaskLogRepo(logs))

    roster = svc.roster(now=ms(2026, 3, 2, 12, 0))

    assert [e.name for e in roster] == ["Asha", "Ravi"]
    assert roster[0].duty_state == DutyState.ON_DUTY
    assert roster[0].hours_worked == 3
    assert roster[0].tasks_completed == 1
    assert roster[1].duty_state == DutyState.OFF_DUTY
    assert roster[1].last_punch_at is None
