from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import now_ms, start_of_day_ms
from ..core.constants import DEFAULT_SHIFT_MINUTES
from ..core.enums import DutyState, TaskStatus
from ..store.event_store import EventStore
from ..store.mutations import MutationHandler
from . import calculator
from .model import NewPunch, PunchLog, RosterEntry, WorkedDuration


@dataclass(frozen=True)
class AttendanceSummary:
    staff_id: int
    duty_state: DutyState
    worked: WorkedDuration
    work_percent: int
    punches: list[PunchLog]


class AttendanceService:
    def __init__(self, store: EventStore, mutations: MutationHandler, *, shift_minutes: int = DEFAULT_SHIFT_MINUTES):
        self._store = store
        self._mutations = mutations
        self._shift_minutes = int(shift_minutes)

    def todays_punches(self, staff_id: int, now: int) -> list[PunchLog]:
        return self._store.punches_for(staff_id, since=start_of_day_ms(now))

    def punch(self, staff_id: int, *, now: Optional[int] = None) -> PunchLog:
        """Toggle duty: IN when off duty, OUT when on duty."""
        now = now if now is not None else now_ms()
        punch_type = calculator.next_punch_type(self.todays_punches(staff_id, now))
        return self._mutations.punch(NewPunch(staff_id=int(staff_id), punch_type=punch_type, timestamp=now))

    def summary(self, staff_id: int, *, now: Optional[int] = None) -> AttendanceSummary:
        now = now if now is not None else now_ms()
        punches = self.todays_punches(staff_id, now)
        worked = calculator.worked_duration(punches, now)
        return AttendanceSummary(
            staff_id=int(staff_id),
            duty_state=calculator.duty_state(punches),
            worked=worked,
            work_percent=calculator.work_percent(worked, self._shift_minutes),
            punches=sorted(punches, key=lambda p: p.timestamp, reverse=True),
        )

    def roster(self, *, now: Optional[int] = None) -> list[RosterEntry]:
        now = now if now is not None else now_ms()
        today = start_of_day_ms(now)
        entries: list[RosterEntry] = []
        for member in self._store.staff:
            punches = self._store.punches_for(member.staff_id, since=today)
            last = max(punches, key=lambda p: p.timestamp) if punches else None
            tasks_done = sum(
                1
                for log in self._store.task_logs
                if log.staff_id == member.staff_id and log.timestamp >= today and log.status == TaskStatus.COMPLETED
            )
            entries.append(
                RosterEntry(
                    staff_id=member.staff_id,
                    name=member.name,
                    role=member.role,
                    duty_state=calculator.duty_state(punches),
                    last_punch_at=last.timestamp if last else None,
                    hours_worked=calculator.worked_duration(punches, now).hours,
                    tasks_completed=tasks_done,
                )
            )
        return entries
