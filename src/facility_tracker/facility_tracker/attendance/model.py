from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import DutyState, PunchType


@dataclass(frozen=True)
class NewPunch:
    staff_id: int
    punch_type: PunchType
    timestamp: int


@dataclass(frozen=True)
class PunchLog:
    punch_id: str
    staff_id: int
    punch_type: PunchType
    timestamp: int
    is_local: bool = False

    def to_new(self) -> NewPunch:
        return NewPunch(staff_id=self.staff_id, punch_type=self.punch_type, timestamp=self.timestamp)

    @classmethod
    def from_new(cls, punch_id: str, new: NewPunch, *, is_local: bool = False) -> "PunchLog":
        return cls(
            punch_id=punch_id,
            staff_id=new.staff_id,
            punch_type=new.punch_type,
            timestamp=new.timestamp,
            is_local=is_local,
        )


@dataclass(frozen=True)
class WorkedDuration:
    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return f"{self.hours}h{self.minutes:02d}m"


@dataclass(frozen=True)
class RosterEntry:
    """Read-model for the manager's attendance overview."""

    staff_id: int
    name: str
    role: str
    duty_state: DutyState
    last_punch_at: Optional[int]
    hours_worked: int
    tasks_completed: int
