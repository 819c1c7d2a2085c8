"""Worked time and duty state from one staff member's punches for a day.

Alternation is not validated: an IN followed by another IN counts from the
first IN up to the next punch and again from the second IN onward, and an
OUT without a preceding IN contributes nothing.
"""

from __future__ import annotations

from typing import Sequence

from ..core.constants import DEFAULT_SHIFT_MINUTES, MS_PER_MINUTE
from ..core.enums import DutyState, PunchType
from .model import PunchLog, WorkedDuration


def _punch_order(p: PunchLog):
    # Same-millisecond punches: IN sorts before OUT.
    return (p.timestamp, p.punch_type != PunchType.IN)


def worked_ms(punches: Sequence[PunchLog], now: int) -> int:
    ordered = sorted(punches, key=_punch_order)
    total = 0
    for i, punch in enumerate(ordered):
        if punch.punch_type != PunchType.IN:
            continue
        nxt = ordered[i + 1] if i + 1 < len(ordered) else None
        # A dangling IN means the staff member is still clocked in.
        end = nxt.timestamp if nxt is not None and nxt.punch_type == PunchType.OUT else now
        total += end - punch.timestamp
    return total


def worked_duration(punches: Sequence[PunchLog], now: int) -> WorkedDuration:
    total_minutes = worked_ms(punches, now) // MS_PER_MINUTE
    return WorkedDuration(hours=total_minutes // 60, minutes=total_minutes % 60)


def duty_state(punches: Sequence[PunchLog]) -> DutyState:
    if not punches:
        return DutyState.OFF_DUTY
    last = max(punches, key=_punch_order)
    return DutyState.ON_DUTY if last.punch_type == PunchType.IN else DutyState.OFF_DUTY


def next_punch_type(punches: Sequence[PunchLog]) -> PunchType:
    return PunchType.OUT if duty_state(punches) == DutyState.ON_DUTY else PunchType.IN


def work_percent(duration: WorkedDuration, shift_minutes: int = DEFAULT_SHIFT_MINUTES) -> int:
    if shift_minutes <= 0:
        return 0
    return min(100, int(100 * duration.total_minutes / shift_minutes + 0.5))
