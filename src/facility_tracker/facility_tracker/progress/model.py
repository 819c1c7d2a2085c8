from __future__ import annotations

from dataclasses import dataclass


def round_percent(done: int, total: int) -> int:
    """``round(100 * done / total)`` with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    return int(100 * done / total + 0.5)


@dataclass(frozen=True)
class CompletionCount:
    done: int
    total: int

    @property
    def percent(self) -> int:
        return round_percent(self.done, self.total)


CategoryProgress = CompletionCount


@dataclass(frozen=True)
class CategoryBreakdown:
    garbage: CategoryProgress
    brooming: CategoryProgress


@dataclass(frozen=True)
class DailyProgress:
    total_expected: int
    total_completed: int
    percent: int
    breakdown: CategoryBreakdown
    payment_status_loaded: bool = False


@dataclass(frozen=True)
class LogStats:
    today_count: int
    week_count: int
    garbage: int
    brooming: int
    mopping: int
    other: int
