from __future__ import annotations

from datetime import datetime, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now()


def to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000)


def now_ms() -> int:
    return to_epoch_ms(now_local())


def start_of_day_ms(now: int) -> int:
    """Local midnight of the day containing ``now`` (epoch ms)."""
    day = from_epoch_ms(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return to_epoch_ms(day)


def days_ago_ms(now: int, days: int) -> int:
    return to_epoch_ms(from_epoch_ms(now) - timedelta(days=days))


def format_clock(timestamp: int) -> str:
    return from_epoch_ms(timestamp).strftime("%H:%M")
