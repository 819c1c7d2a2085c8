from __future__ import annotations

from typing import Protocol, Sequence

from .model import NewPunch, PunchLog


class PunchLogRepository(Protocol):
    def list_recent(self) -> Sequence[PunchLog]:
        """All punches, newest first."""

        raise NotImplementedError

    def insert(self, punch: NewPunch) -> PunchLog:
        raise NotImplementedError
