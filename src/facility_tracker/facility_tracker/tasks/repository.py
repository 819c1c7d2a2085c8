from __future__ import annotations

from typing import Protocol, Sequence

from .model import NewTaskLog, TaskLog


class TaskLogRepository(Protocol):
    def list_recent(self) -> Sequence[TaskLog]:
        """All task logs, newest first."""

        raise NotImplementedError

    def insert(self, log: NewTaskLog) -> TaskLog:
        raise NotImplementedError
