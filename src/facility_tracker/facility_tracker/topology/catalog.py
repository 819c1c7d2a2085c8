from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Frequency, TaskCategory, TaskScope


@dataclass(frozen=True)
class TaskDefinition:
    task_type: str
    label: str
    icon: str
    scope: TaskScope
    category: TaskCategory
    frequency: Frequency = Frequency.DAILY
    area: Optional[str] = None

    @property
    def per_flat(self) -> bool:
        return self.scope == TaskScope.PER_FLAT


@dataclass(frozen=True)
class TaskCatalog:
    """The four disjoint task classes, looked up by task-type identifier."""

    definitions: tuple[TaskDefinition, ...]

    def _daily(self, scope: TaskScope) -> list[TaskDefinition]:
        return [d for d in self.definitions if d.scope == scope and d.frequency == Frequency.DAILY]

    @property
    def per_flat(self) -> list[TaskDefinition]:
        return self._daily(TaskScope.PER_FLAT)

    @property
    def per_floor(self) -> list[TaskDefinition]:
        return self._daily(TaskScope.PER_FLOOR)

    @property
    def per_block(self) -> list[TaskDefinition]:
        return self._daily(TaskScope.PER_BLOCK)

    @property
    def common(self) -> list[TaskDefinition]:
        return self._daily(TaskScope.COMMON)

    def get(self, task_type: str) -> Optional[TaskDefinition]:
        for d in self.definitions:
            if d.task_type == task_type:
                return d
        return None

    def category_of(self, task_type: str) -> TaskCategory:
        d = self.get(task_type)
        return d.category if d else TaskCategory.OTHER

    def count(self, scope: TaskScope, category: Optional[TaskCategory] = None) -> int:
        defs = self._daily(scope)
        if category is not None:
            defs = [d for d in defs if d.category == category]
        return len(defs)
