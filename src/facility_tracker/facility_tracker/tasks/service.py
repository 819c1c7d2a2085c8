from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import from_epoch_ms, now_ms
from ..common.validators import optional_number, optional_text, require_non_empty
from ..core.constants import AI_RATING_RANGE
from ..core.enums import TaskScope, TaskStatus
from ..core.exceptions import ValidationError
from ..media.stamping import ImageStamper
from ..progress import aggregator
from ..store.event_store import EventStore
from ..store.mutations import MutationHandler
from ..topology.catalog import TaskCatalog, TaskDefinition
from ..topology.model import BuildingTopology
from .model import NewTaskLog, TaskLog


class TaskService:
    """Use case: a staff member marks a housekeeping task as done."""

    def __init__(
        self,
        store: EventStore,
        mutations: MutationHandler,
        topology: BuildingTopology,
        catalog: TaskCatalog,
        stamper: Optional[ImageStamper] = None,
    ):
        self._store = store
        self._mutations = mutations
        self._topology = topology
        self._catalog = catalog
        self._stamper = stamper

    def _check_location(
        self,
        task: TaskDefinition,
        block: Optional[int],
        floor: Optional[int],
        flat: Optional[str],
    ) -> None:
        if task.scope == TaskScope.COMMON:
            if block or floor or flat:
                raise ValidationError(f"{task.label} is a common-area task and takes no location")
            return

        building_block = self._topology.get_block(block) if block else None
        if building_block is None:
            raise ValidationError("Block is required for this task")
        if task.scope == TaskScope.PER_BLOCK:
            return

        if floor not in self._topology.floors:
            raise ValidationError("Floor is required for this task")
        if task.scope == TaskScope.PER_FLOOR:
            if flat:
                raise ValidationError(f"{task.label} is done per floor, not per flat")
            return

        if not flat or flat not in building_block.flats(floor):
            raise ValidationError(f"Flat is required for {task.label}")

    def _already_logged_today(self, new: NewTaskLog) -> bool:
        today = aggregator.todays_logs(self._store.task_logs, new.timestamp)
        if new.block is None:
            return aggregator.common_task_done(today, new.task_type)
        return aggregator.is_task_done(
            today, block=new.block, floor=new.floor, task_type=new.task_type, flat=new.flat
        )

    def complete_task(
        self,
        *,
        staff_id: int,
        task_type: str,
        block: Optional[int] = None,
        floor: Optional[int] = None,
        flat: Optional[str] = None,
        image_url: Optional[str] = None,
        ai_feedback: Optional[str] = None,
        ai_rating: Optional[float] = None,
        photo: Optional[bytes] = None,
        now: Optional[int] = None,
    ) -> TaskLog:
        """Validate and record one completion.

        A ``photo`` is stamped and uploaded only after every check passed;
        its URL replaces ``image_url``.
        """
        task_type = require_non_empty(task_type, "Task")
        task = self._catalog.get(task_type)
        if task is None:
            raise ValidationError(f"Unknown task: {task_type}")

        flat = optional_text(flat, "Flat")
        flat = flat.upper() if flat else None
        self._check_location(task, block, floor, flat)
        image_url = optional_text(image_url, "Image")
        ai_feedback = optional_text(ai_feedback, "AI feedback")
        low, high = AI_RATING_RANGE
        ai_rating = optional_number(ai_rating, "AI rating", low=low, high=high)

        now = now if now is not None else now_ms()
        new = NewTaskLog(
            task_type=task.task_type,
            staff_id=int(staff_id),
            timestamp=now,
            status=TaskStatus.COMPLETED,
            image_url=image_url,
            ai_feedback=ai_feedback,
            ai_rating=ai_rating,
            block=block if task.scope != TaskScope.COMMON else None,
            floor=floor if task.scope in (TaskScope.PER_FLOOR, TaskScope.PER_FLAT) else None,
            flat=flat if task.scope == TaskScope.PER_FLAT else None,
        )
        if self._already_logged_today(new):
            raise ValidationError(f"{task.label} is already done here today")
        if photo and self._stamper is not None:
            new = replace(new, image_url=self._stamper.stamp_and_upload(photo, when=from_epoch_ms(now)))
        return self._mutations.log_task(new)

    def history(self, *, staff_id: Optional[int] = None, limit: int = 200) -> list[TaskLog]:
        """Newest-first logs, for one staff member or everybody."""
        logs = [log for log in self._store.task_logs if staff_id is None or log.staff_id == staff_id]
        logs.sort(key=lambda log: log.timestamp, reverse=True)
        return logs[:limit]
