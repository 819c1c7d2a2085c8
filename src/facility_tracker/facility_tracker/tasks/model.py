from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import TaskStatus
from ..topology.model import flat_key


@dataclass(frozen=True)
class NewTaskLog:
    """Candidate task log, before an identifier is assigned."""

    task_type: str
    staff_id: int
    timestamp: int
    status: TaskStatus = TaskStatus.COMPLETED
    image_url: Optional[str] = None
    ai_feedback: Optional[str] = None
    ai_rating: Optional[float] = None
    block: Optional[int] = None
    floor: Optional[int] = None
    flat: Optional[str] = None


@dataclass(frozen=True)
class TaskLog:
    """A recorded task completion. Never edited or deleted once written."""

    log_id: str
    task_type: str
    staff_id: int
    timestamp: int
    status: TaskStatus
    image_url: Optional[str] = None
    ai_feedback: Optional[str] = None
    ai_rating: Optional[float] = None
    block: Optional[int] = None
    floor: Optional[int] = None
    flat: Optional[str] = None
    is_local: bool = False

    @property
    def has_full_location(self) -> bool:
        return bool(self.block and self.floor and self.flat)

    @property
    def slot(self) -> tuple:
        """One expected unit of work: task plus location. Repeat logs share a slot."""
        return (self.task_type, self.block, self.floor, self.flat)

    @property
    def location_key(self) -> Optional[str]:
        if not self.has_full_location:
            return None
        return flat_key(self.block, self.flat, self.floor)

    def to_new(self) -> NewTaskLog:
        return NewTaskLog(
            task_type=self.task_type,
            staff_id=self.staff_id,
            timestamp=self.timestamp,
            status=self.status,
            image_url=self.image_url,
            ai_feedback=self.ai_feedback,
            ai_rating=self.ai_rating,
            block=self.block,
            floor=self.floor,
            flat=self.flat,
        )

    @classmethod
    def from_new(cls, log_id: str, new: NewTaskLog, *, is_local: bool = False) -> "TaskLog":
        return cls(
            log_id=log_id,
            task_type=new.task_type,
            staff_id=new.staff_id,
            timestamp=new.timestamp,
            status=new.status,
            image_url=new.image_url,
            ai_feedback=new.ai_feedback,
            ai_rating=new.ai_rating,
            block=new.block,
            floor=new.floor,
            flat=new.flat,
            is_local=is_local,
        )
