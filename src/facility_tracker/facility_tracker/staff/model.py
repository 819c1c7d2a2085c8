from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NewStaffMember:
    name: str
    role: str
    avatar: str
    block_assignment: str


@dataclass(frozen=True)
class StaffMember:
    """Reference entity: a housekeeper. Created by a manager, read-mostly."""

    staff_id: int
    name: str
    role: str
    avatar: str
    block_assignment: str
