from __future__ import annotations

from typing import Protocol, Sequence

from .model import NewStaffMember, StaffMember


class StaffRepository(Protocol):
    def list_all(self) -> Sequence[StaffMember]:
        """All staff members ordered by id."""

        raise NotImplementedError

    def insert(self, staff: NewStaffMember) -> StaffMember:
        raise NotImplementedError
