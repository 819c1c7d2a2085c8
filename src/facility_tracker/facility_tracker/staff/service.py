from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..store.event_store import EventStore
from .model import NewStaffMember, StaffMember

logger = logging.getLogger(__name__)

DEFAULT_STAFF_ROLE = "Housekeeper"


class StaffService:
    """Use case: managers add housekeepers.

    Permission comes from the session role set by the auth collaborator.
    Unlike task and punch writes there is no local fallback here: a staff
    member the backend does not know about cannot log in anyway.
    """

    def __init__(self, store: EventStore):
        self._store = store

    def list_staff(self) -> list[StaffMember]:
        return list(self._store.staff)

    def add_staff(
        self,
        *,
        current_role: Role,
        name: str,
        role: str = DEFAULT_STAFF_ROLE,
        avatar: str = "",
        block_assignment: str = "",
    ) -> StaffMember:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can add staff")

        new = NewStaffMember(
            name=require_non_empty(name, "Name"),
            role=(role or "").strip() or DEFAULT_STAFF_ROLE,
            avatar=(avatar or "").strip(),
            block_assignment=(block_assignment or "").strip(),
        )
        member = self._store.staff_repo.insert(new)
        self._store.add_staff(member)
        logger.info("Added staff member %s (%s)", member.staff_id, member.name)
        return member
