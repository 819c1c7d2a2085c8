from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import now_ms
from ..common.validators import require_enum, require_non_empty
from ..core.enums import Role, SupplyStatus, Urgency
from ..core.exceptions import AuthorizationError
from ..store.event_store import EventStore
from ..store.mutations import MutationHandler
from .model import NewSupplyRequest, SupplyRequest

PRESET_ITEMS = (
    "Floor Cleaner Liquid",
    "Garbage Bags (Large)",
    "Heavy Broom",
    "Glass Detergent",
    "Mop Refills",
    "Disinfectant Spray",
)


class SupplyService:
    def __init__(self, store: EventStore, mutations: MutationHandler):
        self._store = store
        self._mutations = mutations

    def create_request(
        self,
        *,
        requester_id: int,
        item: str,
        quantity: str,
        urgency: str | Urgency = Urgency.LOW,
        now: Optional[int] = None,
    ) -> SupplyRequest:
        new = NewSupplyRequest(
            item=require_non_empty(item, "Item"),
            quantity=require_non_empty(quantity, "Quantity"),
            urgency=require_enum(urgency, Urgency, "Urgency"),
            requester_id=int(requester_id),
            timestamp=now if now is not None else now_ms(),
        )
        return self._mutations.request_supply(new)

    def approve(self, *, current_role: Role, request_id: str) -> SupplyRequest:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can approve supply requests")
        return self._mutations.approve_supply(str(request_id))

    def reject(self, *, current_role: Role, request_id: str) -> SupplyRequest:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can reject supply requests")
        return self._mutations.reject_supply(str(request_id))

    def list_requests(self, *, status: Optional[SupplyStatus] = None, requester_id: Optional[int] = None) -> list[SupplyRequest]:
        return [
            r
            for r in self._store.supply_requests
            if (status is None or r.status == status) and (requester_id is None or r.requester_id == requester_id)
        ]

    def open_requests(self) -> list[SupplyRequest]:
        return self.list_requests(status=SupplyStatus.OPEN)
