from __future__ import annotations

from dataclasses import dataclass, replace

from ..core.enums import SupplyStatus, Urgency


@dataclass(frozen=True)
class NewSupplyRequest:
    item: str
    quantity: str
    urgency: Urgency
    requester_id: int
    timestamp: int
    status: SupplyStatus = SupplyStatus.OPEN


@dataclass(frozen=True)
class SupplyRequest:
    request_id: str
    item: str
    quantity: str
    urgency: Urgency
    status: SupplyStatus
    requester_id: int
    timestamp: int
    is_local: bool = False

    def with_status(self, status: SupplyStatus) -> "SupplyRequest":
        return replace(self, status=status)

    def to_new(self) -> NewSupplyRequest:
        return NewSupplyRequest(
            item=self.item,
            quantity=self.quantity,
            urgency=self.urgency,
            requester_id=self.requester_id,
            timestamp=self.timestamp,
            status=self.status,
        )

    @classmethod
    def from_new(cls, request_id: str, new: NewSupplyRequest, *, is_local: bool = False) -> "SupplyRequest":
        return cls(
            request_id=request_id,
            item=new.item,
            quantity=new.quantity,
            urgency=new.urgency,
            status=new.status,
            requester_id=new.requester_id,
            timestamp=new.timestamp,
            is_local=is_local,
        )
