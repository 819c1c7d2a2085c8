from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import SupplyStatus
from .model import NewSupplyRequest, SupplyRequest


class SupplyRequestRepository(Protocol):
    def list_recent(self) -> Sequence[SupplyRequest]:
        raise NotImplementedError

    def insert(self, request: NewSupplyRequest) -> SupplyRequest:
        raise NotImplementedError

    def update_status(self, request_id: str, status: SupplyStatus) -> None:
        raise NotImplementedError
