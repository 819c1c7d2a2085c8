from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..topology.model import flat_key


@dataclass(frozen=True)
class ActiveFlatMap:
    """Which flats are currently paying, keyed by ``flat_key``.

    ``loaded`` is False until the billing collaborator has answered; an
    absent key always means inactive.
    """

    flags: Mapping[str, bool] = field(default_factory=dict)
    loaded: bool = True

    @classmethod
    def unavailable(cls) -> "ActiveFlatMap":
        return cls(flags={}, loaded=False)

    @property
    def is_usable(self) -> bool:
        return self.loaded and len(self.flags) > 0

    def is_active_key(self, key: str) -> bool:
        return self.flags.get(key) is True

    def is_active(self, block: int, flat: str, floor: int) -> bool:
        return self.is_active_key(flat_key(block, flat, floor))

    def active_flats(self, block: int, floor: int, flats) -> list[str]:
        return [f for f in flats if self.is_active(block, f, floor)]
