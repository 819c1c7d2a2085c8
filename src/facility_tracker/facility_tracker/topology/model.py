from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..core.constants import FLOORS
from ..core.exceptions import ValidationError


def flat_key(block: int, flat: str, floor: int) -> str:
    """Composite key used by the billing collaborator (no delimiter)."""
    return f"{block}{flat}{floor}"


@dataclass(frozen=True)
class Block:
    block_id: int
    label: str
    flats_for_floor: Callable[[int], Sequence[str]] = field(compare=False)

    def flats(self, floor: int) -> list[str]:
        return list(self.flats_for_floor(floor))


@dataclass(frozen=True)
class BuildingTopology:
    """Blocks -> floors -> flats. Immutable, built once per process."""

    blocks: tuple[Block, ...]
    floors: tuple[int, ...] = FLOORS

    def __post_init__(self):
        seen_blocks: set[int] = set()
        for block in self.blocks:
            if block.block_id in seen_blocks:
                raise ValidationError(f"Duplicate block id {block.block_id}")
            seen_blocks.add(block.block_id)
            for floor in self.floors:
                flats = block.flats(floor)
                if len(set(flats)) != len(flats):
                    raise ValidationError(f"Duplicate flat label in block {block.block_id}, floor {floor}")

    def get_block(self, block_id: int) -> Optional[Block]:
        for block in self.blocks:
            if block.block_id == block_id:
                return block
        return None

    def iter_floors(self):
        """Yield ``(block, floor, flats)`` for every floor of every block."""
        for block in self.blocks:
            for floor in self.floors:
                yield block, floor, block.flats(floor)
