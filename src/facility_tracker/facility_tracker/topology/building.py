"""Default building and task catalog for the complex."""

from __future__ import annotations

from ..core.enums import TaskCategory, TaskScope
from .catalog import TaskCatalog, TaskDefinition
from .model import Block, BuildingTopology


def _fixed(*letters: str):
    flats = tuple(letters)
    return lambda floor: flats


def _block_one_flats(floor: int):
    # Upper floors of block 1 are duplexes.
    return ("A", "B", "C", "D", "E", "F") if floor <= 8 else ("A", "B", "C")


DEFAULT_TOPOLOGY = BuildingTopology(
    blocks=(
        Block(1, "Block 1", _block_one_flats),
        Block(2, "Block 2", _fixed("A", "B", "C", "D")),
        Block(3, "Block 3", _fixed("A", "B", "C", "D", "E")),
        Block(4, "Block 4", _fixed("A", "B", "C", "D", "E")),
        Block(5, "Block 5", _fixed("A", "B", "C", "D", "E")),
        Block(6, "Block 6", _fixed("A", "B", "C", "D")),
    )
)

ROUTINE_HOUSEKEEPING = "Routine Housekeeping"
BROOMING = "Brooming"
MOPPING = "Mopping"
STAIRCASE = "Staircase Cleaning"
GLASS_ENTRANCE = "glass-entrance"
DRIVEWAY = "driveway-broom"

DEFAULT_CATALOG = TaskCatalog(
    definitions=(
        TaskDefinition(ROUTINE_HOUSEKEEPING, "Routine Housekeeping", "trash", TaskScope.PER_FLAT, TaskCategory.GARBAGE),
        TaskDefinition(BROOMING, "Lobby Brooming", "broom", TaskScope.PER_FLOOR, TaskCategory.BROOMING),
        TaskDefinition(MOPPING, "Floor Mopping", "droplets", TaskScope.PER_FLOOR, TaskCategory.MOPPING),
        TaskDefinition(STAIRCASE, "Staircase Cleaning", "stairs", TaskScope.PER_FLOOR, TaskCategory.STAIRCASE),
        TaskDefinition(GLASS_ENTRANCE, "Entrance Glass Cleaning", "sparkles", TaskScope.PER_BLOCK, TaskCategory.GLASS),
        TaskDefinition(
            DRIVEWAY,
            "Driveway Cleaning",
            "car",
            TaskScope.COMMON,
            TaskCategory.DRIVEWAY,
            area="Society Driveway",
        ),
    )
)
