from dataclasses import dataclass, replace
from enum import Enum


class WallSide(Enum):
    """The four sides of a tile that can border a wall."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


@dataclass(frozen=True)
class TileWalls:
    """Which sides of a tile are adjacent to a wall.

    Used by the renderer to pick wall edge sprites, so a floor tile along the
    top of a room has `north=True`.
    """
    north: bool = False
    east: bool = False
    south: bool = False
    west: bool = False

    def has(self, side: WallSide) -> bool:
        return getattr(self, side.value)

    def with_side(self, side: WallSide) -> "TileWalls":
        return replace(self, **{side.value: True})

    def without_side(self, side: WallSide) -> "TileWalls":
        return replace(self, **{side.value: False})

    def is_empty(self) -> bool:
        return not (self.north or self.east or self.south or self.west)
