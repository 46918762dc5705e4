"""Tile coordinates and their conversion to world (pixel) space.

Coordinate System:
- Origin: top-left tile is (row=0, col=0), top-left pixel is (0, 0).
- Columns grow left to right (x), rows grow top to bottom (y).
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import pygame

from .walls import WallSide

# Row/column step for each side of a tile
SIDE_OFFSETS = {
    WallSide.NORTH: (-1, 0),
    WallSide.EAST: (0, 1),
    WallSide.SOUTH: (1, 0),
    WallSide.WEST: (0, -1),
}


@dataclass(frozen=True)
class TilePos:
    """Zero-based position of a tile on a grid."""
    row: int
    col: int

    def top_left(self, tile_size: int) -> Tuple[int, int]:
        """Returns the world coordinates of the top-left corner of this tile."""
        return (self.col * tile_size, self.row * tile_size)

    def bottom_right(self, tile_size: int) -> Tuple[int, int]:
        """Returns the world coordinates just past the bottom-right corner of this tile.

        A rectangle from `top_left()` of one tile to `bottom_right()` of another
        covers both tiles completely.
        """
        return ((self.col + 1) * tile_size, (self.row + 1) * tile_size)

    def center(self, tile_size: int) -> Tuple[int, int]:
        x, y = self.top_left(tile_size)
        return (x + tile_size // 2, y + tile_size // 2)

    def tile_rect(self, tile_size: int) -> pygame.Rect:
        """Returns the world rectangle covered by this tile."""
        x, y = self.top_left(tile_size)
        return pygame.Rect(x, y, tile_size, tile_size)

    def difference(self, other: "TilePos") -> Tuple[int, int]:
        """Returns (drow, dcol) needed to get from other to this position."""
        return (self.row - other.row, self.col - other.col)

    def neighbour(self, side: WallSide, rows: int, cols: int) -> Optional["TilePos"]:
        """Returns the adjacent position on the given side, or None if it is off the grid."""
        drow, dcol = SIDE_OFFSETS[side]
        row = self.row + drow
        col = self.col + dcol
        if 0 <= row < rows and 0 <= col < cols:
            return TilePos(row, col)
        return None

    def adjacent_positions(self, rows: int, cols: int) -> Iterator[Tuple[WallSide, "TilePos"]]:
        """Yields (side, position) for every orthogonal neighbour inside a rows x cols grid."""
        for side in WallSide:
            pos = self.neighbour(side, rows, cols)
            if pos is not None:
                yield side, pos

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
