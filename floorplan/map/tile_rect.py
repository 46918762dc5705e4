from dataclasses import dataclass
from typing import Iterator

import pygame

from ..errors import InvariantError
from .grid_size import GridSize
from .tile_pos import TilePos


@dataclass(frozen=True)
class TileRect:
    """A rectangular area of tiles, given by its top-left tile and its size."""
    top_left: TilePos
    size: GridSize

    @classmethod
    def from_corners(cls, top_left: TilePos, bottom_right: TilePos) -> "TileRect":
        """Create a rectangle that includes both corner tiles."""
        if top_left.row > bottom_right.row or top_left.col > bottom_right.col:
            raise InvariantError(
                f"bug: expected {top_left} to be above and to the left of {bottom_right}")
        return cls(top_left, GridSize(
            rows=bottom_right.row - top_left.row + 1,
            cols=bottom_right.col - top_left.col + 1,
        ))

    @property
    def rows(self) -> int:
        return self.size.rows

    @property
    def cols(self) -> int:
        return self.size.cols

    @property
    def area(self) -> int:
        return self.size.area

    @property
    def bottom_right(self) -> TilePos:
        """The last tile inside the rectangle (inclusive).

        Only meaningful for a non-empty rectangle.
        """
        return TilePos(self.top_left.row + self.rows - 1, self.top_left.col + self.cols - 1)

    def contains(self, pos: TilePos) -> bool:
        return (self.top_left.row <= pos.row < self.top_left.row + self.rows
                and self.top_left.col <= pos.col < self.top_left.col + self.cols)

    def intersects(self, other: "TileRect") -> bool:
        """Returns True if the two rectangles share at least one tile."""
        return (self.top_left.row < other.top_left.row + other.rows
                and other.top_left.row < self.top_left.row + self.rows
                and self.top_left.col < other.top_left.col + other.cols
                and other.top_left.col < self.top_left.col + self.cols)

    def tile_positions(self) -> Iterator[TilePos]:
        """Yields every tile position in the rectangle in row-major order."""
        for row in range(self.top_left.row, self.top_left.row + self.rows):
            for col in range(self.top_left.col, self.top_left.col + self.cols):
                yield TilePos(row, col)

    def edge_positions(self) -> Iterator[TilePos]:
        """Yields the tiles on the outer ring of the rectangle in row-major order."""
        last_row = self.top_left.row + self.rows - 1
        last_col = self.top_left.col + self.cols - 1
        for pos in self.tile_positions():
            if pos.row in (self.top_left.row, last_row) or pos.col in (self.top_left.col, last_col):
                yield pos

    def to_rect(self, tile_size: int) -> pygame.Rect:
        """Returns the world rectangle covered by every tile in this rectangle."""
        x, y = self.top_left.top_left(tile_size)
        return pygame.Rect(x, y, self.cols * tile_size, self.rows * tile_size)
