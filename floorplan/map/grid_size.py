from dataclasses import dataclass

import pygame

from ..errors import InvariantError


@dataclass(frozen=True)
class GridSize:
    """Dimensions of a rectangular area of tiles."""
    rows: int
    cols: int

    def __post_init__(self):
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvariantError(f"bug: GridSize.{name} must be a non-negative int, got {value!r}")

    @property
    def area(self) -> int:
        return self.rows * self.cols

    def to_rect(self, tile_size: int) -> pygame.Rect:
        """Returns the pixel extent of this area when placed at the origin."""
        return pygame.Rect(0, 0, self.cols * tile_size, self.rows * tile_size)
