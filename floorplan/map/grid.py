from typing import Callable, Iterator, List, Optional, Tuple

from ..errors import GenerationSealedError, OutOfBoundsError
from .grid_size import GridSize
from .room import RoomId
from .tile import Tile, TileObject
from .tile_pos import TilePos


class TileGrid:
    """A fixed-size, row-major grid of tiles. Every cell starts out empty.

    check_room, when given, is called with the room id of every tile written
    with set() and raises for ids that do not name a room.
    """

    def __init__(self, size: GridSize, check_room: Optional[Callable[[RoomId], None]] = None):
        self._size = size
        self._check_room = check_room
        self._tiles: List[List[Tile]] = [
            [Tile.empty() for _ in range(size.cols)]
            for _ in range(size.rows)
        ]
        self._sealed = False

    @property
    def rows_len(self) -> int:
        return self._size.rows

    @property
    def cols_len(self) -> int:
        return self._size.cols

    @property
    def dimensions(self) -> GridSize:
        return self._size

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self):
        """Make the grid read-only. There is no way back."""
        self._sealed = True

    def contains(self, pos: TilePos) -> bool:
        return 0 <= pos.row < self.rows_len and 0 <= pos.col < self.cols_len

    def _check_bounds(self, pos: TilePos):
        if not self.contains(pos):
            raise OutOfBoundsError(
                f"bug: tile position {pos} is outside of the {self.rows_len}x{self.cols_len} grid")

    def get(self, pos: TilePos) -> Tile:
        self._check_bounds(pos)
        return self._tiles[pos.row][pos.col]

    def set(self, pos: TilePos, tile: Tile):
        if self._sealed:
            raise GenerationSealedError("bug: cannot modify the tile grid after map generation")
        self._check_bounds(pos)
        if self._check_room is not None and tile.room_id is not None:
            self._check_room(tile.room_id)
        self._tiles[pos.row][pos.col] = tile

    def place_object(self, pos: TilePos, obj: TileObject):
        self.set(pos, self.get(pos).with_object(obj))

    def rows(self) -> Iterator[Tuple[Tile, ...]]:
        """Yields each row of tiles from top to bottom."""
        for row in self._tiles:
            yield tuple(row)

    def tile_positions_within(self, origin: TilePos, size: GridSize) -> Iterator[TilePos]:
        """Yields every position of the area starting at origin, in row-major order.

        The area is not clamped to the grid. Callers must make sure it fits.
        """
        for row in range(origin.row, origin.row + size.rows):
            for col in range(origin.col, origin.col + size.cols):
                yield TilePos(row, col)

    def __eq__(self, other):
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self._size == other._size and self._tiles == other._tiles

    def __repr__(self) -> str:
        return f"TileGrid(rows={self.rows_len}, cols={self.cols_len})"
