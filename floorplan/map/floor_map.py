import logging
from typing import Iterator, List, Optional, Sequence, Tuple

import pygame

from .. import config
from ..errors import GenerationSealedError, InvariantError, OutOfBoundsError
from .grid import TileGrid
from .grid_size import GridSize
from .room import Room, RoomId
from .tile import Tile
from .tile_pos import TilePos
from .tile_rect import TileRect

logger = logging.getLogger(__name__)


class FloorMap:
    """The static floor plan of one level: a grid of tiles and the rooms on it.

    A map goes through two phases. During generation, rooms are added and
    tiles are carved through add_room(), room_mut(), rooms_mut() and
    grid_mut(). Once seal() is called the map is read-only and those methods
    raise GenerationSealedError.

    Rooms are stored in the order they were added and a RoomId is the index
    of a room in that order. Rooms are never removed, so ids stay valid for
    the lifetime of the map.
    """

    def __init__(self, size: GridSize, tile_size: int, debug_dump_on_seal: Optional[bool] = None):
        if tile_size <= 0:
            raise InvariantError(f"bug: tile size must be positive, got {tile_size}")
        self._grid = TileGrid(size, check_room=self._check_room_id)
        self._rooms: List[Room] = []
        self._tile_size = tile_size
        self._sealed = False
        self._debug_dump_on_seal = debug_dump_on_seal

    # --- Phase ---

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def seal(self):
        """Mark map generation as complete. The map is read-only afterwards."""
        if self._sealed:
            return
        self._sealed = True
        self._grid.seal()
        for room in self._rooms:
            room._seal()
        logger.debug("Sealed floor map: %dx%d tiles, %d rooms",
                     self._grid.rows_len, self._grid.cols_len, len(self._rooms))

        dump = self._debug_dump_on_seal
        if dump is None:
            dump = config.DEBUG_DUMP_ON_SEAL
        if dump:
            from ..debug.overlays import dump_floor_map
            logger.debug("Floor map layout:\n%s", dump_floor_map(self))

    def _check_generating(self, operation: str):
        if self._sealed:
            raise GenerationSealedError(f"bug: {operation}() is not allowed after map generation")

    # --- Rooms ---

    @property
    def tile_size(self) -> int:
        """The width and height of every tile in pixels."""
        return self._tile_size

    def level_boundary(self) -> pygame.Rect:
        """Returns the boundary of the whole map in world coordinates."""
        return self._grid.dimensions.to_rect(self._tile_size)

    def nrooms(self) -> int:
        return len(self._rooms)

    def rooms(self) -> Iterator[Tuple[RoomId, Room]]:
        """Yields (id, room) for every room in the order the rooms were added."""
        for i, room in enumerate(self._rooms):
            yield RoomId(i), room

    def room(self, room_id: RoomId) -> Room:
        self._check_room_id(room_id)
        return self._rooms[room_id.index]

    def _check_room_id(self, room_id: RoomId):
        if not 0 <= room_id.index < len(self._rooms):
            raise OutOfBoundsError(f"bug: no room with id {room_id}")

    def room_exact_area(self, room_id: RoomId) -> int:
        """Returns the number of floor tiles of the room.

        Unlike boundary.area this leaves out walls and tiles of other rooms
        that fall inside the room's bounding box.
        """
        grid = self._grid
        return sum(
            1 for pos in self.room(room_id).boundary.tile_positions()
            if grid.get(pos).is_room_floor(room_id)
        )

    def room_mut(self, room_id: RoomId) -> Room:
        """Returns the room with the given id for modification. Generation only."""
        self._check_generating("room_mut")
        return self.room(room_id)

    def rooms_mut(self) -> Iterator[Tuple[RoomId, Room]]:
        """Yields every room for modification. Generation only."""
        self._check_generating("rooms_mut")
        return self.rooms()

    def add_room(self, boundary: TileRect) -> RoomId:
        """Add a room with the given boundary and return its new id. Generation only."""
        self._check_generating("add_room")
        self._rooms.append(Room(boundary, check_boundary=self._check_boundary))
        room_id = RoomId(len(self._rooms) - 1)
        logger.debug("Added room %s at %s (%dx%d)",
                     room_id, boundary.top_left, boundary.rows, boundary.cols)
        return room_id

    def _check_boundary(self, boundary: TileRect):
        if boundary.rows == 0 or boundary.cols == 0:
            raise InvariantError(f"bug: room boundary {boundary} is empty")
        if not (self._grid.contains(boundary.top_left) and self._grid.contains(boundary.bottom_right)):
            raise OutOfBoundsError(f"bug: room boundary {boundary} does not fit on the grid")

    # --- Grid ---

    def grid(self) -> TileGrid:
        return self._grid

    def grid_mut(self) -> TileGrid:
        """Returns the grid for carving tiles. Generation only."""
        self._check_generating("grid_mut")
        return self._grid

    # --- World/tile conversions ---

    def tile_rect(self, top_left: TilePos, bottom_right: TilePos) -> pygame.Rect:
        """Returns the world rectangle covering both corner tiles and everything between them."""
        if top_left.row > bottom_right.row or top_left.col > bottom_right.col:
            raise InvariantError(
                "bug: expected top_left to be above and to the left of bottom_right")
        x1, y1 = top_left.top_left(self._tile_size)
        x2, y2 = bottom_right.bottom_right(self._tile_size)
        return pygame.Rect(x1, y1, x2 - x1, y2 - y1)

    def world_to_tile_pos(self, point: Sequence[float]) -> TilePos:
        """Finds the tile that contains the given point in world coordinates.

        Raises OutOfBoundsError if the point is not on the grid.
        """
        x, y = point[0], point[1]
        if x < 0 or y < 0:
            raise OutOfBoundsError(f"bug: point ({x}, {y}) was not on the grid")

        row = int(y) // self._tile_size
        col = int(x) // self._tile_size
        if row >= self._grid.rows_len or col >= self._grid.cols_len:
            raise OutOfBoundsError(f"bug: point ({x}, {y}) was not on the grid")

        return TilePos(row, col)

    def grid_area_within(self, bounds: pygame.Rect) -> Tuple[TilePos, GridSize]:
        """Returns the top-left tile and size of the tile area covering bounds.

        bounds may start at negative coordinates or reach past the edge of the
        map. The result is always clamped to the grid and is at least 1x1. It
        may cover more than bounds, never less of the part that is on the map.
        """
        rows_len = self._grid.rows_len
        cols_len = self._grid.cols_len
        if rows_len == 0 or cols_len == 0:
            raise InvariantError("bug: cannot look up tiles on an empty grid")

        # The top left of the map is (0, 0), so there are no tiles to find
        # at negative coordinates.
        x = max(bounds.x, 0)
        y = max(bounds.y, 0)
        width = max(bounds.width, 0)
        height = max(bounds.height, 0)

        def clamp_row(row):
            return min(max(row, 0), rows_len - 1)

        def clamp_col(col):
            return min(max(col, 0), cols_len - 1)

        start_row = clamp_row(y // self._tile_size)
        start_col = clamp_col(x // self._tile_size)

        end_row = clamp_row((y + height) // self._tile_size)
        end_col = clamp_col((x + width) // self._tile_size)

        return (
            TilePos(start_row, start_col),
            GridSize(rows=end_row - start_row + 1, cols=end_col - start_col + 1),
        )

    def tiles_within(self, bounds: pygame.Rect) -> Iterator[Tuple[Tuple[int, int], TilePos, Tile]]:
        """Yields (world top-left, position, tile) for the tiles within or around bounds."""
        pos, size = self.grid_area_within(bounds)
        grid = self._grid
        for tile_pos in grid.tile_positions_within(pos, size):
            yield tile_pos.top_left(self._tile_size), tile_pos, grid.get(tile_pos)

    def __eq__(self, other):
        if not isinstance(other, FloorMap):
            return NotImplemented
        return (self._tile_size == other._tile_size
                and self._rooms == other._rooms
                and self._grid == other._grid)

    def __repr__(self) -> str:
        return (f"FloorMap(rows={self._grid.rows_len}, cols={self._grid.cols_len}, "
                f"rooms={len(self._rooms)}, tile_size={self._tile_size})")
