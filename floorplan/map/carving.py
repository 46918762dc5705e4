"""Helpers for generation code that carves rooms, passages and gates into a FloorMap.

Everything here goes through the map's generation-only hooks, so calling it
on a sealed map raises GenerationSealedError.
"""

import logging

from ..errors import InvariantError, OutOfBoundsError
from .floor_map import FloorMap
from .room import RoomId, RoomType
from .tile import Passageway, Tile, ToNextLevel, ToPrevLevel
from .tile_pos import TilePos
from .tile_rect import TileRect
from .walls import TileWalls

logger = logging.getLogger(__name__)


def carve_room(floor_map: FloorMap, boundary: TileRect, room_type: RoomType = RoomType.NORMAL) -> RoomId:
    """
    Add a room and carve it into the grid.

    The outer ring of the boundary becomes walls of the room and everything
    inside becomes floor. Floor tiles next to the ring record which of their
    sides face a wall.

    Args:
        floor_map: Map that is still being generated
        boundary: Bounding box of the room, walls included
        room_type: Kind of room

    Returns:
        The id of the new room
    """
    room_id = floor_map.add_room(boundary)
    floor_map.room_mut(room_id).room_type = room_type

    grid = floor_map.grid_mut()
    edge = set(boundary.edge_positions())
    for pos in boundary.tile_positions():
        if pos in edge:
            grid.set(pos, Tile.wall(room_id))
            continue

        walls = TileWalls()
        for side, neighbour in pos.adjacent_positions(grid.rows_len, grid.cols_len):
            if neighbour in edge:
                walls = walls.with_side(side)
        grid.set(pos, Tile.floor(room_id).with_walls(walls))

    logger.debug("Carved %s room %s: %d floor tiles",
                 room_type.value, room_id, floor_map.room_exact_area(room_id))
    return room_id


def carve_passage(floor_map: FloorMap, start: TilePos, end: TilePos, room_id: RoomId) -> int:
    """
    Carve an L-shaped passage from start to end: along start's row, then along end's column.

    Passage floor is attributed to room_id, usually the room the passage
    leaves from. Tiles that are already floor are left alone. Empty tiles
    beside the passage become walls that belong to no room.

    Returns:
        Number of tiles turned into floor
    """
    floor_map.room(room_id)  # raises for unknown ids
    grid = floor_map.grid_mut()
    # The path stays inside the box spanned by start and end
    for pos in (start, end):
        if not grid.contains(pos):
            raise OutOfBoundsError(f"bug: passage end {pos} is not on the grid")

    path = []
    step = 1 if end.col >= start.col else -1
    for col in range(start.col, end.col + step, step):
        path.append(TilePos(start.row, col))
    step = 1 if end.row >= start.row else -1
    for row in range(start.row + step, end.row + step, step):
        path.append(TilePos(row, end.col))

    carved = 0
    for pos in path:
        if not grid.get(pos).is_floor:
            grid.set(pos, Tile.floor(room_id))
            carved += 1

    for pos in path:
        for _, neighbour in pos.adjacent_positions(grid.rows_len, grid.cols_len):
            if grid.get(neighbour).is_empty:
                grid.set(neighbour, Tile.with_type(Passageway()))

    return carved


def place_gate_pair(upper: FloorMap, lower: FloorMap, gate_id: int, down_pos: TilePos, up_pos: TilePos):
    """
    Link two adjacent levels with a pair of gates sharing gate_id.

    down_pos on upper gets ToNextLevel and up_pos on lower gets ToPrevLevel.
    Both positions are checked before either map is changed.
    """
    upper_grid = upper.grid_mut()
    lower_grid = lower.grid_mut()
    for grid, pos in ((upper_grid, down_pos), (lower_grid, up_pos)):
        if not grid.contains(pos):
            raise OutOfBoundsError(f"bug: gate position {pos} is not on the grid")
        if grid.get(pos).is_empty:
            raise InvariantError(f"bug: cannot place a gate on the empty tile at {pos}")

    upper_grid.place_object(down_pos, ToNextLevel(gate_id))
    lower_grid.place_object(up_pos, ToPrevLevel(gate_id))
