import logging

import pygame
import pytest

from floorplan.errors import GenerationSealedError, InvariantError, OutOfBoundsError
from floorplan.map.floor_map import FloorMap
from floorplan.map.grid_size import GridSize
from floorplan.map.room import RoomId, RoomType
from floorplan.map.tile import Tile
from floorplan.map.tile_pos import TilePos
from floorplan.map.tile_rect import TileRect


@pytest.fixture
def floor_map():
    return FloorMap(GridSize(rows=10, cols=10), tile_size=16)


@pytest.fixture
def small_map():
    return FloorMap(GridSize(rows=5, cols=5), tile_size=10)


def carve_floor(floor_map, room_id, skip=()):
    grid = floor_map.grid_mut()
    for pos in floor_map.room(room_id).boundary.tile_positions():
        if pos not in skip:
            grid.set(pos, Tile.floor(room_id))


# --- Construction ---

def test_new_map(floor_map):
    assert floor_map.tile_size == 16
    assert floor_map.nrooms() == 0
    assert list(floor_map.rooms()) == []
    assert floor_map.grid().rows_len == 10
    assert floor_map.level_boundary() == pygame.Rect(0, 0, 160, 160)
    assert not floor_map.is_sealed


def test_tile_size_must_be_positive():
    with pytest.raises(InvariantError):
        FloorMap(GridSize(rows=2, cols=2), tile_size=0)


# --- Rooms ---

def test_add_room_issues_sequential_ids(floor_map):
    boundaries = [
        TileRect.from_corners(TilePos(0, 0), TilePos(2, 2)),
        TileRect.from_corners(TilePos(5, 5), TilePos(9, 9)),
        TileRect.from_corners(TilePos(0, 6), TilePos(3, 9)),
    ]
    ids = [floor_map.add_room(b) for b in boundaries]
    assert ids == [RoomId(0), RoomId(1), RoomId(2)]
    assert floor_map.nrooms() == 3
    for room_id, boundary in zip(ids, boundaries):
        assert floor_map.room(room_id).boundary == boundary
        assert floor_map.room(room_id).room_type == RoomType.NORMAL
    assert [room_id for room_id, _ in floor_map.rooms()] == ids


def test_room_lookup_is_stable_until_mutated(floor_map):
    first = floor_map.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(1, 1)))
    floor_map.add_room(TileRect.from_corners(TilePos(3, 3), TilePos(4, 4)))
    assert floor_map.room(first).boundary == TileRect.from_corners(TilePos(0, 0), TilePos(1, 1))

    floor_map.room_mut(first).room_type = RoomType.CHALLENGE
    assert floor_map.room(first).room_type == RoomType.CHALLENGE


def test_rooms_mut_iterates_every_room(floor_map):
    floor_map.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(1, 1)))
    floor_map.add_room(TileRect.from_corners(TilePos(3, 3), TilePos(4, 4)))
    for _, room in floor_map.rooms_mut():
        room.room_type = RoomType.TREASURE_CHAMBER
    assert all(room.room_type == RoomType.TREASURE_CHAMBER for _, room in floor_map.rooms())


def test_unknown_room_id_fails(floor_map):
    with pytest.raises(OutOfBoundsError):
        floor_map.room(RoomId(0))


def test_room_boundary_must_fit_on_grid(floor_map):
    with pytest.raises(OutOfBoundsError):
        floor_map.add_room(TileRect.from_corners(TilePos(8, 8), TilePos(10, 10)))


def test_room_boundary_can_change_during_generation(small_map):
    room_id = small_map.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(1, 1)))
    moved = TileRect.from_corners(TilePos(2, 2), TilePos(4, 4))
    small_map.room_mut(room_id).boundary = moved
    assert small_map.room(room_id).boundary == moved
    assert small_map.room_exact_area(room_id) == 0


def test_room_boundary_change_must_fit_on_grid(small_map):
    original = TileRect.from_corners(TilePos(0, 0), TilePos(2, 2))
    room_id = small_map.add_room(original)
    with pytest.raises(OutOfBoundsError):
        small_map.room_mut(room_id).boundary = TileRect.from_corners(TilePos(3, 3), TilePos(7, 7))
    assert small_map.room(room_id).boundary == original
    assert small_map.room_exact_area(room_id) == 0


def test_room_boundary_change_after_seal_fails(small_map):
    original = TileRect.from_corners(TilePos(0, 0), TilePos(2, 2))
    room_id = small_map.add_room(original)
    small_map.seal()
    with pytest.raises(GenerationSealedError):
        small_map.room(room_id).boundary = TileRect.from_corners(TilePos(1, 1), TilePos(3, 3))
    assert small_map.room(room_id).boundary == original


def test_grid_rejects_tiles_of_unknown_rooms(floor_map):
    with pytest.raises(OutOfBoundsError):
        floor_map.grid_mut().set(TilePos(0, 0), Tile.floor(RoomId(3)))
    with pytest.raises(OutOfBoundsError):
        floor_map.grid_mut().set(TilePos(0, 0), Tile.wall(RoomId(0)))
    assert floor_map.grid().get(TilePos(0, 0)).is_empty

    room_id = floor_map.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(1, 1)))
    floor_map.grid_mut().set(TilePos(0, 0), Tile.floor(room_id))
    assert floor_map.grid().get(TilePos(0, 0)).is_room_floor(room_id)


def test_room_exact_area_skips_non_floor_tiles(floor_map):
    room_id = floor_map.add_room(TileRect.from_corners(TilePos(2, 2), TilePos(4, 4)))
    corner = TilePos(4, 4)
    carve_floor(floor_map, room_id, skip={corner})
    floor_map.grid_mut().set(corner, Tile.wall(room_id))

    assert floor_map.room_exact_area(room_id) == 8
    assert floor_map.tile_rect(TilePos(2, 2), TilePos(4, 4)) == pygame.Rect(32, 32, 48, 48)


def test_room_exact_area_ignores_other_rooms_floor(floor_map):
    big = floor_map.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(3, 3)))
    inner = floor_map.add_room(TileRect.from_corners(TilePos(1, 1), TilePos(2, 2)))
    carve_floor(floor_map, big)
    carve_floor(floor_map, inner)

    assert floor_map.room_exact_area(inner) == 4
    assert floor_map.room_exact_area(big) == 12
    for room_id, room in floor_map.rooms():
        assert floor_map.room_exact_area(room_id) <= room.boundary.area


def test_room_exact_area_equals_boundary_when_all_floor(floor_map):
    room_id = floor_map.add_room(TileRect.from_corners(TilePos(5, 5), TilePos(7, 8)))
    carve_floor(floor_map, room_id)
    assert floor_map.room_exact_area(room_id) == floor_map.room(room_id).boundary.area == 12


# --- Sealing ---

def test_sealed_map_rejects_generation_hooks(floor_map):
    room_id = floor_map.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(1, 1)))
    floor_map.seal()
    assert floor_map.is_sealed

    with pytest.raises(GenerationSealedError):
        floor_map.add_room(TileRect.from_corners(TilePos(3, 3), TilePos(4, 4)))
    with pytest.raises(GenerationSealedError):
        floor_map.room_mut(room_id)
    with pytest.raises(GenerationSealedError):
        floor_map.rooms_mut()
    with pytest.raises(GenerationSealedError):
        floor_map.grid_mut()
    with pytest.raises(GenerationSealedError):
        floor_map.room(room_id).room_type = RoomType.CHALLENGE
    with pytest.raises(GenerationSealedError):
        floor_map.grid().set(TilePos(0, 0), Tile.wall())

    # Queries keep working
    assert floor_map.room(room_id).room_type == RoomType.NORMAL
    assert floor_map.nrooms() == 1


def test_seal_is_idempotent(floor_map):
    floor_map.seal()
    floor_map.seal()
    assert floor_map.is_sealed


def test_seal_can_log_a_dump(caplog):
    floor_map = FloorMap(GridSize(rows=2, cols=3), tile_size=8, debug_dump_on_seal=True)
    floor_map.grid_mut().set(TilePos(0, 0), Tile.wall())
    with caplog.at_level(logging.DEBUG, logger="floorplan.map.floor_map"):
        floor_map.seal()
    assert "Floor map layout" in caplog.text
    assert "#" in caplog.text


# --- Coordinate conversion ---

def test_tile_rect_inverted_corners_fail(floor_map):
    with pytest.raises(InvariantError):
        floor_map.tile_rect(TilePos(4, 4), TilePos(2, 2))
    with pytest.raises(InvariantError):
        floor_map.tile_rect(TilePos(2, 4), TilePos(4, 2))


def test_tile_rect_single_tile(floor_map):
    assert floor_map.tile_rect(TilePos(1, 3), TilePos(1, 3)) == pygame.Rect(48, 16, 16, 16)


def test_world_to_tile_pos_round_trips(floor_map):
    grid = floor_map.grid()
    for row in range(grid.rows_len):
        for col in range(grid.cols_len):
            pos = TilePos(row, col)
            grid.get(pos)
            assert floor_map.world_to_tile_pos(pos.top_left(floor_map.tile_size)) == pos


def test_world_to_tile_pos_inside_tile(floor_map):
    assert floor_map.world_to_tile_pos((47, 17)) == TilePos(1, 2)
    assert floor_map.world_to_tile_pos(pygame.Vector2(159.5, 0)) == TilePos(0, 9)


@pytest.mark.parametrize("point", [(-1, 0), (0, -1), (160, 0), (0, 160), (500, 500)])
def test_world_to_tile_pos_off_grid_fails(floor_map, point):
    with pytest.raises(OutOfBoundsError):
        floor_map.world_to_tile_pos(point)


# --- Area queries ---

def test_grid_area_within_negative_bounds(small_map):
    pos, size = small_map.grid_area_within(pygame.Rect(-15, -15, 10, 10))
    assert pos == TilePos(0, 0)
    assert size.rows >= 1 and size.cols >= 1


def test_grid_area_within_is_inclusive_of_far_edge(small_map):
    # 0..10 ends exactly on the boundary of tile 1, which is still included
    pos, size = small_map.grid_area_within(pygame.Rect(0, 0, 10, 10))
    assert pos == TilePos(0, 0)
    assert size == GridSize(rows=2, cols=2)


def test_grid_area_within_covers_bounds_inside_grid(small_map):
    bounds = pygame.Rect(12, 23, 17, 9)
    pos, size = small_map.grid_area_within(bounds)
    assert pos == TilePos(2, 1)
    covered = TileRect(pos, size).to_rect(small_map.tile_size)
    assert covered.contains(bounds)


@pytest.mark.parametrize("bounds", [
    pygame.Rect(-100, -100, 5, 5),
    pygame.Rect(200, 200, 30, 30),
    pygame.Rect(-20, 30, 500, 5),
    pygame.Rect(45, -45, 5, 500),
    pygame.Rect(-1000, -1000, 5000, 5000),
])
def test_grid_area_within_outside_bounds_is_clamped(small_map, bounds):
    pos, size = small_map.grid_area_within(bounds)
    assert 0 <= pos.row < 5 and 0 <= pos.col < 5
    assert size.rows >= 1 and size.cols >= 1
    assert pos.row + size.rows <= 5
    assert pos.col + size.cols <= 5


def test_grid_area_within_far_outside_gives_last_tile(small_map):
    pos, size = small_map.grid_area_within(pygame.Rect(200, 200, 30, 30))
    assert pos == TilePos(4, 4)
    assert size == GridSize(rows=1, cols=1)


@pytest.mark.parametrize("size", [GridSize(rows=0, cols=5), GridSize(rows=5, cols=0)])
def test_grid_area_within_empty_grid_fails(size):
    empty_map = FloorMap(size, tile_size=10)
    with pytest.raises(InvariantError):
        empty_map.grid_area_within(pygame.Rect(0, 0, 10, 10))


def test_tiles_within(small_map):
    small_map.grid_mut().set(TilePos(1, 2), Tile.wall())
    tiles = list(small_map.tiles_within(pygame.Rect(15, 5, 10, 10)))
    positions = [pos for _, pos, _ in tiles]
    assert positions == [TilePos(0, 1), TilePos(0, 2), TilePos(1, 1), TilePos(1, 2)]
    world, pos, tile = tiles[-1]
    assert world == (20, 10)
    assert tile.is_wall


def test_tiles_within_whole_map(small_map):
    tiles = list(small_map.tiles_within(small_map.level_boundary()))
    assert len(tiles) == 25


def test_maps_compare_by_content():
    a = FloorMap(GridSize(rows=3, cols=3), tile_size=8)
    b = FloorMap(GridSize(rows=3, cols=3), tile_size=8)
    assert a == b
    a.add_room(TileRect.from_corners(TilePos(0, 0), TilePos(1, 1)))
    assert a != b
    assert "rooms=1" in repr(a)
