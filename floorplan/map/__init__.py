from .grid_size import GridSize
from .tile_pos import TilePos
from .tile_rect import TileRect
from .walls import TileWalls, WallSide
from .room import Room, RoomId, RoomType
from .tile import (
    Chest,
    EnemySpawn,
    InRoom,
    Item,
    Passageway,
    Potion,
    RoomKey,
    Tile,
    TileKind,
    TileObject,
    TileType,
    ToNextLevel,
    ToPrevLevel,
    TreasureKey,
    tile_object_symbol,
)
from .grid import TileGrid
from .floor_map import FloorMap
