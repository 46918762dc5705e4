"""Tile-based dungeon floor maps: a grid of typed tiles organized into rooms."""

from .errors import (
    FloorMapError,
    GenerationSealedError,
    InvariantError,
    OutOfBoundsError,
    TextureNotFoundError,
)
from .map import (
    FloorMap,
    GridSize,
    Room,
    RoomId,
    RoomType,
    Tile,
    TileGrid,
    TileKind,
    TilePos,
    TileRect,
)
from .tiles import TextureId, TextureRegistry

__version__ = "0.1.0"
