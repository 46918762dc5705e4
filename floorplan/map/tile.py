from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Optional, Union

from ..errors import InvariantError
from ..tiles.texture_registry import TextureId
from .room import RoomId
from .walls import TileWalls


# --- Chest contents ---

@dataclass(frozen=True)
class TreasureKey:
    """Opens the treasure chamber of a level."""


@dataclass(frozen=True)
class RoomKey:
    """Opens a locked room."""


@dataclass(frozen=True)
class Potion:
    strength: int


Item = Union[TreasureKey, RoomKey, Potion]


# --- Objects placed on a tile ---

@dataclass(frozen=True)
class ToNextLevel:
    """Stepping on this tile transports you to the next level.

    gate_id is shared with the ToPrevLevel tile on the next level that this
    gate connects to.
    """
    gate_id: int


@dataclass(frozen=True)
class ToPrevLevel:
    """Stepping on this tile transports you to the previous level.

    gate_id is shared with the ToNextLevel tile on the previous level.
    """
    gate_id: int


@dataclass(frozen=True)
class EnemySpawn:
    """A point where an enemy *may* spawn.

    probability: 1.0 means an enemy will definitely spawn, 0.0 means it never will.
    """
    probability: float

    def __post_init__(self):
        if not 0.0 <= self.probability <= 1.0:
            raise InvariantError(f"bug: spawn probability must be in [0.0, 1.0], got {self.probability}")


@dataclass(frozen=True)
class Chest:
    item: Item


TileObject = Union[ToNextLevel, ToPrevLevel, EnemySpawn, Chest]


def tile_object_symbol(obj: TileObject) -> str:
    """Returns the single character used to show an object in text dumps."""
    if isinstance(obj, ToNextLevel):
        return "↓"
    if isinstance(obj, ToPrevLevel):
        return "↑"
    if isinstance(obj, EnemySpawn):
        return "!"
    if isinstance(obj, Chest):
        return "$"
    raise TypeError(f"not a tile object: {obj!r}")


# --- Tile classification ---

@dataclass(frozen=True)
class Passageway:
    """Tiles between rooms that belong to none of them."""


@dataclass(frozen=True)
class InRoom:
    """Tiles that are part of the given room."""
    room_id: RoomId


TileType = Union[Passageway, InRoom]


class TileKind(IntEnum):
    EMPTY = 0
    WALL = 1
    FLOOR = 2


@dataclass(frozen=True)
class Tile:
    """A single cell of the floor map.

    Tiles are values: edit a cell by building a new Tile and storing it with
    TileGrid.set().
    """
    kind: TileKind = TileKind.EMPTY
    room_id: Optional[RoomId] = None
    object: Optional[TileObject] = None
    walls: TileWalls = field(default_factory=TileWalls)
    texture_id: Optional[TextureId] = None

    def __post_init__(self):
        if self.kind == TileKind.FLOOR and self.room_id is None:
            raise InvariantError("bug: a floor tile must belong to a room")
        if self.kind == TileKind.EMPTY and (
                self.room_id is not None or self.object is not None
                or not self.walls.is_empty() or self.texture_id is not None):
            raise InvariantError("bug: an empty tile cannot carry a room, object, walls or texture")

    @classmethod
    def empty(cls) -> "Tile":
        return cls()

    @classmethod
    def wall(cls, room_id: Optional[RoomId] = None) -> "Tile":
        return cls(kind=TileKind.WALL, room_id=room_id)

    @classmethod
    def floor(cls, room_id: RoomId) -> "Tile":
        return cls(kind=TileKind.FLOOR, room_id=room_id)

    @classmethod
    def with_type(cls, ttype: TileType) -> "Tile":
        """Create a tile for the given classification.

        Room tiles become floor in that room. Passageway tiles become the
        walls lining a passage, which belong to no room.
        """
        if isinstance(ttype, InRoom):
            return cls.floor(ttype.room_id)
        if isinstance(ttype, Passageway):
            return cls.wall()
        raise TypeError(f"not a tile type: {ttype!r}")

    @property
    def tile_type(self) -> Optional[TileType]:
        """The classification of this tile, or None for empty tiles."""
        if self.kind == TileKind.EMPTY:
            return None
        if self.room_id is None:
            return Passageway()
        return InRoom(self.room_id)

    @property
    def is_empty(self) -> bool:
        return self.kind == TileKind.EMPTY

    @property
    def is_wall(self) -> bool:
        return self.kind == TileKind.WALL

    @property
    def is_floor(self) -> bool:
        return self.kind == TileKind.FLOOR

    def is_room_floor(self, room_id: RoomId) -> bool:
        """Returns True if this tile is floor that belongs to the given room."""
        return self.kind == TileKind.FLOOR and self.room_id == room_id

    def has_object(self) -> bool:
        return self.object is not None

    def with_object(self, obj: TileObject) -> "Tile":
        return replace(self, object=obj)

    def without_object(self) -> "Tile":
        return replace(self, object=None)

    def with_walls(self, walls: TileWalls) -> "Tile":
        return replace(self, walls=walls)

    def with_texture(self, texture_id: Optional[TextureId]) -> "Tile":
        return replace(self, texture_id=texture_id)
