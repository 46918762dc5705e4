from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..errors import GenerationSealedError
from .tile_rect import TileRect


@dataclass(frozen=True)
class RoomId:
    """Handle to a room of a FloorMap. The index is the room's position in the map."""
    index: int

    def __str__(self) -> str:
        return str(self.index)


class RoomType(Enum):
    """Enumeration of room kinds. Drives gameplay and rendering tint only."""
    NORMAL = "normal"
    CHALLENGE = "challenge"
    PLAYER_START = "player_start"
    TREASURE_CHAMBER = "treasure_chamber"


class Room:
    """A rectangular region of the map.

    The boundary is the bounding box of the room and may include its walls.
    Both fields can only be changed while the owning map is being generated.
    """

    def __init__(self, boundary: TileRect, room_type: RoomType = RoomType.NORMAL,
                 check_boundary: Optional[Callable[[TileRect], None]] = None):
        # Raises when a boundary does not fit on the owning map
        self._check_boundary = check_boundary
        if check_boundary is not None:
            check_boundary(boundary)
        self._boundary = boundary
        self._room_type = room_type
        self._sealed = False

    @property
    def boundary(self) -> TileRect:
        return self._boundary

    @boundary.setter
    def boundary(self, boundary: TileRect):
        self._check_mutable("boundary")
        if self._check_boundary is not None:
            self._check_boundary(boundary)
        self._boundary = boundary

    @property
    def room_type(self) -> RoomType:
        return self._room_type

    @room_type.setter
    def room_type(self, room_type: RoomType):
        self._check_mutable("room_type")
        self._room_type = room_type

    def _check_mutable(self, field_name: str):
        if self._sealed:
            raise GenerationSealedError(f"bug: cannot change Room.{field_name} after map generation")

    def _seal(self):
        self._sealed = True

    def __eq__(self, other):
        if not isinstance(other, Room):
            return NotImplemented
        return self._boundary == other._boundary and self._room_type == other._room_type

    def __repr__(self) -> str:
        return f"Room(boundary={self._boundary!r}, room_type={self._room_type})"
