"""Debug views of a floor map. Only uses the map's public queries."""

import logging
from typing import Tuple

import pygame

from ..config import ROOM_TYPE_COLORS
from ..map.floor_map import FloorMap
from ..map.room import RoomType
from ..map.tile import Tile, tile_object_symbol

logger = logging.getLogger(__name__)

ROOM_TYPE_GLYPHS = {
    RoomType.NORMAL: ".",
    RoomType.CHALLENGE: "c",
    RoomType.PLAYER_START: "s",
    RoomType.TREASURE_CHAMBER: "t",
}
WALL_GLYPH = "#"
EMPTY_GLYPH = " "


def tile_glyph(floor_map: FloorMap, tile: Tile) -> str:
    if tile.has_object():
        return tile_object_symbol(tile.object)
    if tile.is_floor:
        return ROOM_TYPE_GLYPHS[floor_map.room(tile.room_id).room_type]
    if tile.is_wall:
        return WALL_GLYPH
    return EMPTY_GLYPH


def dump_floor_map(floor_map: FloorMap) -> str:
    """Returns the map as text, one line per row of tiles."""
    lines = []
    for row in floor_map.grid().rows():
        lines.append("".join(tile_glyph(floor_map, tile) for tile in row).rstrip())
    return "\n".join(lines)


def draw_room_overlay(surface: pygame.Surface, floor_map: FloorMap,
                      camera_offset: Tuple[float, float] = (0, 0), zoom: float = 1.0,
                      opacity: float = 1.0) -> int:
    """
    Tint every visible floor tile with the color of its room type.

    Returns the number of tiles tinted.
    """
    cam_x, cam_y = camera_offset
    bounds = pygame.Rect(int(cam_x), int(cam_y),
                         int(surface.get_width() / zoom), int(surface.get_height() / zoom))
    size = max(1, int(floor_map.tile_size * zoom))
    opacity = max(0.0, min(1.0, opacity))

    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    tinted = 0
    for (wx, wy), _pos, tile in floor_map.tiles_within(bounds):
        if not tile.is_floor:
            continue
        room_type = floor_map.room(tile.room_id).room_type
        r, g, b, a = ROOM_TYPE_COLORS[room_type.value]
        sx = int((wx - cam_x) * zoom)
        sy = int((wy - cam_y) * zoom)
        overlay.fill((r, g, b, int(a * opacity)), pygame.Rect(sx, sy, size, size))
        tinted += 1

    surface.blit(overlay, (0, 0))
    logger.debug("Room overlay tinted %d tiles", tinted)
    return tinted
