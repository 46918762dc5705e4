import logging
from typing import Dict, Optional, Tuple

import pygame

from ..config import TILE_KIND_COLORS
from ..map.floor_map import FloorMap
from ..map.tile import Tile, TileKind
from .texture_registry import TextureRegistry

logger = logging.getLogger(__name__)


class FloorRenderer:
    """Draws the visible part of a floor map."""

    def __init__(self, textures: TextureRegistry):
        self.textures = textures
        # Scaled surfaces keyed by (texture index or tile kind, screen size)
        self.zoom_cache: Dict[Tuple[object, int], pygame.Surface] = {}

    @staticmethod
    def visible_bounds(camera_offset: Tuple[float, float], screen_size: Tuple[int, int],
                       zoom: float = 1.0) -> pygame.Rect:
        """Returns the world rectangle seen by a camera at camera_offset."""
        cam_x, cam_y = camera_offset
        screen_w, screen_h = screen_size
        return pygame.Rect(
            int(cam_x),
            int(cam_y),
            int(screen_w / zoom),
            int(screen_h / zoom),
        )

    def render(self, surface: pygame.Surface, floor_map: FloorMap,
               camera_offset: Tuple[float, float] = (0, 0), zoom: float = 1.0) -> int:
        """
        Render every tile of floor_map that can be seen through the camera.

        camera_offset: (camera_x, camera_y) in WORLD coordinates.
        zoom: current zoom factor.

        Returns the number of tiles drawn.
        """
        bounds = self.visible_bounds(camera_offset, surface.get_size(), zoom)
        screen_size = max(1, int(floor_map.tile_size * zoom))

        drawn = 0
        for (world_x, world_y), _pos, tile in floor_map.tiles_within(bounds):
            tile_surface = self._tile_surface(tile, screen_size)
            if tile_surface is None:
                continue
            screen_x = int((world_x - camera_offset[0]) * zoom)
            screen_y = int((world_y - camera_offset[1]) * zoom)
            surface.blit(tile_surface, (screen_x, screen_y))
            drawn += 1
        return drawn

    def _tile_surface(self, tile: Tile, screen_size: int) -> Optional[pygame.Surface]:
        """Get the surface for a tile at the given screen size, or None if nothing is drawn."""
        if tile.kind == TileKind.EMPTY:
            return None

        if tile.texture_id is not None:
            cache_key = (tile.texture_id, screen_size)
        else:
            cache_key = (tile.kind, screen_size)
        if cache_key in self.zoom_cache:
            return self.zoom_cache[cache_key]

        if tile.texture_id is not None:
            base_surface = self.textures.get(tile.texture_id)
        else:
            base_surface = self._kind_surface(tile.kind)

        scaled_surface = pygame.transform.scale(base_surface, (screen_size, screen_size))
        self.zoom_cache[cache_key] = scaled_surface
        return scaled_surface

    def _kind_surface(self, kind: TileKind) -> pygame.Surface:
        """Create a plain surface for untextured tiles."""
        logger.debug("No texture for %s tile, using fallback color", kind.name.lower())
        size = self.textures.tile_size
        surface = pygame.Surface((size, size), pygame.SRCALPHA)
        surface.fill(TILE_KIND_COLORS[kind.name.lower()])
        return surface

    def clear_cache(self):
        """Clear all cached surfaces."""
        self.zoom_cache.clear()
        self.textures.clear_cache()
