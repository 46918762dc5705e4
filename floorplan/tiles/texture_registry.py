import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import pygame

from ..errors import TextureNotFoundError

logger = logging.getLogger(__name__)

# Color of the placeholder surface used when a sprite cannot be loaded
MISSING_TEXTURE_COLOR = (255, 0, 255)


@dataclass(frozen=True)
class TextureId:
    """Opaque handle to a texture. Only the registry that issued it can resolve it."""
    index: int


class TextureRegistry:
    """Registry for storing and managing tile textures.

    Sprites given by path are loaded lazily on first lookup and cached.
    """

    def __init__(self, tile_size: Optional[int] = None):
        from ..config import TILE
        self.tile_size = tile_size if tile_size is not None else TILE
        self._sources: Dict[TextureId, Union[str, pygame.Surface]] = {}
        self._by_path: Dict[str, TextureId] = {}
        self._cache: Dict[TextureId, pygame.Surface] = {}

    def register(self, source: Union[str, pygame.Surface]) -> TextureId:
        """Register a sprite path or an existing surface and return its handle.

        Registering the same path twice returns the same handle.
        """
        if isinstance(source, str) and source in self._by_path:
            return self._by_path[source]

        texture_id = TextureId(len(self._sources))
        self._sources[texture_id] = source
        if isinstance(source, str):
            self._by_path[source] = texture_id
        else:
            self._cache[texture_id] = source
        return texture_id

    def register_color(self, color: Tuple[int, int, int]) -> TextureId:
        """Register a solid-colored tile texture."""
        surface = pygame.Surface((self.tile_size, self.tile_size), pygame.SRCALPHA)
        surface.fill(color)
        return self.register(surface)

    def __contains__(self, texture_id: TextureId) -> bool:
        return texture_id in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def get(self, texture_id: TextureId) -> pygame.Surface:
        """Get the surface for a texture handle, loading it if needed."""
        if texture_id not in self._sources:
            raise TextureNotFoundError(texture_id)

        if texture_id in self._cache:
            return self._cache[texture_id]

        surface = self._load(self._sources[texture_id])
        self._cache[texture_id] = surface
        return surface

    def _load(self, path: str) -> pygame.Surface:
        """Load a sprite scaled to the tile size, falling back to a placeholder."""
        logger.debug("Loading texture %s", path)
        try:
            sprite = pygame.image.load(path)
        except (pygame.error, FileNotFoundError) as e:
            logger.warning("Could not load texture %s: %s", path, e)
            placeholder = pygame.Surface((self.tile_size, self.tile_size), pygame.SRCALPHA)
            placeholder.fill(MISSING_TEXTURE_COLOR)
            return placeholder

        # convert_alpha() needs a display mode; keep the raw surface when headless
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            sprite = sprite.convert_alpha()
        return pygame.transform.scale(sprite, (self.tile_size, self.tile_size))

    def clear_cache(self):
        """Drop loaded sprites. Surfaces registered directly are kept."""
        self._cache = {
            texture_id: source
            for texture_id, source in self._sources.items()
            if isinstance(source, pygame.Surface)
        }
