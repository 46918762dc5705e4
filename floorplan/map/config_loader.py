"""Configuration loader for floor maps."""

import json
import logging
import os
from dataclasses import dataclass

from .. import config
from .floor_map import FloorMap
from .grid_size import GridSize

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/floor_map.json"


@dataclass
class FloorMapConfig:
    """Size and debug settings used to create empty floor maps."""
    rows: int = config.MAP_ROWS
    cols: int = config.MAP_COLS
    tile_size: int = config.TILE
    debug_dump_on_seal: bool = config.DEBUG_DUMP_ON_SEAL

    def create_map(self) -> FloorMap:
        """Create an empty floor map ready for generation."""
        return FloorMap(
            GridSize(rows=self.rows, cols=self.cols),
            self.tile_size,
            debug_dump_on_seal=self.debug_dump_on_seal,
        )


def load_floor_map_config(config_path: str = DEFAULT_CONFIG_PATH) -> FloorMapConfig:
    """
    Load floor map configuration from a JSON file.

    Only known keys of the "floor_map" object are used. A missing or
    malformed file gives the defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        FloorMapConfig: Loaded configuration
    """
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return FloorMapConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)

        config_data = data.get('floor_map', {})
        # Filter only fields that FloorMapConfig accepts
        allowed_keys = {'rows', 'cols', 'tile_size', 'debug_dump_on_seal'}
        filtered = {k: v for k, v in config_data.items() if k in allowed_keys}
        for key in ('rows', 'cols', 'tile_size'):
            if key in filtered:
                filtered[key] = int(filtered[key])
        # bool("false") is True, so only JSON true/false is accepted
        if 'debug_dump_on_seal' in filtered and not isinstance(filtered['debug_dump_on_seal'], bool):
            raise TypeError(
                f"debug_dump_on_seal must be true or false, got {filtered['debug_dump_on_seal']!r}")
        loaded = FloorMapConfig(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Error loading config: %s, using defaults", e)
        return FloorMapConfig()

    if loaded.rows <= 0 or loaded.cols <= 0 or loaded.tile_size <= 0:
        logger.warning("Config %s has non-positive sizes, using defaults", config_path)
        return FloorMapConfig()
    return loaded


def save_floor_map_config(floor_config: FloorMapConfig, config_path: str = DEFAULT_CONFIG_PATH):
    """
    Save floor map configuration to a JSON file.

    Other top-level sections already in the file are preserved.

    Args:
        floor_config: Configuration to save
        config_path: Path to save the configuration file
    """
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    existing = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                existing = json.load(f) or {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_path, e)
            existing = {}
    if not isinstance(existing, dict):
        existing = {}

    existing["floor_map"] = {
        "rows": floor_config.rows,
        "cols": floor_config.cols,
        "tile_size": floor_config.tile_size,
        "debug_dump_on_seal": floor_config.debug_dump_on_seal,
    }

    with open(config_path, 'w') as f:
        json.dump(existing, f, indent=2)
