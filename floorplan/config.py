# === Global configuration & tuning ===

# Pixel edge length of one tile
TILE = 24

# Default floor size in tiles
MAP_ROWS = 40
MAP_COLS = 60

# Colors
BG = (18, 20, 27)
WHITE = (240, 240, 240)

# Fallback colors for tiles without a texture
TILE_KIND_COLORS = {
    "empty": None,            # Transparent - no rendering
    "wall": (54, 60, 78),     # Dark gray
    "floor": (96, 88, 72),    # Worn stone
}

# Debug tint per room type (RGBA)
ROOM_TYPE_COLORS = {
    "normal": (60, 90, 200, 110),
    "challenge": (210, 60, 60, 130),
    "player_start": (90, 170, 250, 130),
    "treasure_chamber": (230, 200, 60, 130),
}

# Log a text dump of the floor map when generation is sealed
DEBUG_DUMP_ON_SEAL = False
