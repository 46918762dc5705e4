"""Exceptions raised by the floor map core."""


class FloorMapError(Exception):
    """Base exception for the floorplan package."""


class InvariantError(FloorMapError, AssertionError):
    """Raised when a caller breaks an invariant of the map. Always a bug in the caller."""


class OutOfBoundsError(InvariantError, IndexError):
    """Raised for a tile position, room id or world point that is not on the map."""


class GenerationSealedError(InvariantError):
    """Raised when the map is mutated after generation was sealed."""


class TextureNotFoundError(FloorMapError, KeyError):
    """Raised when a texture handle was never issued by the registry."""
