from .texture_registry import TextureId, TextureRegistry
