"""
Sprite atlases for tilemaped.

Provides atlas slicing, image loading, and the global sprite catalog built
from a sprite database manifest.
"""

from .models import Region, LoadedImage, Atlas, Sprite
from .slicer import slice_atlas
from .images import ImageLoader, PillowImageLoader, DEFAULT_COLOR_KEY
from .managers import SpriteCatalog
from .loaders import (
    load_sprite_database, read_manifest,
    DEFAULT_CELL_WIDTH, DEFAULT_CELL_HEIGHT, DEFAULT_SPRITES_PER_ATLAS
)

__all__ = [
    # Data models
    'Atlas',
    'LoadedImage',
    'Region',
    'Sprite',

    # Slicing and loading
    'slice_atlas',
    'ImageLoader',
    'PillowImageLoader',
    'DEFAULT_COLOR_KEY',
    'load_sprite_database',
    'read_manifest',
    'DEFAULT_CELL_WIDTH',
    'DEFAULT_CELL_HEIGHT',
    'DEFAULT_SPRITES_PER_ATLAS',

    # Catalog
    'SpriteCatalog',
]
