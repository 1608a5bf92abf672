"""
tilemaped: layered tile-map editor engine

Slices sprite atlases into a global sprite catalog, keeps multi-layer tile
maps in memory, and saves and loads them as plain-text files.
"""

__version__ = "0.1.0"
__author__ = "tilemaped Contributors"

from .utils.logging_config import setup_logging

from .errors import (
    TileMapError, InvalidGeometry, AssetLoadError, EmptyManifest,
    CorruptMetadata, DimensionMismatch, MapIOError, OutOfRange
)
from .tilesets import (
    Region, Atlas, Sprite, SpriteCatalog,
    slice_atlas, load_sprite_database
)
from .maps import (
    TileKind, Tile, Map,
    create_map, init_tile_geometry, save_map, load_map, render_map
)

__all__ = [
    # Logging
    'setup_logging',

    # Errors
    'TileMapError',
    'InvalidGeometry',
    'AssetLoadError',
    'EmptyManifest',
    'CorruptMetadata',
    'DimensionMismatch',
    'MapIOError',
    'OutOfRange',

    # Sprites
    'Region',
    'Atlas',
    'Sprite',
    'SpriteCatalog',
    'slice_atlas',
    'load_sprite_database',

    # Maps
    'TileKind',
    'Tile',
    'Map',
    'create_map',
    'init_tile_geometry',
    'save_map',
    'load_map',
    'render_map',
]
