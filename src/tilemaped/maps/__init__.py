"""Map models, geometry, persistence and rendering for tilemaped."""

from .models import (
    EMPTY_TILE,
    DEFAULT_ASSET_ROOT,
    TileKind,
    Tile,
    MapCell,
    Map,
    create_map,
    sprite_to_raw,
    raw_to_sprite,
)
from .geometry import init_tile_geometry, tile_region
from .persistence import (
    MapMetadata,
    save_map,
    load_map,
    read_metadata,
    parse_metadata_line,
)
from .rendering import (
    DrawCommand,
    Renderer,
    PillowCanvas,
    iter_draw_commands,
    render_map,
    render_sprite,
    render_atlas,
)

__all__ = [
    "EMPTY_TILE",
    "DEFAULT_ASSET_ROOT",
    "TileKind",
    "Tile",
    "MapCell",
    "Map",
    "create_map",
    "sprite_to_raw",
    "raw_to_sprite",
    "init_tile_geometry",
    "tile_region",
    "MapMetadata",
    "save_map",
    "load_map",
    "read_metadata",
    "parse_metadata_line",
    "DrawCommand",
    "Renderer",
    "PillowCanvas",
    "iter_draw_commands",
    "render_map",
    "render_sprite",
    "render_atlas",
]
