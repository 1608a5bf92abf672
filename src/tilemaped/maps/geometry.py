"""Tile geometry: on-screen rectangles derived from grid position."""

import logging
from dataclasses import replace
from typing import Optional

from ..errors import OutOfRange
from ..tilesets.models import Region
from .models import Map

module_logger = logging.getLogger(__name__)


def tile_region(tile_map: Map, row: int, col: int) -> Region:
    """Footprint of the tile at (row, col); identical on every layer."""
    return Region(
        col * tile_map.tile_width,
        row * tile_map.tile_height,
        tile_map.tile_width,
        tile_map.tile_height,
    )


def init_tile_geometry(tile_map: Map, logger: Optional[logging.Logger] = None) -> None:
    """Set the region of every tile from its own row and column.

    Other tile fields are kept, so this can be re-run after a reload.

    Args:
        tile_map: Map to update in place
        logger: Diagnostics logger (module logger by default)

    Raises:
        OutOfRange: If the map grid was released or a dimension is not positive
    """
    log = logger or module_logger

    if not tile_map.is_allocated:
        raise OutOfRange(f"Map '{tile_map.name}' has no allocated grid")
    if min(tile_map.layer_count, tile_map.rows, tile_map.cols,
           tile_map.tile_width, tile_map.tile_height) <= 0:
        raise OutOfRange(
            f"Map '{tile_map.name}' has non-positive dimensions: "
            f"{tile_map.layer_count}x{tile_map.rows}x{tile_map.cols}, "
            f"tile {tile_map.tile_width}x{tile_map.tile_height}"
        )

    log.debug(f"Initializing tile geometry for '{tile_map.name}'")
    for layer in range(tile_map.layer_count):
        for row in range(tile_map.rows):
            for col in range(tile_map.cols):
                cell = tile_map.cell(layer, row, col)
                cell.tile = replace(cell.tile, region=tile_region(tile_map, row, col))
