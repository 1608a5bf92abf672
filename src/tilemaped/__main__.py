"""
Main entry point for tilemaped.
Usage: python -m tilemaped

Runs the editor bootstrap headlessly: creates and saves the "test" map,
loads the configured sprite database and writes a preview of layer 0.
"""

import sys
import logging
from pathlib import Path
from typing import Optional

from . import __version__
from .errors import TileMapError
from .settings import AppSettings
from .utils.logging_config import setup_logging
from .tilesets import PillowImageLoader, load_sprite_database
from .maps import PillowCanvas, create_map, init_tile_geometry, render_map, save_map

PREVIEW_NAME = "preview.png"
PREVIEW_SPRITE = 49


def main(settings: Optional[AppSettings] = None) -> int:
    """Main application entry point."""
    logger = logging.getLogger(f"{__name__}.main")

    settings = settings or AppSettings()
    setup_logging(settings)

    logger.info(f"Starting tilemaped {__version__}")
    logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    if validation.warnings:
        logger.warning("Configuration warnings detected:")
        for warning in validation.warnings:
            logger.warning(f"  {warning}")

    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    try:
        tile_map = create_map(
            16, 16, 3, 16, 16, "test", asset_root=settings.asset_root, logger=logger
        )
        metadata_file = save_map(tile_map, logger=logger)
        settings.add_recent_map(metadata_file)
        init_tile_geometry(tile_map, logger=logger)

        sprite_db = settings.sprite_db
        if not sprite_db.exists():
            logger.info(f"No sprite database at {sprite_db}, skipping sprite loading")
            return 0

        atlas = settings.atlas
        catalog, count = load_sprite_database(
            sprite_db,
            PillowImageLoader(color_key=atlas.color_key),
            cell_width=atlas.cell_width,
            cell_height=atlas.cell_height,
            sprites_per_atlas=atlas.sprites_per_atlas,
            logger=logger,
        )
        if count:
            tile_map.place_sprite(0, 0, 0, min(PREVIEW_SPRITE, count - 1))
            canvas = PillowCanvas(tile_map.map_width, tile_map.map_height)
            render_map(tile_map, catalog, canvas, layers=[0])
            preview = Path(tile_map.storage_path) / PREVIEW_NAME
            canvas.save(preview)
            logger.info(f"Preview written to {preview}")

    except TileMapError:
        logger.exception("Bootstrap failed")
        return 1

    logger.info("Bootstrap finished successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
