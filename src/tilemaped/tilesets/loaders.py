"""
Sprite database loading.

A sprite database (manifest) is a text file listing one atlas image path per
line. Each atlas is decoded, sliced into fixed-size cells and appended to a
`SpriteCatalog`.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from ..errors import AssetLoadError, EmptyManifest, InvalidGeometry
from .images import ImageLoader, PillowImageLoader
from .managers import SpriteCatalog
from .models import Atlas

DEFAULT_CELL_WIDTH = 16
DEFAULT_CELL_HEIGHT = 16
DEFAULT_SPRITES_PER_ATLAS = 25

module_logger = logging.getLogger(__name__)


def read_manifest(manifest_path: str | Path) -> list[str]:
    """Return the atlas paths listed in a manifest.

    Blank lines are skipped. A last line without a trailing line-feed still
    counts.

    Raises:
        AssetLoadError: If the manifest cannot be read
    """
    try:
        with open(manifest_path, encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip()]
    except OSError as e:
        raise AssetLoadError(f"Cannot read sprite database {manifest_path}: {e}") from e


def _resolve_atlas_path(atlas_path: str, manifest_dir: Path) -> str:
    """Resolve relative atlas paths against the manifest directory if needed."""
    path = Path(atlas_path)
    if path.is_absolute() or path.exists():
        return atlas_path
    candidate = manifest_dir / path
    return str(candidate) if candidate.exists() else atlas_path


def load_sprite_database(
    manifest_path: str | Path,
    image_loader: Optional[ImageLoader] = None,
    *,
    cell_width: int = DEFAULT_CELL_WIDTH,
    cell_height: int = DEFAULT_CELL_HEIGHT,
    sprites_per_atlas: int | None = DEFAULT_SPRITES_PER_ATLAS,
    texture_factory: Optional[Callable[[Any], Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> tuple[SpriteCatalog, int]:
    """Load every atlas listed in a manifest into a new sprite catalog.

    Args:
        manifest_path: Path to the manifest file
        image_loader: Image-loading collaborator (Pillow by default)
        cell_width: Sprite cell width in pixels
        cell_height: Sprite cell height in pixels
        sprites_per_atlas: Maximum sprites taken per atlas; None takes all cells
        texture_factory: Turns a decoded pixel buffer into a texture handle
        logger: Diagnostics logger (module logger by default)

    Returns:
        Tuple of (finalized SpriteCatalog, number of sprites)

    Raises:
        AssetLoadError: If the manifest or an atlas image cannot be loaded
        EmptyManifest: If the manifest lists no atlas
        InvalidGeometry: If the cell size is not positive or sprites_per_atlas is negative
    """
    log = logger or module_logger
    loader = image_loader or PillowImageLoader()
    if sprites_per_atlas is not None and sprites_per_atlas < 0:
        raise InvalidGeometry(f"Sprites per atlas cannot be negative: {sprites_per_atlas}")

    log.info(f"Loading sprite database: {manifest_path}")
    atlas_paths = read_manifest(manifest_path)
    if not atlas_paths:
        raise EmptyManifest(f"Sprite database {manifest_path} lists no atlas")

    manifest_dir = Path(manifest_path).parent
    catalog = SpriteCatalog()

    for atlas_path in atlas_paths:
        image = loader.load(_resolve_atlas_path(atlas_path, manifest_dir))
        texture = texture_factory(image.pixels) if texture_factory else None
        atlas = Atlas.from_image(image, cell_width, cell_height, texture=texture)
        sprites = catalog.add_atlas(atlas, limit=sprites_per_atlas or None)
        log.debug(
            f"  atlas {atlas_path}: {atlas.cell_count} cell(s), {len(sprites)} sprite(s)"
        )

    catalog.finalize()
    log.info(f"{catalog.count} sprites loaded from {len(atlas_paths)} atlas(es)")
    return catalog, catalog.count
