"""Turning maps into draw commands.

The engine never owns a window. It emits `(texture, source, dest)` draw
commands to a `Renderer`; presenting the frame is left to the host loop.
`PillowCanvas` is a renderer that composites onto an in-memory RGBA image,
used for previews and tests.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, NamedTuple, Optional, Protocol

from PIL import Image

from ..tilesets.managers import SpriteCatalog
from ..tilesets.models import Atlas, Region, Sprite
from .models import Map

logger = logging.getLogger(__name__)


class DrawCommand(NamedTuple):
    """Copy `source` out of `texture` into `dest` on the target surface."""
    texture: Any
    source: Region
    dest: Region


class Renderer(Protocol):
    """Rendering collaborator."""

    def draw(self, texture: Any, source: Region, dest: Region) -> None:
        ...


def iter_draw_commands(
    tile_map: Map,
    catalog: SpriteCatalog,
    tick: int = 0,
    layers: Optional[Iterable[int]] = None,
) -> Iterator[DrawCommand]:
    """Yield draw commands for every visible tile, bottom layer first.

    EVENT, COLLISION and empty tiles produce nothing. RANGED_SPRITE tiles
    show the frame for `tick`.

    Raises:
        OutOfRange: If a tile references a sprite id missing from the catalog
    """
    layer_indices = range(tile_map.layer_count) if layers is None else layers
    for layer in layer_indices:
        for _, _, _, cell in tile_map.iter_cells(layer):
            sprite_id = cell.tile.frame_at(tick)
            if sprite_id is None:
                continue
            sprite = catalog.get(sprite_id)
            yield DrawCommand(sprite.atlas.texture, sprite.region, cell.tile.region)


def render_map(
    tile_map: Map,
    catalog: SpriteCatalog,
    renderer: Renderer,
    tick: int = 0,
    layers: Optional[Iterable[int]] = None,
) -> int:
    """Send a map's draw commands to a renderer.

    Returns:
        Number of commands drawn
    """
    drawn = 0
    for command in iter_draw_commands(tile_map, catalog, tick, layers):
        renderer.draw(*command)
        drawn += 1
    logger.debug(f"Rendered {drawn} tile(s) of '{tile_map.name}' at tick {tick}")
    return drawn


def render_sprite(x: int, y: int, sprite: Sprite, renderer: Renderer) -> None:
    """Draw one sprite at (x, y) with its own size."""
    dest = Region(x, y, sprite.width, sprite.height)
    renderer.draw(sprite.atlas.texture, sprite.region, dest)


def render_atlas(atlas: Atlas, renderer: Renderer) -> None:
    """Draw every cell of an atlas at its own position."""
    for region in atlas.cell_regions:
        renderer.draw(atlas.texture, region, region)


class PillowCanvas:
    """Renderer compositing Pillow textures onto an RGBA canvas."""

    def __init__(self, width: int, height: int, background: tuple[int, int, int, int] = (0, 0, 0, 0)):
        self.image = Image.new("RGBA", (width, height), background)

    def draw(self, texture: Any, source: Region, dest: Region) -> None:
        sprite = texture.crop(source.box)
        if sprite.mode != "RGBA":
            sprite = sprite.convert("RGBA")
        if sprite.size != dest.size:
            sprite = sprite.resize(dest.size, Image.Resampling.NEAREST)
        self.image.alpha_composite(sprite, dest=(dest.x, dest.y))

    def save(self, path: str | Path) -> None:
        self.image.save(path)
