"""
Data models for sprite atlases.

Contains the dataclasses used by the atlas slicer, the sprite catalog and the
renderer. Models are intentionally lightweight: no file-system logic.
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Geometry
# =============================================================================

@dataclass(frozen=True)
class Region:
    """Axis-aligned integer rectangle in pixel units.

    Describes either a cell of an atlas image or the on-screen footprint of a
    map tile.
    """
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple as used by Pillow's crop()."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


# =============================================================================
# Atlas Models
# =============================================================================

@dataclass
class LoadedImage:
    """Decoded image handed over by the image-loading collaborator."""
    path: str
    width: int
    height: int
    pixels: Any = field(repr=False, compare=False, default=None)


@dataclass
class Atlas:
    """Sprite atlas sliced into a regular grid of cells.

    cell_regions are ordered row-major from (0, 0) and hold
    (pixel_width // cell_width) * (pixel_height // cell_height) entries.
    texture is an opaque handle owned by the rendering side; it is dropped
    together with the atlas.
    """
    source_path: str
    pixel_width: int
    pixel_height: int
    cell_width: int
    cell_height: int
    cell_regions: tuple[Region, ...] = ()
    texture: Any = field(repr=False, compare=False, default=None)

    @classmethod
    def from_image(
        cls,
        image: LoadedImage,
        cell_width: int,
        cell_height: int,
        texture: Any = None,
    ) -> "Atlas":
        """Create an atlas from a decoded image, slicing it immediately.

        Args:
            image: Decoded image from the image loader
            cell_width: Cell width in pixels
            cell_height: Cell height in pixels
            texture: Texture handle; defaults to the decoded pixel buffer

        Returns:
            Atlas with cell_regions populated
        """
        from .slicer import slice_atlas

        regions = slice_atlas(image.width, image.height, cell_width, cell_height)
        return cls(
            source_path=image.path,
            pixel_width=image.width,
            pixel_height=image.height,
            cell_width=cell_width,
            cell_height=cell_height,
            cell_regions=tuple(regions),
            texture=image.pixels if texture is None else texture,
        )

    @property
    def cols(self) -> int:
        return self.pixel_width // self.cell_width

    @property
    def rows(self) -> int:
        return self.pixel_height // self.cell_height

    @property
    def cell_count(self) -> int:
        return len(self.cell_regions)


@dataclass(frozen=True)
class Sprite:
    """One addressable cell of an atlas plus its catalog-wide id.

    region is the very Region object stored in atlas.cell_regions.
    """
    id: int
    region: Region
    atlas: Atlas = field(repr=False, compare=False)

    @property
    def width(self) -> int:
        return self.region.width

    @property
    def height(self) -> int:
        return self.region.height
