"""
Sprite catalog: the flattened, globally addressable sprite index.

No I/O here; the catalog is filled by the sprite database loader.
"""

import logging

from ..errors import InvalidGeometry, OutOfRange
from .models import Atlas, Sprite


class SpriteCatalog:
    """Manage loaded atlases and the global sprite id index.

    Sprite ids are dense: the n-th sprite appended gets id n, in atlas-load
    order then in-atlas slice order. Once `finalize()` has been called the
    catalog is read-only.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.atlases: list[Atlas] = []
        self.sprites: list[Sprite] = []
        self._frozen = False

    def add_atlas(self, atlas: Atlas, limit: int | None = None) -> list[Sprite]:
        """Register an atlas and create one sprite per cell region.

        Args:
            atlas: Sliced atlas
            limit: Maximum number of regions to turn into sprites; None keeps all

        Returns:
            Sprites created for this atlas

        Raises:
            RuntimeError: If the catalog has been finalized
            InvalidGeometry: If limit is negative
        """
        if self._frozen:
            raise RuntimeError("Sprite catalog is finalized and cannot be modified")
        if limit is not None and limit < 0:
            raise InvalidGeometry(f"Sprites per atlas cannot be negative: {limit}")

        regions = atlas.cell_regions if limit is None else atlas.cell_regions[:limit]
        if limit is not None and len(atlas.cell_regions) < limit:
            self.logger.debug(
                f"Atlas {atlas.source_path} has {len(atlas.cell_regions)} cells, "
                f"expected {limit}"
            )

        self.atlases.append(atlas)
        created: list[Sprite] = []
        for region in regions:
            sprite = Sprite(id=len(self.sprites), region=region, atlas=atlas)
            self.sprites.append(sprite)
            created.append(sprite)
        return created

    def finalize(self) -> None:
        """Freeze the catalog; further add_atlas() calls fail."""
        self._frozen = True
        self.logger.debug(
            f"Catalog finalized: {len(self.atlases)} atlas(es), {self.count} sprite(s)"
        )

    @property
    def is_finalized(self) -> bool:
        return self._frozen

    @property
    def count(self) -> int:
        """Number of valid sprites."""
        return len(self.sprites)

    def get(self, sprite_id: int) -> Sprite:
        """Return sprite by global id.

        Raises:
            OutOfRange: If no sprite has this id
        """
        if not 0 <= sprite_id < len(self.sprites):
            raise OutOfRange(f"Sprite id {sprite_id} not in catalog (0..{self.count - 1})")
        return self.sprites[sprite_id]

    def sprites_for_atlas(self, atlas: Atlas) -> list[Sprite]:
        """List sprites cut from the given atlas, in id order."""
        return [sprite for sprite in self.sprites if sprite.atlas is atlas]

    def __getitem__(self, sprite_id: int) -> Sprite:
        return self.get(sprite_id)

    def __len__(self) -> int:
        return len(self.sprites)

    def __iter__(self):
        return iter(self.sprites)
