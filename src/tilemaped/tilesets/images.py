"""
Image-loading collaborator.

The engine only needs an image's pixel size and a decoded buffer. Anything
that implements `ImageLoader` can be passed to the sprite database loader;
`PillowImageLoader` is the default implementation.
"""

import logging
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageChops, UnidentifiedImageError

from ..errors import AssetLoadError
from .models import LoadedImage

# Pixels of this colour become transparent, matching the classic SDL colour key.
DEFAULT_COLOR_KEY = (0, 255, 255)


class ImageLoader(Protocol):
    """Anything able to turn a path into a decoded image."""

    def load(self, path: str) -> LoadedImage:
        ...


class PillowImageLoader:
    """Decode images with Pillow into RGBA buffers.

    When color_key is set, every pixel with exactly that RGB value gets
    alpha 0.
    """

    def __init__(self, color_key: tuple[int, int, int] | None = DEFAULT_COLOR_KEY):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.color_key = color_key

    def load(self, path: str) -> LoadedImage:
        """Load an image from disk.

        Args:
            path: Image file path

        Returns:
            LoadedImage whose pixels is an RGBA `Image.Image`

        Raises:
            AssetLoadError: If the file is missing, unreadable or not an image
        """
        if not Path(path).is_file():
            raise AssetLoadError(f"Image not found: {path}")

        try:
            with Image.open(path) as source:
                image = source.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise AssetLoadError(f"Failed to decode image {path}: {e}") from e

        if self.color_key is not None:
            image = self._apply_color_key(image, self.color_key)

        width, height = image.size
        self.logger.debug(f"Loaded image {path} ({width}x{height})")
        return LoadedImage(path=str(path), width=width, height=height, pixels=image)

    @staticmethod
    def _apply_color_key(
        image: Image.Image, color_key: tuple[int, int, int]
    ) -> Image.Image:
        """Return a copy of image with color_key pixels made transparent."""
        r, g, b, a = image.split()
        # 255 where the channel matches the key, 0 elsewhere
        masks = [
            channel.point(lambda v, key=key: 255 if v == key else 0)
            for channel, key in zip((r, g, b), color_key)
        ]
        matched = ImageChops.multiply(ImageChops.multiply(masks[0], masks[1]), masks[2])
        image.putalpha(ImageChops.subtract(a, matched))
        return image
