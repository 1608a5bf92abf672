"""
Atlas slicing settings for tilemaped.
"""

import logging
from typing import TYPE_CHECKING, Optional, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 16
DEFAULT_SPRITES_PER_ATLAS = 25
DEFAULT_COLOR_KEY = "0,255,255"


class AtlasSettings:
    """Manages how atlases are sliced into sprites."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            return default

    @property
    def cell_width(self) -> int:
        """Width of one atlas cell in pixels."""
        return self._get_int("atlas/cell_width", DEFAULT_CELL_SIZE)

    @cell_width.setter
    def cell_width(self, value: int) -> None:
        if value > 0:
            self.settings.setValue("atlas/cell_width", value)
            self.settings.sync()
        else:
            logger.warning(f"Invalid cell width: {value}, keeping current: {self.cell_width}")

    @property
    def cell_height(self) -> int:
        """Height of one atlas cell in pixels."""
        return self._get_int("atlas/cell_height", DEFAULT_CELL_SIZE)

    @cell_height.setter
    def cell_height(self, value: int) -> None:
        if value > 0:
            self.settings.setValue("atlas/cell_height", value)
            self.settings.sync()
        else:
            logger.warning(f"Invalid cell height: {value}, keeping current: {self.cell_height}")

    @property
    def sprites_per_atlas(self) -> Optional[int]:
        """Maximum sprites taken from one atlas; None means every cell."""
        value = self._get_int("atlas/sprites_per_atlas", DEFAULT_SPRITES_PER_ATLAS)
        return value if value > 0 else None

    @sprites_per_atlas.setter
    def sprites_per_atlas(self, value: Optional[int]) -> None:
        if value is None or value >= 0:
            self.settings.setValue("atlas/sprites_per_atlas", value or 0)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid sprites per atlas: {value}, keeping current: {self.sprites_per_atlas}"
            )

    @property
    def color_key(self) -> Optional[tuple[int, int, int]]:
        """RGB colour made transparent when loading atlases, or None."""
        value = self.settings.value("atlas/color_key", DEFAULT_COLOR_KEY)
        # unquoted INI values containing commas come back as lists
        if isinstance(value, list):
            raw = ",".join(str(part) for part in cast(list[object], value))
        else:
            raw = str(value).strip() if value is not None else ""
        if not raw:
            return None
        try:
            r, g, b = (int(part) for part in raw.split(","))
        except ValueError:
            logger.warning(f"Invalid color key in settings: {raw!r}, ignoring")
            return None
        return (r, g, b)

    @color_key.setter
    def color_key(self, value: Optional[tuple[int, int, int]]) -> None:
        text = "" if value is None else ",".join(str(int(c)) for c in value)
        self.settings.setValue("atlas/color_key", text)
        self.settings.sync()
