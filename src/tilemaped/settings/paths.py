"""
Path-related settings for tilemaped.
"""

from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

DEFAULT_ASSET_ROOT = "asset"
DEFAULT_SPRITE_DB = "sprite.db"
MAX_RECENT_MAPS = 10


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Type-safe list retrieval from settings."""
        if default is None:
            default = []
        value = self.settings.value(key, default)
        if isinstance(value, list):
            return [
                str(item) if item is not None else ""
                for item in cast(list[object], value)
            ]
        if isinstance(value, str) and value:
            # INI storage collapses one-element lists into a plain string
            return [value]
        return default

    @property
    def asset_root(self) -> str:
        """Directory under which every map gets its own <name>/ folder."""
        return self._get_str("paths/asset_root", DEFAULT_ASSET_ROOT) or DEFAULT_ASSET_ROOT

    @asset_root.setter
    def asset_root(self, value: Union[str, Path]) -> None:
        self.settings.setValue("paths/asset_root", str(value))
        self.settings.sync()

    @property
    def sprite_db(self) -> Path:
        """Sprite database manifest path."""
        return Path(self._get_str("paths/sprite_db", DEFAULT_SPRITE_DB) or DEFAULT_SPRITE_DB)

    @sprite_db.setter
    def sprite_db(self, value: Union[str, Path]) -> None:
        self.settings.setValue("paths/sprite_db", str(value))
        self.settings.sync()

    @property
    def recent_maps(self) -> List[str]:
        """Get list of recently opened map directories."""
        return self._get_list("paths/recent_maps", [])

    def add_recent_map(self, map_path: Union[str, Path]) -> None:
        """Add map to recent maps list (max 10 items)."""
        recent = self.recent_maps
        map_str = str(map_path)

        if map_str in recent:
            recent.remove(map_str)
        recent.insert(0, map_str)

        self.settings.setValue("paths/recent_maps", recent[:MAX_RECENT_MAPS])
        self.settings.sync()

    def clear_recent_maps(self) -> None:
        """Clear recent maps list."""
        self.settings.setValue("paths/recent_maps", [])
        self.settings.sync()
