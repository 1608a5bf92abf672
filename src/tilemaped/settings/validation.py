"""
Settings validation system for tilemaped.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .types import ValidationResult
from .logging import VALID_LEVELS

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        atlas = self.settings.atlas
        if atlas.cell_width <= 0 or atlas.cell_height <= 0:
            errors.append(
                f"Atlas cell size must be positive: {atlas.cell_width}x{atlas.cell_height}"
            )

        capacity = atlas._get_int("atlas/sprites_per_atlas", 0)
        if capacity < 0:
            errors.append(f"Sprites per atlas cannot be negative: {capacity}")

        if not self.settings.sprite_db.exists():
            warnings.append(f"Sprite database not found: {self.settings.sprite_db}")

        asset_root = Path(self.settings.asset_root)
        if asset_root.exists() and not asset_root.is_dir():
            errors.append(f"Asset root is not a directory: {asset_root}")

        if self.settings.console_log_level.upper() not in VALID_LEVELS:
            warnings.append(f"Unknown console log level: {self.settings.console_log_level}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
