"""
Settings package for tilemaped.

Type-safe configuration management on top of Qt's QSettings.

Usage:
    from tilemaped.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .paths import PathSettings
from .atlas import AtlasSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "AtlasSettings",
    "LoggingSettings",
]
