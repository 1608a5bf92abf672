"""
Logging-related settings for tilemaped.

Read by `utils.logging_config.setup_logging()`; the log file itself is
configured by editing the settings file.
"""

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

LOG_FILE_PATH = "logs/tilemaped.csv"
VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings:
    """Console and file logging options under the `logging/` group."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _flag(self, key: str, default: bool) -> bool:
        value = self.settings.value(key, default)
        if isinstance(value, str):
            # INI storage hands booleans back as text
            return value.lower() in ("true", "1", "yes")
        return default if value is None else bool(value)

    def _store(self, key: str, value: Any) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()

    @property
    def console_logging(self) -> bool:
        """Whether log records are printed to the console."""
        return self._flag("logging/console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._store("logging/console_enabled", value)

    @property
    def console_log_level(self) -> str:
        """Minimum level printed to the console."""
        value = self.settings.value("logging/console_level", "INFO")
        return str(value) if value else "INFO"

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        level = value.upper()
        if level not in VALID_LEVELS:
            logger.warning(
                f"Invalid console log level: {value}, keeping current: {self.console_log_level}"
            )
            return
        self._store("logging/console_level", level)

    @property
    def console_use_colors(self) -> bool:
        return self._flag("logging/console_use_colors", True)

    @property
    def file_logging(self) -> bool:
        """Whether a rotating CSV log file is written."""
        return self._flag("logging/file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._store("logging/file_enabled", value)

    @property
    def log_file_path(self) -> str:
        value = self.settings.value("logging/file_path", LOG_FILE_PATH)
        return str(value) if value else LOG_FILE_PATH
