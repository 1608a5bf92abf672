"""Basic unit tests for tilemaped settings and logging."""

import logging
from pathlib import Path

import pytest

from tilemaped.settings import AppSettings, ConfigVersion


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_app_settings_init(self, app_settings: AppSettings, tmp_path: Path) -> None:
        """Test AppSettings can be initialized on an INI file."""
        assert app_settings.profile == "test"
        assert app_settings.version == ConfigVersion.CURRENT.value
        assert Path(app_settings.get_settings_file_path()) == tmp_path / "settings.ini"

    def test_first_run(self, app_settings: AppSettings) -> None:
        assert app_settings.is_first_run
        app_settings.set_first_run_complete()
        assert not app_settings.is_first_run

    def test_defaults(self, app_settings: AppSettings) -> None:
        assert app_settings.asset_root == "asset"
        assert app_settings.sprite_db == Path("sprite.db")
        assert app_settings.atlas.cell_width == 16
        assert app_settings.atlas.cell_height == 16
        assert app_settings.atlas.sprites_per_atlas == 25
        assert app_settings.atlas.color_key == (0, 255, 255)
        assert app_settings.console_logging
        assert app_settings.console_log_level == "INFO"
        assert not app_settings.file_logging
        assert app_settings.console_use_colors
        assert app_settings.log_file_path == "logs/tilemaped.csv"

    def test_values_persist(self, tmp_path: Path) -> None:
        """Values written by one instance are read by the next."""
        ini = tmp_path / "persist.ini"
        first = AppSettings(profile="p", settings_file=ini)
        first.asset_root = tmp_path / "maps"
        first.atlas.cell_width = 32
        first.atlas.sprites_per_atlas = None
        first.atlas.color_key = (255, 0, 255)
        first.console_log_level = "debug"

        second = AppSettings(profile="p", settings_file=ini)
        assert second.asset_root == str(tmp_path / "maps")
        assert second.atlas.cell_width == 32
        assert second.atlas.sprites_per_atlas is None
        assert second.atlas.color_key == (255, 0, 255)
        assert second.console_log_level == "DEBUG"

    def test_profiles_are_separate(self, tmp_path: Path) -> None:
        ini = tmp_path / "profiles.ini"
        AppSettings(profile="a", settings_file=ini).atlas.cell_height = 8
        assert AppSettings(profile="b", settings_file=ini).atlas.cell_height == 16

    def test_invalid_values_ignored(self, app_settings: AppSettings) -> None:
        app_settings.atlas.cell_width = 0
        app_settings.atlas.sprites_per_atlas = -3
        app_settings.console_log_level = "LOUD"

        assert app_settings.atlas.cell_width == 16
        assert app_settings.atlas.sprites_per_atlas == 25
        assert app_settings.console_log_level == "INFO"

    def test_color_key_disabled(self, app_settings: AppSettings) -> None:
        app_settings.atlas.color_key = None
        assert app_settings.atlas.color_key is None

    def test_recent_maps(self, app_settings: AppSettings) -> None:
        for index in range(12):
            app_settings.add_recent_map(f"asset/map{index}/map{index}.md")
        app_settings.add_recent_map("asset/map5/map5.md")

        recent = app_settings.recent_maps
        assert len(recent) == 10
        assert recent[0] == "asset/map5/map5.md"
        assert recent.count("asset/map5/map5.md") == 1

        app_settings.clear_recent_maps()
        assert app_settings.recent_maps == []


class TestSettingsValidation:
    """Test settings validation results."""

    def test_missing_sprite_db_is_warning(self, app_settings: AppSettings, tmp_path: Path) -> None:
        app_settings.sprite_db = tmp_path / "missing.db"
        validation = app_settings.validate()
        assert validation.is_valid
        assert any("Sprite database not found" in w for w in validation.warnings)

    def test_valid_configuration(self, app_settings: AppSettings, tmp_path: Path) -> None:
        manifest = tmp_path / "sprite.db"
        manifest.write_text("atlas.png\n", encoding="utf-8")
        app_settings.sprite_db = manifest
        app_settings.asset_root = tmp_path / "asset"

        validation = app_settings.validate()
        assert validation.is_valid
        assert validation.errors == []
        assert validation.warnings == []

    def test_negative_capacity_is_error(self, app_settings: AppSettings) -> None:
        app_settings.settings.setValue("atlas/sprites_per_atlas", -1)
        validation = app_settings.validate()
        assert not validation.is_valid

    def test_asset_root_is_file(self, app_settings: AppSettings, tmp_path: Path) -> None:
        blocker = tmp_path / "asset"
        blocker.write_text("", encoding="utf-8")
        app_settings.asset_root = blocker
        assert not app_settings.validate().is_valid


class TestUtilsLogging:
    """Test logging configuration."""

    @pytest.mark.usefixtures("restore_root_logger")
    def test_logging_setup_with_settings(self, app_settings: AppSettings) -> None:
        """Test logging setup works with settings."""
        from tilemaped.utils.logging_config import ColoredFormatter, setup_logging

        setup_logging(settings=app_settings)

        assert logging.getLogger("tilemaped").level == logging.DEBUG
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ColoredFormatter)
        assert handlers[0].level == logging.INFO

    @pytest.mark.usefixtures("restore_root_logger")
    def test_file_logging_writes_csv(self, app_settings: AppSettings, tmp_path: Path) -> None:
        from tilemaped.utils.logging_config import setup_logging

        log_file = tmp_path / "logs" / "run.csv"
        app_settings.console_logging = False
        app_settings.file_logging = True
        app_settings.settings.setValue("logging/file_path", str(log_file))

        setup_logging(settings=app_settings)
        logging.getLogger("tilemaped.test").info('said "hi"')
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert '"Logging initialized"' in content
        assert '"said ""hi"""' in content

    def test_colored_formatter_colours_level(self) -> None:
        from tilemaped.utils.logging_config import ColoredFormatter

        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        formatted = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert formatted == "\033[33mWARNING\033[0m careful"
