"""Shared fixtures: real PNG atlases and INI-backed settings in tmp_path."""

import logging
from pathlib import Path
from typing import Callable, Iterator

import pytest
from PIL import Image

from tilemaped.settings import AppSettings

CELL = 16


def cell_color(index: int) -> tuple[int, int, int, int]:
    """Distinct opaque colour for the index-th cell, never the colour key."""
    return (index * 7 % 250, 40 + index % 100, 200 - index % 150, 255)


def write_atlas(path: Path, width: int, height: int, cell: int = CELL) -> Path:
    """Write an atlas whose every cell is filled with cell_color(index)."""
    image = Image.new("RGBA", (width, height), (0, 0, 0, 255))
    cols = width // cell
    for row in range(height // cell):
        for col in range(cols):
            box = (col * cell, row * cell, (col + 1) * cell, (row + 1) * cell)
            image.paste(cell_color(row * cols + col), box)
    image.save(path)
    return path


@pytest.fixture
def make_atlas(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a PNG atlas into tmp_path."""

    def _make(name: str = "atlas.png", width: int = 80, height: int = 80, cell: int = CELL) -> Path:
        return write_atlas(tmp_path / name, width, height, cell)

    return _make


@pytest.fixture
def make_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a sprite database manifest listing the given paths."""

    def _make(lines: list[str], name: str = "sprite.db", trailing_newline: bool = True) -> Path:
        path = tmp_path / name
        text = "\n".join(lines)
        if trailing_newline:
            text += "\n"
        path.write_text(text, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def app_settings(tmp_path: Path) -> AppSettings:
    """Settings stored in an INI file under tmp_path."""
    return AppSettings(profile="test", settings_file=tmp_path / "settings.ini")


@pytest.fixture
def asset_root(tmp_path: Path) -> str:
    root = tmp_path / "asset"
    root.mkdir()
    return root.as_posix()


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """setup_logging replaces root handlers; put the previous ones back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
