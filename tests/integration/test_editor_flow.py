"""End-to-end editor flow: sprites, map editing, save, reload, render."""

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from tilemaped.__main__ import main
from tilemaped.maps import (
    PillowCanvas,
    TileKind,
    create_map,
    init_tile_geometry,
    load_map,
    render_map,
    save_map,
)
from tilemaped.settings import AppSettings
from tilemaped.tilesets import PillowImageLoader, load_sprite_database

from ..conftest import cell_color


def test_edit_save_reload_render(
    tmp_path: Path,
    asset_root: str,
    make_atlas: Callable[..., Path],
    make_manifest: Callable[..., Path],
) -> None:
    make_atlas("ground.png", 80, 80)
    make_atlas("props.png", 80, 80)
    catalog, count = load_sprite_database(make_manifest(["ground.png", "props.png"]))
    assert count == 50

    tile_map = create_map(16, 16, 3, 16, 16, "test", asset_root=asset_root)
    init_tile_geometry(tile_map)
    tile_map.place_sprite(0, 0, 0, 49)
    tile_map.place_ranged(1, 4, 4, 25, 27)
    tile_map.mark(2, 8, 8, TileKind.COLLISION)
    save_map(tile_map)
    tile_map.release()

    loaded = load_map(Path(asset_root) / "test")
    assert loaded.get_tile(0, 0, 0).sprite_id == 49
    assert loaded.get_tile(1, 4, 4).kind == TileKind.RANGED_SPRITE
    assert loaded.get_tile(2, 8, 8).kind == TileKind.COLLISION

    canvas = PillowCanvas(loaded.map_width, loaded.map_height)
    assert render_map(loaded, catalog, canvas, tick=1) == 2
    # sprite 49 is cell 24 of the second atlas
    assert canvas.image.getpixel((8, 8)) == cell_color(24)
    # ranged tile at tick 1 shows sprite 26, cell 1 of the second atlas
    assert canvas.image.getpixel((64 + 8, 64 + 8)) == cell_color(1)


def test_color_keyed_atlas(tmp_path: Path, make_manifest: Callable[..., Path]) -> None:
    """Colour-keyed pixels stay transparent on the canvas."""
    atlas = Image.new("RGB", (16, 16), (0, 255, 255))
    atlas.save(tmp_path / "keyed.png")
    catalog, _ = load_sprite_database(
        make_manifest(["keyed.png"]), PillowImageLoader(color_key=(0, 255, 255))
    )

    tile_map = create_map(1, 1, 1, 16, 16, "keyed", asset_root=tmp_path.as_posix())
    init_tile_geometry(tile_map)
    tile_map.place_sprite(0, 0, 0, 0)

    canvas = PillowCanvas(16, 16, background=(1, 2, 3, 255))
    render_map(tile_map, catalog, canvas)
    assert canvas.image.getpixel((5, 5)) == (1, 2, 3, 255)


@pytest.mark.usefixtures("restore_root_logger")
def test_bootstrap_without_sprites(app_settings: AppSettings, asset_root: str) -> None:
    """The bootstrap saves the test map even without a sprite database."""
    app_settings.asset_root = asset_root
    app_settings.sprite_db = Path(asset_root) / "missing.db"

    assert main(app_settings) == 0

    storage = Path(asset_root) / "test"
    assert (storage / "test.md").read_text(encoding="utf-8").startswith("16,16,3,16,16")
    assert len(list(storage.glob("test_*.lr"))) == 3
    assert not (storage / "preview.png").exists()
    assert app_settings.recent_maps == [str(storage / "test.md")]


@pytest.mark.usefixtures("restore_root_logger")
def test_bootstrap_writes_preview(
    app_settings: AppSettings,
    asset_root: str,
    make_atlas: Callable[..., Path],
    make_manifest: Callable[..., Path],
) -> None:
    make_atlas("ground.png", 80, 80)
    make_atlas("props.png", 80, 80)
    app_settings.asset_root = asset_root
    app_settings.sprite_db = make_manifest(["ground.png", "props.png"])

    assert main(app_settings) == 0

    with Image.open(Path(asset_root) / "test" / "preview.png") as preview:
        assert preview.size == (256, 256)
        assert preview.convert("RGBA").getpixel((8, 8)) == cell_color(24)


@pytest.mark.usefixtures("restore_root_logger")
def test_bootstrap_reports_engine_error(
    app_settings: AppSettings, asset_root: str, make_manifest: Callable[..., Path]
) -> None:
    app_settings.asset_root = asset_root
    app_settings.sprite_db = make_manifest(["missing.png"])

    assert main(app_settings) == 1
