"""Tests for tile geometry initialization."""

import pytest

from tilemaped.errors import OutOfRange
from tilemaped.maps import TileKind, create_map, init_tile_geometry, tile_region
from tilemaped.tilesets import Region


class TestInitTileGeometry:
    """Test on-screen regions derived from grid positions."""

    def test_region_from_position(self) -> None:
        """Tile [*][1][2] of a 16x16 map sits at (32, 16)."""
        tile_map = create_map(16, 16, 3, 16, 16, "test")
        init_tile_geometry(tile_map)

        for layer in range(3):
            assert tile_map.get_tile(layer, 1, 2).region == Region(32, 16, 16, 16)

    def test_non_square_tiles(self) -> None:
        tile_map = create_map(4, 4, 1, 32, 8, "wide")
        init_tile_geometry(tile_map)
        assert tile_map.get_tile(0, 3, 1).region == Region(32, 24, 32, 8)
        assert tile_region(tile_map, 3, 1) == Region(32, 24, 32, 8)

    def test_keeps_other_fields(self) -> None:
        """Re-running geometry keeps sprite and kind of every tile."""
        tile_map = create_map(3, 3, 1, 16, 16, "keep")
        tile_map.place_sprite(0, 0, 0, 5)
        tile_map.place_ranged(0, 1, 1, 2, 4)
        tile_map.mark(0, 2, 2, TileKind.EVENT)

        init_tile_geometry(tile_map)
        init_tile_geometry(tile_map)

        assert tile_map.get_tile(0, 0, 0).sprite_id == 5
        assert tile_map.get_tile(0, 1, 1).kind == TileKind.RANGED_SPRITE
        assert tile_map.get_tile(0, 2, 2).kind == TileKind.EVENT
        assert tile_map.get_tile(0, 2, 2).region == Region(32, 32, 16, 16)

    def test_released_map(self) -> None:
        tile_map = create_map(2, 2, 1, 16, 16, "gone")
        tile_map.release()
        with pytest.raises(OutOfRange):
            init_tile_geometry(tile_map)

    def test_non_positive_dimension(self) -> None:
        tile_map = create_map(2, 2, 1, 16, 16, "shrunk")
        tile_map.tile_width = 0
        with pytest.raises(OutOfRange):
            init_tile_geometry(tile_map)
