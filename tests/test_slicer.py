"""Tests for regular-grid atlas slicing."""

import pytest

from tilemaped.errors import InvalidGeometry
from tilemaped.tilesets import Region, slice_atlas


class TestSliceAtlas:
    """Test cell generation from image and cell sizes."""

    def test_exact_grid(self) -> None:
        """An 80x80 image with 16x16 cells gives 25 cells."""
        regions = slice_atlas(80, 80, 16, 16)
        assert len(regions) == 25
        assert regions[0] == Region(0, 0, 16, 16)
        assert regions[24] == Region(64, 64, 16, 16)

    def test_row_major_order(self) -> None:
        """Cells advance along a row before moving down."""
        regions = slice_atlas(48, 32, 16, 16)
        assert [(r.x, r.y) for r in regions] == [
            (0, 0), (16, 0), (32, 0),
            (0, 16), (16, 16), (32, 16),
        ]

    def test_partial_cells_dropped(self) -> None:
        """Leftover pixels at the right and bottom edges are ignored."""
        regions = slice_atlas(70, 40, 16, 16)
        assert len(regions) == 4 * 2
        assert all(r.x + r.width <= 70 and r.y + r.height <= 40 for r in regions)

    def test_image_smaller_than_cell(self) -> None:
        """An image smaller than one cell yields no regions."""
        assert slice_atlas(10, 10, 16, 16) == []

    def test_non_square_cells(self) -> None:
        regions = slice_atlas(64, 48, 32, 24)
        assert regions == [
            Region(0, 0, 32, 24), Region(32, 0, 32, 24),
            Region(0, 24, 32, 24), Region(32, 24, 32, 24),
        ]

    @pytest.mark.parametrize("cell_w, cell_h", [(0, 16), (16, 0), (-1, 16)])
    def test_invalid_cell_size(self, cell_w: int, cell_h: int) -> None:
        """Zero or negative cell sizes are rejected."""
        with pytest.raises(InvalidGeometry):
            slice_atlas(80, 80, cell_w, cell_h)

    def test_negative_image_size(self) -> None:
        with pytest.raises(InvalidGeometry):
            slice_atlas(-16, 80, 16, 16)

    def test_region_box(self) -> None:
        """Region.box is the (left, top, right, bottom) tuple Pillow expects."""
        assert Region(32, 16, 16, 8).box == (32, 16, 48, 24)
        assert Region(32, 16, 16, 8).size == (16, 8)
