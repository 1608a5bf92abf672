"""
Regular-grid slicing of atlas images.
"""

from ..errors import InvalidGeometry
from .models import Region


def slice_atlas(
    pixel_width: int, pixel_height: int, cell_width: int, cell_height: int
) -> list[Region]:
    """Cut an image of the given size into equally sized cells.

    Cells are emitted row-major starting at (0, 0). Pixels left over when the
    image size is not an exact multiple of the cell size are dropped.

    Args:
        pixel_width: Image width in pixels
        pixel_height: Image height in pixels
        cell_width: Width of one cell
        cell_height: Height of one cell

    Returns:
        List of cell regions, length (pixel_width // cell_width) * (pixel_height // cell_height)

    Raises:
        InvalidGeometry: If a cell dimension is not positive or an image dimension is negative
    """
    if cell_width <= 0 or cell_height <= 0:
        raise InvalidGeometry(f"Invalid cell size: {cell_width}x{cell_height}")
    if pixel_width < 0 or pixel_height < 0:
        raise InvalidGeometry(f"Invalid image size: {pixel_width}x{pixel_height}")

    cols = pixel_width // cell_width
    rows = pixel_height // cell_height

    regions: list[Region] = []
    for row in range(rows):
        for col in range(cols):
            regions.append(
                Region(col * cell_width, row * cell_height, cell_width, cell_height)
            )
    return regions
