"""
Data models for map representation during editing.

A map is a stack of layers, each a rows x cols grid. All cells of all
layers live in one contiguous arena of `MapCell`; the raw integer grid and
the rich `Tile` grid are both read through that arena, so the two can never
disagree in shape.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Iterator, Optional

from ..errors import InvalidGeometry, OutOfRange
from ..tilesets.models import Region

DEFAULT_ASSET_ROOT = "asset"

EMPTY_TILE = 0
"""Raw value of a cell that references no sprite."""

module_logger = logging.getLogger(__name__)


class TileKind(IntEnum):
    """What a tile does. Values are persisted in the tile sidecar file."""

    STATIC_SPRITE = 0
    """Draws a single sprite."""

    RANGED_SPRITE = 1
    """Cycles through an inclusive window of sprite ids."""

    EVENT = 2
    """Triggers something when entered; draws nothing."""

    COLLISION = 3
    """Blocks movement; draws nothing."""


@dataclass(frozen=True)
class Tile:
    """Rich view of a map cell.

    sprite_id is set for STATIC_SPRITE and RANGED_SPRITE tiles. range_start
    and range_end only matter for RANGED_SPRITE.
    """
    region: Region = field(default_factory=Region)
    sprite_id: Optional[int] = None
    kind: TileKind = TileKind.STATIC_SPRITE
    range_start: int = 0
    range_end: int = 0

    def frame_at(self, tick: int) -> Optional[int]:
        """Sprite id shown at the given animation tick."""
        if self.kind == TileKind.RANGED_SPRITE:
            span = self.range_end - self.range_start + 1
            return self.range_start + tick % span
        if self.kind == TileKind.STATIC_SPRITE:
            return self.sprite_id
        return None

    @property
    def is_empty(self) -> bool:
        return self.kind == TileKind.STATIC_SPRITE and self.sprite_id is None


@dataclass
class MapCell:
    """A single grid cell: the raw persisted value plus its Tile."""
    value: int = EMPTY_TILE
    tile: Tile = field(default_factory=Tile)


def sprite_to_raw(sprite_id: int) -> int:
    """Raw value stored for a cell showing sprite_id."""
    return sprite_id + 1


def raw_to_sprite(value: int) -> Optional[int]:
    """Sprite id referenced by a raw value, or None for an empty cell."""
    return value - 1 if value > EMPTY_TILE else None


@dataclass
class Map:
    """Multi-layer tile map.

    Attributes:
        cols: Columns per layer
        rows: Rows per layer
        layer_count: Number of stacked layers
        tile_width: On-screen tile width in pixels
        tile_height: On-screen tile height in pixels
        name: Map name, also the stem of its files
        sprite_width: Sprite width (defaults to tile_width)
        sprite_height: Sprite height (defaults to tile_height)
        storage_path: Directory holding the map files, ends with "/"
    """

    cols: int
    rows: int
    layer_count: int
    tile_width: int
    tile_height: int
    name: str
    sprite_width: int = 0
    sprite_height: int = 0
    storage_path: str = ""
    _cells: Optional[list[MapCell]] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self) -> None:
        if self.sprite_width == 0:
            self.sprite_width = self.tile_width
        if self.sprite_height == 0:
            self.sprite_height = self.tile_height
        for label, value in (
            ("cols", self.cols),
            ("rows", self.rows),
            ("layer_count", self.layer_count),
            ("tile_width", self.tile_width),
            ("tile_height", self.tile_height),
            ("sprite_width", self.sprite_width),
            ("sprite_height", self.sprite_height),
        ):
            if value <= 0:
                raise InvalidGeometry(f"Map {label} must be positive, got {value}")
        if not self.name:
            raise ValueError("Map name must not be empty")
        if not self.storage_path:
            self.storage_path = f"{DEFAULT_ASSET_ROOT}/{self.name}/"

        self._cells = [MapCell() for _ in range(self.tile_count)]

    # ---------------------------------------------------------------------
    # Derived metadata
    # ---------------------------------------------------------------------
    @property
    def map_width(self) -> int:
        return self.tile_width * self.cols

    @property
    def map_height(self) -> int:
        return self.tile_height * self.rows

    @property
    def tile_count(self) -> int:
        return self.layer_count * self.rows * self.cols

    @property
    def is_allocated(self) -> bool:
        return self._cells is not None

    # ---------------------------------------------------------------------
    # Arena access
    # ---------------------------------------------------------------------
    def _offset(self, layer: int, row: int, col: int) -> int:
        if self._cells is None:
            raise OutOfRange(f"Map '{self.name}' grid has been released")
        if not (
            0 <= layer < self.layer_count
            and 0 <= row < self.rows
            and 0 <= col < self.cols
        ):
            raise OutOfRange(
                f"Cell [{layer}][{row}][{col}] outside "
                f"[{self.layer_count}][{self.rows}][{self.cols}]"
            )
        return (layer * self.rows + row) * self.cols + col

    def cell(self, layer: int, row: int, col: int) -> MapCell:
        """Return the cell at [layer][row][col]."""
        return self._cells[self._offset(layer, row, col)]  # type: ignore[index]

    def get_raw(self, layer: int, row: int, col: int) -> int:
        return self.cell(layer, row, col).value

    def set_raw(self, layer: int, row: int, col: int, value: int) -> None:
        """Store a raw value; a static tile follows it to the sprite it names."""
        cell = self.cell(layer, row, col)
        cell.value = int(value)
        if cell.tile.kind == TileKind.STATIC_SPRITE:
            cell.tile = replace(cell.tile, sprite_id=raw_to_sprite(cell.value))

    def get_tile(self, layer: int, row: int, col: int) -> Tile:
        return self.cell(layer, row, col).tile

    def set_tile(self, layer: int, row: int, col: int, tile: Tile) -> None:
        """Replace a tile; sprite tiles rewrite the raw value, markers keep it."""
        cell = self.cell(layer, row, col)
        cell.tile = tile
        if tile.kind == TileKind.STATIC_SPRITE:
            cell.value = EMPTY_TILE if tile.sprite_id is None else sprite_to_raw(tile.sprite_id)
        elif tile.kind == TileKind.RANGED_SPRITE:
            cell.value = sprite_to_raw(tile.range_start)

    def place_sprite(self, layer: int, row: int, col: int, sprite_id: int) -> None:
        """Show a single sprite in a cell."""
        if sprite_id < 0:
            raise ValueError(f"Invalid sprite id: {sprite_id}")
        cell = self.cell(layer, row, col)
        cell.tile = replace(
            cell.tile,
            sprite_id=sprite_id,
            kind=TileKind.STATIC_SPRITE,
            range_start=0,
            range_end=0,
        )
        cell.value = sprite_to_raw(sprite_id)

    def place_ranged(
        self, layer: int, row: int, col: int, range_start: int, range_end: int
    ) -> None:
        """Animate a cell through sprites range_start..range_end (inclusive)."""
        if range_start < 0 or range_end < range_start:
            raise ValueError(f"Invalid sprite range: {range_start}..{range_end}")
        cell = self.cell(layer, row, col)
        cell.tile = replace(
            cell.tile,
            sprite_id=range_start,
            kind=TileKind.RANGED_SPRITE,
            range_start=range_start,
            range_end=range_end,
        )
        cell.value = sprite_to_raw(range_start)

    def mark(self, layer: int, row: int, col: int, kind: TileKind) -> None:
        """Turn a cell into an EVENT or COLLISION marker. The raw value is kept."""
        if kind not in (TileKind.EVENT, TileKind.COLLISION):
            raise ValueError(f"mark() expects EVENT or COLLISION, got {kind!r}")
        cell = self.cell(layer, row, col)
        cell.tile = replace(cell.tile, sprite_id=None, kind=kind, range_start=0, range_end=0)

    def clear_cell(self, layer: int, row: int, col: int) -> None:
        """Reset a cell to an empty static tile, keeping its geometry."""
        cell = self.cell(layer, row, col)
        cell.tile = Tile(region=cell.tile.region)
        cell.value = EMPTY_TILE

    def fill_layer(self, layer: int, value: int) -> None:
        """Set every raw value of one layer."""
        for row in range(self.rows):
            for col in range(self.cols):
                self.set_raw(layer, row, col, value)

    def iter_cells(
        self, layer: Optional[int] = None
    ) -> Iterator[tuple[int, int, int, MapCell]]:
        """Yield (layer, row, col, cell) in layer, row, col order."""
        layers = range(self.layer_count) if layer is None else [layer]
        for layer_index in layers:
            for row in range(self.rows):
                for col in range(self.cols):
                    yield layer_index, row, col, self.cell(layer_index, row, col)

    # ---------------------------------------------------------------------
    # Grid views
    # ---------------------------------------------------------------------
    @property
    def raw_grid(self) -> list[list[list[int]]]:
        """Snapshot of raw values as [layer][row][col]."""
        return [
            [
                [self.get_raw(layer_index, row, col) for col in range(self.cols)]
                for row in range(self.rows)
            ]
            for layer_index in range(self.layer_count)
        ]

    @property
    def tile_grid(self) -> list[list[list[Tile]]]:
        """Snapshot of tiles as [layer][row][col]."""
        return [
            [
                [self.get_tile(layer_index, row, col) for col in range(self.cols)]
                for row in range(self.rows)
            ]
            for layer_index in range(self.layer_count)
        ]

    def layer_rows(self, layer: int) -> list[list[int]]:
        """Raw values of one layer, row by row."""
        return [
            [self.get_raw(layer, row, col) for col in range(self.cols)]
            for row in range(self.rows)
        ]

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------
    def release(self) -> None:
        """Drop both grids at once. Later cell access raises OutOfRange."""
        self._cells = None

    def describe(self) -> list[str]:
        """Human-readable metadata lines."""
        return [
            f"width: {self.cols}",
            f"height: {self.rows}",
            f"layers: {self.layer_count}",
            f"sprite_width: {self.sprite_width}",
            f"sprite_height: {self.sprite_height}",
            f"name: {self.name}",
        ]


def create_map(
    cols: int,
    rows: int,
    layer_count: int,
    tile_width: int,
    tile_height: int,
    name: str,
    *,
    asset_root: str = DEFAULT_ASSET_ROOT,
    sprite_width: Optional[int] = None,
    sprite_height: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> Map:
    """Create an empty map with zeroed raw values and default tiles.

    Tile geometry is not populated here; call `init_tile_geometry()`.

    Args:
        cols: Columns per layer
        rows: Rows per layer
        layer_count: Number of layers
        tile_width: Tile width in pixels
        tile_height: Tile height in pixels
        name: Map name
        asset_root: Directory under which <name>/ is stored
        sprite_width: Sprite width, defaults to tile_width
        sprite_height: Sprite height, defaults to tile_height
        logger: Diagnostics logger (module logger by default)

    Returns:
        Newly allocated Map

    Raises:
        InvalidGeometry: If a dimension is not positive
        ValueError: If name is empty
    """
    log = logger or module_logger
    log.info(f"Creating map '{name}'")

    root = asset_root.rstrip("/\\") or "."
    tile_map = Map(
        cols=cols,
        rows=rows,
        layer_count=layer_count,
        tile_width=tile_width,
        tile_height=tile_height,
        name=name,
        sprite_width=sprite_width if sprite_width is not None else tile_width,
        sprite_height=sprite_height if sprite_height is not None else tile_height,
        storage_path=f"{root}/{name}/" if name else "",
    )

    log.debug(f"  map.w = {tile_map.map_width} map.h = {tile_map.map_height}")
    log.debug(f"  map.tile_count = {tile_map.tile_count}")
    return tile_map
