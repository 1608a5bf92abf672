"""Saving and loading maps to the on-disk asset format.

A map named `name` stored in directory `<root>/<name>/` consists of:

* `<name>.md`: one metadata line, `cols,rows,layers,sprite_w,sprite_h`
  immediately followed by the storage directory string;
* `<name>_<i>.lr`: one file per layer, `rows` lines of `cols` integers, each
  integer followed by a comma;
* `<name>.tiles.json`: optional tile attributes (kind, animation range) for
  cells that are not plain static sprites.

Metadata lines of the older `<width>x<height>` form are still readable.
"""

import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional, cast

import orjson

from ..errors import CorruptMetadata, DimensionMismatch, MapIOError
from ..tilesets.loaders import DEFAULT_CELL_HEIGHT, DEFAULT_CELL_WIDTH
from .geometry import init_tile_geometry
from .models import Map, TileKind, raw_to_sprite

METADATA_SUFFIX = ".md"
LAYER_SUFFIX = ".lr"
TILES_SUFFIX = ".tiles.json"
TILES_FORMAT_VERSION = 1

_CANONICAL_RE = re.compile(r"^([0-9]+),([0-9]+),([0-9]+),([0-9]+),([0-9]+)(.*)$")
_DECIMAL_RE = re.compile(r"[0-9]+")

module_logger = logging.getLogger(__name__)


@dataclass
class MapMetadata:
    """Decoded metadata line.

    Legacy `<width>x<height>` lines carry neither layer count nor sprite
    size; those fields are None and is_legacy is True.
    """

    cols: int
    rows: int
    layer_count: Optional[int] = None
    sprite_width: Optional[int] = None
    sprite_height: Optional[int] = None
    storage_path: str = ""
    is_legacy: bool = False

    @classmethod
    def from_map(cls, tile_map: Map) -> "MapMetadata":
        return cls(
            cols=tile_map.cols,
            rows=tile_map.rows,
            layer_count=tile_map.layer_count,
            sprite_width=tile_map.sprite_width,
            sprite_height=tile_map.sprite_height,
            storage_path=tile_map.storage_path,
        )

    def to_line(self) -> str:
        """Encode as a canonical metadata line (without terminator)."""
        storage = self.storage_path
        if storage[:1].isdigit():
            # keep the path distinguishable from sprite_height
            storage = f"./{storage}"
        numbers = (self.cols, self.rows, self.layer_count, self.sprite_width, self.sprite_height)
        return ",".join(str(n) for n in numbers) + storage


# =============================================================================
# File naming
# =============================================================================

def metadata_path(storage_dir: Path, name: str) -> Path:
    return storage_dir / f"{name}{METADATA_SUFFIX}"


def layer_path(storage_dir: Path, name: str, layer: int) -> Path:
    return storage_dir / f"{name}_{layer}{LAYER_SUFFIX}"


def tiles_path(storage_dir: Path, name: str) -> Path:
    return storage_dir / f"{name}{TILES_SUFFIX}"


def _count_layer_files(storage_dir: Path, name: str) -> int:
    count = 0
    while layer_path(storage_dir, name, count).exists():
        count += 1
    return count


# =============================================================================
# Encoding / decoding
# =============================================================================

def parse_metadata_line(line: str) -> MapMetadata:
    """Decode the first line of a metadata file.

    Raises:
        CorruptMetadata: If the line matches neither the canonical nor the legacy form
    """
    line = line.rstrip("\r\n")

    if "," in line:
        match = _CANONICAL_RE.match(line)
        if not match:
            raise CorruptMetadata(f"Malformed metadata line: {line!r}")
        cols, rows, layers, sprite_w, sprite_h = (int(g) for g in match.groups()[:5])
        if min(cols, rows, layers, sprite_w, sprite_h) <= 0:
            raise CorruptMetadata(f"Metadata declares an empty grid: {line!r}")
        return MapMetadata(
            cols=cols,
            rows=rows,
            layer_count=layers,
            sprite_width=sprite_w,
            sprite_height=sprite_h,
            storage_path=match.group(6),
        )

    x_pos = line.find("x")
    if x_pos < 0:
        raise CorruptMetadata(f"No dimension separator in metadata line: {line!r}")
    width_token = line[:x_pos].strip()
    height_token = line[x_pos + 1:].strip()
    if not (_DECIMAL_RE.fullmatch(width_token) and _DECIMAL_RE.fullmatch(height_token)):
        raise CorruptMetadata(f"Invalid dimensions in metadata line: {line!r}")
    cols, rows = int(width_token), int(height_token)
    if cols == 0 or rows == 0:
        raise CorruptMetadata(f"Metadata declares an empty grid: {line!r}")
    return MapMetadata(cols=cols, rows=rows, is_legacy=True)


def read_metadata(md_path: str | Path) -> MapMetadata:
    """Read and decode a metadata file.

    Raises:
        MapIOError: If the file cannot be read
        CorruptMetadata: If its first line is malformed
    """
    try:
        with open(md_path, encoding="utf-8", newline="") as f:
            first_line = f.readline()
    except UnicodeDecodeError as e:
        raise CorruptMetadata(f"Metadata file {md_path} is not text: {e}") from e
    except OSError as e:
        raise MapIOError(f"Cannot read metadata file {md_path}: {e}") from e
    return parse_metadata_line(first_line)


def encode_layer(rows: list[list[int]]) -> str:
    """Encode one layer: every value followed by a comma, one row per line."""
    return "".join("".join(f"{value}," for value in row) + "\n" for row in rows)


def parse_layer(text: str, rows: int, cols: int, source: str = "<layer>") -> list[list[int]]:
    """Decode one layer file into rows x cols integers.

    Raises:
        DimensionMismatch: If the row or column count differs from rows/cols
        CorruptMetadata: If a cell is not an integer
    """
    lines = text.splitlines()
    if len(lines) != rows:
        raise DimensionMismatch(f"{source}: expected {rows} rows, found {len(lines)}")

    grid: list[list[int]] = []
    for row_index, line in enumerate(lines):
        tokens = line.split(",")
        if tokens and tokens[-1].strip() == "":
            tokens.pop()
        if len(tokens) != cols:
            raise DimensionMismatch(
                f"{source}: row {row_index} has {len(tokens)} columns, expected {cols}"
            )
        try:
            grid.append([int(token) for token in tokens])
        except ValueError as e:
            raise CorruptMetadata(f"{source}: row {row_index}: {e}") from e
    return grid


def encode_tiles(tile_map: Map) -> Optional[dict[str, Any]]:
    """Collect attributes of tiles the layer files cannot express.

    Returns:
        Sidecar payload, or None when every tile is a plain static sprite
    """
    entries: list[dict[str, Any]] = []
    for layer, row, col, cell in tile_map.iter_cells():
        tile = cell.tile
        if tile.kind == TileKind.STATIC_SPRITE:
            continue
        entries.append({
            "layer": layer,
            "row": row,
            "col": col,
            "kind": int(tile.kind),
            "range_start": tile.range_start,
            "range_end": tile.range_end,
        })
    if not entries:
        return None
    return {"version": TILES_FORMAT_VERSION, "tiles": entries}


def apply_tiles(tile_map: Map, payload: Any, source: str = "<tiles>") -> int:
    """Apply a tile attribute payload to a map.

    Returns:
        Number of tiles updated

    Raises:
        CorruptMetadata: If the payload is malformed
        DimensionMismatch: If an entry lies outside the map grid
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("tiles"), list):
        raise CorruptMetadata(f"{source}: expected an object with a 'tiles' list")

    entries = cast(list[Any], payload["tiles"])
    for entry in entries:
        try:
            layer = int(entry["layer"])
            row = int(entry["row"])
            col = int(entry["col"])
            kind = TileKind(int(entry["kind"]))
            range_start = int(entry.get("range_start", 0))
            range_end = int(entry.get("range_end", 0))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CorruptMetadata(f"{source}: invalid tile entry {entry!r}: {e}") from e

        if not (
            0 <= layer < tile_map.layer_count
            and 0 <= row < tile_map.rows
            and 0 <= col < tile_map.cols
        ):
            raise DimensionMismatch(f"{source}: tile [{layer}][{row}][{col}] outside map grid")

        if kind == TileKind.RANGED_SPRITE:
            # the layer file stays authoritative for the raw value
            raw = tile_map.get_raw(layer, row, col)
            try:
                tile_map.place_ranged(layer, row, col, range_start, range_end)
            except ValueError as e:
                raise CorruptMetadata(f"{source}: {e}") from e
            tile_map.set_raw(layer, row, col, raw)
        elif kind in (TileKind.EVENT, TileKind.COLLISION):
            tile_map.mark(layer, row, col, kind)
    return len(entries)


# =============================================================================
# Save / load
# =============================================================================

def save_map(tile_map: Map, logger: Optional[logging.Logger] = None) -> Path:
    """Write a map's metadata, layer files and tile attributes.

    All files are first written as temporaries and moved into place only
    once every temporary exists.

    Args:
        tile_map: Map to save
        logger: Diagnostics logger (module logger by default)

    Returns:
        Path of the written metadata file

    Raises:
        MapIOError: If the storage directory or a file cannot be written
    """
    log = logger or module_logger
    storage_dir = Path(tile_map.storage_path)
    name = tile_map.name

    try:
        storage_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MapIOError(f"Cannot create storage directory {storage_dir}: {e}") from e

    files: dict[Path, bytes] = {}
    for layer in range(tile_map.layer_count):
        files[layer_path(storage_dir, name, layer)] = encode_layer(
            tile_map.layer_rows(layer)
        ).encode("utf-8")

    tiles_payload = encode_tiles(tile_map)
    sidecar = tiles_path(storage_dir, name)
    if tiles_payload is not None:
        files[sidecar] = orjson.dumps(tiles_payload, option=orjson.OPT_INDENT_2)

    md_path = metadata_path(storage_dir, name)
    files[md_path] = (MapMetadata.from_map(tile_map).to_line() + "\n").encode("utf-8")

    pending: list[tuple[Path, Path]] = []
    try:
        for target, data in files.items():
            temp = target.with_name(target.name + ".tmp")
            pending.append((temp, target))
            temp.write_bytes(data)
        for temp, target in pending:
            os.replace(temp, target)

        if tiles_payload is None and sidecar.exists():
            sidecar.unlink()
        stale = tile_map.layer_count
        while layer_path(storage_dir, name, stale).exists():
            layer_path(storage_dir, name, stale).unlink()
            stale += 1
    except OSError as e:
        for temp, _ in pending:
            temp.unlink(missing_ok=True)
        raise MapIOError(f"Failed to save map '{name}' to {storage_dir}: {e}") from e

    log.info(f"Saved map '{name}' ({tile_map.layer_count} layer(s)) to {storage_dir}")
    return md_path


def _resolve_metadata_path(path: str | Path) -> Path:
    candidate = Path(path)
    if candidate.is_dir():
        return metadata_path(candidate, candidate.name)
    return candidate


def load_map(
    path: str | Path,
    *,
    fallback_sprite_size: tuple[int, int] = (DEFAULT_CELL_WIDTH, DEFAULT_CELL_HEIGHT),
    logger: Optional[logging.Logger] = None,
) -> Map:
    """Load a map from its storage directory or its metadata file.

    Args:
        path: Storage directory (`<root>/<name>/`) or `<name>.md` file
        fallback_sprite_size: Sprite size used for legacy metadata lines
        logger: Diagnostics logger (module logger by default)

    Returns:
        Map with raw values, tiles and geometry populated

    Raises:
        MapIOError: If the metadata or a layer file is missing or unreadable
        CorruptMetadata: If the metadata, a layer cell or the tile file is malformed
        DimensionMismatch: If a layer file disagrees with the metadata
    """
    log = logger or module_logger
    md_path = _resolve_metadata_path(path)
    if not md_path.is_file():
        raise MapIOError(f"Map metadata not found: {md_path}")

    storage_dir = md_path.parent
    name = md_path.stem
    metadata = read_metadata(md_path)

    if metadata.is_legacy:
        layer_count = _count_layer_files(storage_dir, name) or 1
        sprite_width, sprite_height = fallback_sprite_size
        log.warning(
            f"Map '{name}' uses legacy metadata {metadata.cols}x{metadata.rows}; "
            f"assuming {layer_count} layer(s) and {sprite_width}x{sprite_height} sprites"
        )
    else:
        layer_count = cast(int, metadata.layer_count)
        sprite_width = cast(int, metadata.sprite_width)
        sprite_height = cast(int, metadata.sprite_height)

    storage_path = f"{storage_dir.as_posix()}/"
    if metadata.storage_path and metadata.storage_path != storage_path:
        log.debug(f"Map '{name}' was saved to {metadata.storage_path}, loading from {storage_path}")

    tile_map = Map(
        cols=metadata.cols,
        rows=metadata.rows,
        layer_count=layer_count,
        tile_width=sprite_width,
        tile_height=sprite_height,
        name=name,
        sprite_width=sprite_width,
        sprite_height=sprite_height,
        storage_path=storage_path,
    )

    for layer in range(layer_count):
        source = layer_path(storage_dir, name, layer)
        if metadata.is_legacy and not source.exists():
            continue
        try:
            text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptMetadata(f"Layer file {source} is not text: {e}") from e
        except OSError as e:
            raise MapIOError(f"Cannot read layer file {source}: {e}") from e

        grid = parse_layer(text, tile_map.rows, tile_map.cols, str(source))
        for row, values in enumerate(grid):
            for col, value in enumerate(values):
                cell = tile_map.cell(layer, row, col)
                cell.value = value
                cell.tile = replace(cell.tile, sprite_id=raw_to_sprite(value))

    sidecar = tiles_path(storage_dir, name)
    if sidecar.exists():
        try:
            payload = orjson.loads(sidecar.read_bytes())
        except orjson.JSONDecodeError as e:
            raise CorruptMetadata(f"Failed to parse tile file {sidecar}: {e}") from e
        except OSError as e:
            raise MapIOError(f"Cannot read tile file {sidecar}: {e}") from e
        applied = apply_tiles(tile_map, payload, str(sidecar))
        log.debug(f"  {applied} tile attribute(s) from {sidecar.name}")

    init_tile_geometry(tile_map, logger=log)
    log.info(
        f"Loaded map '{name}': {tile_map.cols}x{tile_map.rows}, {layer_count} layer(s)"
    )
    return tile_map
