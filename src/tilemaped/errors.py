"""
Exceptions raised by the tile-map engine.

Every error surfaces to the caller of the operation that detected it. The
engine never retries and never terminates the process.
"""


class TileMapError(Exception):
    """Base class for all tilemaped errors."""
    pass


class InvalidGeometry(TileMapError, ValueError):
    """Raised when a cell, tile or grid size is zero or negative."""
    pass


class AssetLoadError(TileMapError):
    """Raised when an image or manifest cannot be read or decoded."""
    pass


class EmptyManifest(TileMapError):
    """Raised when a sprite manifest has no usable atlas paths."""
    pass


class CorruptMetadata(TileMapError, ValueError):
    """Raised when a metadata line or a layer cell cannot be parsed."""
    pass


class DimensionMismatch(TileMapError, ValueError):
    """Raised when a layer file disagrees with the declared grid shape."""
    pass


class MapIOError(TileMapError, OSError):
    """Raised when the filesystem refuses a read or write."""
    pass


class OutOfRange(TileMapError, IndexError):
    """Raised on out-of-bounds indices or access to a released grid."""
    pass
