"""
Exceptions raised while assembling an atlas.
"""

from pathlib import Path

from ..settings.types import ConfigError


class AtlasError(Exception):
    """Base class for atlas build failures tied to the input tiles."""
    pass


class EmptyInputError(AtlasError):
    """Raised when a job has no tiles to place."""
    pass


class TileDecodeError(AtlasError):
    """Raised when a tile image cannot be decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot decode tile {path}: {reason}")
        self.path = path
        self.reason = reason


class ReferenceTileError(TileDecodeError):
    """Raised when the first tile fails to decode.

    The first tile fixes the reference tile size for the whole atlas,
    so nothing can be placed without it.
    """
    pass


class LayoutCapacityError(ConfigError):
    """Raised when a job lists more tiles than its grid has cells."""

    def __init__(self, tile_count: int, capacity: int, layout: str):
        super().__init__(
            f"{tile_count} tiles do not fit in a {layout} layout ({capacity} cells)"
        )
        self.tile_count = tile_count
        self.capacity = capacity
