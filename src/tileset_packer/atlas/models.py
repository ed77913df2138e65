"""
Data models for atlas building.

Lightweight value types shared by the builder, the codec and the service.
No file-system logic lives here.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image


# Gutter width in pixels replicated around every tile
BORDER_WIDTH = 1

# Pillow mode for tiles and atlases: 4x 8-bit channels, straight alpha
ATLAS_MODE = "RGBA"

TRANSPARENT: Tuple[int, int, int, int] = (0, 0, 0, 0)


@dataclass(frozen=True)
class GridLayout:
    """Atlas grid capacity in cells (columns x rows)."""
    columns: int
    rows: int

    def __post_init__(self):
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError(
                f"Grid layout must be positive, got {self.columns}x{self.rows}"
            )

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.columns * self.rows

    def cell_position(self, index: int) -> Tuple[int, int]:
        """Return the (column, row) of cell `index`, row-major."""
        return index % self.columns, index // self.columns

    def __str__(self) -> str:
        return f"{self.columns}x{self.rows}"


@dataclass
class DecodedTile:
    """Outcome of decoding one source path.

    Exactly one of `image` and `error` is set. A tile with an error
    keeps its place in the sequence so later cells do not shift.
    """
    path: Path
    image: Optional[Image.Image] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.image is not None

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        """Pixel size (width, height), or None when decoding failed."""
        return self.image.size if self.image is not None else None
