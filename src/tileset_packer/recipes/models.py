"""
Recipe data models.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..atlas.models import BORDER_WIDTH, GridLayout


@dataclass(frozen=True)
class TilesetJob:
    """One tileset entry of a recipe, paths already resolved.

    `asset_paths` keeps recipe order; each entry is either an image file
    or a directory expanded later by the asset enumerator.
    """
    export_path: Path
    layout: GridLayout
    asset_paths: List[Path] = field(default_factory=lambda: [])
    border: int = BORDER_WIDTH


@dataclass
class Recipe:
    """Parsed recipe document."""
    path: Path
    tilesets: List[TilesetJob] = field(default_factory=lambda: [])

    @property
    def base_dir(self) -> Path:
        """Directory every relative recipe path is resolved against."""
        return self.path.parent
