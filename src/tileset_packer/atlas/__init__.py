"""
Atlas package: tile placement and gutter extrusion.
"""

from .models import ATLAS_MODE, BORDER_WIDTH, TRANSPARENT, DecodedTile, GridLayout
from .errors import (
    AtlasError, EmptyInputError, TileDecodeError, ReferenceTileError,
    LayoutCapacityError
)
from .builder import AtlasBuilder, build_atlas, atlas_size, cell_origin, cell_pitch, extrude_borders

__all__ = [
    # Builder
    'AtlasBuilder',
    'build_atlas',
    'atlas_size',
    'cell_origin',
    'cell_pitch',
    'extrude_borders',

    # Models
    'ATLAS_MODE',
    'BORDER_WIDTH',
    'TRANSPARENT',
    'DecodedTile',
    'GridLayout',

    # Errors
    'AtlasError',
    'EmptyInputError',
    'TileDecodeError',
    'ReferenceTileError',
    'LayoutCapacityError',
]
