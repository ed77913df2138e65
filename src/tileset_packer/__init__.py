"""
tileset_packer: pack tile images into padded texture atlases.

Reads a JSON recipe, lays each tileset's tiles out on a grid and extrudes
every tile's edge pixels into a gutter so filtered sampling never bleeds
between neighbours.
"""

__version__ = "0.1.0"
__author__ = "tileset_packer Contributors"

# Core service imports
from .service import TilesetPackerService, JobResult, JobStatus
from .utils.logging_config import setup_logging

# Builder and data models
from .atlas import AtlasBuilder, build_atlas, BORDER_WIDTH, DecodedTile, GridLayout
from .recipes import Recipe, TilesetJob, load_recipe

__all__ = [
    # Services
    'TilesetPackerService',
    'JobResult',
    'JobStatus',

    # Logging
    'setup_logging',

    # Builder
    'AtlasBuilder',
    'build_atlas',
    'BORDER_WIDTH',

    # Data models
    'DecodedTile',
    'GridLayout',
    'Recipe',
    'TilesetJob',
    'load_recipe',
]
