"""
Recipes package: build recipe parsing and asset enumeration.
"""

from .models import Recipe, TilesetJob
from .loaders import RecipeLoader, RecipeError, load_recipe
from .assets import ASSET_SUFFIX, expand_asset_paths, list_assets

__all__ = [
    'Recipe',
    'TilesetJob',
    'RecipeLoader',
    'RecipeError',
    'load_recipe',
    'ASSET_SUFFIX',
    'expand_asset_paths',
    'list_assets',
]
