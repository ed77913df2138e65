"""
Recipe loader.

Reads a JSON build recipe with orjson and turns each `tilesets` entry into
a `TilesetJob` whose paths are resolved against the recipe's directory:

    {
        "tilesets": [
            {
                "export_path": "out/terrain.png",
                "layout": {"width": 8, "height": 4},
                "asset_paths": ["tiles/terrain", "tiles/extra/water.png"],
                "border": 1
            }
        ]
    }

`border` is optional.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union, cast

import orjson

from ..atlas.models import BORDER_WIDTH, GridLayout
from ..settings.types import ConfigError
from .models import Recipe, TilesetJob

logger = logging.getLogger(__name__)


class RecipeError(ConfigError):
    """Raised when a recipe document is malformed."""
    pass


def _require(entry: dict[str, Any], key: str, where: str) -> Any:
    if key not in entry:
        raise RecipeError(f"{where}: missing required field '{key}'")
    return entry[key]


def _positive_int(value: Any, where: str) -> int:
    # bool is an int subclass; `true` is not a grid size
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise RecipeError(f"{where}: expected a positive integer, got {value!r}")
    return value


class RecipeLoader:
    """Parses recipe files into tileset jobs."""

    def __init__(self, default_border: int = BORDER_WIDTH):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.default_border = default_border

    def load(self, recipe_path: Union[str, Path]) -> Recipe:
        """Read and parse the recipe at `recipe_path`.

        Raises:
            RecipeError: invalid JSON or schema violations.
            OSError: the file cannot be read.
        """
        recipe_path = Path(recipe_path)
        with recipe_path.open("rb") as f:  # orjson works with bytes
            raw = f.read()

        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise RecipeError(f"{recipe_path}: invalid JSON: {e}") from e

        return self.parse(data, recipe_path)

    def parse(self, data: Any, recipe_path: Path) -> Recipe:
        """Build a `Recipe` from already decoded JSON."""
        if not isinstance(data, dict):
            raise RecipeError(f"{recipe_path}: top level must be an object")

        entries = _require(cast(dict[str, Any], data), "tilesets", str(recipe_path))
        if not isinstance(entries, list):
            raise RecipeError(f"{recipe_path}: 'tilesets' must be a list")

        recipe = Recipe(path=recipe_path)
        for index, entry in enumerate(cast(list[Any], entries)):
            recipe.tilesets.append(
                self._parse_tileset(entry, recipe.base_dir, f"tilesets[{index}]")
            )

        self.logger.debug(f"Recipe {recipe_path}: {len(recipe.tilesets)} tileset(s)")
        return recipe

    def _parse_tileset(self, entry: Any, base_dir: Path, where: str) -> TilesetJob:
        if not isinstance(entry, dict):
            raise RecipeError(f"{where}: expected an object")
        entry = cast(dict[str, Any], entry)

        export_path = _require(entry, "export_path", where)
        if not isinstance(export_path, str) or not export_path:
            raise RecipeError(f"{where}.export_path: expected a non-empty string")

        layout_json = _require(entry, "layout", where)
        if not isinstance(layout_json, dict):
            raise RecipeError(f"{where}.layout: expected an object")
        layout_json = cast(dict[str, Any], layout_json)
        layout = GridLayout(
            columns=_positive_int(
                _require(layout_json, "width", f"{where}.layout"), f"{where}.layout.width"
            ),
            rows=_positive_int(
                _require(layout_json, "height", f"{where}.layout"), f"{where}.layout.height"
            ),
        )

        asset_paths = _require(entry, "asset_paths", where)
        if not isinstance(asset_paths, list):
            raise RecipeError(f"{where}.asset_paths: expected a list")
        resolved: list[Path] = []
        for i, asset in enumerate(cast(list[Any], asset_paths)):
            if not isinstance(asset, str):
                raise RecipeError(f"{where}.asset_paths[{i}]: expected a string")
            resolved.append(base_dir / asset)

        border = entry.get("border", self.default_border)
        if isinstance(border, bool) or not isinstance(border, int) or border < 0:
            raise RecipeError(f"{where}.border: expected a non-negative integer, got {border!r}")

        return TilesetJob(
            export_path=base_dir / export_path,
            layout=layout,
            asset_paths=resolved,
            border=border,
        )


def load_recipe(recipe_path: Union[str, Path], default_border: Optional[int] = None) -> Recipe:
    """Shortcut for `RecipeLoader(...).load(recipe_path)`."""
    border = BORDER_WIDTH if default_border is None else default_border
    return RecipeLoader(default_border=border).load(recipe_path)
