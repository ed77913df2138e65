"""
High-level service for building tilesets from recipes.

Provides orchestration for a whole recipe run:
    * Load the recipe and resolve its paths
    * Expand asset directories into ordered tile lists
    * Decode tiles and assemble each atlas
    * Write atlases and report what happened per job

Jobs run one after another in recipe order. A job that fails for asset
reasons is logged and the run continues; configuration errors propagate
and stop the run.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING

from .atlas.builder import AtlasBuilder
from .atlas.errors import EmptyInputError, ReferenceTileError
from .atlas.models import BORDER_WIDTH
from .codec import DEFAULT_COMPRESS_LEVEL, decode_tiles, save_atlas
from .recipes.assets import expand_asset_paths
from .recipes.loaders import RecipeLoader
from .recipes.models import Recipe, TilesetJob

if TYPE_CHECKING:
    from .settings import AppSettings


class JobStatus(Enum):
    """Outcome of a single tileset job."""
    WRITTEN = "written"
    BUILT = "built"  # dry run: assembled but not written
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class JobResult:
    """Per-job report returned by the service."""
    export_path: Path
    status: JobStatus
    tile_count: int = 0
    placed: int = 0
    rejected: List[Path] = field(default_factory=lambda: [])
    message: str = ""


class TilesetPackerService:
    """Facade for recipe runs.

    Builder defaults (border width, PNG compression) come from `settings`
    when given; a recipe entry's own `border` always wins.
    """

    def __init__(
        self,
        settings: Optional["AppSettings"] = None,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.dry_run = dry_run

        if settings is not None:
            self.default_border = settings.border_width
            self.compress_level = settings.png_compress_level
        else:
            self.default_border = BORDER_WIDTH
            self.compress_level = DEFAULT_COMPRESS_LEVEL

    def load_recipe(self, recipe_path: Union[str, Path]) -> Recipe:
        """Read and validate the recipe at `recipe_path`.

        Raises:
            OSError: the recipe file cannot be read.
            ConfigError: malformed recipe.
        """
        return RecipeLoader(default_border=self.default_border).load(recipe_path)

    def run_recipe(self, recipe_path: Union[str, Path]) -> List[JobResult]:
        """Load the recipe at `recipe_path` and run all of its jobs."""
        return self.run_jobs(self.load_recipe(recipe_path))

    def run_jobs(self, recipe: Recipe) -> List[JobResult]:
        """Run every job of `recipe` in order.

        Raises:
            ConfigError: a layout too small for its tiles.
        """
        self.logger.info(f"Recipe {recipe.path}: {len(recipe.tilesets)} tileset(s)")

        results: List[JobResult] = []
        for job in recipe.tilesets:
            results.append(self.run_job(job))

        written = sum(1 for r in results if r.status is JobStatus.WRITTEN)
        self.logger.info(f"Done: {written}/{len(results)} tileset(s) written")
        return results

    def run_job(self, job: TilesetJob) -> JobResult:
        """Build and write one tileset.

        Raises:
            LayoutCapacityError: the layout has fewer cells than tiles.
        """
        try:
            asset_paths = expand_asset_paths(job.asset_paths)
        except OSError as e:
            self.logger.error(f"Cannot list assets for {job.export_path}: {e}")
            return JobResult(
                export_path=job.export_path,
                status=JobStatus.FAILED,
                message=str(e),
            )

        tiles = decode_tiles(asset_paths)
        builder = AtlasBuilder(border=job.border, logger=self.logger)
        try:
            atlas = builder.build(tiles, job.layout)
        except EmptyInputError:
            self.logger.warning(f"No assets found for {job.export_path}")
            return JobResult(
                export_path=job.export_path,
                status=JobStatus.SKIPPED,
                message="No assets found",
            )
        except ReferenceTileError as e:
            self.logger.error(f"Cannot build {job.export_path}: {e}")
            return JobResult(
                export_path=job.export_path,
                status=JobStatus.FAILED,
                tile_count=len(tiles),
                rejected=[e.path],
                message=str(e),
            )

        reference_size = tiles[0].size
        rejected = [t.path for t in tiles if t.size != reference_size]
        result = JobResult(
            export_path=job.export_path,
            status=JobStatus.BUILT,
            tile_count=len(tiles),
            placed=len(tiles) - len(rejected),
            rejected=rejected,
        )

        if self.dry_run:
            self.logger.info(
                f"  {job.export_path.name}: {result.placed}/{result.tile_count} tiles "
                f"(dry run, not written)"
            )
            return result

        try:
            save_atlas(atlas, job.export_path, compress_level=self.compress_level)
        except OSError as e:
            self.logger.error(f"Failed to write {job.export_path}: {e}")
            result.status = JobStatus.FAILED
            result.message = str(e)
            return result

        result.status = JobStatus.WRITTEN
        self.logger.info(
            f"  {job.export_path.name}: {result.placed}/{result.tile_count} tiles, "
            f"{atlas.size[0]}x{atlas.size[1]} px, layout {job.layout}"
        )
        return result
