"""
Main entry point for tileset_packer.
Usage: python -m tileset_packer RECIPE
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from . import __version__
from .service import TilesetPackerService
from .settings import AppSettings, ConfigError
from .utils.logging_config import LoggingOverrides, setup_logging


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="tileset-packer",
        description="Pack tile images into padded texture atlases.",
    )
    parser.add_argument("recipe", nargs="?", help="Path to the JSON recipe file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console log level for this run",
    )
    parser.add_argument("--log-file", help="Also log to this CSV file")
    parser.add_argument(
        "--no-color", action="store_true", help="Disable coloured console output"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Build atlases without writing them"
    )
    parser.add_argument("--profile", default="default", help="Settings profile name")
    parser.add_argument("--settings", help="Use this INI settings file")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = AppSettings(profile=args.profile, settings_file=args.settings)
    setup_logging(
        settings,
        LoggingOverrides(
            console_level=args.log_level,
            use_colors=False if args.no_color else None,
            log_file=args.log_file,
        ),
    )
    logger = logging.getLogger(f"{__name__}.main")

    if args.recipe is None:
        logger.error("Missing parameter")
        logger.info("Usage:")
        logger.info(f"\t{parser.prog} JSON_FILE")
        parser.print_usage(sys.stderr)
        return 1

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"Settings: {warning}")
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    recipe_path = Path(args.recipe)
    if not recipe_path.is_file():
        logger.critical(f"Invalid recipe file: {recipe_path}")
        return 1

    service = TilesetPackerService(settings=settings, dry_run=args.dry_run)
    try:
        recipe = service.load_recipe(recipe_path)
    except OSError as e:
        logger.critical(f"Cannot read recipe {recipe_path}: {e}")
        return 1
    except ConfigError as e:
        logger.critical(f"Recipe configuration error: {e}")
        return 1

    try:
        service.run_jobs(recipe)
    except ConfigError as e:
        logger.critical(f"Recipe configuration error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
