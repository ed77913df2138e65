"""
Image codec: decode tile files and write atlases with Pillow.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from PIL import Image

from .atlas.models import ATLAS_MODE, DecodedTile

logger = logging.getLogger(__name__)

DEFAULT_COMPRESS_LEVEL = 6


def decode_tile(path: Path) -> DecodedTile:
    """Decode `path` into an RGBA tile.

    Never raises for unreadable input: the failure is recorded on the
    returned `DecodedTile` so the builder can decide what to do with it.
    """
    try:
        with Image.open(path) as image:
            image.load()
            rgba = image.convert(ATLAS_MODE)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        # UnidentifiedImageError and FileNotFoundError are both OSError;
        # DecompressionBombError is not
        logger.debug(f"Decode failed for {path}: {e}")
        return DecodedTile(path=path, error=str(e))
    return DecodedTile(path=path, image=rgba)


def decode_tiles(paths: Iterable[Path]) -> List[DecodedTile]:
    """Decode every path, preserving order."""
    return [decode_tile(path) for path in paths]


def save_atlas(
    image: Image.Image, export_path: Path, compress_level: int = DEFAULT_COMPRESS_LEVEL
) -> Path:
    """Write `image` as PNG, creating parent directories as needed.

    Filesystem errors propagate to the caller.
    """
    export_path = Path(export_path)
    export_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(export_path, format="PNG", compress_level=compress_level)
    logger.debug(f"Wrote {image.size[0]}x{image.size[1]} atlas to {export_path}")
    return export_path
