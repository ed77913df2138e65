"""
Asset enumeration: expand recipe asset paths into an ordered file list.
"""

import logging
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)

ASSET_SUFFIX = ".png"


def list_assets(directory: Path) -> List[Path]:
    """Return the `.png` files directly inside `directory`, sorted.

    The suffix match is case-sensitive and the listing is not recursive.
    Sorting is lexicographic on the full path, independent of the order
    the filesystem reports entries in.
    """
    assets = [
        entry for entry in directory.iterdir()
        if entry.name.endswith(ASSET_SUFFIX) and not entry.is_dir()
    ]
    assets.sort()
    return assets


def expand_asset_paths(paths: Iterable[Path]) -> List[Path]:
    """Flatten recipe asset paths in order.

    Directories are replaced in place by their sorted `.png` contents.
    Anything else is kept as a file path; a missing file surfaces later as
    a decode failure for that tile.
    """
    expanded: List[Path] = []
    for path in paths:
        if path.is_dir():
            assets = list_assets(path)
            logger.debug(f"{path}: {len(assets)} asset(s)")
            expanded.extend(assets)
        else:
            if not path.exists():
                logger.debug(f"Asset path does not exist: {path}")
            expanded.append(path)
    return expanded
