"""Shared fixtures for tileset_packer tests."""

import logging
from pathlib import Path
from typing import Callable, Iterator, Tuple

import pytest
from PIL import Image

from tileset_packer.atlas.models import DecodedTile

Color = Tuple[int, int, int, int]

RED: Color = (255, 0, 0, 255)
BLUE: Color = (0, 0, 255, 255)


def gradient_tile(width: int, height: int, seed: int = 0) -> Image.Image:
    """Tile whose every pixel is distinct, so misplaced copies are visible."""
    image = Image.new("RGBA", (width, height))
    for y in range(height):
        for x in range(width):
            image.putpixel(
                (x, y), ((x * 31 + seed) % 256, (y * 47 + seed) % 256, (seed * 13) % 256, 255)
            )
    return image


def solid_tile(width: int, height: int, color: Color) -> Image.Image:
    return Image.new("RGBA", (width, height), color)


def decoded(image: Image.Image, name: str = "tile.png") -> DecodedTile:
    return DecodedTile(path=Path(name), image=image)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """INI file for AppSettings so tests never touch the user's store."""
    return tmp_path / "settings.ini"


@pytest.fixture
def write_png(tmp_path: Path) -> Callable[..., Path]:
    """Write an image under tmp_path and return its path."""

    def _write(relative: str, image: Image.Image) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path)
        return path

    return _write
