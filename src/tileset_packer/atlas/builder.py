"""
Atlas builder: tile placement and border extrusion.

Takes an ordered sequence of decoded tiles and a grid layout and returns
one RGBA atlas in which every tile sits inside its own cell, surrounded
by a gutter replicated from the tile's edge pixels. Bilinear sampling at
a tile's true edge therefore never picks up a neighbour's colour.

Cell layout for a W x H tile with border b:

    +---+-----------+---+
    | c |  top row  | c |   b rows
    +---+-----------+---+
    | l |           | r |
    | e |  interior | i |   H rows
    | f |   W x H   | g |
    | t |           | h |
    +---+-----------+---+
    | c | bottom row| c |   b rows
    +---+-----------+---+
"""

import logging
from typing import Optional, Sequence, Tuple

from PIL import Image

from .models import ATLAS_MODE, BORDER_WIDTH, TRANSPARENT, DecodedTile, GridLayout
from .errors import EmptyInputError, LayoutCapacityError, ReferenceTileError

module_logger = logging.getLogger(__name__)


def cell_pitch(tile_size: Tuple[int, int], border: int = BORDER_WIDTH) -> Tuple[int, int]:
    """Size of one cell: the tile plus a gutter on each side."""
    return tile_size[0] + 2 * border, tile_size[1] + 2 * border


def atlas_size(
    layout: GridLayout, tile_size: Tuple[int, int], border: int = BORDER_WIDTH
) -> Tuple[int, int]:
    """Pixel size of an atlas holding `layout` cells of `tile_size` tiles."""
    pitch_w, pitch_h = cell_pitch(tile_size, border)
    return layout.columns * pitch_w, layout.rows * pitch_h


def cell_origin(
    index: int,
    layout: GridLayout,
    tile_size: Tuple[int, int],
    border: int = BORDER_WIDTH,
) -> Tuple[int, int]:
    """Top-left atlas pixel of the cell for tile `index` (gutter included)."""
    column, row = layout.cell_position(index)
    pitch_w, pitch_h = cell_pitch(tile_size, border)
    return column * pitch_w, row * pitch_h


def extrude_borders(
    atlas: Image.Image,
    tile: Image.Image,
    origin: Tuple[int, int],
    border: int = BORDER_WIDTH,
) -> None:
    """Fill the gutter around a placed tile with copies of its edges.

    Writes only outside the interior rectangle: four edge strips, each
    replicated `border` pixels deep, and four corner blocks holding the
    matching tile corner pixel.
    """
    if border <= 0:
        return

    w, h = tile.size
    ox, oy = origin
    nearest = Image.Resampling.NEAREST

    # Edges
    left = tile.crop((0, 0, 1, h)).resize((border, h), nearest)
    right = tile.crop((w - 1, 0, w, h)).resize((border, h), nearest)
    top = tile.crop((0, 0, w, 1)).resize((w, border), nearest)
    bottom = tile.crop((0, h - 1, w, h)).resize((w, border), nearest)

    atlas.paste(left, (ox, oy + border))
    atlas.paste(right, (ox + border + w, oy + border))
    atlas.paste(top, (ox + border, oy))
    atlas.paste(bottom, (ox + border, oy + border + h))

    # Corners
    corners = [
        ((0, 0), (ox, oy)),
        ((w - 1, 0), (ox + border + w, oy)),
        ((w - 1, h - 1), (ox + border + w, oy + border + h)),
        ((0, h - 1), (ox, oy + border + h)),
    ]
    for source, (x, y) in corners:
        atlas.paste(tile.getpixel(source), (x, y, x + border, y + border))


def build_atlas(
    tiles: Sequence[DecodedTile],
    layout: GridLayout,
    border: int = BORDER_WIDTH,
    logger: Optional[logging.Logger] = None,
) -> Image.Image:
    """Assemble tiles into a padded atlas.

    Args:
        tiles: Decoded tiles in placement order. The first one fixes the
            reference tile size.
        layout: Grid capacity; tile `i` goes to cell
            `(i % columns, i // columns)`.
        border: Gutter width in pixels on each side of a tile.
        logger: Sink for per-tile warnings; defaults to this module's logger.

    Returns:
        New RGBA image of size `layout * (tile_size + 2 * border)`.

    Raises:
        EmptyInputError: `tiles` is empty.
        ReferenceTileError: the first tile failed to decode.
        LayoutCapacityError: more tiles than grid cells.
    """
    log = logger or module_logger

    if border < 0:
        raise ValueError(f"Border width must not be negative: {border}")

    if not tiles:
        raise EmptyInputError("No tiles to place")

    if len(tiles) > layout.capacity:
        raise LayoutCapacityError(len(tiles), layout.capacity, str(layout))

    reference = tiles[0]
    if reference.image is None:
        raise ReferenceTileError(reference.path, reference.error or "no image")
    tile_size = reference.image.size

    atlas = Image.new(ATLAS_MODE, atlas_size(layout, tile_size, border), TRANSPARENT)
    log.debug(
        f"Atlas {atlas.size[0]}x{atlas.size[1]} for {len(tiles)} tiles "
        f"of {tile_size[0]}x{tile_size[1]} in {layout} cells"
    )

    for index, entry in enumerate(tiles):
        if entry.image is None:
            log.warning(f"Tile could not be decoded: {entry.path} ({entry.error})")
            continue
        if entry.image.size != tile_size:
            log.warning(f"Tile with a different size: {entry.path}")
            continue

        image = entry.image
        if image.mode != ATLAS_MODE:
            image = image.convert(ATLAS_MODE)

        origin = cell_origin(index, layout, tile_size, border)
        atlas.paste(image, (origin[0] + border, origin[1] + border))
        extrude_borders(atlas, image, origin, border)

    return atlas


class AtlasBuilder:
    """Atlas builder with an injected diagnostics logger and border width."""

    def __init__(
        self,
        border: int = BORDER_WIDTH,
        logger: Optional[logging.Logger] = None,
    ):
        if border < 0:
            raise ValueError(f"Border width must not be negative: {border}")
        self.border = border
        self.logger = logger or logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build(self, tiles: Sequence[DecodedTile], layout: GridLayout) -> Image.Image:
        """Assemble `tiles` into an atlas laid out on `layout`."""
        return build_atlas(tiles, layout, border=self.border, logger=self.logger)
