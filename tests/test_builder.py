"""Unit tests for the atlas builder."""

import logging
from pathlib import Path

import pytest
from PIL import Image

from tileset_packer.atlas import (
    AtlasBuilder,
    DecodedTile,
    EmptyInputError,
    GridLayout,
    LayoutCapacityError,
    ReferenceTileError,
    TileDecodeError,
    atlas_size,
    build_atlas,
    cell_origin,
)
from tileset_packer.settings import ConfigError

from conftest import BLUE, RED, decoded, gradient_tile, solid_tile


def alpha_extrema(image: Image.Image, box: tuple[int, int, int, int]) -> tuple[int, int]:
    return image.crop(box).getchannel("A").getextrema()


class TestGridLayout:
    """Test grid layout arithmetic."""

    def test_capacity(self) -> None:
        assert GridLayout(3, 2).capacity == 6

    def test_cell_position_is_row_major(self) -> None:
        layout = GridLayout(3, 2)
        positions = [layout.cell_position(i) for i in range(6)]
        assert positions == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_rejects_non_positive(self) -> None:
        with pytest.raises(ValueError):
            GridLayout(0, 3)
        with pytest.raises(ValueError):
            GridLayout(2, -1)


class TestAtlasGeometry:
    """Test atlas and cell sizing."""

    @pytest.mark.parametrize(
        "columns,rows,count", [(1, 1, 1), (2, 1, 2), (4, 3, 5), (3, 3, 9)]
    )
    def test_atlas_size(self, columns: int, rows: int, count: int) -> None:
        """Atlas is columns*(W+2) by rows*(H+2) regardless of tile count."""
        tiles = [decoded(gradient_tile(5, 3, seed=i), f"{i}.png") for i in range(count)]
        atlas = build_atlas(tiles, GridLayout(columns, rows))
        assert atlas.size == (columns * 7, rows * 5)
        assert atlas.mode == "RGBA"

    def test_atlas_size_helper(self) -> None:
        assert atlas_size(GridLayout(2, 3), (16, 8)) == (36, 30)
        assert atlas_size(GridLayout(2, 3), (16, 8), border=2) == (40, 36)

    def test_cell_origin(self) -> None:
        layout = GridLayout(3, 2)
        assert cell_origin(0, layout, (4, 4)) == (0, 0)
        assert cell_origin(2, layout, (4, 4)) == (12, 0)
        assert cell_origin(4, layout, (4, 4)) == (6, 6)


class TestPlacement:
    """Test interior copy and border extrusion."""

    def test_interior_identity_copy(self) -> None:
        """Every tile pixel lands at cell_origin + (1 + x, 1 + y)."""
        layout = GridLayout(2, 2)
        sources = [gradient_tile(4, 3, seed=i * 50) for i in range(3)]
        atlas = build_atlas([decoded(s, f"{i}.png") for i, s in enumerate(sources)], layout)

        for index, source in enumerate(sources):
            ox, oy = cell_origin(index, layout, (4, 3))
            for y in range(3):
                for x in range(4):
                    assert atlas.getpixel((ox + 1 + x, oy + 1 + y)) == source.getpixel((x, y))

    def test_semi_transparent_pixels_are_not_blended(self) -> None:
        tile = solid_tile(2, 2, (10, 20, 30, 128))
        atlas = build_atlas([decoded(tile)], GridLayout(1, 1))
        assert atlas.getpixel((1, 1)) == (10, 20, 30, 128)
        assert atlas.getpixel((0, 0)) == (10, 20, 30, 128)

    def test_border_replication(self) -> None:
        """Gutters copy the tile's outer rows and columns, corners its corners."""
        w, h = 5, 4
        layout = GridLayout(2, 2)
        sources = [gradient_tile(w, h, seed=i * 70) for i in range(4)]
        atlas = build_atlas([decoded(s, f"{i}.png") for i, s in enumerate(sources)], layout)

        for index, tile in enumerate(sources):
            ox, oy = cell_origin(index, layout, (w, h))
            for y in range(h):
                assert atlas.getpixel((ox, oy + 1 + y)) == tile.getpixel((0, y))
                assert atlas.getpixel((ox + w + 1, oy + 1 + y)) == tile.getpixel((w - 1, y))
            for x in range(w):
                assert atlas.getpixel((ox + 1 + x, oy)) == tile.getpixel((x, 0))
                assert atlas.getpixel((ox + 1 + x, oy + h + 1)) == tile.getpixel((x, h - 1))

            assert atlas.getpixel((ox, oy)) == tile.getpixel((0, 0))
            assert atlas.getpixel((ox + w + 1, oy)) == tile.getpixel((w - 1, 0))
            assert atlas.getpixel((ox + w + 1, oy + h + 1)) == tile.getpixel((w - 1, h - 1))
            assert atlas.getpixel((ox, oy + h + 1)) == tile.getpixel((0, h - 1))

    def test_wider_border(self) -> None:
        """With border=2 the edge strip fills both gutter pixels."""
        tile = gradient_tile(3, 3, seed=9)
        atlas = build_atlas([decoded(tile)], GridLayout(1, 1), border=2)

        assert atlas.size == (7, 7)
        assert atlas.getpixel((2, 2)) == tile.getpixel((0, 0))
        for y in range(3):
            assert atlas.getpixel((0, 2 + y)) == tile.getpixel((0, y))
            assert atlas.getpixel((1, 2 + y)) == tile.getpixel((0, y))
            assert atlas.getpixel((5, 2 + y)) == tile.getpixel((2, y))
            assert atlas.getpixel((6, 2 + y)) == tile.getpixel((2, y))
        for x in range(2):
            for y in range(2):
                assert atlas.getpixel((x, y)) == tile.getpixel((0, 0))
                assert atlas.getpixel((5 + x, 5 + y)) == tile.getpixel((2, 2))

    def test_zero_border(self) -> None:
        tile = gradient_tile(3, 2)
        atlas = build_atlas([decoded(tile)], GridLayout(1, 1), border=0)
        assert atlas.tobytes() == tile.tobytes()

    def test_single_pixel_tile(self) -> None:
        atlas = build_atlas([decoded(solid_tile(1, 1, RED))], GridLayout(1, 1))
        assert atlas.size == (3, 3)
        assert all(atlas.getpixel((x, y)) == RED for x in range(3) for y in range(3))

    def test_unused_cells_are_transparent(self) -> None:
        atlas = build_atlas([decoded(solid_tile(2, 2, RED))], GridLayout(2, 2))
        assert alpha_extrema(atlas, (4, 0, 8, 8)) == (0, 0)
        assert alpha_extrema(atlas, (0, 4, 4, 8)) == (0, 0)

    def test_non_rgba_tile_is_converted(self) -> None:
        tile = Image.new("RGB", (2, 2), (1, 2, 3))
        atlas = build_atlas([decoded(tile)], GridLayout(1, 1))
        assert atlas.getpixel((1, 1)) == (1, 2, 3, 255)

    def test_red_blue_scenario(self) -> None:
        """Two 4x4 tiles on a 2x1 grid make a 12x6 atlas."""
        atlas = build_atlas(
            [decoded(solid_tile(4, 4, RED), "red.png"), decoded(solid_tile(4, 4, BLUE), "blue.png")],
            GridLayout(2, 1),
        )
        assert atlas.size == (12, 6)
        assert all(atlas.getpixel((x, y)) == RED for x in range(1, 5) for y in range(1, 5))
        assert all(atlas.getpixel((x, y)) == BLUE for x in range(7, 11) for y in range(1, 5))
        assert atlas.getpixel((0, 0)) == RED
        assert atlas.getpixel((5, 1)) == RED
        assert atlas.getpixel((6, 1)) == BLUE
        assert atlas.getpixel((11, 5)) == BLUE

    def test_gutter_does_not_bleed_into_neighbour(self) -> None:
        """The right gutter of cell 0 and the left gutter of cell 1 keep their own colours."""
        left = gradient_tile(4, 4, seed=1)
        right = gradient_tile(4, 4, seed=200)
        atlas = build_atlas([decoded(left, "l.png"), decoded(right, "r.png")], GridLayout(2, 1))
        assert atlas.getpixel((5, 1)) == left.getpixel((3, 0))
        assert atlas.getpixel((6, 1)) == right.getpixel((0, 0))

    def test_idempotent(self) -> None:
        tiles = [decoded(gradient_tile(6, 5, seed=i), f"{i}.png") for i in range(5)]
        first = build_atlas(tiles, GridLayout(3, 2))
        second = build_atlas(tiles, GridLayout(3, 2))
        assert first.tobytes() == second.tobytes()

    def test_source_tiles_untouched(self) -> None:
        tile = gradient_tile(4, 4)
        before = tile.tobytes()
        build_atlas([decoded(tile)], GridLayout(1, 1))
        assert tile.tobytes() == before


class TestRejectedTiles:
    """Test mismatched and undecodable tiles."""

    def test_mismatched_size_leaves_cell_transparent(self, caplog: pytest.LogCaptureFixture) -> None:
        tiles = [
            decoded(solid_tile(4, 4, RED), "a.png"),
            decoded(solid_tile(5, 4, BLUE), "odd.png"),
            decoded(solid_tile(4, 4, BLUE), "c.png"),
        ]
        with caplog.at_level(logging.WARNING):
            atlas = build_atlas(tiles, GridLayout(3, 1))

        assert alpha_extrema(atlas, (6, 0, 12, 6)) == (0, 0)
        assert atlas.getpixel((13, 1)) == BLUE
        assert any("odd.png" in r.getMessage() for r in caplog.records)
        assert all(r.levelno == logging.WARNING for r in caplog.records if "odd.png" in r.getMessage())

    def test_undecodable_tile_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        tiles = [
            decoded(solid_tile(2, 2, RED), "a.png"),
            DecodedTile(path=Path("broken.png"), error="cannot identify image file"),
        ]
        with caplog.at_level(logging.WARNING):
            atlas = build_atlas(tiles, GridLayout(2, 1))

        assert alpha_extrema(atlas, (4, 0, 8, 4)) == (0, 0)
        assert any("broken.png" in r.getMessage() for r in caplog.records)

    def test_warnings_go_to_injected_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = logging.getLogger("tests.atlas_sink")
        builder = AtlasBuilder(logger=sink)
        tiles = [decoded(solid_tile(2, 2, RED), "a.png"), decoded(solid_tile(3, 3, RED), "big.png")]
        with caplog.at_level(logging.WARNING, logger="tests.atlas_sink"):
            builder.build(tiles, GridLayout(2, 1))

        records = [r for r in caplog.records if r.name == "tests.atlas_sink"]
        assert len(records) == 1
        assert "big.png" in records[0].getMessage()


class TestBuildErrors:
    """Test build preconditions."""

    def test_empty_input(self) -> None:
        with pytest.raises(EmptyInputError):
            build_atlas([], GridLayout(1, 1))

    def test_reference_decode_failure(self) -> None:
        tiles = [
            DecodedTile(path=Path("missing.png"), error="No such file"),
            decoded(solid_tile(2, 2, RED)),
        ]
        with pytest.raises(ReferenceTileError) as exc_info:
            build_atlas(tiles, GridLayout(2, 1))
        assert exc_info.value.path == Path("missing.png")
        assert isinstance(exc_info.value, TileDecodeError)

    def test_capacity_exceeded(self) -> None:
        tiles = [decoded(solid_tile(2, 2, RED), f"{i}.png") for i in range(3)]
        with pytest.raises(LayoutCapacityError) as exc_info:
            build_atlas(tiles, GridLayout(2, 1))
        assert isinstance(exc_info.value, ConfigError)
        assert exc_info.value.tile_count == 3
        assert exc_info.value.capacity == 2

    def test_negative_border(self) -> None:
        with pytest.raises(ValueError):
            AtlasBuilder(border=-1)
