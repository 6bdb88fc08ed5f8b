"""
Tests for the tile map color source and grid space conversion.

Run with: pytest tests/test_tilemap.py -v
"""

import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent))

from chromagrid.core.definitions import Color
from chromagrid.core.grid_space import (
    DEFAULT_TRANSFORM,
    cell_from_logical_space,
    grid_space_from_logical,
    logical_space_from_cell,
    logical_space_from_grid,
)
from chromagrid.core.tilemap import CellBounds, ColorSource, TileMap, TileMapConfig
from chromagrid.graph.logical_cell_graph import build_cell_graph


# ==============================================================================
# FIXTURES
# ==============================================================================

@pytest.fixture
def small_map():
    """3 rows x 4 cols, each tile's red channel encodes its column, green its row."""
    colors = np.zeros((3, 4, 4), dtype=np.float64)
    for row in range(3):
        for col in range(4):
            colors[row, col] = (col / 10, row / 10, 0.5, 1.0)
    return TileMap(colors, origin=(-2, 5))


# ==============================================================================
# TILE MAP
# ==============================================================================

class TestTileMap:

    def test_is_color_source(self, small_map):
        assert isinstance(small_map, ColorSource)

    def test_bounds(self, small_map):
        bounds = small_map.cell_bounds

        assert bounds == CellBounds(origin=(-2, 5), size=(4, 3))
        assert (bounds.x_min, bounds.x_max) == (-2, 2)
        assert (bounds.y_min, bounds.y_max) == (5, 8)

    def test_get_color_uses_origin(self, small_map):
        assert small_map.get_color((-2, 5)) == Color(0.0, 0.0, 0.5, 1.0)
        assert small_map.get_color((1, 7)) == Color(0.3, 0.2, 0.5, 1.0)

    def test_get_color_ignores_z(self, small_map):
        assert small_map.get_color((1, 7, 0)) == small_map.get_color((1, 7))

    @pytest.mark.parametrize("location", [(-3, 5), (2, 5), (0, 4), (0, 8)])
    def test_get_color_outside_bounds_raises(self, small_map, location):
        with pytest.raises(IndexError):
            small_map.get_color(location)

    def test_uint8_is_normalized(self):
        tilemap = TileMap(np.array([[[255, 0, 255, 255]]], dtype=np.uint8))

        assert tilemap.get_color((0, 0)) == Color(1.0, 0.0, 1.0, 1.0)

    def test_rgb_gets_opaque_alpha(self):
        tilemap = TileMap(np.array([[[0.25, 0.5, 0.75]]]))

        assert tilemap.get_color((0, 0)) == Color(0.25, 0.5, 0.75, 1.0)

    @pytest.mark.parametrize("shape", [(4, 4), (2, 2, 2), (2, 2, 5), (1, 2, 3, 4)])
    def test_bad_shape_rejected(self, shape):
        with pytest.raises(ValueError):
            TileMap(np.zeros(shape))

    def test_colors_are_copied(self):
        source = np.zeros((2, 2, 4))
        tilemap = TileMap(source)
        source[0, 0] = (1.0, 1.0, 1.0, 1.0)

        assert tilemap.get_color((0, 0)) == Color(0.0, 0.0, 0.0, 0.0)

    def test_activate_deactivate(self, small_map):
        assert small_map.is_active

        small_map.deactivate()
        assert not small_map.is_active
        # Hidden maps still answer color queries
        assert small_map.get_color((0, 6)) == Color(0.2, 0.1, 0.5, 1.0)

        small_map.activate()
        assert small_map.is_active

    def test_world_to_cell_default(self, small_map):
        assert small_map.world_to_cell((0.5, 6.9)) == (0, 6)
        assert small_map.world_to_cell((-0.5, -1.2)) == (-1, -2)

    def test_world_to_cell_with_config(self):
        config = TileMapConfig(cell_size=(0.5, 2.0), world_origin=(10.0, -4.0))
        tilemap = TileMap(np.zeros((2, 2, 4)), config=config)

        assert tilemap.world_to_cell((10.0, -4.0)) == (0, 0)
        assert tilemap.world_to_cell((11.3, 0.5)) == (2, 2)
        assert tilemap.world_to_cell((9.9, -4.1)) == (-1, -1)

    def test_world_to_cell_ignores_tile_origin(self):
        # world_origin is the world position of tile (0, 0), not of the map origin
        config = TileMapConfig(world_origin=(3.0, -1.0))
        tilemap = TileMap(np.zeros((2, 2, 4)), origin=(-2, 5), config=config)

        assert tilemap.world_to_cell((3.5, -0.5)) == (0, 0)
        assert tilemap.world_to_cell((1.2, 4.5)) == (-2, 5)
        assert tilemap.cell_bounds.contains(tilemap.world_to_cell((1.2, 4.5)))

    def test_from_image_flips_rows(self, tmp_path):
        img = Image.new('RGBA', (2, 2), (0, 0, 255, 255))
        img.putpixel((0, 0), (255, 0, 0, 255))  # top-left pixel
        path = tmp_path / 'map.png'
        img.save(path)

        tilemap = TileMap.from_image(path, origin=(3, 3))

        assert tilemap.cell_bounds == CellBounds(origin=(3, 3), size=(2, 2))
        assert tilemap.get_color((3, 4)) == Color(1.0, 0.0, 0.0, 1.0)
        assert tilemap.get_color((3, 3)) == Color(0.0, 0.0, 1.0, 1.0)

    def test_from_image_without_flip(self, tmp_path):
        img = Image.new('RGB', (2, 2), (0, 0, 255))
        img.putpixel((0, 0), (255, 0, 0))
        path = tmp_path / 'map.png'
        img.save(path)

        tilemap = TileMap.from_image(path, config=TileMapConfig(flip_y=False))

        assert tilemap.get_color((0, 0)) == Color(1.0, 0.0, 0.0, 1.0)

    def test_image_graph(self, tmp_path):
        # 6x2 image: red block, green block, red block
        img = Image.new('RGB', (6, 2), (255, 0, 0))
        for x in (2, 3):
            for y in (0, 1):
                img.putpixel((x, y), (0, 255, 0))
        path = tmp_path / 'level.png'
        img.save(path)

        graph = build_cell_graph(TileMap.from_image(path), [])

        assert (graph.size_x, graph.size_y) == (3, 1)
        right = graph.lookup_cell(0, 0).right
        assert (right.x, right.y) == (2, 0)
        assert graph.lookup_cell(1, 0).left is None


# ==============================================================================
# GRID SPACE
# ==============================================================================

class TestGridSpace:

    def test_logical_space_from_cell(self):
        assert logical_space_from_cell(0, 0) == (0, 0)
        assert logical_space_from_cell(3, 2) == (6, 4)

    def test_grid_space_from_logical(self, small_map):
        assert grid_space_from_logical((0, 0), small_map) == (-2, 5)
        assert grid_space_from_logical((2, 0), small_map) == (0, 5)

    def test_logical_space_from_grid(self, small_map):
        assert logical_space_from_grid((-2, 5), small_map) == (0, 0)
        assert logical_space_from_grid((1, 6), small_map) == (2, 0)
        assert logical_space_from_grid((-3, 5), small_map) == (-2, 0)

    def test_cell_from_logical_space(self):
        assert cell_from_logical_space((6, 4), 4, 3) == (3, 2)
        assert cell_from_logical_space((5, 4), 4, 3) is None
        assert cell_from_logical_space((8, 0), 4, 3) is None
        assert cell_from_logical_space((-2, 0), 4, 3) is None

    def test_world_to_graph_cell_roundtrip(self, small_map):
        tile = small_map.world_to_cell((1.5, 7.2))
        space = logical_space_from_grid(tile, small_map)

        assert cell_from_logical_space(space, 2, 1) is None  # y=7 is in a partial block row
        assert cell_from_logical_space(logical_space_from_grid((1, 6), small_map), 2, 1) == (1, 0)

    def test_default_transform(self):
        assert DEFAULT_TRANSFORM.logical_space_from_cell(2, 1) == (4, 2)
        assert DEFAULT_TRANSFORM.grid_space_from_logical(
            (4, 2), TileMap(np.zeros((4, 6, 4)), origin=(1, 1))
        ) == (5, 3)
