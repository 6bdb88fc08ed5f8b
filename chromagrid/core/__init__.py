"""
chromagrid Core Module
======================

Definitions and collaborators consumed by the graph builder.

- definitions: Color/point types, block geometry, gate signature, directions
- tilemap: ColorSource interface and the numpy-backed TileMap
- grid_space: Coordinate transforms (logical grid / logical space / tile space)

Usage:
    from chromagrid.core import TileMap, Direction, DEFAULT_TRANSFORM
"""

from chromagrid.core.definitions import (
    IntPoint,
    Color,
    Direction,
    BLOCK_SIZE,
    CORNER_OFFSETS,
    GATE_CODE,
    GATE_SIGNATURE,
    DIRECTION_OFFSET,
    DIRECTION_OPPOSITE,
    NO_NEIGHBOR,
)
from chromagrid.core.tilemap import CellBounds, ColorSource, TileMap, TileMapConfig
from chromagrid.core.grid_space import (
    CoordinateTransform,
    DEFAULT_TRANSFORM,
    logical_space_from_cell,
    grid_space_from_logical,
    logical_space_from_grid,
    cell_from_logical_space,
)

__all__ = [
    # Definitions
    'IntPoint',
    'Color',
    'Direction',
    'BLOCK_SIZE',
    'CORNER_OFFSETS',
    'GATE_CODE',
    'GATE_SIGNATURE',
    'DIRECTION_OFFSET',
    'DIRECTION_OPPOSITE',
    'NO_NEIGHBOR',
    # Tile map
    'CellBounds',
    'ColorSource',
    'TileMap',
    'TileMapConfig',
    # Grid space
    'CoordinateTransform',
    'DEFAULT_TRANSFORM',
    'logical_space_from_cell',
    'grid_space_from_logical',
    'logical_space_from_grid',
    'cell_from_logical_space',
]
