"""
Grid Space Conversion
=====================

Coordinate transforms between the three spaces used around the graph:

- logical grid: (x, y) index of a logical cell, 0 <= x < size_x
- logical space: tile offset of a cell's 2x2 block from the bounds origin,
  i.e. (BLOCK_SIZE * x, BLOCK_SIZE * y). Gate locations are given here.
- grid (tile) space: absolute tile coordinate on the color source

The graph builder never calls these directly; it receives a
CoordinateTransform at call time so synthetic transforms can be injected.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from chromagrid.core.definitions import BLOCK_SIZE, IntPoint
from chromagrid.core.tilemap import ColorSource


def logical_space_from_cell(x: int, y: int) -> IntPoint:
    return (x * BLOCK_SIZE, y * BLOCK_SIZE)


def grid_space_from_logical(space: Sequence[int], source: ColorSource) -> IntPoint:
    """Top-left tile of the block at `space`, offset by the source's bounds origin."""
    origin_x, origin_y = source.cell_bounds.origin
    return (origin_x + space[0], origin_y + space[1])


def logical_space_from_grid(location: Sequence[int], source: ColorSource) -> IntPoint:
    """Block-aligned logical space of the block containing a tile."""
    origin_x, origin_y = source.cell_bounds.origin
    rel_x = location[0] - origin_x
    rel_y = location[1] - origin_y
    return ((rel_x // BLOCK_SIZE) * BLOCK_SIZE, (rel_y // BLOCK_SIZE) * BLOCK_SIZE)


def cell_from_logical_space(
    space: Sequence[int],
    size_x: int,
    size_y: int,
) -> Optional[IntPoint]:
    """
    Inverse of logical_space_from_cell.

    Returns None when the space is not block-aligned or falls outside a
    size_x by size_y logical grid.
    """
    sx, sy = space[0], space[1]
    if sx % BLOCK_SIZE or sy % BLOCK_SIZE:
        return None
    x, y = sx // BLOCK_SIZE, sy // BLOCK_SIZE
    if not (0 <= x < size_x and 0 <= y < size_y):
        return None
    return (x, y)


@dataclass(frozen=True)
class CoordinateTransform:
    """Pair of pure functions the graph builder uses to locate tiles."""
    logical_space_from_cell: Callable[[int, int], IntPoint] = logical_space_from_cell
    grid_space_from_logical: Callable[[Sequence[int], ColorSource], IntPoint] = grid_space_from_logical


DEFAULT_TRANSFORM = CoordinateTransform()
