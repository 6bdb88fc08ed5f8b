"""
Logical Cell Graph - Color-Visibility Adjacency
===============================================

Builds an indexed neighbor table between logical cells, where a cell's
neighbor in a direction is the nearest other cell along that axis sharing
at least one corner color. Non-matching cells in between are skipped, which
is what lets an agent teleport across the grid in one move. Gates carry a
reserved signature and block visibility through them.

Algorithm:
1. Sample the four corner tiles of each cell's 2x2 block and hash each
   color into an integer code (gates get GATE_SIGNATURE instead)
2. For every cell and direction, scan outward from the adjacent cell and
   stop at the first cell whose code set intersects this cell's
3. Store the hits as arena indices; no hit means no neighbor

Neighbor pairing is not symmetric: if A.right is B, B.left may be a cell
closer to B than A. That is a property of nearest-match search.

Complexity:
- O(N * (size_x + size_y)) for N = size_x * size_y cells

Usage:
    from chromagrid.core.tilemap import TileMap
    from chromagrid.graph import build_cell_graph

    graph = build_cell_graph(TileMap.from_image("level.png"), gate_locations=[(4, 2)])
    cell = graph.lookup_cell(0, 0)
    if cell.right is not None:
        print(f"Right of (0, 0) is ({cell.right.x}, {cell.right.y})")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from chromagrid.core.definitions import (
    BLOCK_SIZE,
    CORNER_OFFSETS,
    DIRECTION_OFFSET,
    GATE_SIGNATURE,
    NO_NEIGHBOR,
    SIGNATURE_LENGTH,
    Direction,
    IntPoint,
)
from chromagrid.core.grid_space import DEFAULT_TRANSFORM, CoordinateTransform
from chromagrid.core.tilemap import ColorSource

logger = logging.getLogger(__name__)


# ==============================================================================
# COLOR SIGNATURES
# ==============================================================================

def color_code(color) -> int:
    """Integer identity of a color. Distinct colors may collide."""
    return hash(color)


def signatures_match(a: AbstractSet[int], b: AbstractSet[int]) -> bool:
    return not a.isdisjoint(b)


def _as_point(location: Sequence[int]) -> IntPoint:
    return (int(location[0]), int(location[1]))


def extract_color_signatures(
    size_x: int,
    size_y: int,
    source: ColorSource,
    gate_locations: Iterable[Sequence[int]],
    transform: CoordinateTransform = DEFAULT_TRANSFORM,
) -> np.ndarray:
    """
    Compute the color signature of every logical cell.

    Args:
        size_x: Logical grid width
        size_y: Logical grid height
        source: Tile colors and bounds
        gate_locations: Gate positions in logical space, compared by value;
            positions that are not exactly a cell's logical space never match
        transform: Cell -> logical space -> tile space conversions

    Returns:
        (size_x, size_y, 4) int64 array of color codes in CORNER_OFFSETS order
    """
    gates = {(g[0], g[1]) for g in gate_locations}
    signatures = np.zeros((size_x, size_y, SIGNATURE_LENGTH), dtype=np.int64)
    gates_hit = 0

    for y in range(size_y):
        for x in range(size_x):
            space = _as_point(transform.logical_space_from_cell(x, y))

            if space in gates:
                signatures[x, y] = GATE_SIGNATURE
                gates_hit += 1
                continue

            gx, gy = _as_point(transform.grid_space_from_logical(space, source))
            for corner, (dx, dy) in enumerate(CORNER_OFFSETS):
                signatures[x, y, corner] = color_code(source.get_color((gx + dx, gy + dy)))

    if gates_hit < len(gates):
        logger.debug(
            f"{len(gates) - gates_hit} of {len(gates)} gate locations "
            f"did not land on a logical cell"
        )

    return signatures


# ==============================================================================
# NEAREST-MATCH SEARCH
# ==============================================================================

def _scan(
    code_sets: List[List[frozenset]],
    x: int,
    y: int,
    step: IntPoint,
    size_x: int,
    size_y: int,
) -> int:
    own = code_sets[x][y]
    dx, dy = step
    cx, cy = x + dx, y + dy
    while 0 <= cx < size_x and 0 <= cy < size_y:
        if signatures_match(own, code_sets[cx][cy]):
            return cy * size_x + cx
        cx += dx
        cy += dy
    return NO_NEIGHBOR


def find_neighbors(signatures: np.ndarray) -> np.ndarray:
    """
    Four-directional nearest-match search over a signature table.

    Args:
        signatures: (size_x, size_y, 4) color codes

    Returns:
        (size_x, size_y, 4) int64 array of row-major arena indices
        (y * size_x + x) indexed by Direction, NO_NEIGHBOR where the scan
        reached the grid edge without a match
    """
    size_x, size_y = signatures.shape[0], signatures.shape[1]
    code_sets = [
        [frozenset(int(code) for code in signatures[x, y]) for y in range(size_y)]
        for x in range(size_x)
    ]

    links = np.full((size_x, size_y, len(Direction)), NO_NEIGHBOR, dtype=np.int64)
    for y in range(size_y):
        for x in range(size_x):
            for direction in Direction:
                links[x, y, direction] = _scan(
                    code_sets, x, y, DIRECTION_OFFSET[direction], size_x, size_y
                )
    return links


# ==============================================================================
# GRAPH
# ==============================================================================

@dataclass(frozen=True, eq=False)
class LogicalCell:
    """
    A node of the logical cell graph.

    Neighbors are resolved through the owning graph's link table, so a
    cell holds no direct references to other cells.
    """
    x: int
    y: int
    graph: 'LogicalCellGraph' = field(repr=False)

    @property
    def up(self) -> Optional['LogicalCell']:
        return self.graph.neighbor(self, Direction.UP)

    @property
    def down(self) -> Optional['LogicalCell']:
        return self.graph.neighbor(self, Direction.DOWN)

    @property
    def left(self) -> Optional['LogicalCell']:
        return self.graph.neighbor(self, Direction.LEFT)

    @property
    def right(self) -> Optional['LogicalCell']:
        return self.graph.neighbor(self, Direction.RIGHT)

    @property
    def position(self) -> IntPoint:
        return (self.x, self.y)

    def neighbors(self) -> Dict[Direction, Optional['LogicalCell']]:
        return {direction: self.graph.neighbor(self, direction) for direction in Direction}


class LogicalCellGraph:
    """
    Dense, read-only grid of logical cells with directional neighbor links.

    Cells live in a single tuple in row-major order (y outer, x inner);
    links are arena indices. Build with build_cell_graph().
    """

    def __init__(self, signatures: np.ndarray, links: np.ndarray):
        """
        Args:
            signatures: (size_x, size_y, 4) color codes from extract_color_signatures
            links: (size_x, size_y, 4) arena indices from find_neighbors
        """
        if signatures.shape[:2] != links.shape[:2]:
            raise ValueError(
                f"Signature table {signatures.shape} and link table "
                f"{links.shape} disagree on grid size"
            )

        self._size_x, self._size_y = int(signatures.shape[0]), int(signatures.shape[1])

        self._signatures = signatures.copy()
        self._signatures.setflags(write=False)
        self._links = links.copy()
        self._links.setflags(write=False)

        self._cells: Tuple[LogicalCell, ...] = tuple(
            LogicalCell(x, y, self)
            for y in range(self._size_y)
            for x in range(self._size_x)
        )

    @property
    def size_x(self) -> int:
        """Width of the logical grid."""
        return self._size_x

    @property
    def size_y(self) -> int:
        """Height of the logical grid."""
        return self._size_y

    def cells(self) -> Iterator[LogicalCell]:
        """Fresh row-major traversal of all cells."""
        for cell in self._cells:
            yield cell

    def __iter__(self) -> Iterator[LogicalCell]:
        return self.cells()

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell) -> bool:
        return isinstance(cell, LogicalCell) and cell.graph is self

    def lookup_cell(self, x: int, y: int) -> LogicalCell:
        """
        Cell at logical grid coordinates.

        Raises:
            IndexError: if (x, y) is outside [0, size_x) x [0, size_y)
        """
        if not (0 <= x < self._size_x and 0 <= y < self._size_y):
            raise IndexError(
                f"Cell ({x}, {y}) is outside the {self._size_x}x{self._size_y} logical grid"
            )
        return self._cells[y * self._size_x + x]

    def neighbor(self, cell: LogicalCell, direction: Direction) -> Optional[LogicalCell]:
        """
        Neighbor of `cell` in `direction`, or None.

        Raises:
            ValueError: if `cell` belongs to a different graph
        """
        if cell.graph is not self:
            raise ValueError(f"Cell {cell.position} does not belong to this graph")
        index = int(self._links[cell.x, cell.y, direction])
        if index == NO_NEIGHBOR:
            return None
        return self._cells[index]

    def signature(self, x: int, y: int) -> Tuple[int, ...]:
        """Corner color codes of a cell, in CORNER_OFFSETS order."""
        self.lookup_cell(x, y)
        return tuple(int(code) for code in self._signatures[x, y])

    def is_gate(self, x: int, y: int) -> bool:
        """
        True if the cell carries the reserved gate signature.

        A real cell whose four corner codes all collide with GATE_CODE also
        reports True.
        """
        return self.signature(x, y) == GATE_SIGNATURE

    @property
    def link_count(self) -> int:
        return int(np.count_nonzero(self._links != NO_NEIGHBOR))

    def __repr__(self) -> str:
        return (
            f"LogicalCellGraph(size_x={self._size_x}, size_y={self._size_y}, "
            f"links={self.link_count})"
        )


# ==============================================================================
# BUILDER
# ==============================================================================

def build_cell_graph(
    source: ColorSource,
    gate_locations: Iterable[Sequence[int]],
    transform: CoordinateTransform = DEFAULT_TRANSFORM,
) -> LogicalCellGraph:
    """
    Build a logical cell graph from a tile color source.

    The source must not change while this runs. Any change to the map
    afterwards requires building a new graph.

    Args:
        source: Tile colors and bounds
        gate_locations: Positions of all locked doors/gates in logical space
        transform: Coordinate conversions (injected for testing)

    Returns:
        LogicalCellGraph with neighbor links for every cell
    """
    bounds = source.cell_bounds
    size_x = bounds.size[0] // BLOCK_SIZE
    size_y = bounds.size[1] // BLOCK_SIZE
    gates = list(gate_locations)

    logger.info(f"Building logical cell graph: {size_x}x{size_y} cells, {len(gates)} gates")

    signatures = extract_color_signatures(size_x, size_y, source, gates, transform)
    links = find_neighbors(signatures)
    graph = LogicalCellGraph(signatures, links)

    logger.info(f"Logical cell graph built with {graph.link_count} directional links")
    return graph
