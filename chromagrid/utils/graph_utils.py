"""
Logical Cell Graph Utilities
============================

Utility functions for inspecting and exporting a built LogicalCellGraph.

This module provides:
- NetworkX export (directed, one edge per neighbor link)
- JSON-ready dict export
- ASCII rendering of neighbor counts
- Structural summary (links, isolated cells, asymmetric pairings)
- Invariant validation (axis alignment and nearest-match)

Usage:
    from chromagrid.utils.graph_utils import to_networkx, validate_graph

    G = to_networkx(graph)
    is_valid, errors = validate_graph(graph)
    if not is_valid:
        print(f"Validation failed: {errors}")
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple

import networkx as nx

from chromagrid.core.definitions import DIRECTION_OFFSET, DIRECTION_OPPOSITE, Direction
from chromagrid.graph.logical_cell_graph import LogicalCellGraph, signatures_match

logger = logging.getLogger(__name__)


# ==========================================
# EXPORT
# ==========================================

def to_networkx(graph: LogicalCellGraph) -> nx.DiGraph:
    """
    Convert a logical cell graph to a NetworkX DiGraph.

    Nodes are (x, y) tuples with 'x', 'y' and 'gate' attributes. Each
    present neighbor link becomes an edge with a 'direction' attribute
    holding the lowercase direction name. Two cells can be linked in both
    directions by different edges, or in one only.

    Example:
        >>> G = to_networkx(graph)
        >>> G.edges[(0, 0), (2, 0)]['direction']
        'right'
    """
    G = nx.DiGraph(size_x=graph.size_x, size_y=graph.size_y)

    for cell in graph.cells():
        G.add_node(cell.position, x=cell.x, y=cell.y, gate=graph.is_gate(cell.x, cell.y))

    for cell in graph.cells():
        for direction, target in cell.neighbors().items():
            if target is not None:
                G.add_edge(cell.position, target.position, direction=direction.name.lower())

    return G


def graph_to_dict(graph: LogicalCellGraph) -> Dict[str, Any]:
    """JSON-serializable view: sizes plus per-cell neighbor coordinates."""
    cells = []
    for cell in graph.cells():
        entry: Dict[str, Any] = {
            'x': cell.x,
            'y': cell.y,
            'gate': graph.is_gate(cell.x, cell.y),
        }
        for direction, target in cell.neighbors().items():
            entry[direction.name.lower()] = None if target is None else [target.x, target.y]
        cells.append(entry)

    return {
        'size_x': graph.size_x,
        'size_y': graph.size_y,
        'cells': cells,
    }


def render_ascii(graph: LogicalCellGraph) -> str:
    """
    One character per cell, highest y on the first line.

    Gates print as '#', other cells as their neighbor count (0-4).
    """
    lines = []
    for y in reversed(range(graph.size_y)):
        row = []
        for x in range(graph.size_x):
            if graph.is_gate(x, y):
                row.append('#')
            else:
                cell = graph.lookup_cell(x, y)
                row.append(str(sum(1 for t in cell.neighbors().values() if t is not None)))
        lines.append(''.join(row))
    return '\n'.join(lines)


# ==========================================
# SUMMARY
# ==========================================

@dataclass
class GraphSummary:
    """Structural statistics of a logical cell graph."""
    size_x: int
    size_y: int
    cell_count: int
    link_count: int
    gate_count: int
    isolated_count: int     # Cells with no neighbor in any direction
    asymmetric_links: int   # A -> B in D where B's opposite link is not A
    component_count: int    # Weakly connected components

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def count_asymmetric_links(graph: LogicalCellGraph) -> int:
    asymmetric = 0
    for cell in graph.cells():
        for direction, target in cell.neighbors().items():
            if target is None:
                continue
            if graph.neighbor(target, DIRECTION_OPPOSITE[direction]) is not cell:
                asymmetric += 1
    return asymmetric


def summarize_graph(graph: LogicalCellGraph) -> GraphSummary:
    G = to_networkx(graph)

    summary = GraphSummary(
        size_x=graph.size_x,
        size_y=graph.size_y,
        cell_count=G.number_of_nodes(),
        link_count=G.number_of_edges(),
        gate_count=sum(1 for _, is_gate in G.nodes(data='gate') if is_gate),
        isolated_count=sum(1 for node in G.nodes() if G.out_degree(node) == 0),
        asymmetric_links=count_asymmetric_links(graph),
        component_count=nx.number_weakly_connected_components(G),
    )
    logger.debug(f"Graph summary: {summary}")
    return summary


# ==========================================
# VALIDATION
# ==========================================

def validate_graph(graph: LogicalCellGraph) -> Tuple[bool, List[str]]:
    """
    Re-check every neighbor link against the signature table.

    Checks:
    - Each neighbor lies strictly further along its axis, other axis fixed
    - Each neighbor shares a color code with the cell
    - No cell strictly between a cell and its neighbor (or the grid edge,
      when there is no neighbor) shares a color code with the cell

    Returns:
        Tuple of (is_valid, error_messages)
    """
    errors: List[str] = []

    for cell in graph.cells():
        own = set(graph.signature(cell.x, cell.y))

        for direction in Direction:
            target = graph.neighbor(cell, direction)
            dx, dy = DIRECTION_OFFSET[direction]
            label = direction.name.lower()

            if target is not None:
                steps_x = (target.x - cell.x) * dx
                steps_y = (target.y - cell.y) * dy
                on_axis = (target.y == cell.y) if dx else (target.x == cell.x)
                if not on_axis or max(steps_x, steps_y) <= 0:
                    errors.append(
                        f"Cell {cell.position} {label} neighbor {target.position} "
                        f"is not further along the {label} axis"
                    )
                    continue
                if not signatures_match(own, set(graph.signature(target.x, target.y))):
                    errors.append(
                        f"Cell {cell.position} {label} neighbor {target.position} "
                        f"shares no color code"
                    )

            cx, cy = cell.x + dx, cell.y + dy
            while 0 <= cx < graph.size_x and 0 <= cy < graph.size_y:
                if target is not None and (cx, cy) == target.position:
                    break
                if signatures_match(own, set(graph.signature(cx, cy))):
                    errors.append(
                        f"Cell {cell.position} {label} scan skipped matching cell {(cx, cy)}"
                    )
                    break
                cx += dx
                cy += dy

    if errors:
        logger.warning(f"Graph validation found {len(errors)} problems")

    return len(errors) == 0, errors
