"""Logical cell graph construction."""

from .logical_cell_graph import (
    LogicalCell,
    LogicalCellGraph,
    build_cell_graph,
    extract_color_signatures,
    find_neighbors,
    color_code,
    signatures_match,
)

__all__ = [
    'LogicalCell',
    'LogicalCellGraph',
    'build_cell_graph',
    'extract_color_signatures',
    'find_neighbors',
    'color_code',
    'signatures_match',
]
