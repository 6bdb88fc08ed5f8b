"""
chromagrid - Color-Visibility Adjacency Graphs
==============================================

Builds logical adjacency graphs over tile grids for color-based puzzle
games. A cell's neighbor in a direction is the nearest other cell sharing a
corner color; gates block visibility.

Submodules:
- core: Definitions, tile map color source, grid space conversion
- graph: Logical cell graph and its builder
- utils: NetworkX export, summaries and validation
"""

__version__ = "1.0.0"

__all__ = ['core', 'graph', 'utils']
