"""
Utility Module for chromagrid
=============================

Graph inspection and export helpers.

Components:
    - to_networkx / graph_to_dict: Export a built graph
    - summarize_graph / GraphSummary: Structural statistics
    - validate_graph: Re-check neighbor invariants
"""

from .graph_utils import (
    GraphSummary,
    count_asymmetric_links,
    graph_to_dict,
    render_ascii,
    summarize_graph,
    to_networkx,
    validate_graph,
)

__all__ = [
    'GraphSummary',
    'count_asymmetric_links',
    'graph_to_dict',
    'render_ascii',
    'summarize_graph',
    'to_networkx',
    'validate_graph',
]
