"""
CHROMAGRID - Command Line Pipeline
==================================
Load -> Build -> Summarize

Builds the color-visibility adjacency graph for a tile map image and
reports its structure.

Usage:
    # Build and summarize a level (one pixel per tile)
    chromagrid level_01.png

    # Mark gates (logical space coordinates) and export neighbors as JSON
    chromagrid level_01.png --gate 4,2 --gate 8,6 --export graph.json

    # Gates from a JSON file containing [[x, y], ...]
    chromagrid level_01.png --gates-file gates.json --ascii

"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from chromagrid.core.definitions import IntPoint
from chromagrid.core.tilemap import TileMap
from chromagrid.graph.logical_cell_graph import LogicalCellGraph, build_cell_graph
from chromagrid.utils.graph_utils import (
    graph_to_dict,
    render_ascii,
    summarize_graph,
    validate_graph,
)

logger = logging.getLogger(__name__)


def parse_point(text: str) -> IntPoint:
    """Parse 'X,Y' into an integer point."""
    parts = text.split(',')
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got '{text}'")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected integer coordinates but got '{text}'")


def load_gates(gate_args: Optional[List[IntPoint]], gates_file: Optional[str]) -> List[IntPoint]:
    gates = list(gate_args or [])
    if gates_file:
        with open(gates_file, 'r') as f:
            data = json.load(f)
        gates.extend((int(g[0]), int(g[1])) for g in data)
        logger.info(f"Loaded {len(data)} gates from {gates_file}")
    return gates


def export_graph(graph: LogicalCellGraph, output_path: str) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(graph_to_dict(graph), f, indent=2)
    logger.info(f"Exported graph to: {path}")


def run_pipeline(image_path: str, gates: List[IntPoint], origin: IntPoint = (0, 0)) -> LogicalCellGraph:
    """
    Load a tile map image and build its logical cell graph.

    Args:
        image_path: Tile map image, one pixel per tile
        gates: Gate positions in logical space
        origin: Tile coordinate of the bottom-left pixel

    Returns:
        The built graph
    """
    logger.info("[STEP 1] Loading tile map...")
    tilemap = TileMap.from_image(image_path, origin=origin)

    logger.info("[STEP 2] Building logical cell graph...")
    graph = build_cell_graph(tilemap, gates)

    logger.info("[STEP 3] Validating neighbor links...")
    is_valid, errors = validate_graph(graph)
    if not is_valid:
        for error in errors:
            logger.error(error)

    summary = summarize_graph(graph)
    logger.info(
        f"Graph {summary.size_x}x{summary.size_y}: {summary.link_count} links, "
        f"{summary.gate_count} gates, {summary.isolated_count} isolated cells, "
        f"{summary.asymmetric_links} asymmetric links, "
        f"{summary.component_count} components"
    )
    return graph


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='chromagrid - Build a color-visibility adjacency graph from a tile map image'
    )

    parser.add_argument(
        'image', type=str,
        help='Tile map image (one pixel per tile)'
    )
    parser.add_argument(
        '--origin', type=parse_point, default=(0, 0),
        help='Tile coordinate of the bottom-left pixel as X,Y (default: 0,0)'
    )
    parser.add_argument(
        '--gate', type=parse_point, action='append',
        help='Gate location in logical space as X,Y (repeatable)'
    )
    parser.add_argument(
        '--gates-file', type=str,
        help='JSON file with a list of [x, y] gate locations'
    )
    parser.add_argument(
        '--export', '-e', type=str,
        help='Export neighbors to a JSON file'
    )
    parser.add_argument(
        '--ascii', action='store_true',
        help='Print ASCII view of neighbor counts'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not Path(args.image).exists():
        logger.error(f"Tile map image not found: {args.image}")
        return 1

    gates = load_gates(args.gate, args.gates_file)
    graph = run_pipeline(args.image, gates, origin=args.origin)

    if args.export:
        export_graph(graph, args.export)

    if args.ascii:
        print("\n" + "=" * 60)
        print("NEIGHBOR COUNTS (# = gate)")
        print("=" * 60)
        print(render_ascii(graph))

    return 0


if __name__ == "__main__":
    sys.exit(main())
