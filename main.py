"""
CHROMAGRID - Main Entry Point
=============================
Launcher for running the pipeline from a source checkout.

Usage:
    python main.py level_01.png --gate 4,2 --export graph.json

The installed console script `chromagrid` runs the same pipeline.
"""

import sys

from chromagrid.cli import main

if __name__ == "__main__":
    sys.exit(main())
