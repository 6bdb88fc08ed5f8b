"""
CHROMAGRID DEFINITIONS
======================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Point and color types
- Logical block geometry (2x2 tiles per logical cell)
- Reserved gate signature
- Direction enumeration and offsets

Import from here instead of duplicating constants across modules.

"""

from typing import Dict, NamedTuple, Tuple
from enum import IntEnum

# ==========================================
# BASIC TYPES
# ==========================================

# (x, y) in tile space, logical space or logical grid space
IntPoint = Tuple[int, int]


class Color(NamedTuple):
    """RGBA color with float channels in [0, 1], as reported by the tile surface."""
    r: float
    g: float
    b: float
    a: float = 1.0


# ==========================================
# LOGICAL BLOCK GEOMETRY
# ==========================================

# Each logical cell covers a BLOCK_SIZE x BLOCK_SIZE block of tiles
BLOCK_SIZE: int = 2

# Corner order of a color signature: (gx,gy), (gx+1,gy), (gx,gy+1), (gx+1,gy+1)
CORNER_OFFSETS: Tuple[IntPoint, ...] = (
    (0, 0),
    (1, 0),
    (0, 1),
    (1, 1),
)

SIGNATURE_LENGTH: int = len(CORNER_OFFSETS)

# ==========================================
# GATES
# ==========================================

# Reserved color code for gates. Not guaranteed distinct from a real
# color's hash; collisions are not guarded against.
GATE_CODE: int = 0
GATE_SIGNATURE: Tuple[int, ...] = (GATE_CODE,) * SIGNATURE_LENGTH

# ==========================================
# DIRECTIONS
# ==========================================

class Direction(IntEnum):
    """Neighbor slots of a logical cell. Values index the link table."""
    UP = 0      # +y
    DOWN = 1    # -y
    LEFT = 2    # -x
    RIGHT = 3   # +x


# Direction to (dx, dy) step in the logical grid
DIRECTION_OFFSET: Dict[Direction, IntPoint] = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

DIRECTION_OPPOSITE: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Link table value for "no neighbor in this direction"
NO_NEIGHBOR: int = -1


# ==========================================
# EXPORTS
# ==========================================

__all__ = [
    # Types
    'IntPoint',
    'Color',
    'Direction',

    # Geometry
    'BLOCK_SIZE',
    'CORNER_OFFSETS',
    'SIGNATURE_LENGTH',

    # Gates
    'GATE_CODE',
    'GATE_SIGNATURE',

    # Directions
    'DIRECTION_OFFSET',
    'DIRECTION_OPPOSITE',
    'NO_NEIGHBOR',
]
