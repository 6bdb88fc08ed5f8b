"""
Tile Map - Color/Bounds Source for Graph Construction
======================================================

Wraps a rendered tile surface so the graph builder can ask two things of it:
the extents of the painted tiles and the color of any tile inside them.

Key Features:
- ColorSource abstract base (the capability set the builder consumes)
- numpy-backed TileMap with integer tile-space addressing
- Map object visibility (activate / deactivate)
- World position to tile conversion
- Loading from an image file, one pixel per tile

Coordinate Conventions:
-----------------------
Tile space is integer (x, y) with y growing upward. The color array is
indexed [row, col] with row 0 holding the lowest y of the bounds, so tile
(x, y) reads colors[y - origin_y, x - origin_x]. Image files store rows
top-down; TileMap.from_image flips them unless configured otherwise.

Usage:
------
    tilemap = TileMap.from_image("level_01.png")
    bounds = tilemap.cell_bounds
    color = tilemap.get_color((bounds.origin[0], bounds.origin[1]))
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from chromagrid.core.definitions import Color, IntPoint

logger = logging.getLogger(__name__)


# ==============================================================================
# BOUNDS
# ==============================================================================

@dataclass(frozen=True)
class CellBounds:
    """
    Integer extents of a tile grid.

    Attributes:
        origin: Lowest (x, y) tile coordinate inside the bounds
        size: Number of tiles along (x, y)
    """
    origin: IntPoint
    size: IntPoint

    @property
    def x_min(self) -> int:
        return self.origin[0]

    @property
    def y_min(self) -> int:
        return self.origin[1]

    @property
    def x_max(self) -> int:
        """Exclusive upper x bound."""
        return self.origin[0] + self.size[0]

    @property
    def y_max(self) -> int:
        """Exclusive upper y bound."""
        return self.origin[1] + self.size[1]

    def contains(self, location: Sequence[int]) -> bool:
        x, y = location[0], location[1]
        return self.x_min <= x < self.x_max and self.y_min <= y < self.y_max


# ==============================================================================
# COLOR SOURCE INTERFACE
# ==============================================================================

class ColorSource(ABC):
    """
    Abstract base class for anything the graph builder can sample.

    Implementations must answer get_color for every tile inside
    cell_bounds, and must not change while a graph is being built.
    """

    @property
    @abstractmethod
    def cell_bounds(self) -> CellBounds:
        """Extents of the tile grid in tile space."""
        pass

    @abstractmethod
    def get_color(self, location: Sequence[int]) -> Color:
        """
        Color of a single tile.

        Args:
            location: (x, y) tile coordinate; extra trailing components
                (such as a z layer) are ignored

        Returns:
            The color value at that tile
        """
        pass


# ==============================================================================
# TILE MAP
# ==============================================================================

@dataclass
class TileMapConfig:
    """Configuration for tile map placement in the world."""
    cell_size: Tuple[float, float] = (1.0, 1.0)     # World units per tile
    world_origin: Tuple[float, float] = (0.0, 0.0)  # World position of tile (0, 0)
    flip_y: bool = True  # Image rows are top-down; tile y grows upward


class TileMap(ColorSource):
    """
    A rendered tile map backed by an RGBA array.

    Colors are stored as float64 in [0, 1]. Integer arrays (e.g. uint8
    image data) are normalized by 255 on construction so that colors read
    back compare and hash the same way regardless of how the map was fed.

    The map also carries the game object's visibility flag. Deactivating a
    map hides it from the scene but does not stop color queries.
    """

    def __init__(
        self,
        colors: np.ndarray,
        origin: Sequence[int] = (0, 0),
        config: Optional[TileMapConfig] = None,
    ):
        """
        Initialize a tile map.

        Args:
            colors: (H, W, 3) or (H, W, 4) array; row index is y - origin_y
            origin: Tile coordinate of colors[0, 0]
            config: World placement settings
        """
        arr = np.asarray(colors)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(
                f"Tile colors must have shape (H, W, 3) or (H, W, 4), got {arr.shape}"
            )

        if np.issubdtype(arr.dtype, np.integer):
            arr = arr.astype(np.float64) / 255.0
        else:
            arr = arr.astype(np.float64)

        if arr.shape[2] == 3:
            alpha = np.ones(arr.shape[:2] + (1,), dtype=np.float64)
            arr = np.concatenate([arr, alpha], axis=2)

        arr.setflags(write=False)
        self._colors = arr
        self._origin: IntPoint = (int(origin[0]), int(origin[1]))
        self.config = config or TileMapConfig()
        self._active = True

    @classmethod
    def from_image(
        cls,
        path: Union[str, Path],
        origin: Sequence[int] = (0, 0),
        config: Optional[TileMapConfig] = None,
    ) -> 'TileMap':
        """
        Load a tile map from an image file, one pixel per tile.

        Args:
            path: Image path (any format Pillow can open)
            origin: Tile coordinate of the bottom-left pixel
            config: World placement settings

        Returns:
            TileMap with the image's colors
        """
        config = config or TileMapConfig()
        img = Image.open(path).convert('RGBA')
        arr = np.asarray(img)
        if config.flip_y:
            arr = arr[::-1]
        logger.info(f"Loaded tile map {path} ({arr.shape[1]}x{arr.shape[0]} tiles)")
        return cls(arr, origin=origin, config=config)

    # ------------------------------------------------------------------
    # ColorSource
    # ------------------------------------------------------------------

    @property
    def cell_bounds(self) -> CellBounds:
        height, width = self._colors.shape[:2]
        return CellBounds(origin=self._origin, size=(width, height))

    def get_color(self, location: Sequence[int]) -> Color:
        x, y = int(location[0]), int(location[1])
        if not self.cell_bounds.contains((x, y)):
            raise IndexError(
                f"Tile ({x}, {y}) is outside map bounds {self.cell_bounds}"
            )
        r, g, b, a = self._colors[y - self._origin[1], x - self._origin[0]]
        return Color(float(r), float(g), float(b), float(a))

    # ------------------------------------------------------------------
    # Map object
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    def activate(self) -> None:
        self._active = True
        logger.debug("Tile map activated")

    def deactivate(self) -> None:
        self._active = False
        logger.debug("Tile map deactivated")

    def world_to_cell(self, world_position: Sequence[float]) -> IntPoint:
        """
        Convert a world position to the tile containing it.

        The result is not clamped to cell_bounds.
        """
        cell_w, cell_h = self.config.cell_size
        origin_x, origin_y = self.config.world_origin
        return (
            math.floor((world_position[0] - origin_x) / cell_w),
            math.floor((world_position[1] - origin_y) / cell_h),
        )

    def __repr__(self) -> str:
        return f"TileMap(bounds={self.cell_bounds}, active={self._active})"
