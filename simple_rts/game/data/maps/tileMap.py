"""
Read-only view of a generated tile grid.

TileMap is what the rest of the game sees of the terrain: renderer, units and
the minimap only ever read through it. The backing NumPy array is flagged
non-writeable so nothing can change the map after generation.
"""
import math
from typing import Dict, Tuple

import numpy as np

from simple_rts.game.data.maps.terrain import INVALID_TILE, TERRAIN_BY_CODE, TILE_CODES
from simple_rts.game.data.maps.utils import code_histogram


class TileMap:
    """
    Finished terrain: fine tile codes plus the spawn point.

    Coordinates are (x, y) with x along the row. Float coordinates (unit
    positions) are floored, so anything left of or above the map (including
    -0.5) is off the map. Non-finite coordinates are off the map too.
    """

    def __init__(self, codes, spawn_point: Tuple[int, int]):
        arr = np.array(codes, dtype=np.int8)
        if arr.ndim != 2 or arr.size == 0:
            raise ValueError(f"tile codes must be a non-empty 2D grid, got shape {arr.shape}")
        unknown = np.setdiff1d(np.unique(arr), np.array(TILE_CODES, dtype=np.int8))
        if unknown.size:
            raise ValueError(f"tile codes contain unknown values {unknown.tolist()}")

        arr.flags.writeable = False
        self._codes = arr
        self._height, self._width = arr.shape
        self._spawn = (int(spawn_point[0]), int(spawn_point[1]))

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height

    def tile_at(self, x, y) -> int:
        """Tile code at (x, y), or INVALID_TILE when outside the map."""
        try:
            x, y = math.floor(x), math.floor(y)
        except (ValueError, OverflowError):  # nan, inf
            return INVALID_TILE
        if x < 0 or y < 0 or x >= self._width or y >= self._height:
            return INVALID_TILE
        return int(self._codes[y, x])

    def spawn_point(self) -> Tuple[int, int]:
        """Initial camera focus and starting base position, in tile coordinates."""
        return self._spawn

    def is_passable(self, x, y) -> bool:
        """
        True on open and rough ground.

        Map query for placement; units still cross void and obstacles at
        their (slow) per-code speed.
        """
        code = self.tile_at(x, y)
        if code == INVALID_TILE:
            return False
        return TERRAIN_BY_CODE[code].passable

    def in_bounds(self, x, y) -> bool:
        return self.tile_at(x, y) != INVALID_TILE

    @property
    def codes(self) -> np.ndarray:
        """The read-only [y, x] code array."""
        return self._codes

    def histogram(self) -> Dict[int, int]:
        return code_histogram(self._codes)

    def __repr__(self):
        return f"TileMap({self._width}x{self._height}, spawn={self._spawn})"
