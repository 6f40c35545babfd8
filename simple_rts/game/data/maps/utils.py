"""
Grid utilities for terrain generation.

All grids are plain ``[y][x]`` lists of integer codes while the automata run;
NumPy is used for the bulk operations (upscaling, histograms) where it gives a
real speed-up. Reads outside a grid return INVALID_TILE and writes outside a
grid are dropped, so callers never have to bounds-check.
"""

from typing import List, Tuple, Iterator, Dict
import numpy as np
from simple_rts.game.data.maps.terrain import INVALID_TILE, OBSTACLE, TILE_CODES

Grid = List[List[int]]


# ============================================================================
# DIRECTION DEFINITIONS
# ============================================================================

DIRECTIONS_4 = [
    ('north', 0, -1), ('south', 0, 1),
    ('east', 1, 0), ('west', -1, 0)
]

# offsets visited by touching_tiles and surround_tile, x outer / y inner
_NEIGHBOUR_OFFSETS_8 = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]
_CROSS_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx == 0 or dy == 0]


# ============================================================================
# GRID OPERATIONS
# ============================================================================

def create_grid(width: int, height: int, value: int = 0) -> Grid:
    """
    Create a grid (height x width) filled with ``value``.

    Args:
        width: Grid width in cells
        height: Grid height in cells
        value: Initial code of every cell

    Returns:
        2D list of ints [y][x]
    """
    return [[value] * width for _ in range(height)]


def grid_size(grid: Grid) -> Tuple[int, int]:
    """Return (width, height) of a [y][x] grid."""
    return (len(grid[0]) if grid else 0), len(grid)


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def valid_pos(x: int, y: int, width: int, height: int) -> bool:
    """Check if position is within grid bounds."""
    return 0 <= x < width and 0 <= y < height


def get_tile(grid: Grid, x: int, y: int) -> int:
    """Read a cell; INVALID_TILE outside the grid."""
    if y < 0 or x < 0 or y >= len(grid) or x >= len(grid[y]):
        return INVALID_TILE
    return grid[y][x]


def set_tile(grid: Grid, x: int, y: int, value: int):
    """Write a cell; silently ignored outside the grid."""
    if y < 0 or x < 0 or y >= len(grid) or x >= len(grid[y]):
        return
    grid[y][x] = value


def neighbors_4(x: int, y: int, width: int, height: int) -> Iterator[Tuple[int, int, str]]:
    """Yield cardinal neighbors (nx, ny, direction) within bounds."""
    for direction, dx, dy in DIRECTIONS_4:
        nx, ny = x + dx, y + dy
        if valid_pos(nx, ny, width, height):
            yield (nx, ny, direction)


def touching_tiles(grid: Grid, x: int, y: int, code: int) -> int:
    """
    Count the 8-connected neighbors of (x, y) holding ``code``.

    Cells outside the grid never match (they read as INVALID_TILE).
    """
    return sum(1 for dx, dy in _NEIGHBOUR_OFFSETS_8 if get_tile(grid, x + dx, y + dy) == code)


def surround_tile(grid: Grid, x: int, y: int, code: int):
    """Set (x, y) and its four orthogonal neighbors to ``code``."""
    for dx, dy in _CROSS_OFFSETS:
        set_tile(grid, x + dx, y + dy, code)


# ============================================================================
# NUMPY CONVERSIONS
# ============================================================================

def upscale_grid(grid: Grid, factor: int) -> np.ndarray:
    """
    Nearest-neighbor upscale: every cell becomes a factor x factor block.

    Returns:
        int8 array of shape (height * factor, width * factor)
    """
    arr = np.asarray(grid, dtype=np.int8)
    return np.repeat(np.repeat(arr, factor, axis=0), factor, axis=1)


def code_histogram(codes) -> Dict[int, int]:
    """Count cells per tile code (every known code is present, possibly 0)."""
    arr = np.asarray(codes)
    counts = np.bincount(arr[arr >= 0].ravel(), minlength=len(TILE_CODES))
    return {code: int(counts[code]) for code in TILE_CODES}


def count_isolated(grid: Grid, code: int = OBSTACLE) -> int:
    """Number of single cells of ``code`` with no 8-neighbor of the same code."""
    width, height = grid_size(grid)
    isolated = 0
    for y in range(height):
        for x in range(width):
            if grid[y][x] == code and touching_tiles(grid, x, y, code) == 0:
                isolated += 1
    return isolated
