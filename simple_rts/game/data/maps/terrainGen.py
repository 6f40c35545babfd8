"""
Procedural terrain generator.

Turns a random stream into a playable tile map through cellular automata on
two resolutions: a coarse region grid that is carved, seeded and eroded, and a
fine tile grid (region upscaled by a fixed factor) that is roughened and
smoothed.

    params = GenerationParameters(seed=12345)
    generator = TerrainGenerator(params)
    tile_map = generator.generate()
    stats = generator.get_statistics()

Every stage is also a module-level function taking the grid and the RNG
explicitly, so it can be run and tested on its own.

Both automata (erosion and smoothing) update one shared grid in place while
scanning x outer, y inner: a cell sees the writes made earlier in the same
pass. The resulting directional bias is part of the terrain's look. Set
``double_buffered`` to read each pass from a snapshot instead.
"""
import math
import random
from typing import Dict, Optional, Tuple

from simple_rts.config import get_map_logger, PerformanceTimer, log_memory_usage
from simple_rts.game.data.maps.config import GenerationParameters, ANGLE_RESOLUTION
from simple_rts.game.data.maps.terrain import VOID, OPEN, ROUGH, OBSTACLE
from simple_rts.game.data.maps.tileMap import TileMap
from simple_rts.game.data.maps.utils import (
    Grid, create_grid, grid_size, copy_grid, valid_pos, neighbors_4,
    touching_tiles, surround_tile, upscale_grid, count_isolated
)

# Smoothing neighbor thresholds (hand-tuned, out of 8 neighbors)
OPEN_KEEP_ROUGH = 3  # open stays open above this many rough neighbors
OPEN_TO_OBSTACLE = 2  # open joins an obstacle mass above this many obstacle neighbors
OPEN_ERASE_VOID = 3  # open is erased with its cross above this many void neighbors
VOID_FILL_OPEN = 3  # void is filled above this many open neighbors
ROUGH_ERASE_VOID = 4  # rough becomes void above this many void neighbors
ROUGH_MIN_ROUGH = 3  # rough dissolves with its cross below this many rough neighbors
OBSTACLE_MIN_OBSTACLE = 5  # obstacle dissolves below this many obstacle neighbors


class TerrainGenerationError(RuntimeError):
    """Raised when the generator cannot build its grids."""


def _chance(rng: random.Random, odds: Tuple[int, int]) -> bool:
    numerator, denominator = odds
    return rng.randrange(denominator) < numerator


def _draw_angle(rng: random.Random, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    steps = int(round((high - low) / ANGLE_RESOLUTION))
    return low + rng.randint(0, steps) * ANGLE_RESOLUTION


# -------------------------
# Region stages
# -------------------------
def allocate_region_grid(rng: random.Random, params: GenerationParameters) -> Grid:
    """Allocate an all-void region grid of bounded-random size."""
    width = rng.randint(*params.region_width_range)
    height = rng.randint(*params.region_height_range)
    return create_grid(width, height, 0)


def carve_landmass(grid: Grid, rng: random.Random, params: GenerationParameters) -> Tuple[int, int]:
    """
    Ray-cast a noisy wedge of elevated cells out from a point near the middle.

    One ray per angular step, so the wedge thins out with distance instead of
    forming a filled sector. Ray cells outside the grid are skipped.

    Returns:
        The landmass center (cx, cy) in region cells.
    """
    width, height = grid_size(grid)
    jitter_low, jitter_high = params.center_jitter_range
    cx = min(max(width // 2 + rng.randint(jitter_low, jitter_high), 0), width - 1)
    cy = min(max(height // 2 + rng.randint(jitter_low, jitter_high), 0), height - 1)

    radius = rng.randint(*params.carve_radius_range)
    start = _draw_angle(rng, params.carve_start_angle_range)
    end = start + _draw_angle(rng, params.carve_angle_span_range)

    angle = start
    while angle < end:
        for i in range(radius):
            x = cx + int(math.cos(angle) * i)
            y = cy + int(math.sin(angle) * i)
            if not valid_pos(x, y, width, height):
                continue
            if _chance(rng, params.carve_fill_chance):
                grid[y][x] = rng.choice(params.elevated_values)
        angle += params.carve_angle_step

    return cx, cy


def seed_islands(grid: Grid, rng: random.Random, params: GenerationParameters) -> int:
    """Stamp a random number of single elevated cells anywhere. Returns the count."""
    width, height = grid_size(grid)
    count = rng.randint(*params.extra_island_count_range)
    for _ in range(count):
        x = rng.randrange(width)
        y = rng.randrange(height)
        grid[y][x] = rng.choice(params.elevated_values)
    return count


def erode(grid: Grid, iterations: int = 3, double_buffered: bool = False):
    """
    Grow elevated cells outward, one height step lower per ring.

    Every cell >= 2 writes (value - 1) into each 4-connected neighbor that is
    still 0. Non-zero cells are never overwritten and a source cell never
    changes, so elevation only spreads. In place, a neighbor raised earlier in
    the scan can spread again within the same pass.
    """
    width, height = grid_size(grid)
    for _ in range(iterations):
        source = copy_grid(grid) if double_buffered else grid
        for x in range(width):
            for y in range(height):
                value = source[y][x]
                if value <= 1:
                    continue
                for nx, ny, _ in neighbors_4(x, y, width, height):
                    if grid[ny][nx] == 0:
                        grid[ny][nx] = value - 1


# -------------------------
# Tile stages
# -------------------------
def upscale(grid: Grid, factor: int) -> Grid:
    """Expand each region cell into a factor x factor block of fine tiles."""
    return upscale_grid(grid, factor).tolist()


def roughen(tiles: Grid, rng: random.Random, params: GenerationParameters):
    """
    Single stochastic pass breaking up the blocky upscaled terrain.

    The three checks run in order against the live value, so a tile knocked
    down to open can be turned rough again in the same visit.
    """
    width, height = grid_size(tiles)
    for x in range(width):
        for y in range(height):
            if tiles[y][x] == ROUGH and _chance(rng, params.rough_to_open_chance):
                tiles[y][x] = OPEN
            if tiles[y][x] == OBSTACLE and _chance(rng, params.obstacle_to_open_chance):
                tiles[y][x] = OPEN
            if tiles[y][x] == OPEN and _chance(rng, params.open_to_rough_chance):
                tiles[y][x] = ROUGH


def smooth_once(tiles: Grid, double_buffered: bool = False):
    """
    One pass of the smoothing automaton.

    The branch is chosen by the code the tile had when the visit started;
    every neighbor count is taken fresh at its check.
    """
    width, height = grid_size(tiles)
    source = copy_grid(tiles) if double_buffered else tiles
    for x in range(width):
        for y in range(height):
            code = source[y][x]
            if code == OPEN:
                if touching_tiles(source, x, y, ROUGH) > OPEN_KEEP_ROUGH:
                    tiles[y][x] = OPEN
                if touching_tiles(source, x, y, OBSTACLE) > OPEN_TO_OBSTACLE:
                    tiles[y][x] = OBSTACLE
                if touching_tiles(source, x, y, VOID) > OPEN_ERASE_VOID:
                    surround_tile(tiles, x, y, VOID)
            elif code == VOID:
                if touching_tiles(source, x, y, OPEN) > VOID_FILL_OPEN:
                    tiles[y][x] = OPEN
            elif code == ROUGH:
                if touching_tiles(source, x, y, VOID) > ROUGH_ERASE_VOID:
                    tiles[y][x] = VOID
                if touching_tiles(source, x, y, ROUGH) < ROUGH_MIN_ROUGH:
                    surround_tile(tiles, x, y, OPEN)
            elif code == OBSTACLE:
                if touching_tiles(source, x, y, OBSTACLE) < OBSTACLE_MIN_OBSTACLE:
                    tiles[y][x] = OPEN


def smooth(tiles: Grid, iterations: int = 5, double_buffered: bool = False):
    """Run the smoothing automaton ``iterations`` times."""
    for _ in range(iterations):
        smooth_once(tiles, double_buffered)


def spawn_from_center(center: Tuple[int, int], factor: int) -> Tuple[int, int]:
    """Fine tile at the middle of the region cell ``center``."""
    cx, cy = center
    return cx * factor + factor // 2, cy * factor + factor // 2


class TerrainGenerator:
    """
    Terrain generator.

    - Uses GenerationParameters for all tunables.
    - Draws from its own random.Random (injected, or seeded from params.seed).
    - Public method `generate()` returns a read-only TileMap.
    """

    def __init__(self, params: GenerationParameters = None, rng: Optional[random.Random] = None):
        self.params = params or GenerationParameters()
        self.logger = get_map_logger()

        if rng is not None:
            self.rng = rng
            self.logger.info("Generator initialized with injected RNG")
        elif self.params.seed is not None:
            self.rng = random.Random(self.params.seed)
            self.logger.info(f"Generator initialized with seed: {self.params.seed}")
        else:
            self.rng = random.Random()
            self.logger.info("Generator initialized with random seed")

        self.tile_map: Optional[TileMap] = None
        self.region_size: Tuple[int, int] = (0, 0)
        self.region_center: Tuple[int, int] = (0, 0)
        self.island_count = 0
        self.isolated_obstacles: Dict[str, int] = {}
        self.stage_times: Dict[str, float] = {}

    # -------------------------
    # Entry point
    # -------------------------
    def generate(self) -> TileMap:
        """
        Run the full pipeline and return the finished map.

        Stages:
          - region allocation and landmass carve
          - island seeding
          - erosion/growth
          - upscale to fine tiles (region grid released)
          - roughening
          - smoothing automaton
        """
        p = self.params
        self.stage_times = {}

        with self._stage("Region carve"):
            region = self._allocate_region()
            self.region_size = grid_size(region)
            self.region_center = carve_landmass(region, self.rng, p)
            self.island_count = seed_islands(region, self.rng, p)
        self.logger.debug(
            f"Region {self.region_size[0]}x{self.region_size[1]}, center={self.region_center}, "
            f"islands={self.island_count}"
        )

        with self._stage("Erosion"):
            erode(region, p.erosion_iterations, p.double_buffered)

        with self._stage("Upscale"):
            tiles = self._upscale_region(region)
        del region
        log_memory_usage(self.logger, "After upscale")

        if p.roughen_enabled:
            with self._stage("Roughening"):
                roughen(tiles, self.rng, p)

        isolated_before = count_isolated(tiles, OBSTACLE)
        with self._stage("Smoothing"):
            smooth(tiles, p.smooth_iterations, p.double_buffered)
        self.isolated_obstacles = {'before_smoothing': isolated_before,
                                   'after_smoothing': count_isolated(tiles, OBSTACLE)}

        spawn = spawn_from_center(self.region_center, p.upscale_factor)
        self.tile_map = TileMap(tiles, spawn)

        stats = self.get_statistics()
        self.logger.info(
            f"Map complete: {stats['width']}x{stats['height']} tiles, spawn={spawn}, "
            f"open={stats['open']}, rough={stats['rough']}, obstacle={stats['obstacle']}, void={stats['void']}"
        )
        return self.tile_map

    def _stage(self, name: str) -> PerformanceTimer:
        timer = PerformanceTimer(self.logger, name)
        self.stage_times[name] = timer
        return timer

    def _allocate_region(self) -> Grid:
        try:
            return allocate_region_grid(self.rng, self.params)
        except MemoryError as e:
            self.logger.critical("Out of memory allocating the region grid")
            raise TerrainGenerationError("could not allocate the region grid") from e

    def _upscale_region(self, region: Grid) -> Grid:
        try:
            return upscale(region, self.params.upscale_factor)
        except MemoryError as e:
            width, height = self.region_size
            factor = self.params.upscale_factor
            self.logger.critical(f"Out of memory allocating a {width * factor}x{height * factor} tile grid")
            raise TerrainGenerationError("could not allocate the tile grid") from e

    # -------------------------
    # Statistics helpers
    # -------------------------
    def get_statistics(self) -> Dict:
        """Return a dictionary of summary statistics about the last generated map."""
        if self.tile_map is None:
            return {}
        counts = self.tile_map.histogram()
        stats = {
            'width': self.tile_map.width(),
            'height': self.tile_map.height(),
            'area': self.tile_map.width() * self.tile_map.height(),
            'seed': self.params.seed,
            'region_width': self.region_size[0],
            'region_height': self.region_size[1],
            'region_center': self.region_center,
            'spawn_point': self.tile_map.spawn_point(),
            'islands': self.island_count,
            'void': counts[VOID],
            'open': counts[OPEN],
            'rough': counts[ROUGH],
            'obstacle': counts[OBSTACLE],
        }
        stats.update(self.isolated_obstacles)
        stats['stage_seconds'] = {name: t.elapsed for name, t in self.stage_times.items()}
        return stats
