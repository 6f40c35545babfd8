"""
Test suite for the individual terrain generation stages.

Tests cover:
- Region allocation bounds
- Landmass carve shape and spawn point placement
- Island seeding
- Erosion spread (in-place scan order and double-buffered)
- Upscaling
- Roughening chains
- Smoothing automaton rules
"""

import math
import random

import pytest

from conftest import small_params
from simple_rts.game.data.maps import GenerationParameters
from simple_rts.game.data.maps.terrain import VOID, OPEN, ROUGH, OBSTACLE
from simple_rts.game.data.maps.terrainGen import (
    allocate_region_grid, carve_landmass, seed_islands, erode, upscale,
    roughen, smooth, smooth_once, spawn_from_center
)
from simple_rts.game.data.maps.utils import create_grid, copy_grid, grid_size, count_isolated


def cells(grid):
    """{(x, y): value} of every non-zero cell."""
    return {(x, y): v for y, row in enumerate(grid) for x, v in enumerate(row) if v}


class TestRegionAllocation:

    def test_dimensions_within_bounds(self):
        params = GenerationParameters()
        rng = random.Random(7)
        for _ in range(50):
            grid = allocate_region_grid(rng, params)
            width, height = grid_size(grid)
            assert 68 <= width <= 100
            assert 51 <= height <= 75

    def test_starts_empty(self):
        grid = allocate_region_grid(random.Random(0), small_params())
        assert not cells(grid)


class TestLandmassCarve:

    def test_center_near_middle(self):
        params = small_params()
        for seed in range(50):
            rng = random.Random(seed)
            grid = allocate_region_grid(rng, params)
            width, height = grid_size(grid)
            cx, cy = carve_landmass(grid, rng, params)
            assert width // 2 - 4 <= cx <= width // 2 - 1
            assert height // 2 - 4 <= cy <= height // 2 - 1

    def test_only_elevated_values_written(self):
        params = GenerationParameters()
        rng = random.Random(3)
        grid = allocate_region_grid(rng, params)
        carve_landmass(grid, rng, params)
        assert set(cells(grid).values()) <= {2, 3}

    def test_carved_cells_within_radius(self):
        params = GenerationParameters(carve_radius_range=(10, 10))
        for seed in range(20):
            rng = random.Random(seed)
            grid = allocate_region_grid(rng, params)
            cx, cy = carve_landmass(grid, rng, params)
            for x, y in cells(grid):
                assert math.hypot(x - cx, y - cy) < 10 + 1.5

    def test_empty_wedge_carves_nothing(self):
        params = GenerationParameters(carve_angle_span_range=(0.0, 0.0))
        rng = random.Random(11)
        grid = allocate_region_grid(rng, params)
        carve_landmass(grid, rng, params)
        assert not cells(grid)

    def test_certain_fill_raises_center(self):
        params = GenerationParameters(carve_angle_span_range=(1.0, 1.0), carve_fill_chance=(1, 1))
        rng = random.Random(5)
        grid = allocate_region_grid(rng, params)
        cx, cy = carve_landmass(grid, rng, params)
        assert grid[cy][cx] in (2, 3)

    def test_out_of_bounds_ray_cells_are_dropped(self):
        params = small_params(carve_radius_range=(40, 40), carve_angle_span_range=(2.0, 2.0))
        rng = random.Random(9)
        grid = allocate_region_grid(rng, params)
        carve_landmass(grid, rng, params)
        width, height = grid_size(grid)
        assert len(grid) == height and all(len(row) == width for row in grid)

    def test_spawn_point_inside_fine_grid_for_many_seeds(self):
        params = GenerationParameters()
        factor = params.upscale_factor
        for seed in range(1000):
            rng = random.Random(seed)
            grid = allocate_region_grid(rng, params)
            width, height = grid_size(grid)
            sx, sy = spawn_from_center(carve_landmass(grid, rng, params), factor)
            assert 0 <= sx < width * factor
            assert 0 <= sy < height * factor

    def test_spawn_is_block_center(self):
        assert spawn_from_center((3, 7), 10) == (35, 75)
        assert spawn_from_center((0, 0), 1) == (0, 0)


class TestIslandSeeding:

    def test_count_within_range(self):
        params = small_params(extra_island_count_range=(4, 9))
        rng = random.Random(0)
        for _ in range(20):
            assert 4 <= seed_islands(create_grid(12, 12), rng, params) <= 9

    def test_stamps_elevated_cells(self):
        params = small_params(extra_island_count_range=(6, 6))
        grid = create_grid(20, 20)
        seed_islands(grid, random.Random(1), params)
        raised = cells(grid)
        assert 1 <= len(raised) <= 6
        assert set(raised.values()) <= {2, 3}

    def test_overwrites_existing_cells(self):
        params = small_params(extra_island_count_range=(30, 30))
        grid = create_grid(8, 8, 1)
        seed_islands(grid, random.Random(4), params)
        assert any(v in (2, 3) for row in grid for v in row)

    def test_zero_islands(self):
        params = small_params(extra_island_count_range=(0, 0))
        grid = create_grid(8, 8)
        assert seed_islands(grid, random.Random(0), params) == 0
        assert not cells(grid)


class TestErosion:

    def test_single_step_double_buffered(self):
        grid = create_grid(10, 10)
        grid[5][5] = 3
        erode(grid, iterations=1, double_buffered=True)
        assert cells(grid) == {(5, 5): 3, (4, 5): 2, (6, 5): 2, (5, 4): 2, (5, 6): 2}

    def test_single_step_in_place_follows_scan_order(self):
        grid = create_grid(10, 10)
        grid[5][5] = 3
        erode(grid, iterations=1)
        # x outer, y inner: (5, 6) and (6, 5) are visited after being raised and spread again
        assert cells(grid) == {
            (5, 5): 3,
            (4, 5): 2, (6, 5): 2, (5, 4): 2, (5, 6): 2,
            (4, 6): 1, (6, 6): 1, (5, 7): 1, (7, 5): 1, (6, 4): 1,
        }

    def test_no_diagonal_spread(self):
        grid = create_grid(5, 5)
        grid[2][2] = 2
        erode(grid, iterations=1, double_buffered=True)
        assert grid[1][1] == grid[1][3] == grid[3][1] == grid[3][3] == 0

    def test_ones_do_not_spread(self):
        grid = create_grid(5, 5)
        grid[2][2] = 1
        erode(grid, iterations=3)
        assert cells(grid) == {(2, 2): 1}

    def test_never_overwrites_non_zero(self):
        grid = create_grid(3, 1)
        grid[0] = [3, 1, 3]
        erode(grid, iterations=3)
        assert grid[0] == [3, 1, 3]

    def test_elevated_cells_never_decrease(self):
        rng = random.Random(42)
        for double_buffered in (False, True):
            grid = [[rng.choice((0, 0, 0, 2, 3)) for _ in range(15)] for _ in range(12)]
            before = copy_grid(grid)
            erode(grid, iterations=3, double_buffered=double_buffered)
            for y, row in enumerate(before):
                for x, v in enumerate(row):
                    if v:
                        assert grid[y][x] == v

    def test_zero_iterations_is_noop(self):
        grid = create_grid(6, 6)
        grid[3][3] = 3
        erode(grid, iterations=0)
        assert cells(grid) == {(3, 3): 3}

    def test_three_passes_reach_rings(self):
        grid = create_grid(11, 11)
        grid[5][5] = 3
        erode(grid, iterations=3, double_buffered=True)
        assert grid[5][3] == 1  # two steps west
        assert grid[5][2] == 0  # 1s stop spreading


class TestUpscale:

    def test_blocks_copy_region_values(self):
        region = [[0, 3, 2], [1, 0, 3]]
        tiles = upscale(region, 4)
        assert grid_size(tiles) == (12, 8)
        for y in range(8):
            for x in range(12):
                assert tiles[y][x] == region[y // 4][x // 4]

    def test_returns_plain_lists(self):
        tiles = upscale([[2]], 2)
        assert tiles == [[2, 2], [2, 2]]
        assert type(tiles[0][0]) is int


class TestRoughening:

    def test_void_untouched(self):
        tiles = create_grid(10, 10, VOID)
        roughen(tiles, random.Random(0), GenerationParameters())
        assert tiles == create_grid(10, 10, VOID)

    def test_never_happening_chances_change_nothing(self):
        params = GenerationParameters(rough_to_open_chance=(0, 5), obstacle_to_open_chance=(0, 7),
                                      open_to_rough_chance=(0, 3))
        tiles = [[OPEN, ROUGH, OBSTACLE, VOID]]
        roughen(tiles, random.Random(0), params)
        assert tiles == [[OPEN, ROUGH, OBSTACLE, VOID]]

    def test_downgrades_chain_into_open_check(self):
        params = GenerationParameters(rough_to_open_chance=(1, 1), obstacle_to_open_chance=(1, 1),
                                      open_to_rough_chance=(1, 1))
        tiles = [[OPEN, ROUGH, OBSTACLE, VOID]]
        roughen(tiles, random.Random(0), params)
        # 2 -> 1 -> 2 and 3 -> 1 -> 2 in the same visit
        assert tiles == [[ROUGH, ROUGH, ROUGH, VOID]]

    def test_downgrades_without_regrowth(self):
        params = GenerationParameters(rough_to_open_chance=(1, 1), obstacle_to_open_chance=(1, 1),
                                      open_to_rough_chance=(0, 1))
        tiles = [[OPEN, ROUGH, OBSTACLE, VOID]]
        roughen(tiles, random.Random(0), params)
        assert tiles == [[OPEN, OPEN, OPEN, VOID]]

    def test_deterministic_for_seed(self):
        rng = random.Random(17)
        base = [[rng.randrange(4) for _ in range(30)] for _ in range(30)]
        a, b = copy_grid(base), copy_grid(base)
        roughen(a, random.Random(99), GenerationParameters())
        roughen(b, random.Random(99), GenerationParameters())
        assert a == b

    def test_obstacles_mostly_survive(self):
        tiles = create_grid(50, 50, OBSTACLE)
        roughen(tiles, random.Random(3), GenerationParameters())
        kept = sum(row.count(OBSTACLE) for row in tiles)
        # 1 in 7 is knocked down
        assert 0.75 * 2500 < kept < 0.95 * 2500


class TestSmoothing:

    def test_isolated_open_cell_is_erased_with_its_cross(self):
        tiles = create_grid(5, 5, VOID)
        tiles[2][2] = OPEN
        smooth(tiles, iterations=1)
        assert tiles == create_grid(5, 5, VOID)

    def test_void_hole_in_open_is_filled(self):
        tiles = create_grid(3, 3, OPEN)
        tiles[1][1] = VOID
        smooth_once(tiles)
        assert tiles == create_grid(3, 3, OPEN)

    def test_lone_obstacle_dissolves(self):
        tiles = create_grid(5, 5, OPEN)
        tiles[2][2] = OBSTACLE
        smooth_once(tiles)
        assert tiles == create_grid(5, 5, OPEN)

    def test_lone_rough_dissolves_with_cross(self):
        tiles = create_grid(5, 5, OPEN)
        tiles[2][2] = ROUGH
        smooth_once(tiles)
        assert tiles == create_grid(5, 5, OPEN)

    def test_open_joins_dense_obstacles(self):
        tiles = create_grid(3, 3, OBSTACLE)
        tiles[1][1] = OPEN
        smooth_once(tiles)
        assert tiles[1][1] == OBSTACLE

    def test_rough_surrounded_by_void_becomes_void(self):
        tiles = create_grid(3, 3, VOID)
        tiles[1][1] = ROUGH
        smooth_once(tiles)
        # first check turns it void, the cross then dissolves to open since it had no rough neighbors
        assert tiles == [
            [VOID, OPEN, VOID],
            [OPEN, OPEN, OPEN],
            [VOID, OPEN, VOID],
        ]

    def test_uniform_open_is_stable(self):
        tiles = create_grid(8, 8, OPEN)
        smooth(tiles, iterations=5)
        assert tiles == create_grid(8, 8, OPEN)

    @pytest.mark.parametrize("double_buffered", [False, True])
    def test_codes_stay_closed(self, double_buffered):
        rng = random.Random(8)
        tiles = [[rng.randrange(4) for _ in range(30)] for _ in range(20)]
        smooth(tiles, iterations=5, double_buffered=double_buffered)
        assert {v for row in tiles for v in row} <= {VOID, OPEN, ROUGH, OBSTACLE}

    def test_in_place_dissolves_whole_obstacle_slab(self):
        # each dissolved obstacle lowers the counts of the ones scanned after it
        tiles = create_grid(4, 3, OBSTACLE)
        smooth_once(tiles)
        assert tiles == create_grid(4, 3, OPEN)

    def test_double_buffered_reads_snapshot(self):
        # from a snapshot only the corners (3 obstacle neighbors) dissolve
        tiles = create_grid(4, 3, OBSTACLE)
        smooth_once(tiles, double_buffered=True)
        assert tiles == [
            [OPEN, OBSTACLE, OBSTACLE, OPEN],
            [OBSTACLE, OBSTACLE, OBSTACLE, OBSTACLE],
            [OPEN, OBSTACLE, OBSTACLE, OPEN],
        ]

    def test_isolated_obstacles_do_not_increase(self):
        before_total = after_total = 0
        for seed in range(10):
            rng = random.Random(seed)
            tiles = [[rng.randrange(4) for _ in range(40)] for _ in range(40)]
            before = count_isolated(tiles, OBSTACLE)
            smooth(tiles, iterations=5)
            after = count_isolated(tiles, OBSTACLE)
            before_total += before
            after_total += after
        assert after_total <= before_total
