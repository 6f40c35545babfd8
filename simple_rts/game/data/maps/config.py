"""
Terrain generation configuration.

GenerationParameters bundles every tunable of the terrain pipeline. The
defaults are the hand-tuned values of the prototype and reproduce its maps;
change them for smaller test maps or different landmass shapes, not to
"improve" the terrain.

Ranges are inclusive ``(low, high)`` tuples. Chances are
``(numerator, denominator)`` pairs and are drawn as
``rng.randrange(denominator) < numerator``.
"""
from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Optional, Tuple

from simple_rts.config import get_map_logger

# Region grids smaller than this cannot hold the jittered landmass center
MIN_REGION_SIZE = 8

# Carve angles are drawn in steps of this many radians
ANGLE_RESOLUTION = 0.01


class MapConfigError(ValueError):
    """Raised when generation parameters describe an unusable map."""


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass
class GenerationParameters:
    """
    All knobs of TerrainGenerator.

    Attributes:
        seed: Seed for the generator's private random.Random (None = OS entropy)
        region_width_range: Coarse grid width bounds in region cells
        region_height_range: Coarse grid height bounds in region cells
        center_jitter_range: Offset applied to the grid middle to pick the landmass center
        carve_radius_range: Length of each carved ray in region cells
        carve_start_angle_range: First ray angle in radians
        carve_angle_span_range: Width of the carved wedge in radians
        carve_angle_step: Angle between two consecutive rays
        carve_fill_chance: Chance that a ray cell is raised
        extra_island_count_range: Number of random single-cell islands
        elevated_values: Values a raised region cell can take
        erosion_iterations: Passes of the growth/erosion automaton
        roughen_enabled: Run the stochastic roughening pass
        rough_to_open_chance: Roughening chance for 2 -> 1
        obstacle_to_open_chance: Roughening chance for 3 -> 1
        open_to_rough_chance: Roughening chance for 1 -> 2
        smooth_iterations: Passes of the smoothing automaton
        upscale_factor: Fine tiles per region cell along each axis
        double_buffered: Read each automaton pass from a snapshot instead of the live grid
    """
    seed: Optional[int] = None

    region_width_range: Tuple[int, int] = (68, 100)
    region_height_range: Tuple[int, int] = (51, 75)
    center_jitter_range: Tuple[int, int] = (-4, -1)

    carve_radius_range: Tuple[int, int] = (20, 29)
    carve_start_angle_range: Tuple[float, float] = (0.03, 0.64)
    carve_angle_span_range: Tuple[float, float] = (0.0, 2.18)
    carve_angle_step: float = 0.05
    carve_fill_chance: Tuple[int, int] = (1, 2)

    extra_island_count_range: Tuple[int, int] = (0, 249)
    elevated_values: Tuple[int, ...] = field(default=(2, 3))

    erosion_iterations: int = 3

    roughen_enabled: bool = True
    rough_to_open_chance: Tuple[int, int] = (3, 5)
    obstacle_to_open_chance: Tuple[int, int] = (1, 7)
    open_to_rough_chance: Tuple[int, int] = (1, 3)

    smooth_iterations: int = 5
    upscale_factor: int = 10
    double_buffered: bool = False

    def __post_init__(self):
        self.validate()

    @property
    def max_tile_size(self) -> Tuple[int, int]:
        """Largest fine grid (width, height) these parameters can produce."""
        return (self.region_width_range[1] * self.upscale_factor,
                self.region_height_range[1] * self.upscale_factor)

    def validate(self):
        """
        Reject parameter sets that would produce a degenerate map.

        Raises:
            MapConfigError: describing the first offending field
        """
        try:
            self._check_range('region_width_range', minimum=MIN_REGION_SIZE, integral=True)
            self._check_range('region_height_range', minimum=MIN_REGION_SIZE, integral=True)
            self._check_range('center_jitter_range', integral=True)
            self._check_range('carve_radius_range', minimum=1, integral=True)
            self._check_range('carve_start_angle_range')
            self._check_range('carve_angle_span_range', minimum=0)
            self._check_range('extra_island_count_range', minimum=0, integral=True)

            if not isinstance(self.carve_angle_step, Real) or self.carve_angle_step <= 0:
                raise MapConfigError(f"carve_angle_step must be positive, got {self.carve_angle_step!r}")

            for name in ('carve_fill_chance', 'rough_to_open_chance',
                         'obstacle_to_open_chance', 'open_to_rough_chance'):
                self._check_chance(name)

            if not self.elevated_values:
                raise MapConfigError("elevated_values must not be empty")
            if not all(_is_int(v) for v in self.elevated_values):
                raise MapConfigError(f"elevated_values must be integers, got {self.elevated_values!r}")
            if min(self.elevated_values) < 2:
                raise MapConfigError(f"elevated_values must all be >= 2, got {self.elevated_values}")
            if max(self.elevated_values) > 3:
                raise MapConfigError(f"elevated_values must all be <= 3, got {self.elevated_values}")

            for name in ('erosion_iterations', 'smooth_iterations', 'upscale_factor'):
                if not _is_int(getattr(self, name)):
                    raise MapConfigError(f"{name} must be an integer, got {getattr(self, name)!r}")
            for name in ('erosion_iterations', 'smooth_iterations'):
                if getattr(self, name) < 0:
                    raise MapConfigError(f"{name} must be >= 0, got {getattr(self, name)}")

            if self.upscale_factor < 1:
                raise MapConfigError(f"upscale_factor must be >= 1, got {self.upscale_factor}")
        except MapConfigError as e:
            get_map_logger().error(f"Invalid generation parameters: {e}")
            raise

    def _pair(self, name: str):
        value = getattr(self, name)
        if not isinstance(value, (tuple, list)) or len(value) != 2:
            raise MapConfigError(f"{name} must be a (low, high) pair, got {value!r}")
        return value

    def _check_range(self, name: str, minimum=None, integral=False):
        low, high = self._pair(name)
        if integral and not (_is_int(low) and _is_int(high)):
            raise MapConfigError(f"{name} bounds must be integers, got {(low, high)!r}")
        if not (isinstance(low, Real) and isinstance(high, Real)):
            raise MapConfigError(f"{name} bounds must be numbers, got {(low, high)!r}")
        if low > high:
            raise MapConfigError(f"{name} is reversed: low {low} > high {high}")
        if minimum is not None and low < minimum:
            raise MapConfigError(f"{name} lower bound {low} is below the minimum of {minimum}")

    def _check_chance(self, name: str):
        numerator, denominator = self._pair(name)
        if not (_is_int(numerator) and _is_int(denominator)):
            raise MapConfigError(f"{name} must be an integer (numerator, denominator) pair, "
                                 f"got {(numerator, denominator)!r}")
        if denominator < 1:
            raise MapConfigError(f"{name} denominator must be >= 1, got {denominator}")
        if not 0 <= numerator <= denominator:
            raise MapConfigError(f"{name} numerator must lie in [0, {denominator}], got {numerator}")
