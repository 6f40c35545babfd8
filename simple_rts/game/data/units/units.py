import math

from simple_rts.config import get_logger, MAX_UNITS
from simple_rts.game.data.units.unitData.mobilityTypes import MOBILITY_BY_UNIT_TYPE

# distance (in tiles) at which a moving unit counts as arrived, also the click radius
ARRIVE_RADIUS = 1.5


class Unit:  # a single unit on the map, positions are in tile coordinates

    def __init__(self, x, y, unitType, team):
        if not 0 <= unitType < len(MOBILITY_BY_UNIT_TYPE):
            raise ValueError(f"unknown unit type {unitType}")

        # position of the unit
        self.x = x
        self.y = y

        # facing in radians, units start facing down
        self.angle = math.pi / 2

        # index into MOBILITY_BY_UNIT_TYPE, also picks the sprite
        self.unitType = unitType
        self.mobility = MOBILITY_BY_UNIT_TYPE[unitType]

        # owning player
        self.team = team

        # move target, only meaningful while moving
        self.targetX = x
        self.targetY = y
        self.moving = False

        self.selected = False

    def target(self, x, y):  # order the unit to walk to (x, y)
        self.targetX = x
        self.targetY = y
        self.moving = True

    def update(self, tileCode):  # advance one step, speed depends on the tile under the unit
        if not self.moving:
            return
        self.angle = math.atan2(self.targetY - self.y, self.targetX - self.x)
        speed = self.mobility.speed_on(tileCode)
        self.x += math.cos(self.angle) * speed
        self.y += math.sin(self.angle) * speed
        if self.distance_sq(self.targetX, self.targetY) < ARRIVE_RADIUS * ARRIVE_RADIUS:
            self.moving = False

    def distance_sq(self, x, y):
        return (x - self.x) ** 2 + (y - self.y) ** 2

    def hit_test(self, x, y):  # is (x, y) close enough to click this unit?
        return self.distance_sq(x, y) < ARRIVE_RADIUS * ARRIVE_RADIUS


class UnitRoster:
    """All units in play, capped at MAX_UNITS."""

    def __init__(self, capacity=MAX_UNITS):
        self.capacity = capacity
        self.units = []
        self.logger = get_logger(__name__)

    def __iter__(self):
        return iter(self.units)

    def __len__(self):
        return len(self.units)

    def add(self, x, y, unitType, team):
        """Spawn a unit. Returns None when the roster is full."""
        if len(self.units) >= self.capacity:
            self.logger.warning(f"Unit cap of {self.capacity} reached, not spawning type {unitType}")
            return None
        unit = Unit(x, y, unitType, team)
        self.units.append(unit)
        self.logger.debug(f"Spawned unit type {unitType} for team {team} at ({x:.1f}, {y:.1f})")
        return unit

    def select_all(self, select=True):
        for unit in self.units:
            unit.selected = select

    def click(self, x, y, deselect=False):
        """
        Handle a left click on the map at tile coordinates (x, y).

        The first unit under the cursor is selected (or deselected with
        ``deselect``). A click on empty ground orders every selected unit
        there instead.

        Returns:
            True if the click hit a unit, False if it issued a move order
        """
        for unit in self.units:
            if unit.hit_test(x, y):
                unit.selected = not deselect
                return True
        self.order_move(x, y)
        return False

    def order_move(self, x, y):
        for unit in self.units:
            if unit.selected:
                unit.target(x, y)

    def update(self, tile_map):
        for unit in self.units:
            unit.update(tile_map.tile_at(unit.x, unit.y))
