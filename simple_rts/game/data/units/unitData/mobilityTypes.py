# mobilityTypes.py
# contains mobility types of units (movement speed per tile code)
# every code has a speed, so units crawl over void and obstacles regardless of terrain.passable

from simple_rts.game.data.maps.terrain import VOID, OPEN, ROUGH, OBSTACLE, INVALID_TILE


class mobilityTypes:  # contains the mobility types of units
    # define attributes

    def __init__(self, name, voidSpeed, openSpeed, roughSpeed, obstacleSpeed):
        # name shown in logs and debug overlays
        self.name = name

        # tiles per update step when standing on void
        self.voidSpeed = voidSpeed

        # ditto for open ground
        self.openSpeed = openSpeed

        # ditto for rough ground
        self.roughSpeed = roughSpeed

        # ditto for obstacles
        self.obstacleSpeed = obstacleSpeed

    def speed_on(self, code):  # speed for the tile code the unit stands on
        if code == VOID:
            return self.voidSpeed
        if code == OPEN:
            return self.openSpeed
        if code == ROUGH:
            return self.roughSpeed
        if code == OBSTACLE:
            return self.obstacleSpeed
        if code == INVALID_TILE:  # off the map, the unit is stuck
            return 0.0
        raise ValueError(f"unknown tile code {code}")


# define objects for mobilityTypes (instances you can import and use)

# for scouts, fastest everywhere
scoutMobility = mobilityTypes("scout", 0.005, 0.03, 0.02, 0.01)

# for line infantry
infantryMobility = mobilityTypes("infantry", 0.003, 0.025, 0.015, 0.005)

# for heavy units, barely move off open ground
heavyMobility = mobilityTypes("heavy", 0.001, 0.015, 0.01, 0.005)

# unit type index -> mobility
MOBILITY_BY_UNIT_TYPE = (scoutMobility, infantryMobility, heavyMobility)
