# terrain categories of the generated tile grid
# the integer codes are what the generator writes and what tile_at() returns

VOID = 0  # void / open water
OPEN = 1  # walkable ground
ROUGH = 2  # rough ground, slow
OBSTACLE = 3  # rocks, very slow

INVALID_TILE = -1  # returned for coordinates outside the grid

TILE_CODES = (VOID, OPEN, ROUGH, OBSTACLE)


class terrain:
    def __init__(self, name, code, passable, minimapColour=None):
        self.name = name  # name of the terrain type
        self.code = code  # tile code stored in the grid
        # good ground for placing bases and spawns; informational only,
        # movement is governed by the unit speed tables in mobilityTypes
        self.passable = passable
        self.minimapColour = minimapColour  # rgba used by the minimap, None = not drawn


# define objects for terrain class
void = terrain("Void", VOID, False)
plains = terrain("Plains", OPEN, True, (0xef, 0xef, 0xef, 0x98))
rough = terrain("Rough", ROUGH, True, (0xd0, 0xd0, 0xd0, 0x98))
rocks = terrain("Rocks", OBSTACLE, False, (0xaf, 0xaf, 0xaf, 0x98))

ALL_TERRAIN_TYPES = (void, plains, rough, rocks)

# code -> terrain lookup
TERRAIN_BY_CODE = {t.code: t for t in ALL_TERRAIN_TYPES}
