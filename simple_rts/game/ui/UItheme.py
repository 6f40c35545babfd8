import pygame

from simple_rts.game.data.maps.terrain import ALL_TERRAIN_TYPES, VOID, OPEN, ROUGH, OBSTACLE


class UITheme:

    # colour scheme for the map view, minimap and unit markers (no tileset art yet)

    BACKGROUND = pygame.Color(0, 0, 0)
    TEXT = pygame.Color("#FFFFFF")
    MINIMAP_BORDER = pygame.Color(0xff, 0xff, 0xff)
    TARGET_LINE = pygame.Color(0xff, 0xff, 0xff)
    SELECTION = pygame.Color(0xff, 0xff, 0x00)

    # main view tile colours by code
    TILE_COLOURS = {
        VOID: pygame.Color("#10243C"),  # deep water blue
        OPEN: pygame.Color("#6B8E4E"),  # grass
        ROUGH: pygame.Color("#8A7A55"),  # dirt
        OBSTACLE: pygame.Color("#5A5A5A"),  # rock
    }

    # minimap colours come from the terrain definitions, None = not drawn
    MINIMAP_COLOURS = {t.code: pygame.Color(*t.minimapColour) for t in ALL_TERRAIN_TYPES if t.minimapColour}

    # team index -> colour
    TEAM_COLOURS = (pygame.Color(0xff, 0x00, 0x00), pygame.Color(0x00, 0xff, 0x00))

    BORDER_WIDTH = 1
    UNIT_RADIUS = 1.0  # in tiles
