"""
pygame drawing for the map view, the minimap and units.

Nothing here reads global camera or window state: every call gets the
surface, the TileMap and the Camera it should use.
"""
import math

import pygame

from simple_rts.config import get_logger, MINIMAP_SHRINK, UI_BORDER, TILE_OVERDRAW, TILE_PIXELS
from simple_rts.game.ui.UItheme import UITheme

logger = get_logger(__name__)


# ---------------------------
# MAP VIEW
# ---------------------------

def draw_level(surface, tile_map, camera):
    """Draw every tile inside the camera view."""
    screen_size = surface.get_size()
    x0, y0, x1, y1 = camera.visible_tile_range(screen_size)
    x0, y0 = max(x0, 0), max(y0, 0)
    x1, y1 = min(x1, tile_map.width() - 1), min(y1, tile_map.height() - 1)

    ox, oy = camera.offset(screen_size)
    size = TILE_PIXELS * (camera.scale + TILE_OVERDRAW)
    codes = tile_map.codes
    for x in range(x0, x1 + 1):
        for y in range(y0, y1 + 1):
            colour = UITheme.TILE_COLOURS[int(codes[y, x])]
            rect = pygame.Rect(int(x * camera.tile_size - ox), int(y * camera.tile_size - oy),
                               math.ceil(size), math.ceil(size))
            surface.fill(colour, rect)


def draw_units(surface, units, camera):
    """Units as team-coloured circles with selection ring and move target line."""
    screen_size = surface.get_size()
    radius = max(1, int(UITheme.UNIT_RADIUS * camera.tile_size))
    for unit in units:
        sx, sy = camera.world_to_screen(unit.x, unit.y, screen_size)
        if unit.selected:
            pygame.draw.circle(surface, UITheme.SELECTION, (int(sx), int(sy)), radius * 2, UITheme.BORDER_WIDTH)
            if unit.moving:
                tx, ty = camera.world_to_screen(unit.targetX, unit.targetY, screen_size)
                pygame.draw.line(surface, UITheme.TARGET_LINE, (int(sx), int(sy)), (int(tx), int(ty)))
                pygame.draw.circle(surface, UITheme.SELECTION, (int(tx), int(ty)), radius, UITheme.BORDER_WIDTH)
        colour = UITheme.TEAM_COLOURS[unit.team % len(UITheme.TEAM_COLOURS)]
        pygame.draw.circle(surface, colour, (int(sx), int(sy)), radius)
        # facing tick
        fx = sx + math.cos(unit.angle) * radius
        fy = sy + math.sin(unit.angle) * radius
        pygame.draw.line(surface, UITheme.TEXT, (int(sx), int(sy)), (int(fx), int(fy)))


# ---------------------------
# MINIMAP
# ---------------------------

def minimap_rect(tile_map, screen_size):
    """Screen rectangle occupied by the minimap (top right corner)."""
    sw, _ = screen_size
    w = tile_map.width() // MINIMAP_SHRINK
    h = tile_map.height() // MINIMAP_SHRINK
    return pygame.Rect(sw - w - UI_BORDER, UI_BORDER, w + 1, h + 1)


def build_minimap(tile_map):
    """
    Render the minimap once; the map never changes after generation.

    Samples every MINIMAP_SHRINK-th tile, void stays transparent.
    """
    s = MINIMAP_SHRINK
    w, h = tile_map.width(), tile_map.height()
    minimap = pygame.Surface((w // s + 1, h // s + 1), pygame.SRCALPHA)
    codes = tile_map.codes
    for x in range(0, w, s):
        for y in range(0, h, s):
            colour = UITheme.MINIMAP_COLOURS.get(int(codes[y, x]))
            if colour is None:
                continue
            minimap.set_at((x // s, y // s), colour)
    logger.debug(f"Minimap built: {minimap.get_width()}x{minimap.get_height()} px")
    return minimap


def draw_minimap(surface, minimap, tile_map, camera, units=()):
    """Blit the cached minimap with its border, the camera view box and unit markers."""
    s = MINIMAP_SHRINK
    sw, sh = surface.get_size()
    rect = minimap_rect(tile_map, (sw, sh))
    surface.blit(minimap, rect.topleft)
    pygame.draw.rect(surface, UITheme.MINIMAP_BORDER, rect, UITheme.BORDER_WIDTH)

    # camera view in minimap pixels
    view_w = (sw / camera.tile_size) / s
    view_h = (sh / camera.tile_size) / s
    view = pygame.Rect(int(rect.x + camera.x / s - view_w / 2), int(rect.y + camera.y / s - view_h / 2),
                       max(1, int(view_w)), max(1, int(view_h)))
    pygame.draw.rect(surface, UITheme.MINIMAP_BORDER, view, UITheme.BORDER_WIDTH)

    for unit in units:
        colour = UITheme.TEAM_COLOURS[unit.team % len(UITheme.TEAM_COLOURS)]
        surface.fill(colour, pygame.Rect(int(rect.x + unit.x / s) - 1, int(rect.y + unit.y / s) - 1, 3, 3))


def minimap_click(tile_map, camera, pos, screen_size):
    """
    Recentre the camera if ``pos`` falls inside the minimap.

    Returns:
        True if the click was consumed by the minimap
    """
    rect = minimap_rect(tile_map, screen_size)
    mx, my = pos
    # exclusive edges, the border pixels do not count
    if rect.x < mx < rect.right - 1 and rect.y < my < rect.bottom - 1:
        camera.x = (mx - rect.x) * MINIMAP_SHRINK
        camera.y = (my - rect.y) * MINIMAP_SHRINK
        return True
    return False
