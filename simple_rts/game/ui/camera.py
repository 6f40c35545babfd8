"""
Camera state passed explicitly to every rendering and input call.

Positions are in tile coordinates (the centre of the screen looks at
(x, y)); ``scale`` multiplies TILE_PIXELS to get on-screen pixels per tile.
"""
from simple_rts.config import TILE_PIXELS, DEFAULT_SCALE, MIN_SCALE, MAX_SCALE, ZOOM_STEP, KEY_PAN_SPEED

# tiles drawn beyond each screen edge so partially visible tiles are not cut
VIEW_MARGIN = 3


class Camera:
    def __init__(self, x=0.0, y=0.0, scale=DEFAULT_SCALE):
        self.x = x
        self.y = y
        self.scale = scale

    @property
    def tile_size(self):
        """On-screen pixels per tile at the current zoom."""
        return TILE_PIXELS * self.scale

    def center_on(self, point):
        self.x = float(point[0])
        self.y = float(point[1])

    def pan_pixels(self, dx, dy):
        """Drag panning: the map follows the mouse, so the camera moves the other way."""
        self.x -= dx / self.tile_size
        self.y -= dy / self.tile_size

    def nudge(self, dx, dy):
        """Keyboard panning, a constant on-screen speed at any zoom."""
        self.x += dx * KEY_PAN_SPEED / self.scale
        self.y += dy * KEY_PAN_SPEED / self.scale

    def zoom(self, steps):
        self.scale = min(max(self.scale + steps * ZOOM_STEP, MIN_SCALE), MAX_SCALE)

    def clamp(self, width, height):
        """Keep the camera over the map (width x height tiles)."""
        self.x = min(max(self.x, 0.0), float(width))
        self.y = min(max(self.y, 0.0), float(height))

    def offset(self, screen_size):
        """Pixel offset subtracted from world pixel coordinates to get screen ones."""
        sw, sh = screen_size
        return self.x * self.tile_size - sw / 2, self.y * self.tile_size - sh / 2

    def world_to_screen(self, wx, wy, screen_size):
        ox, oy = self.offset(screen_size)
        return wx * self.tile_size - ox, wy * self.tile_size - oy

    def screen_to_world(self, sx, sy, screen_size):
        sw, sh = screen_size
        return (self.x + (sx - sw / 2) / self.tile_size,
                self.y + (sy - sh / 2) / self.tile_size)

    def visible_tile_range(self, screen_size):
        """Inclusive (x0, y0, x1, y1) tile range covering the screen plus a margin."""
        sw, sh = screen_size
        half_w = (sw / 2) / self.tile_size
        half_h = (sh / 2) / self.tile_size
        return (int(self.x - half_w) - VIEW_MARGIN, int(self.y - half_h) - VIEW_MARGIN,
                int(self.x + half_w) + VIEW_MARGIN, int(self.y + half_h) + VIEW_MARGIN)

    def __repr__(self):
        return f"Camera(x={self.x:.2f}, y={self.y:.2f}, scale={self.scale:.2f})"
