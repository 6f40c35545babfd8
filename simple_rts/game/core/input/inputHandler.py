import pygame

from simple_rts.config import get_logger

logger = get_logger(__name__)


class InputHandler:
    """
    Turns pygame events and the polled keyboard into intent for one frame.

    Call ``process`` once per frame; the per-frame fields (clicks, zoom,
    pan delta, select-all) are reset at the start of every call, the held
    states (panning) persist.
    """

    def __init__(self):
        self.quit = False
        self.panning = False
        self.pan_delta = (0, 0)
        self.click = None  # (x, y) screen position of a left click this frame
        self.zoom_steps = 0
        self.select_all = None  # True = select, False = deselect, None = nothing
        self.shift_held = False
        self.arrows = (0, 0)

    def process(self, events, keys=None):
        self.pan_delta = (0, 0)
        self.click = None
        self.zoom_steps = 0
        self.select_all = None

        mods = pygame.key.get_mods() if keys is None else 0
        for event in events:
            if event.type == pygame.QUIT:
                logger.info("Quit event received")
                self.quit = True
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 3:
                    self.panning = True
                elif event.button == 1:
                    self.click = event.pos
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 3:
                    self.panning = False
            elif event.type == pygame.MOUSEMOTION:
                if self.panning:
                    dx, dy = self.pan_delta
                    self.pan_delta = (dx + event.rel[0], dy + event.rel[1])
            elif event.type == pygame.MOUSEWHEEL:
                self.zoom_steps += event.y
            elif event.type == pygame.KEYDOWN:
                mods = getattr(event, "mod", mods)
                if event.key == pygame.K_ESCAPE:
                    logger.info("Escape pressed, quitting")
                    self.quit = True
                elif event.key == pygame.K_a and mods & pygame.KMOD_CTRL:
                    self.select_all = not (mods & pygame.KMOD_SHIFT)

        if keys is None:
            keys = pygame.key.get_pressed()
        self.shift_held = bool(keys[pygame.K_LSHIFT]) or bool(mods & pygame.KMOD_SHIFT)
        self.arrows = (int(keys[pygame.K_RIGHT]) - int(keys[pygame.K_LEFT]),
                       int(keys[pygame.K_DOWN]) - int(keys[pygame.K_UP]))
        return self
