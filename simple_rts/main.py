import logging


class Game:
    def __init__(self, params=None):
        # ---------------------------
        # LAZY IMPORTS
        # ---------------------------
        import pygame
        from simple_rts.config import get_logger, WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT
        from simple_rts.game.data.maps import TerrainGenerator
        from simple_rts.game.data.units.units import UnitRoster
        from simple_rts.game.core.input.inputHandler import InputHandler
        from simple_rts.game.ui.camera import Camera
        from simple_rts.game.ui.renderer import build_minimap

        self.logger = get_logger(__name__)
        self.logger.info("=" * 60)
        self.logger.info("Game initialization started")

        # ---------------------------
        # TERRAIN
        # ---------------------------

        # generated once, read-only for the rest of the session
        self.generator = TerrainGenerator(params)
        self.tile_map = self.generator.generate()

        # ---------------------------
        # SCREEN INIT
        # ---------------------------

        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.logger.info(f"Display initialized at {WINDOW_WIDTH}x{WINDOW_HEIGHT}")

        self.clock = pygame.time.Clock()
        self.running = True
        self.last_update = pygame.time.get_ticks()

        # ---------------------------
        # WORLD STATE
        # ---------------------------

        self.camera = Camera()
        self.camera.center_on(self.tile_map.spawn_point())
        self.minimap = build_minimap(self.tile_map)
        self.input = InputHandler()

        self.units = UnitRoster()
        spawn_x, spawn_y = self.tile_map.spawn_point()
        self.units.add(float(spawn_x), float(spawn_y), 0, 0)

        self.logger.info(f"Camera starts at {self.camera}")
        self.logger.info("Game initialization completed successfully")

    def handle_input(self):
        """Apply this frame's mouse and shortcut input to the camera and units."""
        from simple_rts.game.ui.renderer import minimap_click

        screen_size = self.screen.get_size()
        w, h = self.tile_map.width(), self.tile_map.height()

        if self.input.select_all is not None:
            self.units.select_all(self.input.select_all)
        if self.input.zoom_steps:
            self.camera.zoom(self.input.zoom_steps)

        if self.input.panning:
            self.camera.pan_pixels(*self.input.pan_delta)
            self.camera.clamp(w, h)

        if self.input.click is not None:
            if not minimap_click(self.tile_map, self.camera, self.input.click, screen_size):
                wx, wy = self.camera.screen_to_world(*self.input.click, screen_size)
                if 0 <= wx < w and 0 <= wy < h:
                    self.units.click(wx, wy, deselect=self.input.shift_held)

    def update(self):
        """One fixed simulation step."""
        self.units.update(self.tile_map)
        self.camera.nudge(*self.input.arrows)

    def draw(self):
        from simple_rts.game.ui.UItheme import UITheme
        from simple_rts.game.ui.renderer import draw_level, draw_units, draw_minimap

        self.screen.fill(UITheme.BACKGROUND)
        draw_level(self.screen, self.tile_map, self.camera)
        draw_units(self.screen, self.units, self.camera)
        draw_minimap(self.screen, self.minimap, self.tile_map, self.camera, self.units)

    async def main_loop(self):
        import asyncio
        import pygame
        from simple_rts.config import UPDATE_STEP_MS

        self.logger.info("Entering main game loop")
        frame_count = 0

        while self.running:
            self.clock.tick(60)
            frame_count += 1

            self.input.process(pygame.event.get())
            if self.input.quit:
                self.logger.info("Quit requested by user")
                self.running = False
                break

            self.handle_input()

            # fixed-step simulation
            now = pygame.time.get_ticks()
            while now - self.last_update > UPDATE_STEP_MS:
                self.update()
                self.last_update += UPDATE_STEP_MS

            # Log every 300 frames (5 seconds at 60 FPS)
            if frame_count % 300 == 0:
                self.logger.debug(f"Frame: {frame_count}, camera: {self.camera}")

            self.draw()
            pygame.display.flip()
            await asyncio.sleep(0)

        self.logger.info(f"Main loop exited after {frame_count} frames")


# ------------------------ # ENTRY POINT # ------------------------

if __name__ == "__main__":
    import asyncio
    from simple_rts.config import get_project_root, setup_logging


    async def main():
        import pygame

        # Initialize logging first
        project_root = get_project_root()
        logger = setup_logging(project_root)

        logger.info("=" * 60)
        logger.info("Application started")
        logger.info(f"Project root: {project_root}")

        try:
            pygame.init()
            logger.info("Creating Game instance...")
            game = Game()

            logger.info("Starting main loop...")
            await game.main_loop()

            logger.info("Shutting down pygame...")
            pygame.quit()
            logger.info("Pygame shut down successfully")

        except Exception as e:
            logger.critical(f"Critical error in main: {e}", exc_info=True)
            raise
        finally:
            logger.info("Application terminated")
            logging.shutdown()


    asyncio.run(main())
