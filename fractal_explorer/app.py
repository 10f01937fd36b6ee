"""
Main application module for the fractal explorer.

Contains the FractalApp class which handles:
- Window setup and main loop
- User input (click to zoom, control panel, keyboard)
- Blitting rows to the window as the renderer finishes them
- Saving the displayed image as PNG
"""

import logging
import os
from datetime import datetime

import pygame

from .config import load_settings
from .explorer import FractalExplorer, ResetEvent, SaveEvent, ZoomEvent
from .menu import ControlPanel
from .renderer import warmup_jit

logger = logging.getLogger(__name__)


class FractalApp:
    """
    Main application class for the fractal explorer.

    Handles the pygame window, event loop, and coordinates between the
    explorer session, the control panel and the display.
    """

    IDLE_CAPTION = "Fractal Explorer - Click to zoom, R to reset, S to save"

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings instance (default: loaded from settings.json)
        """
        self.settings = settings or load_settings()
        self.size = self.settings.size

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.surface = None

        # Components
        self.explorer = None
        self.panel = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_components()

        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        self.explorer.draw_fractal()

        self.running = True
        try:
            while self.running:
                self._handle_events()
                self._update_surface()
                self._draw()
                self.clock.tick(60)
        finally:
            self.explorer.close()
            pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.size, ControlPanel.TOP_HEIGHT + self.size + ControlPanel.BOTTOM_HEIGHT)
        )
        pygame.display.set_caption(self.IDLE_CAPTION)
        self.clock = pygame.time.Clock()

    def _init_components(self):
        """Initialize explorer session and control panel."""
        self.explorer = FractalExplorer(
            self.size,
            fractal=self.settings.fractal,
            zoom_scale=self.settings.zoom_scale,
            workers=self.settings.workers,
            save_handler=self._save_image,
        )
        self.panel = ControlPanel(self.size, selected=self.settings.fractal)

    def _handle_events(self):
        """Process all pending pygame events."""
        self.panel.set_enabled(self.explorer.input_enabled)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            # Panel gets first crack at events
            handled, selection = self.panel.handle_event(event)
            if selection is not None:
                self.explorer.handle_event(selection)
                self.panel.dropdown.set_value(self.explorer.fractal.name)
            if handled:
                continue

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_click(self, pos):
        """Zoom in on the clicked point of the image."""
        x, y = pos[0], pos[1] - ControlPanel.TOP_HEIGHT
        if 0 <= x < self.size and 0 <= y < self.size:
            self.explorer.handle_event(ZoomEvent(x, y))

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.explorer.handle_event(ResetEvent())
        elif event.key == pygame.K_s:
            self.explorer.handle_event(SaveEvent())
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _save_image(self, image):
        """Save an exported RGB image as a timestamped PNG in save_dir."""
        surface = pygame.surfarray.make_surface(image.swapaxes(0, 1))

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        name = self.explorer.fractal.name.lower().replace(" ", "_")
        save_dir = os.path.expanduser(self.settings.save_dir)
        filename = os.path.join(save_dir, f"{name}_{timestamp}.png")

        try:
            os.makedirs(save_dir, exist_ok=True)
            pygame.image.save(surface, filename)
        except (pygame.error, OSError) as e:
            logger.error("Cannot save image to %s: %s", filename, e)
            pygame.display.set_caption(f"Cannot save image: {e}")
            return

        logger.info("Image saved to: %s", filename)
        pygame.display.set_caption(f"Saved: {os.path.basename(filename)}")

    def _update_surface(self):
        """Rebuild the image surface if the renderer drew new rows."""
        dirty = self.explorer.display.take_dirty()
        if dirty is None:
            return
        rgb = self.explorer.display.get_image()
        self.surface = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
        if self.explorer.input_enabled:
            pygame.display.set_caption(self.IDLE_CAPTION)
        else:
            pygame.display.set_caption(f"Rendering {self.explorer.fractal}...")

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((40, 40, 40))
        if self.surface is not None:
            self.screen.blit(self.surface, (0, ControlPanel.TOP_HEIGHT))
        self.panel.draw(self.screen)
        pygame.display.flip()


def run(settings=None):
    """
    Run the fractal explorer.

    Args:
        settings: Settings instance (default: loaded from settings.json)
    """
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FractalApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
