"""
Fractal exploration session.

FractalExplorer ties the pieces together: it owns the viewport and the
selected generator, starts frames on the renderer, and applies the
user's selections (reset, save, switch fractal, zoom click). Every
selection is refused while a frame is being rendered so that two frames
never draw over each other.
"""

import logging
import math
import threading
from dataclasses import dataclass

from .display import ImageDisplay
from .fractals import DEFAULT_FRACTAL, get_fractal
from .renderer import FractalRenderer
from .viewport import ViewportController

logger = logging.getLogger(__name__)


# Selection events delivered by the UI

@dataclass(frozen=True)
class ResetEvent:
    pass


@dataclass(frozen=True)
class SaveEvent:
    pass


@dataclass(frozen=True)
class SelectFractalEvent:
    name: str


@dataclass(frozen=True)
class ZoomEvent:
    x: int
    y: int


class FractalExplorer:
    """
    Interactive exploration state for one square display.

    Usage:
        explorer = FractalExplorer(800)
        explorer.draw_fractal()

        # From the UI:
        explorer.handle_event(ZoomEvent(400, 300))
        if explorer.input_enabled:
            ...

    Attributes:
        size: Width and height of the display in pixels
        display: Pixel sink frames are drawn into
        renderer: Row-parallel renderer
        zoom_scale: Extent multiplier applied on each zoom click
        save_handler: Called with the exported RGB image on SaveEvent
    """

    DEFAULT_ZOOM_SCALE = 0.5

    def __init__(self, size, fractal=DEFAULT_FRACTAL, zoom_scale=None, workers=None,
                 display=None, on_frame_complete=None, save_handler=None):
        """
        Initialize the session.

        Args:
            size: Display size in pixels
            fractal: Name of the generator selected at startup
            zoom_scale: Extent multiplier per zoom click (default 0.5)
            workers: Thread pool size for the renderer
            display: Pixel sink (default: a new ImageDisplay)
            on_frame_complete: Called with each finished RenderFrame
            save_handler: Called with the exported image on SaveEvent
        """
        self.size = size
        self.display = display if display is not None else ImageDisplay(size, size)
        if zoom_scale is None:
            zoom_scale = self.DEFAULT_ZOOM_SCALE
        if not math.isfinite(zoom_scale) or zoom_scale <= 0:
            raise ValueError(f"zoom_scale must be finite and positive, got {zoom_scale!r}")
        self.zoom_scale = zoom_scale
        self.save_handler = save_handler

        self.fractal = get_fractal(fractal)
        self.controller = ViewportController(self.fractal)
        self.renderer = FractalRenderer(self.display, max_workers=workers,
                                        on_frame_complete=on_frame_complete)

        # Selections are applied one at a time
        self._input_lock = threading.Lock()

    @property
    def viewport(self):
        """Copy of the current viewport."""
        return self.controller.viewport.copy()

    @property
    def input_enabled(self):
        return not self.renderer.is_rendering

    def draw_fractal(self):
        """Start rendering the current view. Returns False while busy."""
        with self._input_lock:
            return self._draw()

    def _draw(self):
        return self.renderer.render(self.fractal, self.controller.viewport)

    def _busy(self, action):
        if self.renderer.is_rendering:
            logger.debug("Ignoring %s: frame in progress", action)
            return True
        return False

    def reset(self):
        """Return to the current fractal's initial view and redraw."""
        with self._input_lock:
            if self._busy("reset"):
                return False
            self.controller.reset(self.fractal)
            return self._draw()

    def select_fractal(self, name):
        """
        Switch to another generator, reset its view and redraw.

        Raises:
            KeyError if name is not a known generator
        """
        with self._input_lock:
            if self._busy("fractal switch"):
                return False
            self.fractal = get_fractal(name)
            self.controller.reset(self.fractal)
            logger.debug("Selected %s", self.fractal)
            return self._draw()

    def zoom_at(self, x, y):
        """Recenter on pixel (x, y), zoom in by zoom_scale and redraw."""
        with self._input_lock:
            if self._busy("zoom"):
                return False
            if not self.controller.zoom_at_pixel(x, y, self.size, self.zoom_scale):
                return False
            return self._draw()

    def export_image(self):
        """Return the displayed image as an RGB array, or None while rendering."""
        with self._input_lock:
            if self._busy("export"):
                return None
            return self.display.get_image()

    def save(self):
        """Hand the current image to the save handler."""
        image = self.export_image()
        if image is None or self.save_handler is None:
            return False
        self.save_handler(image)
        return True

    def handle_event(self, event):
        """
        Apply a selection event from the UI.

        Returns:
            True if the event was applied, False if it was ignored
        """
        if isinstance(event, ZoomEvent):
            return self.zoom_at(event.x, event.y)
        if isinstance(event, ResetEvent):
            return self.reset()
        if isinstance(event, SelectFractalEvent):
            return self.select_fractal(event.name)
        if isinstance(event, SaveEvent):
            return self.save()
        raise TypeError(f"unsupported event {event!r}")

    def wait(self, timeout=None):
        """Block until the current frame is complete (see FractalRenderer.wait)."""
        return self.renderer.wait(timeout)

    def close(self):
        self.renderer.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
