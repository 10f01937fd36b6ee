"""
In-memory image the renderer draws into.

ImageDisplay stores one packed 0xRRGGBB color per pixel. Render tasks
write whole rows from worker threads (each row belongs to exactly one
task, so pixel writes need no locking); the UI thread collects the dirty
rows and blits them to the window.
"""

import threading

import numpy as np

from .colormaps import BLACK, unpack_rgb


class ImageDisplay:
    """
    Square raster with dirty-region tracking.

    Usage:
        display = ImageDisplay(800, 800)
        display.draw_pixel(10, 20, 0xFF0000)
        display.mark_dirty(20, 21)

        # In the UI loop:
        dirty = display.take_dirty()
        if dirty is not None:
            rgb = display.get_image()
    """

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"display size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.image = np.zeros((height, width), dtype=np.uint32)
        self._dirty = None  # (y_start, y_end) of rows changed since last take_dirty()
        self._dirty_lock = threading.Lock()

    def clear_image(self):
        """Set all pixels to black."""
        self.image.fill(BLACK)
        self.mark_dirty(0, self.height)

    def draw_pixel(self, x, y, rgb):
        """Set the pixel at (x, y) to the packed color rgb."""
        self.image[y, x] = rgb

    def draw_row(self, y, colors):
        """Set every pixel of row y from an array of packed colors."""
        self.image[y, :] = colors

    def mark_dirty(self, y_start, y_end):
        """Record that rows [y_start, y_end) changed and need repainting."""
        with self._dirty_lock:
            if self._dirty is None:
                self._dirty = (y_start, y_end)
            else:
                self._dirty = (min(self._dirty[0], y_start), max(self._dirty[1], y_end))

    def take_dirty(self):
        """Return and clear the dirty row range, or None if nothing changed."""
        with self._dirty_lock:
            dirty, self._dirty = self._dirty, None
        return dirty

    def get_image(self):
        """Return a copy of the image as a (height, width, 3) uint8 RGB array."""
        return unpack_rgb(self.image)
