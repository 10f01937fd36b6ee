"""
Viewport geometry: the square region of the complex plane on screen.

Contains:
- Viewport: the rectangle (x, y, width, height) being displayed
- get_coord: linear mapping from a pixel index to a complex coordinate
- ViewportController: owns the viewport, handles reset and click-to-zoom
"""

import logging
import math
import sys
from dataclasses import dataclass, replace

from numba import jit

logger = logging.getLogger(__name__)


@dataclass
class Viewport:
    """Region of the complex plane mapped onto the pixel grid."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self):
        return self.x + self.width

    @property
    def y_max(self):
        return self.y + self.height

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def copy(self):
        return replace(self)


@jit(nopython=True, nogil=True, cache=True)
def get_coord(range_min, range_max, size, coord):
    """
    Map a pixel index onto one axis of the complex plane.

    Args:
        range_min, range_max: Bounds of the axis in complex-plane units
        size: Number of pixels along the axis
        coord: Pixel index (0 <= coord < size)

    Returns:
        The coordinate at the left/top edge of the pixel.
    """
    return range_min + (range_max - range_min) * (coord / size)


class ViewportController:
    """
    Owns the current viewport and applies reset / recenter-and-zoom.

    The controller mutates its viewport in place. Callers that render
    must take a snapshot with ``viewport.copy()`` first.
    """

    def __init__(self, fractal):
        self.viewport = fractal.initial_viewport()

    def reset(self, fractal):
        """Set the viewport to the fractal's initial range."""
        self.viewport = fractal.initial_viewport()

    def pixel_to_complex(self, px, py, size):
        vp = self.viewport
        return (get_coord(vp.x, vp.x_max, size, px),
                get_coord(vp.y, vp.y_max, size, py))

    def recenter_and_zoom(self, center_x, center_y, scale):
        """
        Center the viewport on (center_x, center_y) and scale its extent.

        Args:
            center_x, center_y: New center in complex-plane units
            scale: Extent multiplier (< 1 zooms in)

        Returns:
            True if the viewport changed, False if the zoom was rejected
            because the result would not be representable.
        """
        if not (math.isfinite(scale) and scale > 0):
            raise ValueError(f"zoom scale must be a positive finite number, got {scale!r}")

        width = self.viewport.width * scale
        height = self.viewport.height * scale
        x = center_x - width / 2
        y = center_y - height / 2

        if not _is_representable(x, y, width, height):
            logger.warning("Rejected zoom to (%r, %r): viewport of width %r is degenerate",
                           center_x, center_y, width)
            return False

        vp = self.viewport
        vp.x, vp.y, vp.width, vp.height = x, y, width, height
        return True

    def zoom_at_pixel(self, px, py, size, scale):
        """Recenter on the complex coordinate under pixel (px, py) and zoom."""
        if not (0 <= px < size and 0 <= py < size):
            logger.warning("Rejected zoom at pixel (%d, %d): outside %dx%d display",
                           px, py, size, size)
            return False
        center_x, center_y = self.pixel_to_complex(px, py, size)
        return self.recenter_and_zoom(center_x, center_y, scale)


# Smallest extent, relative to the magnitude of the coordinates, that still
# gives every pixel of a large display a distinct double.
_MIN_RELATIVE_EXTENT = sys.float_info.epsilon * 4096


def _is_representable(x, y, width, height):
    if not all(math.isfinite(v) for v in (x, y, width, height)):
        return False
    if width <= 0 or height <= 0:
        return False
    magnitude = max(abs(x), abs(y), abs(x + width), abs(y + height), 1.0)
    return width > magnitude * _MIN_RELATIVE_EXTENT
