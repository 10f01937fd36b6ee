"""
Hue-cycling color scheme for escape-time fractals.

Escaped points are colored by hue: the hue starts at 0.7 (violet) and
advances by 1/200 per iteration, wrapping around the color wheel, with
full saturation and brightness. Points that never escaped are black.

Colors are packed 0xRRGGBB integers, the format the display stores.
"""

import numpy as np
from numba import jit

from .compute import NOT_ESCAPED


BLACK = 0x000000
HUE_OFFSET = 0.7
HUE_STEP = 200.0


@jit(nopython=True, nogil=True, cache=True)
def hsb_to_rgb(hue, saturation, brightness):
    """
    Convert an HSB color to a packed 0xRRGGBB integer.

    The hue is taken modulo 1.0, so any real value is accepted.
    Saturation and brightness are in the 0-1 range.
    """
    if saturation == 0:
        red = green = blue = brightness
    else:
        h = (hue - np.floor(hue)) * 6.0
        f = h - np.floor(h)
        p = brightness * (1.0 - saturation)
        q = brightness * (1.0 - saturation * f)
        t = brightness * (1.0 - saturation * (1.0 - f))
        sector = int(h)
        if sector == 0:
            red, green, blue = brightness, t, p
        elif sector == 1:
            red, green, blue = q, brightness, p
        elif sector == 2:
            red, green, blue = p, brightness, t
        elif sector == 3:
            red, green, blue = p, q, brightness
        elif sector == 4:
            red, green, blue = t, p, brightness
        else:
            red, green, blue = brightness, p, q
    r = int(red * 255.0 + 0.5)
    g = int(green * 255.0 + 0.5)
    b = int(blue * 255.0 + 0.5)
    return (r << 16) | (g << 8) | b


@jit(nopython=True, nogil=True, cache=True)
def hue_color(iterations):
    """Packed color for a raw kernel result (NOT_ESCAPED is black)."""
    if iterations == NOT_ESCAPED:
        return BLACK
    return hsb_to_rgb(HUE_OFFSET + iterations / HUE_STEP, 1.0, 1.0)


@jit(nopython=True, nogil=True, cache=True)
def apply_hue_colormap(iterations, out):
    """
    Color a row of kernel results.

    Args:
        iterations: 1D array of escape times from compute_row
        out: 1D uint32 array of the same length (modified in place)
    """
    for i in range(iterations.shape[0]):
        out[i] = hue_color(iterations[i])


def color_for(iterations):
    """
    Get the display color for an iteration result.

    Args:
        iterations: Escape iteration count, or None if the point
            did not escape

    Returns:
        Packed 0xRRGGBB color (0 for points that did not escape)
    """
    if iterations is None:
        return BLACK
    return int(hue_color(iterations))


def unpack_rgb(colors):
    """Split packed colors into an (..., 3) uint8 RGB array."""
    colors = np.asarray(colors, dtype=np.uint32)
    rgb = np.empty(colors.shape + (3,), dtype=np.uint8)
    rgb[..., 0] = (colors >> 16) & 0xFF
    rgb[..., 1] = (colors >> 8) & 0xFF
    rgb[..., 2] = colors & 0xFF
    return rgb
