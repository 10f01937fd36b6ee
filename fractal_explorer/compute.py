"""
Escape-time computation functions using Numba JIT compilation.

This module contains the performance-critical loops shared by every
fractal variant. They are compiled with ``nogil=True`` so that row tasks
running on a thread pool execute in parallel.

Supported fractal kinds:
- 0: z² + c (Mandelbrot)
- 1: (z̄)² + c (Tricorn / Mandelbar)
- 2: (|Re z| + i|Im z|)² + c (Burning Ship)

A point that has not escaped after ``max_iter`` steps is reported as
NOT_ESCAPED (-1). Escaping exactly on the last allowed step counts as
not escaped.
"""

import numpy as np
from numba import jit

from .viewport import get_coord


# Fractal kinds
FRACTAL_MANDELBROT = 0
FRACTAL_TRICORN = 1
FRACTAL_BURNING_SHIP = 2

MAX_ITERATIONS = 2000
ESCAPE_RADIUS_SQ = 4.0
NOT_ESCAPED = -1


@jit(nopython=True, nogil=True, cache=True)
def escape_time(x, y, kind, max_iter):
    """
    Count iterations of the selected recurrence before |z| exceeds 2.

    Args:
        x, y: Real and imaginary parts of c
        kind: Which recurrence to use (see FRACTAL_* constants)
        max_iter: Iteration limit

    Returns:
        Iteration count at escape, or NOT_ESCAPED.
    """
    real = 0.0
    imag = 0.0
    iterations = 0
    while iterations < max_iter and real * real + imag * imag <= ESCAPE_RADIUS_SQ:
        if kind == FRACTAL_BURNING_SHIP:
            real = abs(real)
            imag = abs(imag)
        next_real = real * real - imag * imag + x
        if kind == FRACTAL_TRICORN:
            next_imag = 2 * real * -imag + y
        else:
            next_imag = 2 * real * imag + y
        real = next_real
        imag = next_imag
        iterations += 1

    if iterations == max_iter:
        return NOT_ESCAPED
    return iterations


@jit(nopython=True, nogil=True, cache=True)
def compute_row(kind, x_min, x_max, y, size, max_iter, out):
    """
    Compute escape times for one row of the display.

    Args:
        kind: Fractal kind
        x_min, x_max: Real axis bounds of the viewport
        y: Imaginary coordinate shared by the whole row
        size: Number of pixels in the row
        max_iter: Iteration limit
        out: Integer array of length ``size`` (modified in place)
    """
    for px in range(size):
        x = get_coord(x_min, x_max, size, px)
        out[px] = escape_time(x, y, kind, max_iter)


def compute_iterations(kind, viewport, size, max_iter=MAX_ITERATIONS):
    """
    Compute a full size x size grid of escape times sequentially.

    Rows are indexed first: ``result[y, x]``.
    """
    result = np.empty((size, size), dtype=np.int64)
    for py in range(size):
        y = get_coord(viewport.y, viewport.y_max, size, py)
        compute_row(kind, viewport.x, viewport.x_max, y, size, max_iter, result[py])
    return result

