"""
Fractal generator definitions.

Each generator is a stateless strategy that knows its initial viewport
and how to count escape iterations for a point of the complex plane.
The heavy lifting is delegated to the JIT-compiled kernels in compute.py,
selected by the generator's ``kind``.

To add a new generator:
1. Add a kernel branch and a FRACTAL_* constant in compute.py
2. Subclass FractalGenerator and add it to the FRACTALS dictionary
"""

from .compute import (
    FRACTAL_BURNING_SHIP,
    FRACTAL_MANDELBROT,
    FRACTAL_TRICORN,
    MAX_ITERATIONS,
    NOT_ESCAPED,
    escape_time,
)
from .viewport import Viewport


class FractalGenerator:
    """
    Base class for escape-time fractals.

    Subclasses set ``name``, ``kind`` and the initial range
    (``RANGE_X``, ``RANGE_Y``, ``DIM``).
    """

    name = None
    kind = None
    RANGE_X = -2.0
    RANGE_Y = -2.0
    DIM = 4.0
    MAX_ITERATIONS = MAX_ITERATIONS

    def initial_viewport(self):
        """Return a new viewport covering the fractal's initial range."""
        return Viewport(self.RANGE_X, self.RANGE_Y, self.DIM, self.DIM)

    def num_iterations(self, x, y):
        """
        Count the iterations before the point x + iy escapes.

        Returns:
            The iteration count, or None if the point did not escape
            within MAX_ITERATIONS.
        """
        iterations = escape_time(x, y, self.kind, self.MAX_ITERATIONS)
        if iterations == NOT_ESCAPED:
            return None
        return int(iterations)

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __str__(self):
        return self.name


class Mandelbrot(FractalGenerator):
    """z² + c"""

    name = "Mandelbrot"
    kind = FRACTAL_MANDELBROT
    RANGE_X = -2.0
    RANGE_Y = -1.5
    DIM = 3.0


class Tricorn(FractalGenerator):
    """Conjugate map: (z̄)² + c"""

    name = "Tricorn"
    kind = FRACTAL_TRICORN
    RANGE_X = -2.0
    RANGE_Y = -2.0
    DIM = 4.0


class BurningShip(FractalGenerator):
    """(|Re z| + i|Im z|)² + c"""

    name = "Burning Ship"
    kind = FRACTAL_BURNING_SHIP
    RANGE_X = -2.0
    RANGE_Y = -2.5
    DIM = 4.0


# Registry of all available generators, in menu order.
# Keys are display names, values are generator classes.
FRACTALS = {
    Mandelbrot.name: Mandelbrot,
    Tricorn.name: Tricorn,
    BurningShip.name: BurningShip,
}

DEFAULT_FRACTAL = Mandelbrot.name


def get_fractal(name):
    """
    Get a generator by display name.

    Raises:
        KeyError if name not found
    """
    return FRACTALS[name]()


def list_fractal_names():
    """Get list of available generator names."""
    return list(FRACTALS.keys())
