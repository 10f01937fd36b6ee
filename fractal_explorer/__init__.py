"""
Fractal Explorer Package

An interactive escape-time fractal explorer (Mandelbrot, Tricorn,
Burning Ship) using Pygame for display and Numba for JIT-compiled,
row-parallel computation.

Quick Start:
    from fractal_explorer import run
    run()

Or from command line:
    python -m fractal_explorer

Package Structure:
    - viewport.py: Viewport, pixel-to-complex mapping, recenter-and-zoom
    - compute.py: JIT-compiled escape-time kernels
    - fractals.py: Fractal generators (Mandelbrot, Tricorn, Burning Ship)
    - colormaps.py: Hue-cycling color scheme
    - display.py: In-memory image the renderer draws into
    - renderer.py: Row-parallel rendering on a thread pool
    - explorer.py: Session state and selection handling
    - config.py: settings.json loading
    - menu.py: Control panel widgets
    - app.py: Main application and event loop

Controls:
    - Click: Zoom in (2x) centered on the clicked point
    - R / Reset button: Reset to the fractal's initial view
    - S / Save Image button: Save the displayed image as PNG
    - Dropdown: Switch fractal
    - ESC: Quit
"""

from .app import run, FractalApp
from .colormaps import color_for
from .config import Settings, load_settings
from .display import ImageDisplay
from .explorer import (
    FractalExplorer,
    ResetEvent,
    SaveEvent,
    SelectFractalEvent,
    ZoomEvent,
)
from .fractals import (
    FRACTALS,
    BurningShip,
    Mandelbrot,
    Tricorn,
    get_fractal,
    list_fractal_names,
)
from .renderer import FractalRenderer
from .viewport import Viewport, ViewportController, get_coord

__version__ = "1.0.0"
__all__ = [
    "run",
    "FractalApp",
    "FractalExplorer",
    "FractalRenderer",
    "ImageDisplay",
    "Viewport",
    "ViewportController",
    "get_coord",
    "color_for",
    "FRACTALS",
    "Mandelbrot",
    "Tricorn",
    "BurningShip",
    "get_fractal",
    "list_fractal_names",
    "Settings",
    "load_settings",
    "ResetEvent",
    "SaveEvent",
    "SelectFractalEvent",
    "ZoomEvent",
]
