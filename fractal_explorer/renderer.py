"""
Row-parallel fractal renderer.

The FractalRenderer class handles:
- Splitting a frame into one independent task per pixel row
- Running the row tasks on a thread pool so the caller never blocks
- Counting finished rows to know when the whole frame is on the display
- Refusing new frames while one is still in flight (no cancellation)
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial

import numpy as np

from .colormaps import apply_hue_colormap
from .compute import (
    FRACTAL_BURNING_SHIP,
    FRACTAL_MANDELBROT,
    FRACTAL_TRICORN,
    compute_row,
)
from .viewport import Viewport, get_coord

logger = logging.getLogger(__name__)


def warmup_jit():
    """
    Warm up JIT compilation with a tiny row of every fractal kind.

    Call this once at startup so the first frame isn't delayed by every
    worker thread waiting on the compiler at once.
    """
    iterations = np.empty(4, dtype=np.int64)
    colors = np.empty(4, dtype=np.uint32)
    for kind in (FRACTAL_MANDELBROT, FRACTAL_TRICORN, FRACTAL_BURNING_SHIP):
        compute_row(kind, -2.0, 1.0, 0.0, 4, 10, iterations)
        apply_hue_colormap(iterations, colors)


@dataclass(frozen=True)
class RenderFrame:
    """Read-only snapshot of everything a row task needs."""

    number: int
    fractal: object
    viewport: Viewport
    size: int


class FractalRenderer:
    """
    Renders frames into a pixel sink, one thread-pool task per row.

    Usage:
        renderer = FractalRenderer(display, on_frame_complete=callback)
        renderer.render(fractal, viewport)   # returns immediately

        # Either react in callback(frame), poll renderer.is_rendering,
        # or block until the frame is done:
        renderer.wait()

    The sink must provide ``draw_row(y, colors)`` and
    ``mark_dirty(y_start, y_end)``. Each row is written by exactly one
    task, so the sink needs no locking for pixel data.

    Attributes:
        display: Pixel sink the frames are drawn into
        size: Width and height of the square display in pixels
        frames_rendered: Number of frames that completed
    """

    def __init__(self, display, max_workers=None, on_frame_complete=None):
        """
        Initialize the renderer.

        Args:
            display: Square pixel sink (width == height)
            max_workers: Thread pool size (None = executor default)
            on_frame_complete: Called with the RenderFrame once its last
                row is drawn, from the worker thread that drew it. An
                exception it raises is re-raised from wait()
        """
        if display.width != display.height:
            raise ValueError(f"display must be square, got {display.width}x{display.height}")
        self.display = display
        self.size = display.width
        self.on_frame_complete = on_frame_complete
        self.frames_rendered = 0

        self.executor = ThreadPoolExecutor(max_workers=max_workers,
                                           thread_name_prefix="fractal-row")
        self.closed = False

        # Frame state, guarded by lock
        self.lock = threading.Lock()
        self._rows_remaining = 0
        self._frame_count = 0
        self._errors = []
        self._idle = threading.Event()
        self._idle.set()

    @property
    def rows_remaining(self):
        with self.lock:
            return self._rows_remaining

    @property
    def is_rendering(self):
        return not self._idle.is_set()

    def render(self, fractal, viewport):
        """
        Start rendering a frame.

        Args:
            fractal: Generator providing ``kind`` and ``MAX_ITERATIONS``
            viewport: Region to draw; a snapshot is taken before dispatch

        Returns:
            True if the frame was dispatched, False if a frame is
            already in flight (the request is dropped, not queued).
        """
        with self.lock:
            if self.closed:
                raise RuntimeError("render() called on a closed renderer")
            if not self._idle.is_set():
                logger.debug("Frame requested while %d rows remain; ignored", self._rows_remaining)
                return False
            self._frame_count += 1
            frame = RenderFrame(self._frame_count, fractal, viewport.copy(), self.size)
            self._rows_remaining = self.size
            self._errors = []
            self._idle.clear()

        logger.debug("Frame %d: %s at %r, %d rows", frame.number, fractal,
                     frame.viewport, frame.size)
        submitted = 0
        try:
            for y in range(frame.size):
                future = self.executor.submit(self._render_row, frame, y)
                future.add_done_callback(partial(self._row_done, frame))
                submitted += 1
        except RuntimeError:
            # Executor shut down under us; rows never submitted won't finish
            self._abandon_rows(frame, frame.size - submitted)
            raise
        return True

    def _abandon_rows(self, frame, count):
        with self.lock:
            self._rows_remaining -= count
            idle = self._rows_remaining == 0
        logger.warning("Frame %d: %d rows not submitted", frame.number, count)
        if idle:
            self._idle.set()

    def _render_row(self, frame, y):
        """Compute and draw row y of the frame (runs on a worker thread)."""
        size = frame.size
        vp = frame.viewport
        iterations = np.empty(size, dtype=np.int64)
        colors = np.empty(size, dtype=np.uint32)

        y_coord = get_coord(vp.y, vp.y_max, size, y)
        compute_row(frame.fractal.kind, vp.x, vp.x_max, y_coord, size,
                    frame.fractal.MAX_ITERATIONS, iterations)
        apply_hue_colormap(iterations, colors)

        self.display.draw_row(y, colors)
        self.display.mark_dirty(y, y + 1)

    def _row_done(self, frame, future):
        """Count a finished row; the last one completes the frame."""
        error = future.exception()
        if error is not None:
            logger.error("Frame %d: row task failed", frame.number, exc_info=error)

        with self.lock:
            if error is not None:
                self._errors.append(error)
            self._rows_remaining -= 1
            finished = self._rows_remaining == 0
            if finished:
                self.frames_rendered += 1
                self.display.mark_dirty(0, frame.size)

        if not finished:
            return

        logger.debug("Frame %d complete", frame.number)
        if self.on_frame_complete is not None:
            try:
                self.on_frame_complete(frame)
            except Exception as e:
                logger.error("Frame %d: completion callback failed", frame.number, exc_info=e)
                with self.lock:
                    self._errors.append(e)
        # The renderer stays busy until the callback has returned
        self._idle.set()

    def wait(self, timeout=None):
        """
        Block until no frame is in flight.

        Returns:
            True once idle, False if the timeout expired first.

        Raises:
            The first exception raised by a row task or the completion
            callback of the last frame.
        """
        if not self._idle.wait(timeout):
            return False
        with self.lock:
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]
        return True

    def close(self):
        """Wait for in-flight rows and shut down the thread pool."""
        with self.lock:
            self.closed = True
        self.executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
