from __future__ import annotations

import threading

import numpy as np
import pytest

from fractal_explorer.display import ImageDisplay


class GatedDisplay(ImageDisplay):
    """ImageDisplay whose row writes wait until the test opens the gate."""

    def __init__(self, size: int) -> None:
        super().__init__(size, size)
        self.gate = threading.Event()

    def draw_row(self, y, colors) -> None:
        assert self.gate.wait(timeout=10.0), "gate never opened"
        super().draw_row(y, colors)


class RecordingSink:
    """Pixel sink counting how many times each pixel is written."""

    def __init__(self, size: int) -> None:
        self.width = size
        self.height = size
        self.writes = np.zeros((size, size), dtype=np.int64)
        self.dirty: list[tuple[int, int]] = []
        self._lock = threading.Lock()

    def draw_row(self, y, colors) -> None:
        self.writes[y, : len(colors)] += 1

    def mark_dirty(self, y_start: int, y_end: int) -> None:
        with self._lock:
            self.dirty.append((y_start, y_end))


@pytest.fixture
def gated_display():
    display = GatedDisplay(16)
    yield display
    display.gate.set()


@pytest.fixture
def recording_sink():
    return RecordingSink(24)
