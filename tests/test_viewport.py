"""Tests for pixel mapping and recenter-and-zoom."""

from __future__ import annotations

import math

import pytest

from fractal_explorer.fractals import Mandelbrot, Tricorn
from fractal_explorer.viewport import Viewport, ViewportController, get_coord


def test_get_coord_starts_at_lower_bound() -> None:
    assert get_coord(-2.0, 1.0, 800, 0) == -2.0
    assert get_coord(-1.5, 1.5, 3, 0) == -1.5


def test_get_coord_is_linear() -> None:
    assert get_coord(-2.0, 2.0, 4, 1) == pytest.approx(-1.0)
    assert get_coord(-2.0, 2.0, 4, 2) == pytest.approx(0.0)
    assert get_coord(-2.0, 2.0, 4, 3) == pytest.approx(1.0)


@pytest.mark.parametrize("size", [1, 7, 100, 800])
def test_get_coord_is_monotonic(size: int) -> None:
    values = [get_coord(-2.0, 1.0, size, i) for i in range(size)]
    assert all(a <= b for a, b in zip(values, values[1:]))
    assert values[-1] < 1.0


def test_pixel_to_complex_uses_both_axes() -> None:
    controller = ViewportController(Mandelbrot())
    x, y = controller.pixel_to_complex(50, 25, 100)
    assert x == pytest.approx(-0.5)
    assert y == pytest.approx(-0.75)


def test_reset_uses_fractal_initial_range() -> None:
    controller = ViewportController(Mandelbrot())
    controller.recenter_and_zoom(0.0, 0.0, 0.5)
    controller.reset(Tricorn())
    assert controller.viewport == Viewport(-2.0, -2.0, 4.0, 4.0)


def test_recenter_and_zoom_formula() -> None:
    controller = ViewportController(Mandelbrot())
    assert controller.recenter_and_zoom(0.25, -0.5, 0.5)
    vp = controller.viewport
    assert vp.width == pytest.approx(1.5)
    assert vp.height == pytest.approx(1.5)
    assert vp.x == pytest.approx(0.25 - 0.75)
    assert vp.y == pytest.approx(-0.5 - 0.75)


def test_double_half_zoom_on_center_quarters_width() -> None:
    controller = ViewportController(Mandelbrot())
    cx, cy = controller.viewport.center
    width = controller.viewport.width

    controller.recenter_and_zoom(cx, cy, 0.5)
    controller.recenter_and_zoom(cx, cy, 0.5)

    vp = controller.viewport
    assert vp.width == pytest.approx(width / 4)
    assert vp.height == pytest.approx(width / 4)
    assert vp.center[0] == pytest.approx(cx)
    assert vp.center[1] == pytest.approx(cy)


def test_zoom_at_pixel_recenters_on_clicked_point() -> None:
    controller = ViewportController(Mandelbrot())
    target = controller.pixel_to_complex(30, 70, 100)
    assert controller.zoom_at_pixel(30, 70, 100, 0.5)
    cx, cy = controller.viewport.center
    assert cx == pytest.approx(target[0])
    assert cy == pytest.approx(target[1])


@pytest.mark.parametrize("px, py", [(-1, 0), (0, -1), (100, 0), (0, 100), (250, 250)])
def test_zoom_outside_display_is_rejected(px: int, py: int) -> None:
    controller = ViewportController(Mandelbrot())
    before = controller.viewport.copy()
    assert controller.zoom_at_pixel(px, py, 100, 0.5) is False
    assert controller.viewport == before


@pytest.mark.parametrize("scale", [0.0, -0.5, math.inf, math.nan])
def test_invalid_scale_raises(scale: float) -> None:
    controller = ViewportController(Mandelbrot())
    with pytest.raises(ValueError):
        controller.recenter_and_zoom(0.0, 0.0, scale)


def test_non_finite_target_is_rejected() -> None:
    controller = ViewportController(Mandelbrot())
    before = controller.viewport.copy()
    assert controller.recenter_and_zoom(math.nan, 0.0, 0.5) is False
    assert controller.recenter_and_zoom(0.0, math.inf, 0.5) is False
    assert controller.viewport == before


def test_repeated_zoom_stops_before_degenerate_viewport() -> None:
    controller = ViewportController(Mandelbrot())
    accepted = 0
    while controller.zoom_at_pixel(37, 61, 800, 0.5):
        accepted += 1
        assert accepted < 200

    vp = controller.viewport
    assert accepted > 10
    assert math.isfinite(vp.x) and math.isfinite(vp.y)
    assert vp.width > 0
    assert vp.width == vp.height

    # Neighbouring pixels still map to distinct coordinates
    assert get_coord(vp.x, vp.x_max, 800, 1) != get_coord(vp.x, vp.x_max, 800, 0)


def test_copy_is_independent() -> None:
    vp = Viewport(0.0, 0.0, 1.0, 1.0)
    snapshot = vp.copy()
    vp.x = 5.0
    assert snapshot.x == 0.0
