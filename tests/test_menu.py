"""Tests for the control panel's event handling (no window needed)."""

from __future__ import annotations

import pygame

from fractal_explorer.explorer import ResetEvent, SelectFractalEvent
from fractal_explorer.menu import ControlPanel


def _click(x: int, y: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(x, y))


def test_expanded_dropdown_swallows_image_click() -> None:
    panel = ControlPanel(400)
    assert panel.handle_event(_click(200, 15)) == (True, None)
    assert panel.dropdown.expanded

    # A click on the image only closes the list
    assert panel.handle_event(_click(20, 200)) == (True, None)
    assert not panel.dropdown.expanded
    assert panel.handle_event(_click(20, 200)) == (False, None)


def test_dropdown_selection_event() -> None:
    panel = ControlPanel(400)
    panel.handle_event(_click(200, 15))
    # Second item of the expanded list
    handled, selection = panel.handle_event(_click(200, 6 + 24 + 22 + 5))
    assert handled
    assert selection == SelectFractalEvent(panel.dropdown.options[1])


def test_disabled_panel_ignores_clicks() -> None:
    panel = ControlPanel(400)
    reset = _click(100, ControlPanel.TOP_HEIGHT + 400 + 10)
    assert panel.handle_event(reset) == (True, ResetEvent())

    panel.set_enabled(False)
    assert panel.handle_event(reset) == (False, None)
    assert panel.handle_event(_click(200, 15)) == (False, None)
