"""
Control panel for the fractal explorer window.

Provides a dropdown for choosing the fractal (above the image) and the
Reset / Save Image buttons (below it). Controls are greyed out and
ignore clicks while a frame is being rendered.
"""

import pygame

from .explorer import ResetEvent, SaveEvent, SelectFractalEvent
from .fractals import list_fractal_names


class Dropdown:
    """A dropdown/select component."""

    ITEM_HEIGHT = 22

    def __init__(self, x, y, width, options, selected_idx=0, label=""):
        self.x = x
        self.y = y
        self.width = width
        self.height = 24
        self.options = options
        self.selected_idx = selected_idx
        self.label = label
        self.expanded = False
        self.hovered_idx = -1
        self.enabled = True

    def get_value(self):
        return self.options[self.selected_idx]

    def set_value(self, value):
        if value in self.options:
            self.selected_idx = self.options.index(value)

    def handle_event(self, event):
        """Returns (handled, value_changed)."""
        if not self.enabled:
            self.expanded = False
            return False, False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos

            # Click on main dropdown button
            button_rect = pygame.Rect(self.x, self.y, self.width, self.height)
            if button_rect.collidepoint(mx, my):
                self.expanded = not self.expanded
                return True, False

            # Click on dropdown item
            if self.expanded:
                item_y = self.y + self.height
                for i in range(len(self.options)):
                    item_rect = pygame.Rect(self.x, item_y, self.width, self.ITEM_HEIGHT)
                    if item_rect.collidepoint(mx, my):
                        old_idx = self.selected_idx
                        self.selected_idx = i
                        self.expanded = False
                        return True, (old_idx != i)
                    item_y += self.ITEM_HEIGHT

                # Click outside dropdown - close it
                self.expanded = False
                return True, False

        elif event.type == pygame.MOUSEMOTION:
            mx, my = event.pos
            self.hovered_idx = -1
            if self.expanded:
                item_y = self.y + self.height
                for i in range(len(self.options)):
                    item_rect = pygame.Rect(self.x, item_y, self.width, self.ITEM_HEIGHT)
                    if item_rect.collidepoint(mx, my):
                        self.hovered_idx = i
                    item_y += self.ITEM_HEIGHT

        return False, False

    def draw(self, screen, font, small_font):
        text_color = (220, 220, 220) if self.enabled else (120, 120, 120)

        # Label to the left of the button
        if self.label:
            label = small_font.render(self.label, True, (180, 180, 180))
            screen.blit(label, (self.x - label.get_width() - 8, self.y + 5))

        # Main button
        button_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(screen, (55, 55, 55), button_rect)
        pygame.draw.rect(screen, (100, 100, 100), button_rect, 1)

        # Selected value text
        text = small_font.render(str(self.get_value()), True, text_color)
        screen.blit(text, (self.x + 8, self.y + 5))

        # Dropdown arrow
        arrow = "▼" if not self.expanded else "▲"
        arrow_text = small_font.render(arrow, True, (150, 150, 150))
        screen.blit(arrow_text, (self.x + self.width - 18, self.y + 5))

        # Dropdown items
        if self.expanded:
            item_y = self.y + self.height
            for i, opt in enumerate(self.options):
                item_rect = pygame.Rect(self.x, item_y, self.width, self.ITEM_HEIGHT)

                if i == self.selected_idx:
                    pygame.draw.rect(screen, (70, 100, 70), item_rect)
                elif i == self.hovered_idx:
                    pygame.draw.rect(screen, (65, 65, 65), item_rect)
                else:
                    pygame.draw.rect(screen, (50, 50, 50), item_rect)

                pygame.draw.rect(screen, (80, 80, 80), item_rect, 1)

                color = (255, 255, 255) if i == self.selected_idx else (180, 180, 180)
                text = small_font.render(str(opt), True, color)
                screen.blit(text, (self.x + 8, item_y + 4))
                item_y += self.ITEM_HEIGHT


class Button:
    """A push button."""

    def __init__(self, x, y, width, text, height=26):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.enabled = True

    def handle_event(self, event):
        """Returns True if the button was clicked."""
        return (self.enabled
                and event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.rect.collidepoint(event.pos))

    def draw(self, screen, font):
        fill = (70, 100, 70) if self.enabled else (55, 55, 55)
        border = (100, 150, 100) if self.enabled else (90, 90, 90)
        text_color = (220, 255, 220) if self.enabled else (130, 130, 130)
        pygame.draw.rect(screen, fill, self.rect)
        pygame.draw.rect(screen, border, self.rect, 1)
        text = font.render(self.text, True, text_color)
        text_x = self.rect.x + (self.rect.width - text.get_width()) // 2
        text_y = self.rect.y + (self.rect.height - text.get_height()) // 2
        screen.blit(text, (text_x, text_y))


class ControlPanel:
    """
    Fractal dropdown above the image, Reset / Save Image below it.

    handle_event() translates clicks into the explorer's selection
    events; the app forwards those to FractalExplorer.handle_event().
    """

    TOP_HEIGHT = 36
    BOTTOM_HEIGHT = 40

    def __init__(self, size, selected=None):
        names = list_fractal_names()
        selected_idx = names.index(selected) if selected in names else 0
        self.dropdown = Dropdown(size // 2 - 40, 6, 160, names, selected_idx, label="Fractal:")
        bottom_y = self.TOP_HEIGHT + size + 7
        self.reset_button = Button(size // 2 - 130, bottom_y, 120, "Reset")
        self.save_button = Button(size // 2 + 10, bottom_y, 120, "Save Image")
        self.enabled = True

        self.font = None
        self.small_font = None

    def init_fonts(self):
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 14)
        self.small_font = pygame.font.SysFont('Arial', 12)

    def set_enabled(self, enabled):
        self.enabled = enabled
        self.dropdown.enabled = enabled
        self.reset_button.enabled = enabled
        self.save_button.enabled = enabled

    def handle_event(self, event):
        """
        Returns (handled, selection) where selection is a ResetEvent,
        SaveEvent, SelectFractalEvent or None.
        """
        handled, changed = self.dropdown.handle_event(event)
        if handled:
            if changed:
                return True, SelectFractalEvent(self.dropdown.get_value())
            return True, None
        if self.reset_button.handle_event(event):
            return True, ResetEvent()
        if self.save_button.handle_event(event):
            return True, SaveEvent()
        return False, None

    def draw(self, screen):
        if self.font is None:
            self.init_fonts()
        self.reset_button.draw(screen, self.font)
        self.save_button.draw(screen, self.font)
        # Drawn last so the expanded list overlaps the image
        self.dropdown.draw(screen, self.font, self.small_font)
