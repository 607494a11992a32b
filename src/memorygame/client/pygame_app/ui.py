from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_text_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True
    visible: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled or not self.visible:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        if not self.visible:
            return
        bg = (60, 60, 70) if self.enabled else (30, 30, 34)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        draw_text_centered(screen, font, self.text, self.rect.center)


@dataclass
class Slider:
    """Integer slider; `on_change` fires whenever the value moves."""

    rect: pygame.Rect
    min_value: int
    max_value: int
    value: int
    on_change: Callable[[int], None]
    dragging: bool = False

    def set_value(self, value: int) -> None:
        self.value = max(self.min_value, min(self.max_value, value))

    def _value_at(self, x: int) -> int:
        span = self.max_value - self.min_value
        if span <= 0:
            return self.min_value
        t = (x - self.rect.x) / max(1, self.rect.width)
        t = max(0.0, min(1.0, t))
        return self.min_value + round(t * span)

    def _drag_to(self, x: int) -> None:
        new_value = self._value_at(x)
        if new_value != self.value:
            self.value = new_value
            self.on_change(new_value)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 16).collidepoint(event.pos):
                self.dragging = True
                self._drag_to(event.pos[0])
                return True
            return False
        if event.type == pygame.MOUSEMOTION and self.dragging:
            self._drag_to(event.pos[0])
            return True
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self.dragging:
            self.dragging = False
            return True
        return False

    def draw(self, screen: pygame.Surface) -> None:
        track = pygame.Rect(self.rect.x, self.rect.centery - 3, self.rect.width, 6)
        pygame.draw.rect(screen, (70, 70, 80), track, border_radius=3)
        span = max(1, self.max_value - self.min_value)
        x = self.rect.x + int((self.value - self.min_value) / span * self.rect.width)
        fill = pygame.Rect(track.x, track.y, x - track.x, track.height)
        pygame.draw.rect(screen, (120, 160, 230), fill, border_radius=3)
        pygame.draw.circle(screen, (230, 230, 240), (x, self.rect.centery), 10)
        pygame.draw.circle(screen, (0, 0, 0), (x, self.rect.centery), 10, width=2)
