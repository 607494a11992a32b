from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorygame.client.pygame_app.card_sprite import FLIP_DURATION, CardSprite
from memorygame.client.pygame_app.scenes.memory import grid_shape
from memorygame.client.pygame_app.ui import Slider
from memorygame.engine.types import Card


def test_grid_shape_fits_all_cards() -> None:
    assert grid_shape(16) == (4, 4)
    assert grid_shape(12) == (4, 3)
    assert grid_shape(2) == (2, 1)
    for n in range(2, 17, 2):
        cols, rows = grid_shape(n)
        assert cols * rows >= n


def test_slider_drag_reports_integer_values() -> None:
    seen: list[int] = []
    slider = Slider(rect=pygame.Rect(0, 0, 70, 20), min_value=1, max_value=8, value=8, on_change=seen.append)

    down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 10))
    assert slider.handle_event(down)
    assert slider.value == 1
    move = pygame.event.Event(pygame.MOUSEMOTION, pos=(30, 10), rel=(30, 0), buttons=(1, 0, 0))
    slider.handle_event(move)
    up = pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(30, 10))
    slider.handle_event(up)
    assert not slider.dragging
    assert seen == [1, 4]


def test_card_sprite_flip_animation() -> None:
    surf = pygame.Surface((10, 14))
    sprite = CardSprite(card=Card(id=0, variant=0), rect=pygame.Rect(0, 0, 10, 14), face=surf, back=surf)
    sprite.flip()
    assert sprite.animating
    sprite.update(FLIP_DURATION / 2)
    assert 0.0 < sprite.progress < 1.0
    sprite.update(FLIP_DURATION)
    assert sprite.progress == 1.0
    assert not sprite.animating
    sprite.unflip()
    sprite.update(FLIP_DURATION * 2)
    assert sprite.progress == 0.0
