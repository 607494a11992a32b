from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

from memorygame.engine.types import Card

FLIP_DURATION = 0.25


@dataclass
class CardSprite:
    card: Card
    rect: pygame.Rect
    face: pygame.Surface
    back: pygame.Surface
    # 0.0 = back showing, 1.0 = face showing
    progress: float = 0.0
    face_up: bool = False
    interactable: bool = True

    def flip(self) -> None:
        self.face_up = True

    def unflip(self) -> None:
        self.face_up = False

    @property
    def animating(self) -> bool:
        target = 1.0 if self.face_up else 0.0
        return self.progress != target

    def update(self, dt: float) -> None:
        step = dt / FLIP_DURATION
        if self.face_up:
            self.progress = min(1.0, self.progress + step)
        else:
            self.progress = max(0.0, self.progress - step)

    def render(self, screen: pygame.Surface, hovered: bool = False) -> None:
        # Squash horizontally to zero at the halfway point, swap sides there.
        scale_x = abs(1.0 - 2.0 * self.progress)
        img = self.face if self.progress >= 0.5 else self.back
        w = max(1, int(self.rect.width * scale_x))
        if w != self.rect.width:
            img = pygame.transform.smoothscale(img, (w, self.rect.height))
        screen.blit(img, img.get_rect(center=self.rect.center).topleft)

        if hovered and self.interactable and not self.animating:
            pygame.draw.rect(screen, (240, 240, 120), self.rect, width=3, border_radius=10)
