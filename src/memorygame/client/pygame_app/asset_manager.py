from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from memorygame.engine.types import VariantDefinition

SOUND_FILES: dict[str, str] = {
    "flip": "sfx/flip.wav",
    "unflip": "sfx/unflip.wav",
    "shuffle": "sfx/shuffle.wav",
}


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    card: pygame.font.Font


class AssetManager:
    def __init__(self, repo_root: Path, assets_dir: Path, audio: bool = True) -> None:
        self.repo_root = repo_root
        self.assets_dir = assets_dir
        self.audio = audio
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}
        self._sounds: dict[str, pygame.mixer.Sound | None] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 48),
            card=pygame.font.SysFont(None, 64),
        )

    def _resolve(self, path_str: str) -> Path:
        p = Path(path_str)
        if p.is_absolute():
            return p
        if path_str.startswith("assets/"):
            return self.repo_root / path_str
        return self.assets_dir / path_str

    def get_image(self, path_str: str, size: tuple[int, int] | None = None) -> pygame.Surface | None:
        w, h = size if size is not None else (0, 0)
        key = (path_str, w, h)
        if key in self._cache:
            return self._cache[key]

        path = self._resolve(path_str)
        if not path.exists():
            return None
        try:
            img = pygame.image.load(path.as_posix()).convert_alpha()
        except pygame.error:
            return None
        if size is not None:
            img = pygame.transform.smoothscale(img, size)
        self._cache[key] = img
        return img

    def card_face(self, variant: VariantDefinition, size: tuple[int, int]) -> pygame.Surface:
        img = self.get_image(f"cards/variant_{variant.id}.png", size=size)
        if img is not None:
            return img

        key = (f"<face:{variant.id}>", size[0], size[1])
        if key in self._cache:
            return self._cache[key]
        surf = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(surf, (236, 232, 220), surf.get_rect(), border_radius=10)
        inner = surf.get_rect().inflate(-12, -12)
        pygame.draw.rect(surf, variant.color, inner, border_radius=8)
        glyph = self.fonts.card.render(variant.symbol, True, (20, 20, 20))
        surf.blit(glyph, glyph.get_rect(center=inner.center).topleft)
        self._cache[key] = surf
        return surf

    def card_back(self, size: tuple[int, int]) -> pygame.Surface:
        img = self.get_image("cards/back.png", size=size)
        if img is not None:
            return img

        key = ("<back>", size[0], size[1])
        if key in self._cache:
            return self._cache[key]
        surf = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(surf, (36, 52, 96), surf.get_rect(), border_radius=10)
        pygame.draw.rect(surf, (220, 220, 230), surf.get_rect().inflate(-10, -10), width=2, border_radius=8)
        self._cache[key] = surf
        return surf

    def get_sound(self, cue: str) -> pygame.mixer.Sound | None:
        if not self.audio:
            return None
        if cue in self._sounds:
            return self._sounds[cue]
        sound: pygame.mixer.Sound | None = None
        rel = SOUND_FILES.get(cue)
        if rel is not None:
            path = self._resolve(rel)
            if path.exists():
                try:
                    sound = pygame.mixer.Sound(path.as_posix())
                except pygame.error:
                    sound = None
        self._sounds[cue] = sound
        return sound

    def play_sound(self, cue: str) -> None:
        sound = self.get_sound(cue)
        if sound is not None:
            sound.play()
