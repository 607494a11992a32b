from __future__ import annotations

import json
import math
import os
import random
import struct
import wave
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]

SAMPLE_RATE = 22050
CARD_SIZE = (180, 250)


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


def generate_all() -> None:
    root = _repo_root()
    data_dir = root / "src" / "memorygame" / "data"
    assets_dir = root / "assets"
    cards_dir = assets_dir / "cards"
    sfx_dir = assets_dir / "sfx"
    cards_dir.mkdir(parents=True, exist_ok=True)
    sfx_dir.mkdir(parents=True, exist_ok=True)

    variants = json.loads((data_dir / "variants.json").read_text(encoding="utf-8"))["variants"]

    pygame.init()
    pygame.font.init()
    font_big = pygame.font.SysFont(None, 96)
    font_small = pygame.font.SysFont(None, 24)

    for v in variants:
        surf = pygame.Surface(CARD_SIZE, pygame.SRCALPHA)
        pygame.draw.rect(surf, (236, 232, 220), surf.get_rect(), border_radius=14)
        inner = surf.get_rect().inflate(-16, -16)
        pygame.draw.rect(surf, tuple(v["color"]), inner, border_radius=10)
        pygame.draw.rect(surf, (0, 0, 0), inner, width=3, border_radius=10)

        glyph = font_big.render(v["symbol"], True, (20, 20, 20))
        surf.blit(glyph, glyph.get_rect(center=inner.center).topleft)
        name = font_small.render(v["name"], True, (20, 20, 20))
        surf.blit(name, name.get_rect(midbottom=(inner.centerx, inner.bottom - 10)).topleft)

        pygame.image.save(surf, (cards_dir / f"variant_{v['id']}.png").as_posix())

    _make_back(cards_dir / "back.png")
    pygame.quit()

    _write_flip(sfx_dir / "flip.wav")
    _write_unflip(sfx_dir / "unflip.wav")
    _write_shuffle(sfx_dir / "shuffle.wav")
    print("Generated placeholder assets under ./assets/")


def _make_back(path: Path) -> None:
    surf = pygame.Surface(CARD_SIZE, pygame.SRCALPHA)
    pygame.draw.rect(surf, (36, 52, 96), surf.get_rect(), border_radius=14)
    inner = surf.get_rect().inflate(-14, -14)
    # diagonal lattice
    for x in range(-CARD_SIZE[1], CARD_SIZE[0], 18):
        pygame.draw.line(surf, (56, 76, 132), (x, 0), (x + CARD_SIZE[1], CARD_SIZE[1]), 2)
        pygame.draw.line(surf, (56, 76, 132), (x + CARD_SIZE[1], 0), (x, CARD_SIZE[1]), 2)
    pygame.draw.rect(surf, (220, 220, 230), inner, width=3, border_radius=10)
    pygame.image.save(surf, path.as_posix())


def _write_wav(path: Path, samples: list[float]) -> None:
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        frames = b"".join(struct.pack("<h", max(-32767, min(32767, int(s * 32767)))) for s in samples)
        wf.writeframes(frames)


def _swish(duration: float, f_start: float, f_end: float, decay: float, seed: int) -> list[float]:
    total = int(SAMPLE_RATE * duration)
    rng = random.Random(seed)
    samples: list[float] = []
    for i in range(total):
        t = i / SAMPLE_RATE
        f = f_start + (f_end - f_start) * (t / duration)
        env = math.exp(-decay * t)
        tone = math.sin(2.0 * math.pi * f * t) * 0.5
        noise = (rng.random() * 2.0 - 1.0) * 0.25
        samples.append((tone + noise) * env * 0.6)
    return samples


def _write_flip(path: Path) -> None:
    _write_wav(path, _swish(0.09, 240.0, 420.0, 24.0, seed=3))


def _write_unflip(path: Path) -> None:
    _write_wav(path, _swish(0.09, 420.0, 220.0, 24.0, seed=5))


def _write_shuffle(path: Path) -> None:
    samples: list[float] = []
    for n in range(6):
        samples.extend(_swish(0.06, 200.0 + 30.0 * n, 320.0 + 30.0 * n, 30.0, seed=11 + n))
        samples.extend([0.0] * int(SAMPLE_RATE * 0.02))
    _write_wav(path, samples)


if __name__ == "__main__":
    generate_all()
