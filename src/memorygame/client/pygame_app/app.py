from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from memorygame.engine.session import SessionConfig
from memorygame.engine.types import VariantPool
from memorygame.paths import Paths
from memorygame.services.content import ContentService
from memorygame.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene

FPS = 60


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    seed: int
    matches_override: Optional[int] = None

    # Loaded at boot
    variants: Optional[VariantPool] = None
    config: Optional[SessionConfig] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            # Clamp so a stalled frame can't skip past several timed waits at once.
            dt = min(self.ctx.clock.tick(FPS) / 1000.0, 0.1)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        pygame.quit()
        return 0
