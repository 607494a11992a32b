from __future__ import annotations

import argparse
import random

import pygame  # type: ignore[import-not-found]

from memorygame.paths import get_paths
from memorygame.services.content import ContentService
from memorygame.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="memorygame")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible deal")
    parser.add_argument("--matches", type=int, default=None, help="Number of pairs for the first deal")
    parser.add_argument("--mute", action="store_true", help="Disable sound effects")
    parser.add_argument("--no-telemetry", action="store_true", help="Do not write userdata/telemetry.jsonl")
    args = parser.parse_args()

    pygame.init()
    audio = not args.mute
    if audio:
        try:
            pygame.mixer.init()
        except pygame.error:
            audio = False

    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Memory")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(repo_root=paths.repo_root, assets_dir=paths.assets_dir, audio=audio)
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)
    seed = args.seed if args.seed is not None else random.randrange(1, 2**31 - 1)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        seed=seed,
        matches_override=args.matches,
    )

    app = App(ctx, BootScene(ctx))
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
