from __future__ import annotations

import argparse
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.clock import ManualScheduler
from memorymatch.paths import get_paths
from memorymatch.services.content import ContentService
from memorymatch.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="memorymatch")
    parser.add_argument("--width", type=int, default=720)
    parser.add_argument("--height", type=int, default=760)
    parser.add_argument("--seed", type=int, default=None, help="fix the deck order")
    parser.add_argument("--no-telemetry", action="store_true")
    parser.add_argument("--userdata", type=Path, default=None, help="directory for telemetry.jsonl")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Memory Match Game")

    clock = pygame.time.Clock()
    paths = get_paths(args.userdata)

    assets = AssetManager()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        scheduler=ManualScheduler(),
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
