from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from setgame.paths import get_paths
from setgame.services.config import ClientSettings, ConfigService
from setgame.services.telemetry import TelemetryService

from .app import App, GameContext, window_size
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="setgame")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="deal a reproducible first game")
    parser.add_argument("--delay", type=float, default=None, help="seconds before a full selection resolves")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode(window_size(ClientSettings(), args.width, args.height))
    pygame.display.set_caption("Set")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager()
    config = ConfigService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl")

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        config=config,
        telemetry=telemetry,
        seed=args.seed,
        width_override=args.width,
        height_override=args.height,
        delay_override=args.delay,
    )

    app = App(ctx, BootScene(ctx))
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
