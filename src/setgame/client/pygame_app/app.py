from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from setgame.paths import Paths
from setgame.services.config import ClientSettings, ConfigService, GameSettings
from setgame.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene, SceneTransition


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    config: ConfigService
    telemetry: TelemetryService

    # Command-line overrides, applied once settings are loaded at boot
    seed: Optional[int] = None
    width_override: Optional[int] = None
    height_override: Optional[int] = None
    delay_override: Optional[float] = None
    settings: Optional[GameSettings] = None


def window_size(client: ClientSettings, width: Optional[int] = None, height: Optional[int] = None) -> tuple[int, int]:
    """Window size from settings, with each command-line dimension overriding its own axis."""
    return (
        width if width is not None else client.width,
        height if height is not None else client.height,
    )


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
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

        return 0
