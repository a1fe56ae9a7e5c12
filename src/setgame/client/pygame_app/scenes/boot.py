from __future__ import annotations

import dataclasses
import traceback

import pygame  # type: ignore[import-not-found]

from setgame.services.config import ConfigError
from setgame.session import GameSession

from ..app import GameContext, window_size
from ..scene_base import SceneTransition
from ..ui import Button, draw_text
from .game import GameScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            settings = self.ctx.config.load_settings()
            if self.ctx.delay_override is not None:
                client = dataclasses.replace(settings.client, resolve_delay=max(0.0, self.ctx.delay_override))
                settings = dataclasses.replace(settings, client=client)
            self.ctx.settings = settings

            size = window_size(settings.client, self.ctx.width_override, self.ctx.height_override)
            if self.ctx.screen.get_size() != size:
                self.ctx.screen = pygame.display.set_mode(size)

            session = GameSession(settings=settings, telemetry=self.ctx.telemetry, seed=self.ctx.seed)
            self.ctx.telemetry.log("boot", {"ok": True})
            return SceneTransition(GameScene(self.ctx, session))
        except ConfigError as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 64, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        font = self.ctx.assets.fonts.big
        draw_text(screen, font, "Set", (20, 20))

        font2 = self.ctx.assets.fonts.ui
        if self._error is None:
            draw_text(screen, font2, "Loading settings...", (20, 80))
        else:
            draw_text(screen, font2, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, self.ctx.assets.fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, font2)
