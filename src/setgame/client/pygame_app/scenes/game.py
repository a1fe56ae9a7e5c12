from __future__ import annotations

import math

import pygame  # type: ignore[import-not-found]

from setgame.engine.rules import Triple
from setgame.session import GameSession

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text, grid_rect

GAP = 10
ORIGIN = (20, 20)
BOTTOM_BAR = 90
HINT_SECONDS = 2.0


class GameScene:
    def __init__(self, ctx: GameContext, session: GameSession) -> None:
        self.ctx = ctx
        self.session = session

        self._hint: Triple | None = None
        self._hint_left = 0.0
        # (board seed, event count) -> available set count
        self._available_key: tuple[int, int] | None = None
        self._available = 0

        w, h = ctx.screen.get_size()
        bar_y = h - BOTTOM_BAR + 20
        self.btn_expand = Button(rect=pygame.Rect(w - 460, bar_y, 140, 48), text="Expand", on_click=self._on_expand)
        self.btn_hint = Button(rect=pygame.Rect(w - 310, bar_y, 140, 48), text="Hint", on_click=self._on_hint)
        self.btn_reset = Button(rect=pygame.Rect(w - 160, bar_y, 140, 48), text="Reset", on_click=self._on_reset)

    def _on_expand(self) -> None:
        self.session.expand()

    def _on_hint(self) -> None:
        sets = self.session.board.find_available_sets()
        if not sets:
            self.session.message = "No set on the table."
            return
        self._hint = sets[0]
        self._hint_left = HINT_SECONDS

    def _on_reset(self) -> None:
        self.session.reset()
        self._hint = None

    def _card_size(self, count: int) -> tuple[int, int]:
        client = self.session.settings.client
        columns = client.columns
        rows = max(1, math.ceil(count / columns))
        _, h = self.ctx.screen.get_size()
        avail_h = h - BOTTOM_BAR - ORIGIN[1]
        fit_h = (avail_h - GAP * (rows - 1)) // rows
        if fit_h >= client.card_height:
            return client.card_width, client.card_height
        scale = fit_h / client.card_height
        return int(client.card_width * scale), fit_h

    def _card_rect(self, position: int, size: tuple[int, int]) -> pygame.Rect:
        return grid_rect(position, self.session.settings.client.columns, ORIGIN, size, gap=GAP)

    def _hit_test_card(self, pos: tuple[int, int]) -> int | None:
        cards = self.session.board.cards
        size = self._card_size(len(cards))
        for i in range(len(cards)):
            if self._card_rect(i, size).collidepoint(pos):
                return i
        return None

    def _available_sets(self) -> int:
        board = self.session.board
        key = (board.seed, len(board.event_log))
        if key != self._available_key:
            self._available_key = key
            self._available = board.count_available_sets()
        return self._available

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_reset.handle_event(event):
            return
        if self.session.board.finished:
            return
        self.btn_expand.visible = self.session.board.can_expand
        if self.btn_expand.handle_event(event) or self.btn_hint.handle_event(event):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            position = self._hit_test_card(event.pos)
            if position is not None:
                self.session.click(position)
                self._hint = None

        if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
            self._on_reset()

    def update(self, dt: float) -> SceneTransition | None:
        self.session.update(dt)
        if self._hint is not None:
            self._hint_left -= dt
            if self._hint_left <= 0:
                self._hint = None
        return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((0, 96, 64))
        fonts = self.ctx.assets.fonts
        board = self.session.board

        size = self._card_size(len(board.cards))
        for i, card in enumerate(board.cards):
            rect = self._card_rect(i, size)
            screen.blit(self.ctx.assets.get_card(card, size, selected=board.is_selected(i)), rect.topleft)
            if self._hint is not None and i in self._hint:
                pygame.draw.rect(screen, (120, 220, 255), rect, width=3, border_radius=12)

        _, h = screen.get_size()
        y = h - BOTTOM_BAR + 14
        draw_text(screen, fonts.ui, f"Sets found: {board.sets_found}", (20, y))
        draw_text(screen, fonts.ui, f"Sets on table: {self._available_sets()}", (20, y + 26))
        draw_text(screen, fonts.small, f"Deck: {len(board.deck)}", (220, y + 4))
        if self.session.message:
            draw_text(screen, fonts.ui, self.session.message, (220, y + 26), color=(240, 200, 120))

        self.btn_expand.visible = board.can_expand and not board.finished
        self.btn_expand.enabled = not self.session.busy
        self.btn_hint.enabled = not board.finished
        self.btn_expand.draw(screen, fonts.ui)
        self.btn_hint.draw(screen, fonts.ui)
        self.btn_reset.draw(screen, fonts.ui)

        if board.finished:
            self._draw_finished(screen)

    def _draw_finished(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))
        w, h = screen.get_size()
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Table cleared!", (w // 2 - 100, h // 2 - 40))
        draw_text(screen, fonts.ui, f"Sets found: {self.session.board.sets_found}", (w // 2 - 70, h // 2))
        self.btn_reset.draw(screen, fonts.ui)
