from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

from setgame.engine.types import Card

from .card_renderer import render_card


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    """Fonts plus a cache of rendered card faces (81 cards x selected state)."""

    def __init__(self) -> None:
        self._cache: dict[tuple[str, int, int, bool], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 34),
        )

    def get_card(self, card: Card, size: tuple[int, int], selected: bool = False) -> pygame.Surface:
        w, h = size
        key = (card.code(), w, h, selected)
        if key not in self._cache:
            self._cache[key] = render_card(card, size, selected=selected)
        return self._cache[key]
