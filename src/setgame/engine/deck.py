from __future__ import annotations

import random
from dataclasses import dataclass, field

from .types import SYMBOLS, Card


@dataclass
class Deck:
    """Remaining draw pile. Cards leave from the end of `cards`."""

    cards: list[Card] = field(default_factory=list)

    @staticmethod
    def new() -> "Deck":
        # shape x color x filling x amount, unshuffled
        cards = [
            Card(shape=shape, color=color, filling=filling, amount=amount)
            for shape in SYMBOLS
            for color in SYMBOLS
            for filling in SYMBOLS
            for amount in SYMBOLS
        ]
        return Deck(cards=cards)

    @staticmethod
    def new_shuffled(rng: random.Random | None = None) -> "Deck":
        deck = Deck.new()
        deck.shuffle(rng or random.Random())
        return deck

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self.cards)

    def draw(self) -> Card | None:
        if not self.cards:
            return None
        return self.cards.pop()

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)
