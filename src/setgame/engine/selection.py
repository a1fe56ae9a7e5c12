from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .rules import is_set
from .types import Card

SLOTS = 3


class SelectionFullError(RuntimeError):
    """Raised when a fourth, unselected position is toggled."""


def _empty_slots() -> list[int | None]:
    return [None] * SLOTS


@dataclass
class CardSelection:
    """Up to three tableau positions chosen by the player."""

    slots: list[int | None] = field(default_factory=_empty_slots)

    def is_full(self) -> bool:
        return all(s is not None for s in self.slots)

    def is_empty(self) -> bool:
        return all(s is None for s in self.slots)

    def is_selected(self, position: int) -> bool:
        return position in self.slots

    def positions(self) -> list[int]:
        return sorted(s for s in self.slots if s is not None)

    def toggle(self, position: int) -> bool:
        """Deselect `position` if chosen, otherwise take the first free slot.

        Returns True when the position ends up selected. Deselecting is never
        blocked; selecting into a full selection raises SelectionFullError.
        """
        if self.is_selected(position):
            self.slots = [None if s == position else s for s in self.slots]
            return False
        for i, s in enumerate(self.slots):
            if s is None:
                self.slots[i] = position
                return True
        raise SelectionFullError(f"Cannot select position {position}: selection is full.")

    def resolves_to_set(self, cards: Sequence[Card]) -> bool:
        if not self.is_full():
            return False
        a, b, c = (cards[s] for s in self.slots if s is not None)
        return is_set(a, b, c)

    def clear(self) -> None:
        self.slots = _empty_slots()
