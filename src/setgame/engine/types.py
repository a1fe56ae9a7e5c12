from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Symbol = Literal[0, 1, 2]
Attribute = Literal["shape", "color", "filling", "amount"]

SYMBOLS: tuple[Symbol, ...] = (0, 1, 2)
ATTRIBUTES: tuple[Attribute, ...] = ("shape", "color", "filling", "amount")

# Order used by Card.code(); matches how cards are labelled in logs and snapshots.
_CODE_ORDER: tuple[Attribute, ...] = ("color", "shape", "filling", "amount")


@dataclass(frozen=True)
class Card:
    """One of the 81 cards: four attributes, each one of three symbols."""

    shape: Symbol
    color: Symbol
    filling: Symbol
    amount: Symbol

    def value(self, attr: Attribute) -> Symbol:
        return getattr(self, attr)

    def code(self) -> str:
        return "".join(str(self.value(a)) for a in _CODE_ORDER)

    @staticmethod
    def from_code(code: str) -> "Card":
        if len(code) != 4 or any(ch not in "012" for ch in code):
            raise ValueError(f"Invalid card code: {code!r}")
        values = dict(zip(_CODE_ORDER, (int(ch) for ch in code)))
        return Card(
            shape=values["shape"],  # type: ignore[arg-type]
            color=values["color"],  # type: ignore[arg-type]
            filling=values["filling"],  # type: ignore[arg-type]
            amount=values["amount"],  # type: ignore[arg-type]
        )
