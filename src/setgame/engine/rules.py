from __future__ import annotations

from itertools import combinations
from typing import Sequence, TypeVar

from .types import ATTRIBUTES, Card

T = TypeVar("T")

Triple = tuple[int, int, int]


def all_same_or_different(first: T, second: T, third: T) -> bool:
    """True unless exactly two of the three values are equal."""
    if first == second and second == third:
        return True
    return first != second and second != third and third != first


def is_set(first: Card, second: Card, third: Card) -> bool:
    for attr in ATTRIBUTES:
        if not all_same_or_different(first.value(attr), second.value(attr), third.value(attr)):
            return False
    return True


def find_sets(cards: Sequence[Card]) -> list[Triple]:
    """Every position triple i<j<k of `cards` that forms a set.

    Brute force over all combinations; tableaus stay small (<= 21 cards).
    """
    found: list[Triple] = []
    for i, j, k in combinations(range(len(cards)), 3):
        if is_set(cards[i], cards[j], cards[k]):
            found.append((i, j, k))
    return found


def count_sets(cards: Sequence[Card]) -> int:
    return len(find_sets(cards))
