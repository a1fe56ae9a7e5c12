"""Deterministic, headless rules engine for the Set card game.

IMPORTANT: This package must never import pygame.
"""

from .actions import ExpandAction, ResolveSelectionAction, SelectCardAction
from .board import (
    Board,
    BoardConfig,
    StepResult,
    count_available_sets,
    expand,
    new_game,
    reset,
    resolve_selection,
    select,
    step,
)
from .deck import Deck
from .rules import is_set
from .selection import CardSelection, SelectionFullError
from .types import Card

__all__ = [
    "Board",
    "BoardConfig",
    "Card",
    "CardSelection",
    "Deck",
    "ExpandAction",
    "ResolveSelectionAction",
    "SelectCardAction",
    "SelectionFullError",
    "StepResult",
    "count_available_sets",
    "expand",
    "is_set",
    "new_game",
    "reset",
    "resolve_selection",
    "select",
    "step",
]
