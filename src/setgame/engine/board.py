from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .actions import Action, ExpandAction, ResolveSelectionAction, SelectCardAction
from .deck import Deck
from .rules import Triple, count_sets, find_sets
from .selection import CardSelection, SelectionFullError
from .types import Card

Event = dict[str, object]

FULL_DECK_SIZE = 81
# Cards dealt per expansion; a set found afterwards shrinks the tableau by the same amount.
EXPAND_SIZE = 3


@dataclass(frozen=True)
class BoardConfig:
    tableau_size: int = 12
    # Any 21 cards contain a set, so three expansions of 3 from 12 is enough.
    max_expansions: int = 3


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class Board:
    config: BoardConfig
    seed: int
    rng: random.Random
    deck: Deck
    cards: list[Card]
    selection: CardSelection = field(default_factory=CardSelection)
    sets_found: int = 0
    times_expanded: int = 0
    finished: bool = False
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def deck_is_empty(self) -> bool:
        return self.deck.is_empty()

    @property
    def can_expand(self) -> bool:
        """Whether the UI should offer the expand action."""
        if self.finished:
            return False
        return self.times_expanded < self.config.max_expansions and not self.deck_is_empty

    def is_selected(self, position: int) -> bool:
        return self.selection.is_selected(position)

    def count_available_sets(self) -> int:
        return count_available_sets(self)

    def find_available_sets(self) -> list[Triple]:
        return find_sets(self.cards)


def _log(board: Board, event: Event) -> None:
    board.event_log.append(event)


def _rejected(error: str) -> StepResult:
    return StepResult(ok=False, events=[], error=error)


def _check_finished(board: Board) -> None:
    if board.finished or board.cards:
        return
    board.finished = True
    _log(board, {"type": "GAME_FINISHED", "sets_found": board.sets_found})


def _replace_from_deck(board: Board, positions: Sequence[int]) -> list[Card]:
    """Swap each selected card for a fresh deck card, in place.

    A position for which the deck has nothing left is dropped; the other
    cards keep their order.
    """
    replacements: dict[int, Card | None] = {}
    for pos in positions:
        replacements[pos] = board.deck.draw()

    out: list[Card] = []
    for i, card in enumerate(board.cards):
        if i not in replacements:
            out.append(card)
            continue
        new_card = replacements[i]
        if new_card is not None:
            out.append(new_card)
    return out


def _backfill_from_tail(cards: Sequence[Card], positions: Sequence[int]) -> list[Card]:
    """Remove the selected cards and shrink the tableau by three.

    Freed slots below the last three positions are filled, lowest slot
    first, with the surviving tail cards in their tableau order.
    """
    removed = set(positions)
    assert len(removed) == 3, "backfill needs three distinct positions"
    n = len(cards)
    tail_start = n - 3
    movers = [cards[i] for i in range(tail_start, n) if i not in removed]

    out: list[Card] = []
    next_mover = 0
    for i in range(tail_start):
        if i in removed:
            out.append(movers[next_mover])
            next_mover += 1
        else:
            out.append(cards[i])
    assert next_mover == len(movers), "every surviving tail card must be placed exactly once"
    return out


def new_game(seed: int | None = None, config: BoardConfig | None = None) -> Board:
    cfg = config or BoardConfig()
    if cfg.tableau_size < 3 or cfg.tableau_size > FULL_DECK_SIZE:
        raise ValueError(f"tableau_size must be between 3 and {FULL_DECK_SIZE}.")
    if seed is None:
        seed = random.randrange(2**31)

    rng = random.Random(seed)
    deck = Deck.new_shuffled(rng)
    cards: list[Card] = []
    for _ in range(cfg.tableau_size):
        card = deck.draw()
        assert card is not None, "a fresh deck always covers the initial tableau"
        cards.append(card)

    board = Board(config=cfg, seed=seed, rng=rng, deck=deck, cards=cards)
    _log(board, {"type": "GAME_STARTED", "seed": seed, "cards": [c.code() for c in cards]})
    return board


def reset(board: Board, seed: int | None = None) -> Board:
    """Return a brand-new board; nothing from `board` is reused but its config."""
    return new_game(seed=seed, config=board.config)


def select(board: Board, position: int) -> StepResult:
    if board.finished:
        return _rejected("Game already finished.")
    if position < 0 or position >= len(board.cards):
        return _rejected("Invalid card position.")

    try:
        selected = board.selection.toggle(position)
    except SelectionFullError:
        return _rejected("Selection is full.")

    event: Event = {
        "type": "CARD_SELECTED" if selected else "CARD_DESELECTED",
        "position": position,
        "card": board.cards[position].code(),
        "full": board.selection.is_full(),
    }
    _log(board, event)
    return StepResult(ok=True, events=[event])


def expand(board: Board) -> StepResult:
    """Deal up to EXPAND_SIZE more cards, stopping early on an empty deck.

    The expansion cap is the caller's gate (see Board.can_expand).
    """
    if board.finished:
        return _rejected("Game already finished.")

    drawn: list[Card] = []
    for _ in range(EXPAND_SIZE):
        card = board.deck.draw()
        if card is None:
            break
        drawn.append(card)
    board.cards.extend(drawn)
    board.times_expanded += 1

    event: Event = {
        "type": "TABLEAU_EXPANDED",
        "cards": [c.code() for c in drawn],
        "times_expanded": board.times_expanded,
    }
    _log(board, event)
    return StepResult(ok=True, events=[event])


def resolve_selection(board: Board) -> StepResult:
    if board.finished:
        return _rejected("Game already finished.")
    if not board.selection.is_full():
        return _rejected("Selection is not complete.")

    before = len(board.event_log)
    positions = board.selection.positions()
    codes = [board.cards[p].code() for p in positions]

    if board.selection.resolves_to_set(board.cards):
        board.sets_found += 1
        if board.times_expanded > 0:
            board.cards = _backfill_from_tail(board.cards, positions)
            board.times_expanded -= 1
        else:
            board.cards = _replace_from_deck(board, positions)
        _log(
            board,
            {"type": "SET_FOUND", "positions": positions, "cards": codes, "sets_found": board.sets_found},
        )
    else:
        _log(board, {"type": "NOT_A_SET", "positions": positions, "cards": codes})

    board.selection.clear()
    _check_finished(board)
    return StepResult(ok=True, events=board.event_log[before:])


def count_available_sets(board: Board) -> int:
    return count_sets(board.cards)


def step(board: Board, action: Action) -> StepResult:
    """Apply a single action to the board.

    Mutates `board` in place; deterministic for a given (seed, action sequence).
    """
    if board.finished:
        return _rejected("Game already finished.")

    board.action_log.append(action)

    if isinstance(action, SelectCardAction):
        return select(board, action.position)
    if isinstance(action, ExpandAction):
        return expand(board)
    if isinstance(action, ResolveSelectionAction):
        return resolve_selection(board)
    return _rejected("Unknown action.")


def replay(seed: int, actions: Iterable[Action], config: BoardConfig | None = None) -> Board:
    board = new_game(seed=seed, config=config)
    for a in actions:
        step(board, a)
        if board.finished:
            break
    return board
