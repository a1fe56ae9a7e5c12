from __future__ import annotations

import pytest

from setgame.engine import board as board_module
from setgame.engine.actions import ExpandAction, ResolveSelectionAction, SelectCardAction
from setgame.engine.board import (
    Board,
    BoardConfig,
    count_available_sets,
    expand,
    new_game,
    replay,
    reset,
    resolve_selection,
    select,
    step,
)
from setgame.engine.deck import Deck
from setgame.engine.serialize import snapshot
from setgame.engine.types import Card

SET_A = Card(shape=0, color=0, filling=0, amount=0)
SET_B = Card(shape=1, color=1, filling=1, amount=1)
SET_C = Card(shape=2, color=2, filling=2, amount=2)


def _filler(n: int) -> list[Card]:
    # Cards that never complete a set with SET_A/B/C at positions 0-2
    taken = {SET_A, SET_B, SET_C}
    out = [c for c in Deck.new().cards if c not in taken and c.amount != 0 and c.shape != 2]
    return out[:n]


def _board_with(cards: list[Card], deck_size: int | None = None) -> Board:
    board = new_game(seed=11)
    remaining = [c for c in Deck.new().cards if c not in cards]
    if deck_size is not None:
        remaining = remaining[:deck_size]
    board.deck = Deck(cards=remaining)
    board.cards = list(cards)
    return board


def _select_all(board: Board, *positions: int) -> None:
    for p in positions:
        assert select(board, p).ok


def test_new_game_deals_twelve() -> None:
    board = new_game(seed=123)
    assert len(board.cards) == 12
    assert len(board.deck) == 81 - 12
    assert board.sets_found == 0
    assert board.times_expanded == 0
    assert board.finished is False
    assert board.selection.is_empty()
    assert len(set(board.cards) | set(board.deck.cards)) == 81
    assert board.event_log[0]["type"] == "GAME_STARTED"


def test_new_game_is_seeded() -> None:
    assert new_game(seed=5).cards == new_game(seed=5).cards


def test_resolve_set_without_expansion_replaces_in_place() -> None:
    tableau = [SET_A, SET_B, SET_C] + _filler(9)
    board = _board_with(tableau)
    _select_all(board, 0, 1, 2)

    res = resolve_selection(board)
    assert res.ok
    assert res.events[-1]["type"] == "SET_FOUND"
    assert board.sets_found == 1
    assert len(board.cards) == 12
    assert len(board.deck) == 69 - 3
    for p in (0, 1, 2):
        assert board.cards[p] not in (SET_A, SET_B, SET_C)
    assert board.cards[3:] == tableau[3:]
    assert board.selection.is_empty()
    assert len(set(board.cards) | set(board.deck.cards)) == 81 - 3


def test_resolve_set_after_expansion_backfills_from_tail() -> None:
    tableau = [SET_A, SET_B, SET_C] + _filler(12)
    board = _board_with(tableau)
    board.times_expanded = 1
    deck_before = len(board.deck)
    _select_all(board, 2, 0, 1)

    res = resolve_selection(board)
    assert res.ok
    assert len(board.cards) == 12
    assert board.times_expanded == 0
    assert board.sets_found == 1
    assert len(board.deck) == deck_before
    # freed slots take the last three cards in tableau order
    assert board.cards[:3] == tableau[12:15]
    assert board.cards[3:] == tableau[3:12]


def test_backfill_when_set_includes_tail_positions() -> None:
    filler = _filler(12)
    # positions 0, 13, 14 hold the set; 12 is the only tail survivor
    tableau = [SET_A] + filler[:12] + [SET_B, SET_C]
    board = _board_with(tableau)
    board.times_expanded = 2
    _select_all(board, 0, 13, 14)

    resolve_selection(board)
    assert len(board.cards) == 12
    assert board.times_expanded == 1
    assert board.cards[0] == tableau[12]
    assert board.cards[1:] == tableau[1:12]
    assert sorted(c.code() for c in board.cards) == sorted(c.code() for c in tableau if c not in (SET_A, SET_B, SET_C))


def test_resolve_non_set_leaves_tableau_alone() -> None:
    tableau = [SET_A, SET_B] + _filler(10)
    board = _board_with(tableau)
    _select_all(board, 0, 1, 2)
    deck_before = list(board.deck.cards)

    res = resolve_selection(board)
    assert res.ok
    assert res.events[-1]["type"] == "NOT_A_SET"
    assert board.sets_found == 0
    assert board.cards == tableau
    assert board.deck.cards == deck_before
    assert board.selection.is_empty()


def test_resolve_incomplete_selection_is_a_no_op() -> None:
    board = new_game(seed=3)
    select(board, 0)
    select(board, 4)
    before = snapshot(board)

    res = resolve_selection(board)
    assert not res.ok
    assert res.error == "Selection is not complete."
    assert snapshot(board) == before
    assert board.is_selected(0) and board.is_selected(4)


def test_select_rejects_fourth_card_and_allows_deselect() -> None:
    board = new_game(seed=8)
    _select_all(board, 0, 1, 2)
    res = select(board, 3)
    assert not res.ok
    assert res.error == "Selection is full."
    assert not board.is_selected(3)

    res2 = select(board, 1)
    assert res2.ok
    assert res2.events[0]["type"] == "CARD_DESELECTED"
    assert not board.is_selected(1)


def test_select_out_of_range() -> None:
    board = new_game(seed=8)
    assert not select(board, 12).ok
    assert not select(board, -1).ok
    assert board.selection.is_empty()


def test_expand_draws_three_and_counts() -> None:
    board = new_game(seed=21)
    for i in range(3):
        assert board.can_expand
        res = expand(board)
        assert res.ok
        assert len(board.cards) == 12 + 3 * (i + 1)
    assert board.times_expanded == 3
    assert not board.can_expand
    assert len(board.deck) == 81 - 21

    # the cap is the caller's gate; expand itself still works
    expand(board)
    assert len(board.cards) == 24
    assert board.times_expanded == 4


def test_expand_stops_early_on_small_deck() -> None:
    board = _board_with(_filler(12), deck_size=2)
    res = expand(board)
    assert res.ok
    assert len(board.cards) == 14
    assert board.deck_is_empty
    assert board.times_expanded == 1
    assert not board.can_expand

    expand(board)
    assert len(board.cards) == 14


def test_replace_with_empty_deck_shrinks_and_finishes() -> None:
    board = _board_with([SET_A, SET_B, SET_C], deck_size=0)
    _select_all(board, 0, 1, 2)

    res = resolve_selection(board)
    assert res.ok
    assert board.cards == []
    assert board.finished is True
    assert [e["type"] for e in res.events] == ["SET_FOUND", "GAME_FINISHED"]

    # terminal: further operations are no-ops
    assert not select(board, 0).ok
    assert not expand(board).ok
    assert not resolve_selection(board).ok
    assert not board.can_expand


def test_replace_with_short_deck_drops_unfilled_positions() -> None:
    tableau = [SET_A] + _filler(4) + [SET_B, SET_C]
    board = _board_with(tableau, deck_size=1)
    last = board.deck.cards[-1]
    _select_all(board, 0, 5, 6)

    resolve_selection(board)
    assert board.cards == [last] + tableau[1:5]
    assert not board.finished


def test_count_available_sets_is_read_only() -> None:
    board = _board_with([SET_A, SET_B, SET_C] + _filler(9))
    select(board, 4)
    before = snapshot(board)
    assert count_available_sets(board) >= 1
    assert board.count_available_sets() == count_available_sets(board)
    assert (0, 1, 2) in board.find_available_sets()
    assert snapshot(board) == before


def test_reset_builds_a_new_board() -> None:
    board = new_game(seed=4)
    _select_all(board, 0, 1)
    expand(board)
    board.sets_found = 5

    fresh = reset(board, seed=9)
    assert fresh is not board
    assert fresh.seed == 9
    assert len(fresh.cards) == 12
    assert fresh.sets_found == 0
    assert fresh.times_expanded == 0
    assert fresh.selection.is_empty()
    assert not fresh.finished
    # the discarded board is untouched
    assert board.times_expanded == 1
    assert board.sets_found == 5


def test_custom_config() -> None:
    board = new_game(seed=2, config=BoardConfig(tableau_size=9, max_expansions=1))
    assert len(board.cards) == 9
    expand(board)
    assert len(board.cards) == 12
    assert not board.can_expand


def test_expand_then_set_returns_to_tableau_size() -> None:
    board = _board_with([SET_A, SET_B, SET_C] + _filler(9))
    expand(board)
    assert len(board.cards) == 15
    _select_all(board, 0, 1, 2)

    resolve_selection(board)
    assert len(board.cards) == board.config.tableau_size
    assert board.times_expanded == 0


def test_tableau_tracks_expansions_while_deck_lasts() -> None:
    board = new_game(seed=5)
    while not board.deck_is_empty:
        assert len(board.cards) == board.config.tableau_size + 3 * board.times_expanded
        sets = board.find_available_sets()
        if sets:
            _select_all(board, *sets[0])
            assert resolve_selection(board).ok
        else:
            assert board.can_expand
            expand(board)


def test_set_after_short_expansion_still_shrinks_by_three() -> None:
    tableau = [SET_A, SET_B, SET_C] + _filler(9)
    board = _board_with(tableau, deck_size=1)
    extra = board.deck.cards[-1]
    expand(board)
    assert len(board.cards) == 13
    assert board.times_expanded == 1
    _select_all(board, 0, 1, 2)

    resolve_selection(board)
    assert len(board.cards) == 10
    assert board.times_expanded == 0
    # positions 10, 11 and 12 were the tail
    assert board.cards[:3] == [tableau[10], tableau[11], extra]
    assert board.cards[3:] == tableau[3:10]


def test_step_on_finished_board_is_rejected_and_not_logged() -> None:
    board = _board_with([SET_A, SET_B, SET_C], deck_size=0)
    for a in (SelectCardAction(0), SelectCardAction(1), SelectCardAction(2), ResolveSelectionAction()):
        assert step(board, a).ok
    assert board.finished
    logged = len(board.action_log)

    res = step(board, SelectCardAction(0))
    assert not res.ok
    assert res.error == "Game already finished."
    assert not step(board, ExpandAction()).ok
    assert len(board.action_log) == logged


def test_replay_stops_once_finished(monkeypatch: pytest.MonkeyPatch) -> None:
    small = _board_with([SET_A, SET_B, SET_C], deck_size=0)

    def _small_game(seed: int | None = None, config: BoardConfig | None = None) -> Board:
        return small

    monkeypatch.setattr(board_module, "new_game", _small_game)
    actions = [
        SelectCardAction(0),
        SelectCardAction(1),
        SelectCardAction(2),
        ResolveSelectionAction(),
        SelectCardAction(0),
        ExpandAction(),
    ]
    board = replay(1, actions)
    assert board.finished
    assert board.action_log == actions[:4]
    assert board.times_expanded == 0
