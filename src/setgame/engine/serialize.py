from __future__ import annotations

from .actions import Action, ExpandAction, ResolveSelectionAction, SelectCardAction
from .board import Board


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "position": a.position}
    if isinstance(a, ExpandAction):
        return {"type": "expand"}
    if isinstance(a, ResolveSelectionAction):
        return {"type": "resolve"}
    # should be unreachable
    return {"type": "unknown"}


def snapshot(board: Board) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current board."""
    return {
        "seed": board.seed,
        "cards": [c.code() for c in board.cards],
        "deck": [c.code() for c in board.deck.cards],
        "selection": list(board.selection.slots),
        "sets_found": board.sets_found,
        "times_expanded": board.times_expanded,
        "finished": board.finished,
        "action_log": [action_to_dict(a) for a in board.action_log],
    }
