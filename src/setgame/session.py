from __future__ import annotations

from dataclasses import dataclass, field

from setgame.engine.actions import ExpandAction, ResolveSelectionAction, SelectCardAction
from setgame.engine.board import Board, StepResult, new_game, reset, step
from setgame.services.config import GameSettings
from setgame.services.telemetry import TelemetryService


@dataclass
class GameSession:
    """Owns the live board for one player and drives it from UI input.

    The board itself is synchronous; this class adds the presentation delay
    between the third pick and the resolution, counted down by `update(dt)`.
    """

    settings: GameSettings = field(default_factory=GameSettings)
    telemetry: TelemetryService | None = None
    seed: int | None = None
    board: Board = field(init=False)
    pending_resolve: float | None = field(default=None, init=False)
    message: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.board = new_game(seed=self.seed, config=self.settings.board)
        self._emit("game_started", {"seed": self.board.seed})

    def _emit(self, event_type: str, payload: dict[str, object]) -> None:
        if self.telemetry is not None:
            self.telemetry.log(event_type, payload)

    @property
    def busy(self) -> bool:
        return self.pending_resolve is not None

    def click(self, position: int) -> StepResult | None:
        if self.busy or self.board.finished:
            return None
        res = step(self.board, SelectCardAction(position=position))
        if not res.ok:
            return res
        self.message = ""
        if self.board.selection.is_full():
            self.pending_resolve = self.settings.client.resolve_delay
        return res

    def expand(self) -> StepResult | None:
        if self.busy or not self.board.can_expand:
            return None
        res = step(self.board, ExpandAction())
        if res.ok:
            self._emit("tableau_expanded", {"times_expanded": self.board.times_expanded})
        return res

    def reset(self) -> None:
        old_seed = self.board.seed
        self.board = reset(self.board)
        self.pending_resolve = None
        self.message = ""
        self._emit("game_reset", {"previous_seed": old_seed, "seed": self.board.seed})

    def update(self, dt: float) -> StepResult | None:
        if self.pending_resolve is None:
            return None
        self.pending_resolve -= dt
        if self.pending_resolve > 0:
            return None
        self.pending_resolve = None
        return self._resolve()

    def _resolve(self) -> StepResult:
        res = step(self.board, ResolveSelectionAction())
        for ev in res.events:
            if ev.get("type") == "SET_FOUND":
                self.message = "Set!"
                self._emit("set_found", {"sets_found": self.board.sets_found, "cards": ev.get("cards")})
            elif ev.get("type") == "NOT_A_SET":
                self.message = "Not a set."
            elif ev.get("type") == "GAME_FINISHED":
                self._emit("game_finished", {"sets_found": self.board.sets_found})
        return res
