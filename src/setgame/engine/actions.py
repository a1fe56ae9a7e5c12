from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectCardAction:
    position: int


@dataclass(frozen=True)
class ExpandAction:
    pass


@dataclass(frozen=True)
class ResolveSelectionAction:
    pass


Action = SelectCardAction | ExpandAction | ResolveSelectionAction
