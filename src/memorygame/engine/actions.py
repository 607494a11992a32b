from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectCardAction:
    card_id: int


@dataclass(frozen=True)
class RestartAction:
    pass


@dataclass(frozen=True)
class SetMatchesAction:
    matches: int


@dataclass(frozen=True)
class TickAction:
    dt: float


Action = SelectCardAction | RestartAction | SetMatchesAction | TickAction
