from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Phase = Literal["playing", "game_over", "restarting"]
GuessState = Literal["empty", "guess1_pending", "guess2_pending"]
SoundCue = Literal["flip", "unflip", "shuffle"]

Color = tuple[int, int, int]


@dataclass(frozen=True)
class VariantDefinition:
    id: int
    name: str
    symbol: str
    color: Color


@dataclass(frozen=True)
class VariantPool:
    """Immutable set of card variants a session can draw pairs from."""

    variants: tuple[VariantDefinition, ...]

    def get(self, variant: int) -> VariantDefinition:
        return self.variants[variant]

    def __len__(self) -> int:
        return len(self.variants)

    def all_ids(self) -> Sequence[int]:
        return [v.id for v in self.variants]


@dataclass
class Card:
    id: int
    variant: int
    face_up: bool = False
    interactable: bool = True


@dataclass(frozen=True)
class GuessSlot:
    card_id: int
    variant: int
