from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .types import Card, SoundCue


class Presenter(Protocol):
    """Everything the session needs from whatever draws it."""

    def cards_spawned(self, cards: Sequence[Card]) -> None: ...

    def cards_destroyed(self, cards: Sequence[Card]) -> None: ...

    def flip_card(self, card: Card) -> None: ...

    def unflip_card(self, card: Card) -> None: ...

    def set_interactable(self, card: Card, value: bool) -> None: ...

    def play_sound(self, cue: SoundCue) -> None: ...

    def show_game_over(self, guesses: int) -> None: ...

    def hide_game_over(self) -> None: ...

    def set_matches(self, matches: int) -> None: ...


class NullPresenter:
    """Headless presenter used for replays and tests that only inspect state."""

    def cards_spawned(self, cards: Sequence[Card]) -> None:
        pass

    def cards_destroyed(self, cards: Sequence[Card]) -> None:
        pass

    def flip_card(self, card: Card) -> None:
        pass

    def unflip_card(self, card: Card) -> None:
        pass

    def set_interactable(self, card: Card, value: bool) -> None:
        pass

    def play_sound(self, cue: SoundCue) -> None:
        pass

    def show_game_over(self, guesses: int) -> None:
        pass

    def hide_game_over(self) -> None:
        pass

    def set_matches(self, matches: int) -> None:
        pass
