from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, TypeVar

from .actions import Action, RestartAction, SelectCardAction, SetMatchesAction, TickAction
from .ports import NullPresenter, Presenter
from .timers import Scheduler, TimerHandle
from .types import Card, GuessSlot, GuessState, Phase, VariantPool

Event = dict[str, object]
T = TypeVar("T")

INVALID_SELECTION = "Invalid selection."


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class SessionConfig:
    cards_to_spawn: int = 16
    card_check_delay: float = 1.0
    card_unflip_delay: float = 0.75
    min_cards: int = 2
    max_cards: int = 16
    # Pairs are drawn from variants [0, len - 1): the last variant in the pool
    # is never dealt unless this is turned off.
    exclude_last_variant: bool = True


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


def validate_card_count(count: int, config: SessionConfig) -> None:
    if count < 2 or count % 2 != 0:
        raise ConfigurationError(f"Card count must be an even number >= 2, got {count}.")
    if not config.min_cards <= count <= config.max_cards:
        raise ConfigurationError(
            f"Card count must be between {config.min_cards} and {config.max_cards}, got {count}."
        )


def eligible_variant_count(pool_size: int, config: SessionConfig) -> int:
    if config.exclude_last_variant:
        return max(0, pool_size - 1)
    return pool_size


def reposition_shuffle(rng: random.Random, items: Sequence[T]) -> list[T]:
    """Move every item, in original order, to a random position.

    Each move is a remove-and-insert, so the result is always a permutation
    of `items`, but not a uniformly distributed one.
    """
    order = list(items)
    for item in list(items):
        target = rng.randrange(len(order))
        order.remove(item)
        order.insert(target, item)
    return order


class GameSession:
    """Controller for one memory-game screen.

    Mutates itself in-place in response to commands and scheduler ticks, and
    reports every visible change through `presenter`. Deterministic for a
    given (pool, config, seed, command sequence).
    """

    def __init__(
        self,
        pool: VariantPool,
        config: SessionConfig | None = None,
        seed: int = 0,
        presenter: Presenter | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.pool = pool
        self.config = config or SessionConfig()
        self.seed = seed
        self.rng = random.Random(seed)
        self.presenter: Presenter = presenter or NullPresenter()
        self.scheduler = scheduler or Scheduler()

        self.cards_to_spawn = self.config.cards_to_spawn
        self.cards: list[Card] = []
        self.total_matches = 0
        self.guess_count = 0
        self.correct_count = 0
        self.guess1: GuessSlot | None = None
        self.guess2: GuessSlot | None = None
        self.phase: Phase = "playing"

        self.action_log: list[Action] = []
        self.event_log: list[Event] = []

        self._by_id: dict[int, Card] = {}
        self._ids = itertools.count()
        self._timers: list[TimerHandle] = []

    # -- queries -------------------------------------------------------

    @property
    def guess_state(self) -> GuessState:
        if self.guess1 is None:
            return "empty"
        if self.guess2 is None:
            return "guess1_pending"
        return "guess2_pending"

    @property
    def matches_to_spawn(self) -> int:
        return self.cards_to_spawn // 2

    def get_card(self, card_id: int) -> Card | None:
        return self._by_id.get(card_id)

    def index_of(self, card_id: int) -> int:
        card = self._by_id.get(card_id)
        if card is None:
            return -1
        return self.cards.index(card)

    # -- scheduling ----------------------------------------------------

    def _schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        self._timers = [t for t in self._timers if t.active]
        handle = self.scheduler.call_later(delay, callback)
        self._timers.append(handle)
        return handle

    def _cancel_pending(self) -> int:
        cancelled = 0
        for t in self._timers:
            if t.active:
                t.cancel()
                cancelled += 1
        self._timers = []
        return cancelled

    def tick(self, dt: float) -> StepResult:
        before = len(self.event_log)
        self.scheduler.advance(dt)
        return StepResult(ok=True, events=self.event_log[before:])

    # -- lifecycle -----------------------------------------------------

    def start(self) -> StepResult:
        before = len(self.event_log)
        self.spawn_cards()
        self.presenter.hide_game_over()
        self.presenter.set_matches(self.matches_to_spawn)
        return StepResult(ok=True, events=self.event_log[before:])

    def _require_variants(self, pairs: int) -> int:
        eligible = eligible_variant_count(len(self.pool), self.config)
        if eligible < pairs:
            raise ConfigurationError(
                f"Not enough card variants: {pairs} pairs need {pairs} variants, only {eligible} available."
            )
        return eligible

    def spawn_cards(self) -> list[Card]:
        validate_card_count(self.cards_to_spawn, self.config)
        pairs = self.cards_to_spawn // 2
        eligible = self._require_variants(pairs)

        created: list[Card] = []
        for variant in self.rng.sample(range(eligible), pairs):
            for _ in range(2):
                created.append(Card(id=next(self._ids), variant=variant))

        self.cards = reposition_shuffle(self.rng, created)
        self._by_id = {c.id: c for c in self.cards}
        self.total_matches = len(self.cards) // 2

        self.presenter.cards_spawned(list(self.cards))
        self.presenter.play_sound("shuffle")
        self.event_log.append(
            {
                "type": "CARDS_SPAWNED",
                "count": len(self.cards),
                "layout": [[c.id, c.variant] for c in self.cards],
            }
        )
        return self.cards

    def _game_over(self) -> None:
        self.phase = "game_over"
        self.presenter.show_game_over(self.guess_count)
        self.event_log.append({"type": "GAME_OVER", "guesses": self.guess_count, "matches": self.correct_count})

    def restart_game(self) -> StepResult:
        """Tear the current session down and deal a fresh one.

        Cancels any pending match check or unflip wait first, so a restart
        issued mid-guess can never resolve a guess against the new layout.
        """
        before = len(self.event_log)
        cancelled = self._cancel_pending()
        self.presenter.hide_game_over()
        self.phase = "restarting"
        self.event_log.append({"type": "RESTART_REQUESTED", "cancelled": cancelled})

        for card in self.cards:
            card.face_up = False
            self.presenter.unflip_card(card)
            self.presenter.play_sound("unflip")

        self._schedule(self.config.card_unflip_delay, self._destroy_cards)
        return StepResult(ok=True, events=self.event_log[before:])

    def _destroy_cards(self) -> None:
        destroyed = self.cards
        self.cards = []
        self._by_id = {}
        self.guess_count = 0
        self.correct_count = 0
        self.total_matches = 0
        self.guess1 = None
        self.guess2 = None
        self.presenter.cards_destroyed(destroyed)
        self.event_log.append({"type": "CARDS_DESTROYED", "count": len(destroyed)})
        # Respawn on the next tick so the presenter has dropped the old cards.
        self._schedule(0.0, self._respawn)

    def _respawn(self) -> None:
        self.spawn_cards()
        self.phase = "playing"

    def set_num_cards_to_spawn(self, matches: int) -> StepResult:
        count = matches * 2
        validate_card_count(count, self.config)
        # Checked here so the respawn at the end of a restart cannot fail.
        self._require_variants(matches)
        self.cards_to_spawn = count
        self.presenter.set_matches(matches)
        event: Event = {"type": "SPAWN_COUNT_CHANGED", "cards_to_spawn": count}
        self.event_log.append(event)
        return StepResult(ok=True, events=[event])

    # -- guessing ------------------------------------------------------

    def _reject(self, msg: str) -> StepResult:
        return StepResult(ok=False, events=[], error=msg)

    def flip_card(self, card_id: int) -> StepResult:
        card = self._by_id.get(card_id)
        if card is None:
            return self._reject(INVALID_SELECTION)
        if self.phase != "playing":
            return self._reject("Game is not in progress.")
        if self.guess2 is not None:
            return self._reject("Wait for the current guess to resolve.")
        if self.guess1 is not None and self.guess1.card_id == card.id:
            return self._reject("Card already selected.")
        if not card.interactable:
            return self._reject("Card can't be selected.")

        before = len(self.event_log)
        slot = GuessSlot(card_id=card.id, variant=card.variant)
        if self.guess1 is None:
            self.guess1 = slot
            self._reveal(card, guess=1)
        else:
            self.guess2 = slot
            self._reveal(card, guess=2)
            self.guess_count += 1
            self._schedule(self.config.card_check_delay, self._check_for_match)
        return StepResult(ok=True, events=self.event_log[before:])

    def _reveal(self, card: Card, guess: int) -> None:
        card.interactable = False
        card.face_up = True
        self.presenter.set_interactable(card, False)
        self.presenter.flip_card(card)
        self.presenter.play_sound("flip")
        self.event_log.append({"type": "CARD_FLIPPED", "card_id": card.id, "variant": card.variant, "guess": guess})

    def _check_for_match(self) -> None:
        g1, g2 = self.guess1, self.guess2
        assert g1 is not None and g2 is not None

        if g1.variant == g2.variant:
            self.correct_count += 1
            self.event_log.append(
                {"type": "MATCH_FOUND", "variant": g1.variant, "card_ids": [g1.card_id, g2.card_id]}
            )
            if self.correct_count == self.total_matches:
                self._game_over()
            self._clear_guesses()
            return

        for cid in (g1.card_id, g2.card_id):
            card = self._by_id[cid]
            card.interactable = True
            card.face_up = False
            self.presenter.set_interactable(card, True)
            self.presenter.unflip_card(card)
        # Two cards turning over, two sounds.
        self.presenter.play_sound("unflip")
        self.presenter.play_sound("unflip")
        self.event_log.append({"type": "MATCH_MISSED", "card_ids": [g1.card_id, g2.card_id]})
        self._schedule(self.config.card_unflip_delay, self._clear_guesses)

    def _clear_guesses(self) -> None:
        self.guess1 = None
        self.guess2 = None
        self.event_log.append({"type": "GUESSES_CLEARED"})


def step(session: GameSession, action: Action) -> StepResult:
    """Apply a single command to the session."""
    session.action_log.append(action)

    if isinstance(action, SelectCardAction):
        return session.flip_card(action.card_id)
    if isinstance(action, RestartAction):
        return session.restart_game()
    if isinstance(action, SetMatchesAction):
        try:
            return session.set_num_cards_to_spawn(action.matches)
        except ConfigurationError as e:
            return StepResult(ok=False, events=[], error=str(e))
    if isinstance(action, TickAction):
        return session.tick(action.dt)
    return StepResult(ok=False, events=[], error="Unknown action.")


def new_session(
    pool: VariantPool,
    seed: int,
    config: SessionConfig | None = None,
    presenter: Presenter | None = None,
) -> GameSession:
    session = GameSession(pool, config=config, seed=seed, presenter=presenter)
    session.start()
    return session


def replay(
    pool: VariantPool,
    seed: int,
    actions: Iterable[Action],
    config: SessionConfig | None = None,
) -> GameSession:
    session = new_session(pool, seed=seed, config=config)
    for a in actions:
        step(session, a)
    return session
