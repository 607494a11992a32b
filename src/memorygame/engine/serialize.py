from __future__ import annotations


from .actions import Action, RestartAction, SelectCardAction, SetMatchesAction, TickAction
from .session import GameSession
from .types import Card, GuessSlot


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "card_id": a.card_id}
    if isinstance(a, RestartAction):
        return {"type": "restart"}
    if isinstance(a, SetMatchesAction):
        return {"type": "set_matches", "matches": a.matches}
    if isinstance(a, TickAction):
        return {"type": "tick", "dt": a.dt}
    # should be unreachable
    return {"type": "unknown"}


def _card_to_dict(c: Card) -> dict[str, object]:
    return {
        "id": c.id,
        "variant": c.variant,
        "face_up": c.face_up,
        "interactable": c.interactable,
    }


def _slot_to_dict(s: GuessSlot | None) -> dict[str, object] | None:
    if s is None:
        return None
    return {"card_id": s.card_id, "variant": s.variant}


def snapshot(session: GameSession) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current session."""
    return {
        "seed": session.seed,
        "phase": session.phase,
        "cards_to_spawn": session.cards_to_spawn,
        "total_matches": session.total_matches,
        "guess_count": session.guess_count,
        "correct_count": session.correct_count,
        "guesses": [_slot_to_dict(session.guess1), _slot_to_dict(session.guess2)],
        "cards": [_card_to_dict(c) for c in session.cards],
        "action_log": [action_to_dict(a) for a in session.action_log],
    }
