from __future__ import annotations

from memorygame.engine.actions import RestartAction, SelectCardAction, SetMatchesAction, TickAction
from memorygame.engine.serialize import snapshot
from memorygame.engine.session import GameSession, SessionConfig, new_session, replay, step
from memorygame.paths import get_paths
from memorygame.services.content import ContentService


def _load_pool():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_variants()


def _choose_action(session: GameSession) -> object:
    if session.phase == "game_over":
        return RestartAction()
    if session.guess2 is not None or session.phase == "restarting":
        return TickAction(dt=1.0)
    open_cards = [c for c in session.cards if c.interactable]
    if not open_cards:
        return TickAction(dt=1.0)
    if session.guess1 is None:
        return SelectCardAction(card_id=open_cards[0].id)

    # deterministic "player": finds the partner, except every third guess
    g1 = session.guess1
    partner = [c for c in open_cards if c.variant == g1.variant and c.id != g1.card_id]
    others = [c for c in open_cards if c.variant != g1.variant]
    if session.guess_count % 3 == 2 and others:
        return SelectCardAction(card_id=others[0].id)
    return SelectCardAction(card_id=partner[0].id)


def test_same_seed_same_layout() -> None:
    pool = _load_pool()
    cfg = SessionConfig(cards_to_spawn=12)
    a = new_session(pool, seed=2024, config=cfg)
    b = new_session(pool, seed=2024, config=cfg)
    assert [(c.id, c.variant) for c in a.cards] == [(c.id, c.variant) for c in b.cards]


def test_session_replay() -> None:
    pool = _load_pool()
    cfg = SessionConfig(cards_to_spawn=8)
    seed = 424242
    session = new_session(pool, seed=seed, config=cfg)

    actions = [SetMatchesAction(matches=3)]
    step(session, actions[0])
    for _ in range(120):
        a = _choose_action(session)
        actions.append(a)
        step(session, a)

    snap1 = snapshot(session)
    snap2 = snapshot(replay(pool, seed=seed, actions=actions, config=cfg))
    assert snap1 == snap2
    assert any(e["type"] == "GAME_OVER" for e in session.event_log)


def test_set_matches_action_reports_errors() -> None:
    pool = _load_pool()
    session = new_session(pool, seed=1, config=SessionConfig(cards_to_spawn=4))
    res = step(session, SetMatchesAction(matches=20))
    assert not res.ok
    assert res.error is not None
    assert session.cards_to_spawn == 4
