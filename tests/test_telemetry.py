from __future__ import annotations

import json
from pathlib import Path

from memorygame.engine.session import SessionConfig, new_session
from memorygame.engine.types import VariantDefinition, VariantPool
from memorygame.services.telemetry import TelemetryService


def _pool() -> VariantPool:
    return VariantPool(
        variants=tuple(VariantDefinition(id=i, name=f"v{i}", symbol=str(i), color=(i, i, i)) for i in range(5))
    )


def _read(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_log_session_appends_summary(tmp_path: Path) -> None:
    path = tmp_path / "userdata" / "telemetry.jsonl"
    telemetry = TelemetryService(path)
    session = new_session(_pool(), seed=11, config=SessionConfig(cards_to_spawn=6))

    telemetry.log_session("session_started", session)
    telemetry.log("boot", {"ok": True})

    records = _read(path)
    assert [r["type"] for r in records] == ["session_started", "boot"]
    assert records[0]["payload"] == {
        "seed": 11,
        "cards": 6,
        "guesses": 0,
        "matches": 0,
        "total_matches": 3,
    }
    assert "ts" in records[0]


def test_disabled_telemetry_writes_nothing(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    telemetry = TelemetryService(path, enabled=False)
    session = new_session(_pool(), seed=1, config=SessionConfig(cards_to_spawn=4))

    telemetry.log_session("game_over", session)
    telemetry.log("boot", {"ok": True})
    assert not path.exists()
