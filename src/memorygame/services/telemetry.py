from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from memorygame.engine.session import GameSession


@dataclass
class TelemetryService:
    path: Path
    enabled: bool = True

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if not self.enabled:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_session(self, event_type: str, session: GameSession) -> None:
        self.log(
            event_type,
            {
                "seed": session.seed,
                "cards": len(session.cards),
                "guesses": session.guess_count,
                "matches": session.correct_count,
                "total_matches": session.total_matches,
            },
        )
