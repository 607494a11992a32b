from __future__ import annotations

import json
from pathlib import Path

import pytest

from memorygame.paths import get_paths
from memorygame.services.content import ContentError, ContentService


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_shipped_config_matches_defaults() -> None:
    paths = get_paths()
    cfg = ContentService(paths.data_dir, paths.schema_dir).load_session_config()
    assert cfg.cards_to_spawn == 16
    assert cfg.card_check_delay == 1.0
    assert cfg.card_unflip_delay == 0.75
    assert cfg.exclude_last_variant


def _write(data_dir: Path, name: str, payload: object) -> None:
    (data_dir / name).write_text(json.dumps(payload), encoding="utf-8")


def test_odd_card_count_rejected(tmp_path: Path) -> None:
    paths = get_paths()
    _write(tmp_path, "game.json", {"cards_to_spawn": 5, "card_check_delay": 1.0, "card_unflip_delay": 0.5})
    content = ContentService(tmp_path, paths.schema_dir)
    with pytest.raises(ContentError, match="cards_to_spawn"):
        content.load_session_config()


def test_too_few_variants_rejected(tmp_path: Path) -> None:
    paths = get_paths()
    _write(tmp_path, "game.json", {"cards_to_spawn": 4, "card_check_delay": 1.0, "card_unflip_delay": 0.5})
    _write(
        tmp_path,
        "variants.json",
        {"variants": [{"id": i, "name": f"v{i}", "symbol": "x", "color": [1, 2, 3]} for i in range(4)]},
    )
    content = ContentService(tmp_path, paths.schema_dir)
    assert len(content.load_variants()) == 4
    with pytest.raises(ContentError, match="usable variants"):
        content.validate_all()


def test_missing_file_is_content_error(tmp_path: Path) -> None:
    paths = get_paths()
    content = ContentService(tmp_path, paths.schema_dir)
    with pytest.raises(ContentError, match="Missing content file"):
        content.load_variants()
