from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from memorygame.engine.session import ConfigurationError, SessionConfig, eligible_variant_count, validate_card_count
from memorygame.engine.types import Color, VariantDefinition, VariantPool


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.absolute_path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_number(obj: Mapping[str, object], key: str) -> float:
    v = obj.get(key)
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        raise ContentError(f"Expected number for {key}")
    return float(v)


def _parse_color(raw: object) -> Color:
    if not isinstance(raw, list) or len(raw) != 3 or not all(isinstance(c, int) for c in raw):
        raise ContentError("color must be a list of 3 ints")
    return (raw[0], raw[1], raw[2])


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_variants(self) -> VariantPool:
        path = self._data_dir / "variants.json"
        schema = _load_schema(self._schema_dir / "variants.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))

        if not isinstance(raw, dict):
            raise ContentError("variants.json must be an object")
        raw_variants = raw.get("variants")
        if not isinstance(raw_variants, list):
            raise ContentError("variants.json.variants must be a list")

        variants: list[VariantDefinition] = []
        for i, item in enumerate(raw_variants):
            if not isinstance(item, dict):
                continue
            vid = _require_int(item, "id")
            # Cards carry the variant id and the pool is indexed by it.
            if vid != i:
                raise ContentError(f"Variant ids must be 0..n-1 in order; entry {i} has id {vid}")
            variants.append(
                VariantDefinition(
                    id=vid,
                    name=_require_str(item, "name"),
                    symbol=_require_str(item, "symbol"),
                    color=_parse_color(item.get("color")),
                )
            )
        return VariantPool(variants=tuple(variants))

    def load_session_config(self) -> SessionConfig:
        path = self._data_dir / "game.json"
        schema = _load_schema(self._schema_dir / "game.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("game.json must be an object")

        defaults = SessionConfig()
        min_cards = raw.get("min_cards", defaults.min_cards)
        max_cards = raw.get("max_cards", defaults.max_cards)
        if not isinstance(min_cards, int) or not isinstance(max_cards, int) or min_cards > max_cards:
            raise ContentError("game.json: min_cards must not exceed max_cards")

        cfg = SessionConfig(
            cards_to_spawn=_require_int(raw, "cards_to_spawn"),
            card_check_delay=_require_number(raw, "card_check_delay"),
            card_unflip_delay=_require_number(raw, "card_unflip_delay"),
            min_cards=min_cards,
            max_cards=max_cards,
            exclude_last_variant=bool(raw.get("exclude_last_variant", defaults.exclude_last_variant)),
        )
        try:
            validate_card_count(cfg.cards_to_spawn, cfg)
        except ConfigurationError as e:
            raise ContentError(f"game.json: {e}") from e
        return cfg

    def validate_all(self) -> None:
        # Load is validation (schema + parse), plus the cross-file pool check
        pool = self.load_variants()
        cfg = self.load_session_config()
        eligible = eligible_variant_count(len(pool), cfg)
        if eligible < cfg.max_cards // 2:
            raise ContentError(
                f"variants.json: {cfg.max_cards // 2} pairs need {cfg.max_cards // 2} usable variants, "
                f"found {eligible}"
            )
