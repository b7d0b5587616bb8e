from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from memorymatch.engine.game import GameConfig


class ContentError(RuntimeError):
    pass


Color = tuple[int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str, default: int) -> int:
    v = obj.get(key, default)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def parse_hex_color(value: str) -> Color:
    if not _HEX_COLOR.match(value):
        raise ContentError(f"Invalid color: {value!r}")
    return (int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16))


@dataclass(frozen=True)
class Theme:
    primary: Color
    secondary: Color
    success: Color
    error: Color
    background: Color
    surface: Color
    text: Color


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        schema = _load_json(self._schema_dir / f"{name}.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_game_config(self) -> GameConfig:
        raw = self._load_validated("game")
        faces_raw = raw.get("faces")
        if not isinstance(faces_raw, list):
            raise ContentError("game.json.faces must be a list")
        faces = tuple(f for f in faces_raw if isinstance(f, str))
        defaults = GameConfig()
        return GameConfig(
            faces=faces,
            mismatch_delay_ms=_require_int(raw, "mismatch_delay_ms", defaults.mismatch_delay_ms),
            tick_interval_ms=_require_int(raw, "tick_interval_ms", defaults.tick_interval_ms),
        )

    def load_theme(self) -> Theme:
        raw = self._load_validated("theme")
        colors: dict[str, Color] = {}
        for key in ("primary", "secondary", "success", "error", "background", "surface", "text"):
            v = raw.get(key)
            if not isinstance(v, str):
                raise ContentError(f"Expected color string for {key}")
            colors[key] = parse_hex_color(v)
        return Theme(**colors)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_game_config()
        _ = self.load_theme()
