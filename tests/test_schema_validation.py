from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from memorymatch.engine.game import GameConfig
from memorymatch.paths import get_paths
from memorymatch.services.content import ContentError, ContentService, parse_hex_color
from memorymatch.services.telemetry import TelemetryService


def _copy_data(tmp_path: Path) -> ContentService:
    paths = get_paths()
    data_dir = tmp_path / "data"
    shutil.copytree(paths.data_dir, data_dir)
    return ContentService(data_dir, data_dir / "schemas")


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_shipped_game_config_matches_defaults() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    assert content.load_game_config() == GameConfig()


def test_theme_colors_parsed() -> None:
    paths = get_paths()
    theme = ContentService(paths.data_dir, paths.schema_dir).load_theme()
    assert theme.primary == (0x25, 0x63, 0xEB)
    assert theme.background == (0xF9, 0xFA, 0xFB)


def test_wrong_face_count_fails_schema(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    game_path = tmp_path / "data" / "game.json"
    raw = json.loads(game_path.read_text(encoding="utf-8"))
    raw["faces"] = raw["faces"][:7]
    game_path.write_text(json.dumps(raw), encoding="utf-8")

    with pytest.raises(ContentError, match="Schema validation failed"):
        content.load_game_config()


def test_duplicate_faces_fail_schema(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    game_path = tmp_path / "data" / "game.json"
    raw = json.loads(game_path.read_text(encoding="utf-8"))
    raw["faces"][1] = raw["faces"][0]
    game_path.write_text(json.dumps(raw), encoding="utf-8")

    with pytest.raises(ContentError):
        content.load_game_config()


def test_missing_and_broken_files(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    (tmp_path / "data" / "theme.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError, match="Invalid JSON"):
        content.load_theme()

    (tmp_path / "data" / "game.json").unlink()
    with pytest.raises(ContentError, match="Missing content file"):
        content.load_game_config()


def test_parse_hex_color_rejects_garbage() -> None:
    assert parse_hex_color("#000000") == (0, 0, 0)
    with pytest.raises(ContentError):
        parse_hex_color("blue")


def test_telemetry_appends_json_lines(tmp_path: Path) -> None:
    path = tmp_path / "userdata" / "telemetry.jsonl"
    telemetry = TelemetryService(path)
    telemetry.log("game_won", {"moves": 12, "elapsed_seconds": 40})
    telemetry.log("restart", {"won": True})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    rec = json.loads(lines[0])
    assert rec["type"] == "game_won"
    assert rec["payload"] == {"moves": 12, "elapsed_seconds": 40}
    assert "ts" in rec

    TelemetryService(tmp_path / "off.jsonl", enabled=False).log("boot", {})
    assert not (tmp_path / "off.jsonl").exists()
