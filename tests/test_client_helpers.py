from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from memorymatch.client.pygame_app.scenes.boot import boot_error_color  # noqa: E402
from memorymatch.paths import get_paths  # noqa: E402
from memorymatch.services.content import ContentService  # noqa: E402


def test_boot_error_uses_theme_error_color() -> None:
    paths = get_paths()
    theme = ContentService(paths.data_dir, paths.schema_dir).load_theme()
    assert theme.error == (0xEF, 0x44, 0x44)
    assert boot_error_color(theme) == theme.error


def test_boot_error_color_without_theme() -> None:
    assert boot_error_color(None) == (240, 80, 80)
