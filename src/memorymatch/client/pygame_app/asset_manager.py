from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

# Tried in order; pygame falls back to its default font when none is installed.
EMOJI_FONTS = "notocoloremoji,segoeuiemoji,applecoloremoji,symbola"


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    face: pygame.font.Font


class AssetManager:
    def __init__(self) -> None:
        self._glyphs: dict[tuple[str, tuple[int, int, int]], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 26),
            small=pygame.font.SysFont(None, 20),
            big=pygame.font.SysFont(None, 44),
            face=pygame.font.SysFont(EMOJI_FONTS, 48),
        )

    def face_glyph(self, face: str, color: tuple[int, int, int]) -> pygame.Surface:
        key = (face, color)
        if key not in self._glyphs:
            self._glyphs[key] = self.fonts.face.render(face, True, color)
        return self._glyphs[key]
