from __future__ import annotations

import random
import traceback

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.game import MemoryGame
from memorymatch.services.content import Theme

from ..app import GameContext, SceneTransition
from ..ui import Button, Color, draw_text
from .board import BoardScene

_DEFAULT_ERROR = (240, 80, 80)


def boot_error_color(theme: Theme | None) -> Color:
    return theme.error if theme is not None else _DEFAULT_ERROR


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.theme = self.ctx.content.load_theme()
            self.ctx.content.validate_all()
            config = self.ctx.content.load_game_config()

            seed = self.ctx.seed if self.ctx.seed is not None else random.randrange(1, 2**31 - 1)
            self.ctx.game = MemoryGame(self.ctx.scheduler, random.Random(seed), config)

            self.ctx.telemetry.log("boot", {"ok": True, "seed": seed})
            return SceneTransition(BoardScene(self.ctx, self.ctx.game))
        except Exception as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            # Offer quit button
            h = self.ctx.screen.get_height()
            self._quit_button = Button(
                rect=pygame.Rect(20, h - 64, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        draw_text(screen, self.ctx.assets.fonts.big, "Memory Match", (20, 20))

        font2 = self.ctx.assets.fonts.ui
        if self._error is None:
            draw_text(screen, font2, "Loading... validating game data.", (20, 80))
        else:
            draw_text(screen, font2, "BOOT ERROR", (20, 80), color=boot_error_color(self.ctx.theme))
            y = 120
            for line in self._error.splitlines()[:28]:
                draw_text(screen, self.ctx.assets.fonts.small, line[:100], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, font2)
