from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.game import MemoryGame, StepResult
from memorymatch.engine.types import GameSnapshot, TileView

from ..app import GameContext, SceneTransition
from ..ui import Button, draw_text, draw_text_centered

GRID_COLUMNS = 4
TILE_SIZE = 120
TILE_GAP = 14
GRID_TOP = 150

_FALLBACK_BG = (249, 250, 251)
_FALLBACK_TEXT = (17, 24, 39)


class BoardScene:
    def __init__(self, ctx: GameContext, game: MemoryGame) -> None:
        self.ctx = ctx
        self.game = game
        self._snap: GameSnapshot = game.snapshot()
        self._carry_ms = 0.0
        self._won_logged = False
        game.add_listener(self._on_snapshot)

        theme = ctx.theme
        primary = theme.primary if theme is not None else (37, 99, 235)
        secondary = theme.secondary if theme is not None else (245, 158, 11)
        w = ctx.screen.get_width()

        self.btn_restart = Button(
            rect=pygame.Rect(w - 180, 70, 150, 44),
            text="Restart",
            on_click=self._on_restart,
            color=primary,
        )
        self.btn_play_again = Button(
            rect=pygame.Rect(w // 2 - 110, 470, 220, 56),
            text="Play Again",
            on_click=self._on_restart,
            color=secondary,
        )

    def _on_snapshot(self, snap: GameSnapshot) -> None:
        self._snap = snap

    def _on_restart(self) -> None:
        before = self._snap
        self.game.restart()
        self._won_logged = False
        self.ctx.telemetry.log(
            "restart",
            {"moves": before.moves, "elapsed_seconds": before.elapsed_seconds, "won": before.won},
        )

    def _log_result(self, res: StepResult) -> None:
        for ev in res.events:
            kind = ev.get("type")
            if kind == "GAME_STARTED":
                self.ctx.telemetry.log("session_started", {})
            elif kind in ("PAIR_MATCHED", "PAIR_MISMATCHED"):
                self.ctx.telemetry.log(
                    "pair_evaluated",
                    {"matched": kind == "PAIR_MATCHED", "moves": ev.get("moves", 0)},
                )

    # -- layout ------------------------------------------------------------

    def _grid_origin(self) -> tuple[int, int]:
        grid_w = GRID_COLUMNS * TILE_SIZE + (GRID_COLUMNS - 1) * TILE_GAP
        return (self.ctx.screen.get_width() - grid_w) // 2, GRID_TOP

    def _tile_rect(self, index: int) -> pygame.Rect:
        x0, y0 = self._grid_origin()
        row, col = divmod(index, GRID_COLUMNS)
        return pygame.Rect(
            x0 + col * (TILE_SIZE + TILE_GAP),
            y0 + row * (TILE_SIZE + TILE_GAP),
            TILE_SIZE,
            TILE_SIZE,
        )

    def _hit_test_tile(self, pos: tuple[int, int]) -> TileView | None:
        for i, tile in enumerate(self._snap.tiles):
            if self._tile_rect(i).collidepoint(pos):
                return tile
        return None

    @staticmethod
    def _tile_disabled(snap: GameSnapshot, tile: TileView) -> bool:
        return snap.locked and not tile.is_revealed

    # -- scene protocol ------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._snap.won:
            self.btn_play_again.handle_event(event)
            return

        if self.btn_restart.handle_event(event):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            tile = self._hit_test_tile(event.pos)
            if tile is None or self._tile_disabled(self._snap, tile):
                return
            self._log_result(self.game.select_tile(tile.id))

    def update(self, dt: float) -> SceneTransition | None:
        # the engine's timers run on whole milliseconds of frame time
        self._carry_ms += dt * 1000.0
        whole = int(self._carry_ms)
        self._carry_ms -= whole
        if whole > 0:
            self.ctx.scheduler.advance(whole)

        if self._snap.won and not self._won_logged:
            self._won_logged = True
            self.ctx.telemetry.log(
                "game_won",
                {"moves": self._snap.moves, "elapsed_seconds": self._snap.elapsed_seconds},
            )
        return None

    def render(self, screen: pygame.Surface) -> None:
        theme = self.ctx.theme
        bg = theme.background if theme is not None else _FALLBACK_BG
        text = theme.text if theme is not None else _FALLBACK_TEXT
        fonts = self.ctx.assets.fonts
        snap = self._snap

        screen.fill(bg)
        draw_text(screen, fonts.big, "Memory Match Game", (30, 20), color=text)
        draw_text(screen, fonts.ui, f"Moves: {snap.moves}", (30, 82), color=text)
        draw_text(screen, fonts.ui, f"Time: {snap.elapsed_display}", (190, 82), color=text)
        self.btn_restart.draw(screen, fonts.ui)

        for i, tile in enumerate(snap.tiles):
            self._draw_tile(screen, self._tile_rect(i), tile, disabled=self._tile_disabled(snap, tile))

        if snap.won:
            self._draw_victory(screen)

    def _draw_tile(self, screen: pygame.Surface, rect: pygame.Rect, tile: TileView, disabled: bool) -> None:
        theme = self.ctx.theme
        primary = theme.primary if theme is not None else (37, 99, 235)
        surface = theme.surface if theme is not None else (255, 255, 255)
        success = theme.success if theme is not None else (245, 158, 11)
        text = theme.text if theme is not None else _FALLBACK_TEXT

        if tile.is_revealed:
            pygame.draw.rect(screen, surface, rect, border_radius=12)
            border = success if tile.matched else primary
            pygame.draw.rect(screen, border, rect, width=4, border_radius=12)
            glyph = self.ctx.assets.face_glyph(tile.face, text)
            screen.blit(glyph, glyph.get_rect(center=rect.center).topleft)
            return

        back = tuple(c // 2 for c in primary) if disabled else primary
        pygame.draw.rect(screen, back, rect, border_radius=12)
        draw_text_centered(screen, self.ctx.assets.fonts.big, "?", rect.center, color=surface)

    def _draw_victory(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))

        fonts = self.ctx.assets.fonts
        cx = screen.get_width() // 2
        modal = pygame.Rect(cx - 220, 250, 440, 300)
        pygame.draw.rect(screen, (255, 255, 255), modal, border_radius=16)
        draw_text_centered(screen, fonts.big, "Congratulations!", (cx, 300), color=(17, 24, 39))
        draw_text_centered(screen, fonts.ui, "You won the game!", (cx, 345), color=(17, 24, 39))
        draw_text_centered(
            screen,
            fonts.ui,
            f"Moves: {self._snap.moves}    Time: {self._snap.elapsed_display}",
            (cx, 400),
            color=(17, 24, 39),
        )
        self.btn_play_again.draw(screen, fonts.ui)
