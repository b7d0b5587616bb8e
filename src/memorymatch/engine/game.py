from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable

from .clock import ManualScheduler, Scheduler, TimerHandle
from .deck import DEFAULT_FACES, RandomSource, generate_deck
from .serialize import format_elapsed
from .types import DECK_FACES, Event, Face, GameSnapshot, Tile, TileId, TileView

Listener = Callable[[GameSnapshot], None]


@dataclass(frozen=True)
class GameConfig:
    faces: tuple[Face, ...] = DEFAULT_FACES
    mismatch_delay_ms: int = 1000
    tick_interval_ms: int = 1000


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    reason: str | None = None


@dataclass
class GameState:
    tiles: list[Tile]
    selection: list[TileId] = field(default_factory=list)
    moves: int = 0
    elapsed_seconds: int = 0
    active: bool = False
    won: bool = False
    locked: bool = False
    event_log: list[Event] = field(default_factory=list)

    def tile(self, tile_id: TileId) -> Tile | None:
        for t in self.tiles:
            if t.id == tile_id:
                return t
        return None

    def is_revealed(self, tile: Tile) -> bool:
        return tile.matched or tile.id in self.selection


def _rejection(state: GameState, tile: Tile) -> str | None:
    if state.locked:
        return "locked"
    if tile.matched:
        return "matched"
    if tile.id in state.selection:
        return "already_selected"
    if len(state.selection) >= 2:
        return "selection_full"
    return None


class MemoryGame:
    """Owns one memory-match session and every timer attached to it.

    All mutation goes through ``select_tile``, ``restart`` and clock
    callbacks delivered by the scheduler; each runs to completion before the
    next. Listeners receive a fresh snapshot after every mutation.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        rng: RandomSource,
        config: GameConfig | None = None,
    ) -> None:
        cfg = config or GameConfig()
        if len(cfg.faces) != DECK_FACES:
            raise ValueError(f"A deck needs exactly {DECK_FACES} faces.")
        if cfg.mismatch_delay_ms <= 0 or cfg.tick_interval_ms <= 0:
            raise ValueError("Timer intervals must be positive.")
        self.config = cfg
        self.scheduler = scheduler
        self.rng = rng
        self._listeners: list[Listener] = []
        self._pending_clear: TimerHandle | None = None
        self._clock: TimerHandle | None = None
        self.state = self._deal()

    # -- collaborators -----------------------------------------------------

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def _deal(self) -> GameState:
        state = GameState(tiles=generate_deck(self.config.faces, self.rng))
        state.event_log.append({"type": "DECK_DEALT", "tiles": len(state.tiles)})
        return state

    def _start_clock(self) -> None:
        if self._clock is None:
            self._clock = self.scheduler.call_every(self.config.tick_interval_ms, self._on_clock)

    def _stop_clock(self) -> None:
        if self._clock is not None:
            self._clock.cancel()
            self._clock = None

    def _cancel_pending_clear(self) -> None:
        if self._pending_clear is not None:
            self._pending_clear.cancel()
            self._pending_clear = None

    def _on_clock(self) -> None:
        self.tick()

    # -- transitions -------------------------------------------------------

    def _activate(self) -> None:
        self.state.active = True
        self.state.event_log.append({"type": "GAME_STARTED"})
        self._start_clock()

    def _evaluate_pair(self) -> None:
        state = self.state
        state.locked = True
        first, second = (state.tile(tid) for tid in state.selection)
        assert first is not None and second is not None
        # moves counts the decision, so it advances before any flip-back
        state.moves += 1
        if first.face == second.face:
            first.matched = True
            second.matched = True
            state.selection.clear()
            state.locked = False
            state.event_log.append(
                {
                    "type": "PAIR_MATCHED",
                    "tile_ids": [first.id, second.id],
                    "face": first.face,
                    "moves": state.moves,
                }
            )
        else:
            state.event_log.append(
                {
                    "type": "PAIR_MISMATCHED",
                    "tile_ids": [first.id, second.id],
                    "moves": state.moves,
                }
            )
            self._schedule_clear(state)
        self._check_winner()

    def _schedule_clear(self, owner: GameState) -> None:
        def clear() -> None:
            # A restart replaces the state; never touch a newer session.
            if owner is not self.state:
                return
            self._pending_clear = None
            cleared = list(owner.selection)
            owner.selection.clear()
            owner.locked = False
            owner.event_log.append({"type": "SELECTION_CLEARED", "tile_ids": cleared})
            self._notify()

        self._cancel_pending_clear()
        self._pending_clear = self.scheduler.call_later(self.config.mismatch_delay_ms, clear)

    def _check_winner(self) -> None:
        state = self.state
        if state.won:
            return
        if state.moves > 0 and all(t.matched for t in state.tiles):
            state.won = True
            state.active = False
            self._stop_clock()
            state.event_log.append(
                {"type": "GAME_WON", "moves": state.moves, "elapsed_seconds": state.elapsed_seconds}
            )

    # -- intents -----------------------------------------------------------

    def select_tile(self, tile_id: TileId) -> StepResult:
        """Flip ``tile_id`` face up if the rules allow it.

        Rejected selections are not errors: the result carries ``ok=False``
        and a ``reason`` (``unknown_tile``, ``locked``, ``matched``,
        ``already_selected`` or ``selection_full``).
        """
        state = self.state
        tile = state.tile(tile_id)
        if tile is None:
            return StepResult(ok=False, events=[], reason="unknown_tile")

        start = len(state.event_log)
        # moves == 0 admits no locked, matched or selected tile, so a
        # session is only ever started by a click that is then accepted.
        if not state.active and state.moves == 0:
            self._activate()

        reason = _rejection(state, tile)
        if reason is not None:
            return StepResult(ok=False, events=[], reason=reason)

        state.selection.append(tile.id)
        state.event_log.append({"type": "TILE_SELECTED", "tile_id": tile.id, "face": tile.face})
        if len(state.selection) == 2:
            self._evaluate_pair()
        self._notify()
        return StepResult(ok=True, events=state.event_log[start:])

    def tick(self) -> bool:
        """Count one elapsed second; ignored unless the session is running."""
        state = self.state
        if not state.active or state.won:
            return False
        state.elapsed_seconds += 1
        self._notify()
        return True

    def restart(self) -> StepResult:
        self._cancel_pending_clear()
        self._stop_clock()
        self.state = self._deal()
        self.state.event_log.append({"type": "GAME_RESTARTED"})
        self._notify()
        return StepResult(ok=True, events=list(self.state.event_log))

    def close(self) -> None:
        """Tear the session down; no timer fires for it afterwards."""
        self._cancel_pending_clear()
        self._stop_clock()

    # -- views -------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        state = self.state
        return GameSnapshot(
            tiles=tuple(
                TileView(id=t.id, face=t.face, matched=t.matched, is_revealed=state.is_revealed(t))
                for t in state.tiles
            ),
            selection=tuple(state.selection),
            moves=state.moves,
            elapsed_seconds=state.elapsed_seconds,
            elapsed_display=format_elapsed(state.elapsed_seconds),
            active=state.active,
            locked=state.locked,
            won=state.won,
        )


def new_game(
    seed: int,
    scheduler: Scheduler | None = None,
    config: GameConfig | None = None,
) -> MemoryGame:
    """Build a game whose deck order is fixed by ``seed``."""
    return MemoryGame(scheduler or ManualScheduler(), random.Random(seed), config)


def tiles_by_face(state: GameState) -> dict[Face, list[TileId]]:
    """Group tile ids by face, in deck order. Handy for scripted play."""
    out: dict[Face, list[TileId]] = {}
    for t in state.tiles:
        out.setdefault(t.face, []).append(t.id)
    return out
