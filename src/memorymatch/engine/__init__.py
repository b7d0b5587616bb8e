"""Deterministic, headless rules engine for Memory Match.

IMPORTANT: This package must never import pygame.
"""

from .clock import ManualScheduler, Scheduler, TimerHandle
from .deck import DEFAULT_FACES, RandomSource, generate_deck, shuffle_tiles
from .game import GameConfig, GameState, MemoryGame, StepResult, new_game
from .types import GameSnapshot, Tile, TileView

__all__ = [
    "DEFAULT_FACES",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "ManualScheduler",
    "MemoryGame",
    "RandomSource",
    "Scheduler",
    "StepResult",
    "Tile",
    "TileView",
    "TimerHandle",
    "generate_deck",
    "new_game",
    "shuffle_tiles",
]
