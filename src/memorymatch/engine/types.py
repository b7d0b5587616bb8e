from __future__ import annotations

from dataclasses import dataclass

Face = str
TileId = str
Event = dict[str, object]

DECK_FACES = 8


@dataclass
class Tile:
    id: TileId
    face: Face
    matched: bool = False


@dataclass(frozen=True)
class TileView:
    id: TileId
    face: Face
    matched: bool
    is_revealed: bool


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game handed to the presentation layer."""

    tiles: tuple[TileView, ...]
    selection: tuple[TileId, ...]
    moves: int
    elapsed_seconds: int
    elapsed_display: str
    active: bool
    locked: bool
    won: bool

    def tile(self, tile_id: TileId) -> TileView | None:
        for t in self.tiles:
            if t.id == tile_id:
                return t
        return None
