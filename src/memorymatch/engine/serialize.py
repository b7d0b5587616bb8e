from __future__ import annotations

from .types import GameSnapshot, TileView


def format_elapsed(seconds: int) -> str:
    """Render elapsed seconds as zero-padded ``MM:SS``."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def _tile_to_dict(t: TileView) -> dict[str, object]:
    return {
        "id": t.id,
        "face": t.face,
        "matched": t.matched,
        "is_revealed": t.is_revealed,
    }


def snapshot_to_dict(snap: GameSnapshot) -> dict[str, object]:
    """Return a JSON-serializable canonical form of a snapshot."""
    return {
        "tiles": [_tile_to_dict(t) for t in snap.tiles],
        "selection": list(snap.selection),
        "moves": snap.moves,
        "elapsed_seconds": snap.elapsed_seconds,
        "elapsed_display": snap.elapsed_display,
        "active": snap.active,
        "locked": snap.locked,
        "won": snap.won,
    }
