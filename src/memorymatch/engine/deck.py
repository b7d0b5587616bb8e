from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

from .types import Face, Tile

T = TypeVar("T")

DEFAULT_FACES: tuple[Face, ...] = ("🎮", "🎯", "🎨", "🎭", "🎪", "🎬", "🎵", "🎸")


class RandomSource(Protocol):
    """Anything with a uniform ``random()`` in [0, 1); ``random.Random`` fits."""

    def random(self) -> float: ...


def shuffle_tiles(rng: RandomSource, items: Sequence[T]) -> list[T]:
    """Fisher-Yates shuffle into a new list; ``items`` is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        # guard against sources returning exactly 1.0
        j = min(j, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_deck(faces: Sequence[Face], rng: RandomSource) -> list[Tile]:
    """Build two tiles per face and return them in shuffled order.

    Ids are ``"{index}-a"`` / ``"{index}-b"`` where ``index`` is the face's
    position in ``faces``, so they are unique within a deck.
    """
    if len(set(faces)) != len(faces):
        raise ValueError("Deck faces must be distinct.")
    pairs: list[Tile] = []
    for index, face in enumerate(faces):
        pairs.append(Tile(id=f"{index}-a", face=face))
        pairs.append(Tile(id=f"{index}-b", face=face))
    return shuffle_tiles(rng, pairs)
