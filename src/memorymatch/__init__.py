"""Memory Match: a 4x4 tile-matching game with a headless engine."""

__version__ = "1.0.0"
