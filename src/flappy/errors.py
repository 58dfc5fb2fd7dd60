# src/flappy/errors.py
"""Exceptions raised by the game core.

Collision and out-of-bounds are not errors: they end a session through
``StopCause`` in :mod:`src.flappy.state`.
"""


class FlappyError(Exception):
    """Base class for every error raised by the game."""


class AssetLoadError(FlappyError):
    """An asset could not be fetched or decoded. Fatal to session start."""


class NotFoundError(FlappyError, KeyError):
    """Lookup of an asset that is unknown or not loaded yet."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class InvalidInputError(FlappyError):
    """An action was sent while the session cannot take it (still loading)."""
