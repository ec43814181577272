from __future__ import annotations


class TetrisError(Exception):
    """Base class for errors raised by the game engine."""


class BindingError(TetrisError):
    """A session was bound to a peer twice, or to itself."""


class PairingError(TetrisError):
    """A piece generator was paired with a second partner."""


class SessionStateError(TetrisError):
    """An operation was called in a session state that does not allow it."""
