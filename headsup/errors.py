from __future__ import annotations


class PokerError(Exception):
    """Base class for everything the engine raises on purpose."""


class IllegalActionError(PokerError, ValueError):
    """The requested action is not allowed in the current snapshot.

    Recoverable: the snapshot the action was applied to is left untouched.
    """


class InvariantError(PokerError, RuntimeError):
    """Engine state is broken. Never expected during normal play."""


class DeckExhaustedError(InvariantError):
    pass


class CategoryMismatchError(InvariantError):
    pass


class ConfigError(InvariantError):
    pass
