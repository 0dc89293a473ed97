"""
Errors raised at the boundaries of the application.

The rules engine itself never raises these: bad input there degrades to a no-op.
They signal problems with requests, stored data, or lookups.
"""


class GameError(Exception):
    """Base class for every error this application raises on purpose."""


class GameStateError(GameError):
    """Stored / transported game data cannot be turned into a valid game."""


class InvalidRequestError(GameError):
    """A request failed validation before it reached the game."""


class RepositoryError(GameError):
    """The requested record does not exist (or could not be stored)."""
