"""
Custom exceptions shared by all layers.

Everything derives from GameError, so the outer layers can catch a single type.
"""


class GameError(Exception):
    """Top level exception for anything going wrong while playing a game."""


class InvalidRequestError(GameError):
    """Input could not be interpreted (malformed coordinates, bad placement string in a request, ...)"""


class IllegalMoveError(GameError):
    """Well-formed move that breaks a piece rule, occupancy rule, or path-blocking rule."""


class InvalidPositionError(GameError):
    """A stored board placement or encoded move cannot be decoded."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record."""
