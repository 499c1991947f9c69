"""
Custom exceptions raised across layers.

Every exception derives from GameError, so the request layer can catch the whole family in one place
and translate it into a rejected request. None of them are fatal.
"""


class GameError(Exception):
    """Base class for all errors raised by the game backend."""


# --- REQUEST VALIDATION ---
class InvalidRequestError(GameError):
    """Request data cannot be interpreted."""


class ConfigurationError(GameError):
    """Settings read from the environment are invalid."""


# --- MOVES ---
class IllegalMoveError(GameError):
    """The requested move is not allowed on the current board."""


class InvalidColumnError(IllegalMoveError):
    """Column index outside of the board."""


class ColumnFullError(IllegalMoveError):
    """Column has no open row left."""


# --- GAME STATE ---
class GameStateError(GameError):
    """Invalid state transition, or a stored game that cannot be restored."""


class GameFinishedError(GameStateError):
    """Game already reached a terminal status and accepts no further moves."""


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Failure in the persistence layer."""


class GameNotFoundError(RepositoryError):
    """No game with this ID exists for the given owner."""
