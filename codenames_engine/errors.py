"""Error kinds raised by the game engine."""

from typing import Optional


class GameError(Exception):
    """Base exception for game-related errors."""

    code = "GAME_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code or self.code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class NotFoundError(GameError, LookupError):
    """No stored snapshot for the requested game id."""
    code = "NOT_FOUND"


class InvalidStateError(GameError):
    """Action not allowed in the game's current state."""
    code = "INVALID_STATE"


class InvalidArgumentError(GameError, ValueError):
    """Bad input, e.g. a guess that is not a hidden board word."""
    code = "INVALID_ARGUMENT"


class ConfigurationError(GameError, ValueError):
    """Engine misconfigured, e.g. the word source is too small for the board."""
    code = "CONFIGURATION_ERROR"


class StaleGameError(GameError):
    """A write raced with another write to the same game."""
    code = "STALE_GAME"


class WordSourceError(GameError):
    """The word source could not supply words."""
    code = "WORD_SOURCE_ERROR"
