# Codenames game engine
from .state import BASE_NUM_AGENTS, Card, Clue, GameData, GameStatus, Team, Turn
from .errors import (
    ConfigurationError,
    GameError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    StaleGameError,
    WordSourceError,
)
from .board import Board
from .words import WordSource, WordListSource, RemoteWordSource, load_wordlist, default_word_source
from .generator import BoardGenerator
from .rules import GameRules
from .store import GameStore, InMemoryGameStore, SQLiteGameStore
from .service import CodenamesService
from .config import EngineConfig, load_engine_config, build_service

__all__ = [
    # State
    "BASE_NUM_AGENTS",
    "Card",
    "Clue",
    "GameData",
    "GameStatus",
    "Team",
    "Turn",
    # Errors
    "ConfigurationError",
    "GameError",
    "InvalidArgumentError",
    "InvalidStateError",
    "NotFoundError",
    "StaleGameError",
    "WordSourceError",
    # Board and rules
    "Board",
    "BoardGenerator",
    "GameRules",
    # Words
    "WordSource",
    "WordListSource",
    "RemoteWordSource",
    "load_wordlist",
    "default_word_source",
    # Storage
    "GameStore",
    "InMemoryGameStore",
    "SQLiteGameStore",
    # Service
    "CodenamesService",
    "EngineConfig",
    "load_engine_config",
    "build_service",
]
