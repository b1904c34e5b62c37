"""Service facade: load a game, apply the rules, store the result."""

import logging
import random
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .errors import NotFoundError
from .generator import BoardGenerator
from .rules import GameRules
from .state import Clue, GameData, GameStatus
from .store import GameStore

logger = logging.getLogger(__name__)


class CodenamesService:
    """
    Entry point used by the CLI (or any other front end).

    Each mutating call is one load -> compute -> store cycle. Calls for the
    same game id are serialised on a per-game lock; the store's version check
    catches writers outside this process.
    """

    def __init__(
        self,
        store: GameStore,
        generator: BoardGenerator,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.generator = generator
        self.rng = rng or random.Random()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = self._locks[game_id] = threading.Lock()
            return lock

    @contextmanager
    def _locked_game(self, game_id: str) -> Iterator[GameData]:
        """Hold the game's lock and yield its stored snapshot."""
        lock = self._lock_for(game_id)
        with lock:
            try:
                game = self.store.get(game_id)
            except NotFoundError:
                # Unknown ids must not leave a lock behind
                with self._locks_guard:
                    if self._locks.get(game_id) is lock:
                        del self._locks[game_id]
                raise
            yield game

    def create_game(self) -> str:
        """Create a NEW game and return its id."""
        game = self.store.put(GameRules.new_game(self.generator.base_agents))
        logger.debug("Created new game %s", game.id)
        return game.id

    def start_game(self, game_id: str) -> GameData:
        logger.info("Starting game: %s", game_id)
        with self._locked_game(game_id) as game:
            game = GameRules.start_game(game, self.generator, self.rng)
            saved = self.store.put(game)
        logger.debug(
            "Game %s started by %s (red=%d, blue=%d)",
            game_id, saved.starting_team.value, saved.red_agents_left, saved.blue_agents_left,
        )
        return saved

    def get_game(self, game_id: str) -> GameData:
        return self.store.get(game_id)

    def get_games(self) -> list[GameData]:
        return self.store.list_all()

    def give_clue(self, game_id: str, clue: Clue) -> GameData:
        with self._locked_game(game_id) as game:
            game, turn = GameRules.give_clue(game, clue)
            saved = self.store.put(game)
        if turn.guesses_left == 0:
            logger.info(
                "Game %s: %s clue '%s' is a board word, turn forfeited",
                game_id, turn.team.value, turn.clue_string,
            )
        return saved

    def make_guess(self, game_id: str, word: str) -> GameData:
        with self._locked_game(game_id) as game:
            game, turn = GameRules.make_guess(game, word)
            saved = self.store.put(game)
        logger.debug(
            "Game %s: %s guessed '%s' (correct=%s, guesses left=%d)",
            game_id, turn.team.value, word, turn.correct, turn.guesses_left,
        )
        if saved.game_status == GameStatus.GAME_OVER:
            logger.info("Game %s over, %s wins", game_id, saved.winner.value)
        return saved

    def clear(self) -> None:
        logger.warning("Deleting all games!")
        self.store.delete_all()
        with self._locks_guard:
            self._locks.clear()
