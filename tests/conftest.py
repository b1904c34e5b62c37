"""Shared test fixtures."""

import random
from dataclasses import replace

import pytest

from codenames_engine import (
    BoardGenerator,
    CodenamesService,
    GameData,
    GameRules,
    GameStatus,
    InMemoryGameStore,
    Team,
    WordListSource,
)

BOARD_WORDS = [f"Word{i}" for i in range(25)]


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def word_source(rng):
    return WordListSource(BOARD_WORDS, rng=rng)


@pytest.fixture
def generator(word_source, rng):
    return BoardGenerator(word_source, rng=rng)


@pytest.fixture
def store():
    return InMemoryGameStore()


@pytest.fixture
def service(store, generator, rng):
    return CodenamesService(store, generator, rng=rng)


@pytest.fixture
def new_game():
    return GameRules.new_game()


@pytest.fixture
def make_started_game(generator):
    """Build an IN_PROGRESS game with a chosen starting team."""
    def _make(starting_team: Team = Team.RED) -> GameData:
        game = GameRules.new_game()
        game = game.with_agents_left(starting_team, game.agents_left(starting_team) + 1)
        return replace(
            game,
            starting_team=starting_team,
            current_team=starting_team,
            board=generator.generate_board(starting_team),
            game_status=GameStatus.IN_PROGRESS,
        )
    return _make


def words_of(game: GameData, team: Team, hidden_only: bool = True) -> list[str]:
    return [
        c.word for c in game.board
        if c.team == team and (not hidden_only or not c.is_visible)
    ]


def card_for(game: GameData, word: str):
    return next(c for c in game.board if c.word == word)
