"""Board generator for Codenames."""

import random
from typing import Optional

from .errors import ConfigurationError, InvalidArgumentError
from .state import BASE_NUM_AGENTS, Card, Team
from .words import WordSource


class BoardGenerator:
    """
    Generates shuffled, team-assigned boards.

    With the default sizes the starting team gets 9 agents, the other team 8,
    and the remaining 7 cards are citizens plus one assassin.
    """

    TOTAL_CARDS = 25

    def __init__(
        self,
        word_source: WordSource,
        board_size: int = TOTAL_CARDS,
        base_agents: int = BASE_NUM_AGENTS,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the generator.

        Args:
            word_source: Where board words come from
            board_size: Number of cards on the board
            base_agents: Agents for the second team; the starting team gets one more
            rng: Random source used for shuffling
        """
        if base_agents < 1:
            raise ConfigurationError(f"base_agents must be positive, got {base_agents}")
        # Both teams' agents, the bonus agent and the assassin must fit
        if board_size < 2 * base_agents + 2:
            raise ConfigurationError(
                f"Board of {board_size} cards cannot hold {base_agents} agents per team"
            )
        self.word_source = word_source
        self.board_size = board_size
        self.base_agents = base_agents
        self.rng = rng or random.Random()

    @property
    def citizen_count(self) -> int:
        return self.board_size - 2 - 2 * self.base_agents

    def generate_board(self, starting_team: Team) -> tuple[Card, ...]:
        """
        Generate a shuffled board.

        Args:
            starting_team: Team that moves first and gets the extra agent

        Returns:
            The cards, in shuffled order
        """
        if not starting_team.is_player:
            raise InvalidArgumentError(f"{starting_team.value} cannot start a game")

        words = list(self.word_source.draw(self.board_size))
        if len(words) < self.board_size:
            raise ConfigurationError(
                f"Word source returned {len(words)} words, need {self.board_size}"
            )
        words = words[:self.board_size]
        if len(set(words)) != len(words):
            raise ConfigurationError("Word source returned duplicate words")

        teams = self._generate_key(starting_team)
        cards = [Card(team=team, word=word) for team, word in zip(teams, words)]

        # Shuffle to hide word-list order
        self.rng.shuffle(cards)
        return tuple(cards)

    def _generate_key(self, starting_team: Team) -> list[Team]:
        """Team for each word position, in word-list order."""
        key: list[Team] = []
        key.extend([starting_team] * (self.base_agents + 1))
        key.extend([starting_team.opponent] * self.base_agents)
        key.extend([Team.CITIZEN] * self.citizen_count)
        key.append(Team.ASSASSIN)
        return key
