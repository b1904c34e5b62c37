"""Statistics over stored games."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .board import Board
from .state import GameData, GameStatus, Team


@dataclass
class GameSummary:
    """Per-game figures derived from the turn history."""
    game_id: str
    status: GameStatus
    starting_team: Optional[Team]
    winner: Optional[Team]
    clues: int
    forfeited_clues: int  # clue was a board word
    clue_numbers: list[int]
    correct_guesses: int
    wrong_guesses: int
    assassin_loss: bool
    red_agents_left: int
    blue_agents_left: int

    @classmethod
    def from_game(cls, game: GameData) -> "GameSummary":
        clue_turns = [t for t in game.turns if t.guess_string is None]
        guess_turns = [t for t in game.turns if t.guess_string is not None]

        # The game ended on the assassin if the final guess revealed it
        assassin_loss = False
        if game.game_status == GameStatus.GAME_OVER and guess_turns:
            last_guess = guess_turns[-1].guess_string
            assassin_loss = last_guess == Board.from_game(game).assassin_word

        return cls(
            game_id=game.id,
            status=game.game_status,
            starting_team=game.starting_team,
            winner=game.winner,
            clues=len(clue_turns),
            forfeited_clues=sum(1 for t in clue_turns if t.guesses_left == 0),
            clue_numbers=[t.clue_number for t in clue_turns],
            correct_guesses=sum(1 for t in guess_turns if t.correct),
            wrong_guesses=sum(1 for t in guess_turns if t.correct is False),
            assassin_loss=assassin_loss,
            red_agents_left=game.red_agents_left,
            blue_agents_left=game.blue_agents_left,
        )

    @property
    def correct_per_clue(self) -> float:
        """Average correct guesses per clue."""
        if not self.clues:
            return 0.0
        return self.correct_guesses / self.clues

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "status": self.status.value,
            "starting_team": self.starting_team.value if self.starting_team else None,
            "winner": self.winner.value if self.winner else None,
            "clues": self.clues,
            "forfeited_clues": self.forfeited_clues,
            "correct_guesses": self.correct_guesses,
            "wrong_guesses": self.wrong_guesses,
            "assassin_loss": self.assassin_loss,
            "red_agents_left": self.red_agents_left,
            "blue_agents_left": self.blue_agents_left,
            "correct_per_clue": self.correct_per_clue,
        }


@dataclass
class StoreMetrics:
    """Aggregated metrics across all stored games."""
    games: list[GameSummary] = field(default_factory=list)

    @classmethod
    def from_games(cls, games: list[GameData]) -> "StoreMetrics":
        return cls(games=[GameSummary.from_game(g) for g in games])

    @property
    def finished(self) -> list[GameSummary]:
        return [g for g in self.games if g.status == GameStatus.GAME_OVER]

    def count_by_status(self) -> dict[str, int]:
        counts = {status.value: 0 for status in GameStatus}
        for g in self.games:
            counts[g.status.value] += 1
        return counts

    def wins(self, team: Team) -> int:
        return sum(1 for g in self.finished if g.winner == team)

    @property
    def starting_team_win_rate(self) -> float:
        """Share of finished games won by the team that moved first."""
        finished = self.finished
        if not finished:
            return 0.0
        return float(np.mean([g.winner == g.starting_team for g in finished]))

    @property
    def assassin_loss_rate(self) -> float:
        """Rate of finished games lost by hitting the assassin."""
        finished = self.finished
        if not finished:
            return 0.0
        return float(np.mean([g.assassin_loss for g in finished]))

    @property
    def avg_clue_number(self) -> float:
        numbers = [n for g in self.games for n in g.clue_numbers]
        if not numbers:
            return 0.0
        return float(np.mean(numbers))

    @property
    def avg_correct_per_clue(self) -> float:
        """Average correct guesses per clue across all games."""
        total_clues = sum(g.clues for g in self.games)
        if total_clues == 0:
            return 0.0
        return sum(g.correct_guesses for g in self.games) / total_clues

    @property
    def avg_game_length(self) -> float:
        """Average number of clues in finished games."""
        finished = self.finished
        if not finished:
            return 0.0
        return float(np.mean([g.clues for g in finished]))

    def summary(self) -> str:
        """Human-readable summary."""
        status = self.count_by_status()
        lines = [
            "Game statistics",
            "=" * 50,
            f"Games stored: {len(self.games)} "
            f"(new: {status['NEW']}, in progress: {status['IN_PROGRESS']}, over: {status['GAME_OVER']})",
            f"Wins: RED {self.wins(Team.RED)}, BLUE {self.wins(Team.BLUE)}",
            f"Starting team win rate: {self.starting_team_win_rate:.1%}",
            f"Assassin loss rate: {self.assassin_loss_rate:.1%}",
            f"Avg clue number: {self.avg_clue_number:.2f}",
            f"Avg correct per clue: {self.avg_correct_per_clue:.2f}",
            f"Avg game length: {self.avg_game_length:.1f} clues",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_games": len(self.games),
            "by_status": self.count_by_status(),
            "red_wins": self.wins(Team.RED),
            "blue_wins": self.wins(Team.BLUE),
            "starting_team_win_rate": self.starting_team_win_rate,
            "assassin_loss_rate": self.assassin_loss_rate,
            "avg_clue_number": self.avg_clue_number,
            "avg_correct_per_clue": self.avg_correct_per_clue,
            "avg_game_length": self.avg_game_length,
            "games": [g.to_dict() for g in self.games],
        }
