"""Game state types and data structures for Codenames."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from .errors import InvalidStateError

# Agents each team has to find before the starting team's bonus agent
BASE_NUM_AGENTS = 8


class Team(Enum):
    """Card designations. Only RED and BLUE take turns."""
    RED = "RED"
    BLUE = "BLUE"
    CITIZEN = "CITIZEN"
    ASSASSIN = "ASSASSIN"

    @property
    def is_player(self) -> bool:
        return self in (Team.RED, Team.BLUE)

    @property
    def opponent(self) -> "Team":
        """Get the opposing team. Only defined for RED and BLUE."""
        if self == Team.RED:
            return Team.BLUE
        if self == Team.BLUE:
            return Team.RED
        raise InvalidStateError(f"{self.value} is not a player team and has no opponent")


class GameStatus(Enum):
    """Lifecycle of a game. Only ever moves forward."""
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class Card:
    """A single card on the board."""
    team: Team
    word: str
    is_visible: bool = False

    def reveal(self) -> "Card":
        """Return a new card with is_visible=True."""
        return replace(self, is_visible=True)


@dataclass(frozen=True)
class Clue:
    """A clue given by a spymaster."""
    clue_string: str
    clue_number: int


@dataclass(frozen=True)
class Turn:
    """
    One clue, or one guess made against that clue.

    Giving a clue appends a Turn; every guess appends a copy of the latest
    Turn with the guess recorded and guesses_left decremented.
    """
    team: Team
    clue_string: str
    guess_string: Optional[str]
    clue_number: int
    guesses_left: int
    correct: Optional[bool] = None
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    def to_dict(self) -> dict:
        return {
            "team": self.team.value,
            "clue_string": self.clue_string,
            "guess_string": self.guess_string,
            "clue_number": self.clue_number,
            "guesses_left": self.guesses_left,
            "correct": self.correct,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Turn":
        return cls(
            team=Team(data["team"]),
            clue_string=data["clue_string"],
            guess_string=data.get("guess_string"),
            clue_number=int(data["clue_number"]),
            guesses_left=int(data["guesses_left"]),
            correct=data.get("correct"),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


def _new_game_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class GameData:
    """
    Complete snapshot of one Codenames game.

    Snapshots are immutable: every transition builds a new GameData with
    dataclasses.replace, and the store is the only long-lived owner.
    """
    id: str = field(default_factory=_new_game_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    # Teams
    starting_team: Optional[Team] = None
    current_team: Optional[Team] = None

    # Agents still hidden for each team
    red_agents_left: int = BASE_NUM_AGENTS
    blue_agents_left: int = BASE_NUM_AGENTS

    game_status: GameStatus = GameStatus.NEW
    board: tuple[Card, ...] = ()
    winner: Optional[Team] = None
    turns: tuple[Turn, ...] = ()

    # Bumped by the store on every successful write
    version: int = 0

    @property
    def latest_turn(self) -> Optional[Turn]:
        return self.turns[-1] if self.turns else None

    def agents_left(self, team: Team) -> int:
        """Hidden agents remaining for a player team."""
        if team == Team.RED:
            return self.red_agents_left
        if team == Team.BLUE:
            return self.blue_agents_left
        raise InvalidStateError(f"{team.value} has no agents")

    def with_agents_left(self, team: Team, count: int) -> "GameData":
        """Return a copy with one team's agent counter set to count."""
        if team == Team.RED:
            return replace(self, red_agents_left=count)
        if team == Team.BLUE:
            return replace(self, blue_agents_left=count)
        raise InvalidStateError(f"{team.value} has no agents")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible document."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "starting_team": self.starting_team.value if self.starting_team else None,
            "current_team": self.current_team.value if self.current_team else None,
            "red_agents_left": self.red_agents_left,
            "blue_agents_left": self.blue_agents_left,
            "game_status": self.game_status.value,
            "board": [
                {"team": c.team.value, "word": c.word, "is_visible": c.is_visible}
                for c in self.board
            ],
            "winner": self.winner.value if self.winner else None,
            "turns": [t.to_dict() for t in self.turns],
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameData":
        """Rebuild a snapshot from a document produced by to_dict."""
        def team_or_none(value: Optional[str]) -> Optional[Team]:
            return Team(value) if value else None

        return cls(
            id=data["id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
            starting_team=team_or_none(data.get("starting_team")),
            current_team=team_or_none(data.get("current_team")),
            red_agents_left=int(data["red_agents_left"]),
            blue_agents_left=int(data["blue_agents_left"]),
            game_status=GameStatus(data["game_status"]),
            board=tuple(
                Card(team=Team(c["team"]), word=c["word"], is_visible=bool(c["is_visible"]))
                for c in data.get("board", [])
            ),
            winner=team_or_none(data.get("winner")),
            turns=tuple(Turn.from_dict(t) for t in data.get("turns", [])),
            version=int(data.get("version", 0)),
        )
