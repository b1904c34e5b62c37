"""Board queries and text rendering for Codenames."""

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from .state import Card, GameData, Team


@dataclass(frozen=True)
class Board:
    """
    Read-only view over a game's cards.

    The cards are a flat sequence laid out in rows of `columns` cards.
    Word matching is exact (case-sensitive).
    """
    cards: tuple[Card, ...]
    columns: int = 5

    @classmethod
    def from_game(cls, game: GameData) -> "Board":
        """Create a board view from a game snapshot."""
        return cls(cards=tuple(game.board))

    def contains_word(self, word: str) -> bool:
        """True if word is on the board, revealed or not."""
        return any(card.word == word for card in self.cards)

    def find_hidden(self, word: str) -> Optional[int]:
        """Index of the hidden card showing word, or None."""
        for i, card in enumerate(self.cards):
            if card.word == word and not card.is_visible:
                return i
        return None

    def reveal(self, index: int) -> tuple[Card, ...]:
        """Return the cards with the card at index revealed."""
        cards = list(self.cards)
        cards[index] = cards[index].reveal()
        return tuple(cards)

    def count_by_team(self) -> dict[Team, int]:
        counts = Counter(card.team for card in self.cards)
        return {team: counts.get(team, 0) for team in Team}

    @property
    def assassin_word(self) -> str:
        """Get the assassin word."""
        for card in self.cards:
            if card.team == Team.ASSASSIN:
                return card.word
        raise ValueError("No assassin card found on board")

    def _rows(self) -> list[tuple[Card, ...]]:
        return [
            self.cards[i:i + self.columns]
            for i in range(0, len(self.cards), self.columns)
        ]

    def render_for_spymaster(self) -> str:
        """Render the board showing all card teams (spymaster view)."""
        lines = []
        team_symbols = {
            Team.RED: "R",
            Team.BLUE: "B",
            Team.CITIZEN: ".",
            Team.ASSASSIN: "X",
        }
        for row in self._rows():
            row_words = []
            row_teams = []
            for card in row:
                symbol = team_symbols[card.team]
                if card.is_visible:
                    symbol = symbol.lower()
                row_words.append(f"{card.word:12}")
                row_teams.append(f"{symbol:^12}")
            lines.append(" ".join(row_words))
            lines.append(" ".join(row_teams))
            lines.append("")
        return "\n".join(lines)

    def render_for_guesser(self) -> str:
        """Render the board (guesser view - only revealed teams shown)."""
        lines = []
        revealed_symbols = {
            Team.RED: "[RED]",
            Team.BLUE: "[BLU]",
            Team.CITIZEN: "[---]",
            Team.ASSASSIN: "[XXX]",
        }
        for row in self._rows():
            row_words = []
            for card in row:
                if card.is_visible:
                    row_words.append(f"{revealed_symbols[card.team]:^12}")
                else:
                    row_words.append(f"{card.word:12}")
            lines.append(" ".join(row_words))
        return "\n".join(lines)
