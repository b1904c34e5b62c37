"""Game rules and turn resolution for Codenames."""

import random
from dataclasses import replace
from datetime import datetime
from typing import Optional

from .board import Board
from .errors import InvalidArgumentError, InvalidStateError
from .generator import BoardGenerator
from .state import BASE_NUM_AGENTS, Clue, GameData, GameStatus, Team, Turn


class GameRules:
    """
    Codenames game rules engine.

    Every method takes a snapshot and returns a new one; inputs are never
    modified, so a failed call leaves the caller's snapshot as it was.

    Rules:
    - Starting team has one more agent to find than the other team
    - Spymaster gives clue (word + number); guessers get number + 1 guesses
    - A clue that is a board word forfeits the turn
    - Turn ends on a wrong guess or when the guesses run out
    - Game ends when a team has no agents left, or the assassin is revealed
    """

    @staticmethod
    def start_game(
        game: GameData,
        generator: BoardGenerator,
        rng: Optional[random.Random] = None,
    ) -> GameData:
        """
        Pick the starting team and deal the board.

        Args:
            game: A NEW game
            generator: Board generator to deal with
            rng: Random source for the starting team

        Returns:
            The game IN_PROGRESS
        """
        if game.game_status != GameStatus.NEW:
            raise InvalidStateError(
                f"Game {game.id} is {game.game_status.value}, it can only be started when NEW"
            )
        rng = rng or random.Random()
        base = generator.base_agents

        starting_team = rng.choice([Team.RED, Team.BLUE])
        started = replace(
            game,
            red_agents_left=base,
            blue_agents_left=base,
            starting_team=starting_team,
            current_team=starting_team,
        )
        started = started.with_agents_left(starting_team, base + 1)

        return replace(
            started,
            board=generator.generate_board(starting_team),
            game_status=GameStatus.IN_PROGRESS,
        )

    @staticmethod
    def give_clue(game: GameData, clue: Clue) -> tuple[GameData, Turn]:
        """
        Process a spymaster giving a clue.

        Args:
            game: Current game state
            clue: The clue being given

        Returns:
            Tuple of (new game state, the turn that was added)
        """
        GameRules._require_in_progress(game, "give a clue")
        if not clue.clue_string.strip():
            raise InvalidArgumentError("Clue must not be empty")
        if clue.clue_number < 0:
            raise InvalidArgumentError(f"Clue number must not be negative, got {clue.clue_number}")

        team = game.current_team
        turn = Turn(
            team=team,
            clue_string=clue.clue_string,
            guess_string=None,
            clue_number=clue.clue_number,
            guesses_left=clue.clue_number + 1,  # Can guess number + 1 times
            correct=None,
        )
        next_team = team

        # A board word as clue is accepted, but the team loses its guesses
        if Board.from_game(game).contains_word(clue.clue_string):
            turn = replace(turn, guesses_left=0)
            next_team = team.opponent

        new_game = replace(game, turns=game.turns + (turn,), current_team=next_team)
        return new_game, turn

    @staticmethod
    def make_guess(game: GameData, word: str) -> tuple[GameData, Turn]:
        """
        Process a single guess.

        Args:
            game: Current game state
            word: The word being guessed (exact match)

        Returns:
            Tuple of (new game state, the turn recording this guess)
        """
        GameRules._require_in_progress(game, "guess")
        last_turn = game.latest_turn
        if last_turn is None:
            raise InvalidStateError("No clue has been given yet")
        team = game.current_team
        if last_turn.team != team:
            raise InvalidStateError(f"Waiting for {team.value} spymaster's clue")
        if last_turn.guesses_left <= 0:
            raise InvalidStateError("No guesses remaining this turn")

        turn = replace(
            last_turn,
            guesses_left=last_turn.guesses_left - 1,
            guess_string=word,
            created_at=datetime.now(),
        )

        board = Board.from_game(game)
        index = board.find_hidden(word)
        if index is None:
            raise InvalidArgumentError(f"'{word}' is not a hidden word on the board")

        hit = game.board[index].team
        new_game = replace(game, board=board.reveal(index))

        if hit == team:
            turn = replace(turn, correct=True)
            new_game = new_game.with_agents_left(team, new_game.agents_left(team) - 1)
        else:
            # Mistake! Opponent, citizen or assassin all end the turn
            turn = replace(turn, correct=False, guesses_left=0)
            if hit == team.opponent:
                new_game = new_game.with_agents_left(hit, new_game.agents_left(hit) - 1)

        new_game = replace(new_game, turns=new_game.turns + (turn,))

        winner = GameRules.evaluate_winner(new_game, team, hit)
        if winner is not None:
            new_game = replace(new_game, game_status=GameStatus.GAME_OVER, winner=winner)
        elif turn.guesses_left == 0:
            new_game = replace(new_game, current_team=team.opponent)

        return new_game, turn

    @staticmethod
    def evaluate_winner(game: GameData, guessing_team: Team, revealed: Team) -> Optional[Team]:
        """
        Decide whether the last guess ended the game.

        Args:
            game: Game state after the guess was applied
            guessing_team: Team that made the guess
            revealed: Team of the card that was revealed

        Returns:
            The winning team, or None if play continues
        """
        if revealed == Team.ASSASSIN:
            return guessing_team.opponent
        if game.red_agents_left == 0:
            return Team.RED
        if game.blue_agents_left == 0:
            return Team.BLUE
        return None

    @staticmethod
    def new_game(base_agents: int = BASE_NUM_AGENTS) -> GameData:
        """Create an empty NEW game."""
        return GameData(red_agents_left=base_agents, blue_agents_left=base_agents)

    @staticmethod
    def _require_in_progress(game: GameData, action: str) -> None:
        if game.game_status != GameStatus.IN_PROGRESS:
            raise InvalidStateError(
                f"Cannot {action} - game is {game.game_status.value}"
            )
