"""Command-line interface for playing Codenames games."""

import json
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

import click

from .board import Board
from .config import EngineConfig, build_service, load_engine_config
from .errors import GameError
from .metrics import StoreMetrics
from .service import CodenamesService
from .state import Clue, GameData, GameStatus

DEFAULT_STORE_PATH = "codenames.db"


@contextmanager
def _game_errors():
    """Turn engine errors into a clean CLI failure."""
    try:
        yield
    except GameError as e:
        raise click.ClickException(f"{e.code}: {e.message}") from e


def _service(ctx: click.Context) -> CodenamesService:
    return ctx.obj["service"]


def _echo_status(game: GameData) -> None:
    click.echo(f"Game {game.id}: {game.game_status.value}")
    if game.game_status == GameStatus.NEW:
        return
    click.echo(
        f"RED agents left: {game.red_agents_left}  "
        f"BLUE agents left: {game.blue_agents_left}"
    )
    if game.winner is not None:
        click.echo(f"Winner: {game.winner.value}")
    elif game.current_team is not None:
        turn = game.latest_turn
        if turn is not None and turn.team == game.current_team and turn.guesses_left > 0:
            click.echo(
                f"{game.current_team.value} is guessing: "
                f"{turn.clue_string} {turn.clue_number} ({turn.guesses_left} guesses left)"
            )
        else:
            click.echo(f"Waiting for {game.current_team.value} spymaster's clue")


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Engine config JSON file")
@click.option("--store", "-s", "store_path", type=click.Path(dir_okay=False), envvar="CODENAMES_STORE",
              help=f"SQLite game store (default: {DEFAULT_STORE_PATH})")
@click.option("--seed", type=int, help="Random seed for boards and starting team")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Optional[str],
    store_path: Optional[str],
    seed: Optional[int],
    log_level: Optional[str],
):
    """Play Codenames games stored on disk."""
    if ctx.obj is not None and "service" in ctx.obj:
        # Service injected by the caller (tests)
        return

    try:
        cfg = load_engine_config(config_path) if config_path else EngineConfig()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config")

    cfg = replace(
        cfg,
        store_path=store_path or cfg.store_path or DEFAULT_STORE_PATH,
        seed=seed if seed is not None else cfg.seed,
        log_level=(log_level or cfg.log_level).upper(),
    )
    logging.basicConfig(
        level=getattr(logging, cfg.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with _game_errors():
        ctx.obj = {"service": build_service(cfg)}


@main.command()
@click.pass_context
def new(ctx: click.Context):
    """Create a new game and print its id."""
    with _game_errors():
        game_id = _service(ctx).create_game()
    click.echo(game_id)


@main.command()
@click.argument("game_id")
@click.pass_context
def start(ctx: click.Context, game_id: str):
    """Deal the board and pick the starting team."""
    with _game_errors():
        game = _service(ctx).start_game(game_id)
    _echo_status(game)


@main.command()
@click.argument("game_id")
@click.option("--spymaster", is_flag=True, help="Show every card's team")
@click.option("--json", "as_json", is_flag=True, help="Print the full game document")
@click.pass_context
def show(ctx: click.Context, game_id: str, spymaster: bool, as_json: bool):
    """Show a game's board and status."""
    with _game_errors():
        game = _service(ctx).get_game(game_id)

    if as_json:
        click.echo(json.dumps(game.to_dict(), indent=2))
        return

    _echo_status(game)
    if game.board:
        board = Board.from_game(game)
        click.echo("")
        if spymaster:
            counts = board.count_by_team()
            click.echo("Key: " + ", ".join(f"{team.value} {n}" for team, n in counts.items()))
            click.echo(board.render_for_spymaster())
        else:
            click.echo(board.render_for_guesser())


@main.command(name="list")
@click.pass_context
def list_games(ctx: click.Context):
    """List all stored games."""
    with _game_errors():
        games = _service(ctx).get_games()

    if not games:
        click.echo("No games")
        return

    click.echo(f"{'Game':<38} {'Status':<12} {'Turn':<6} {'Red':>4} {'Blue':>5} {'Winner':<6}")
    click.echo("-" * 76)
    for game in games:
        current = game.current_team.value if game.current_team else "-"
        winner = game.winner.value if game.winner else "-"
        click.echo(
            f"{game.id:<38} {game.game_status.value:<12} {current:<6} "
            f"{game.red_agents_left:>4} {game.blue_agents_left:>5} {winner:<6}"
        )


@main.command()
@click.argument("game_id")
@click.argument("word")
@click.argument("number", type=int)
@click.pass_context
def clue(ctx: click.Context, game_id: str, word: str, number: int):
    """Give a clue for the team whose turn it is."""
    with _game_errors():
        game = _service(ctx).give_clue(game_id, Clue(clue_string=word, clue_number=number))

    turn = game.latest_turn
    if turn.guesses_left == 0:
        click.echo(f"'{word}' is on the board! {turn.team.value} loses the turn.")
    _echo_status(game)


@main.command()
@click.argument("game_id")
@click.argument("word")
@click.pass_context
def guess(ctx: click.Context, game_id: str, word: str):
    """Reveal a hidden word for the team whose turn it is."""
    with _game_errors():
        game = _service(ctx).make_guess(game_id, word)

    turn = game.latest_turn
    revealed = next(c for c in game.board if c.word == word)
    click.echo(f"{word}: {revealed.team.value} ({'correct' if turn.correct else 'wrong'})")
    _echo_status(game)


@main.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear(ctx: click.Context, yes: bool):
    """Delete all stored games."""
    if not yes:
        click.confirm("Delete all games?", abort=True)
    with _game_errors():
        _service(ctx).clear()
    click.echo("All games deleted")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print metrics as JSON")
@click.pass_context
def stats(ctx: click.Context, as_json: bool):
    """Summarise all stored games."""
    with _game_errors():
        metrics = StoreMetrics.from_games(_service(ctx).get_games())

    if as_json:
        click.echo(json.dumps(metrics.to_dict(), indent=2))
    else:
        click.echo(metrics.summary())


if __name__ == "__main__":
    main()
