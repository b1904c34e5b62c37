"""Game snapshot storage, keyed by game id."""

import json
import logging
import os
import sqlite3
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime

from .errors import NotFoundError, StaleGameError
from .state import GameData

logger = logging.getLogger(__name__)


class GameStore(ABC):
    """
    Document store for game snapshots.

    put() is version checked: the snapshot being written must carry the
    version currently stored (0 for a game that was never stored). The
    store writes it with the version bumped and updated_at refreshed.
    """

    @abstractmethod
    def get(self, game_id: str) -> GameData:
        """Load a snapshot. Raises NotFoundError if absent."""
        pass

    @abstractmethod
    def put(self, game: GameData) -> GameData:
        """Write a snapshot and return what was stored."""
        pass

    @abstractmethod
    def list_all(self) -> list[GameData]:
        """All stored snapshots, oldest first."""
        pass

    @abstractmethod
    def delete_all(self) -> None:
        pass

    @staticmethod
    def _stamp(game: GameData) -> GameData:
        updated_at = max(datetime.now(), game.created_at)
        return replace(game, updated_at=updated_at, version=game.version + 1)


class InMemoryGameStore(GameStore):
    """Process-local store."""

    def __init__(self) -> None:
        self._games: dict[str, GameData] = {}
        self._lock = threading.Lock()

    def get(self, game_id: str) -> GameData:
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found")
        return game

    def put(self, game: GameData) -> GameData:
        with self._lock:
            current = self._games.get(game.id)
            stored_version = current.version if current is not None else 0
            if game.version != stored_version:
                raise StaleGameError(
                    f"Game {game.id} is at version {stored_version}, write was based on {game.version}"
                )
            saved = self._stamp(game)
            self._games[game.id] = saved
        return saved

    def list_all(self) -> list[GameData]:
        with self._lock:
            games = list(self._games.values())
        return sorted(games, key=lambda g: g.created_at)

    def delete_all(self) -> None:
        with self._lock:
            self._games.clear()


class SQLiteGameStore(GameStore):
    """
    Stores each snapshot as a JSON document in a SQLite table.

    A connection is opened per call, so the store can be shared between
    threads.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        if os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        self._init()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path, timeout=15)

    def _init(self) -> None:
        con = self._connect()
        try:
            con.execute(
                "CREATE TABLE IF NOT EXISTS games ("
                "id TEXT PRIMARY KEY, version INTEGER NOT NULL, "
                "document TEXT NOT NULL, created_at TEXT NOT NULL)"
            )
            con.commit()
        finally:
            con.close()

    def get(self, game_id: str) -> GameData:
        con = self._connect()
        try:
            row = con.execute("SELECT document FROM games WHERE id=?", (game_id,)).fetchone()
        finally:
            con.close()
        if not row:
            raise NotFoundError(f"Game {game_id} not found")
        return GameData.from_dict(json.loads(row[0]))

    def put(self, game: GameData) -> GameData:
        saved = self._stamp(game)
        document = json.dumps(saved.to_dict())
        con = self._connect()
        try:
            if game.version == 0:
                try:
                    con.execute(
                        "INSERT INTO games (id, version, document, created_at) VALUES (?, ?, ?, ?)",
                        (saved.id, saved.version, document, saved.created_at.isoformat()),
                    )
                except sqlite3.IntegrityError:
                    raise StaleGameError(f"Game {game.id} already exists") from None
            else:
                cur = con.execute(
                    "UPDATE games SET version=?, document=? WHERE id=? AND version=?",
                    (saved.version, document, saved.id, game.version),
                )
                if cur.rowcount != 1:
                    raise StaleGameError(
                        f"Game {game.id} changed since version {game.version} was loaded"
                    )
            con.commit()
        finally:
            con.close()
        return saved

    def list_all(self) -> list[GameData]:
        con = self._connect()
        try:
            rows = con.execute("SELECT document FROM games ORDER BY created_at").fetchall()
        finally:
            con.close()
        return [GameData.from_dict(json.loads(row[0])) for row in rows]

    def delete_all(self) -> None:
        con = self._connect()
        try:
            cur = con.execute("DELETE FROM games")
            con.commit()
            logger.debug("Deleted %d stored games from %s", cur.rowcount, self.path)
        finally:
            con.close()
