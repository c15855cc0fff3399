"""SQLite-backed game repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from ledger.types import Game
from shared.dal.game_repository import GameRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteGameRepository(GameRepository):
    """SQLite implementation of GameRepository.

    Stores full game snapshots as JSON with an indexed date column for ordering.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_game(self, game: Game) -> None:
        """Insert a game record. Logs a warning and returns on duplicate id."""
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO games (id, date, data) VALUES (?, ?, ?)",
                    (game.id, game.date.isoformat(), game.model_dump_json()),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError:
                self._db.connection.rollback()
                logger.warning("game already exists, ignoring duplicate create", game_id=game.id)

    async def get_game(self, game_id: str) -> Game | None:
        """Retrieve a single game by its id."""
        row = self._db.connection.execute(
            "SELECT data FROM games WHERE id = ?",
            (game_id,),
        ).fetchone()
        if row is None:
            return None
        return Game.model_validate_json(row[0])

    async def list_games(self) -> list[Game]:
        """Retrieve all games, most recent first."""
        rows = self._db.connection.execute(
            "SELECT data FROM games ORDER BY date DESC, rowid DESC",
        ).fetchall()
        return [Game.model_validate_json(row[0]) for row in rows]

    async def delete_game(self, game_id: str) -> bool:
        """Delete a game. Returns False when no game had that id."""
        async with self._lock:
            cursor = self._db.connection.execute("DELETE FROM games WHERE id = ?", (game_id,))
            self._db.connection.commit()
            return cursor.rowcount > 0
