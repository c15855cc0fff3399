"""SQLite-backed player repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from ledger.types import Player
from shared.dal.player_repository import PlayerRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqlitePlayerRepository(PlayerRepository):
    """SQLite implementation of PlayerRepository.

    Writes serialize on an asyncio lock. Maps IntegrityError on insert to a
    domain ValueError.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_player(self, player: Player) -> None:
        """Insert a player. Raises ValueError on duplicate id."""
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO players (id, name, data) VALUES (?, ?, ?)",
                    (player.id, player.name, player.model_dump_json()),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError as exc:
                self._db.connection.rollback()
                raise ValueError(f"Player with id '{player.id}' already exists") from exc

    async def get_player(self, player_id: str) -> Player | None:
        """Look up a player by id."""
        row = self._db.connection.execute(
            "SELECT data FROM players WHERE id = ?",
            (player_id,),
        ).fetchone()
        if row is None:
            return None
        return Player.model_validate_json(row[0])

    async def list_players(self) -> list[Player]:
        """All players ordered by name (case-insensitive)."""
        rows = self._db.connection.execute(
            "SELECT data FROM players ORDER BY name COLLATE NOCASE, id",
        ).fetchall()
        return [Player.model_validate_json(row[0]) for row in rows]

    async def rename_player(self, player_id: str, name: str) -> Player | None:
        """Update a player's name. Returns the updated player, or None if not found."""
        async with self._lock:
            player = Player(id=player_id, name=name)
            cursor = self._db.connection.execute(
                "UPDATE players SET name = ?, data = ? WHERE id = ?",
                (player.name, player.model_dump_json(), player_id),
            )
            self._db.connection.commit()
            if cursor.rowcount == 0:
                return None
            return player

    async def delete_player(self, player_id: str) -> bool:
        """Delete a player. Returns False when no player had that id."""
        async with self._lock:
            cursor = self._db.connection.execute("DELETE FROM players WHERE id = ?", (player_id,))
            self._db.connection.commit()
            if cursor.rowcount == 0:
                logger.warning("delete_player had no effect (not found)", player_id=player_id)
            return cursor.rowcount > 0
