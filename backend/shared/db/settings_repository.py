"""SQLite-backed scoring settings repository."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ledger.scoring import ScoringConfiguration
from shared.dal.settings_repository import SettingsRepository

if TYPE_CHECKING:
    from shared.db.connection import Database


class SqliteSettingsRepository(SettingsRepository):
    """Keeps the active configuration in a single-row settings table."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def get_settings(self) -> ScoringConfiguration | None:
        """Return the stored configuration, or None if none has been saved."""
        row = self._db.connection.execute("SELECT data FROM settings WHERE id = 1").fetchone()
        if row is None:
            return None
        return ScoringConfiguration.model_validate_json(row[0])

    async def save_settings(self, settings: ScoringConfiguration) -> None:
        """Replace the stored configuration."""
        async with self._lock:
            self._db.connection.execute(
                "INSERT INTO settings (id, data) VALUES (1, ?) ON CONFLICT(id) DO UPDATE SET data = excluded.data",
                (settings.model_dump_json(),),
            )
            self._db.connection.commit()
