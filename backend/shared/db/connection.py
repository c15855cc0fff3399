"""SQLite database connection and schema management."""

import os
import sqlite3
from pathlib import Path

import structlog
from pydantic import ValidationError

from ledger.export import LedgerExport

logger = structlog.get_logger()

_DB_FILE_PERMISSIONS = 0o600

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS players (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_players_name
    ON players (name COLLATE NOCASE);

CREATE TABLE IF NOT EXISTS games (
    id TEXT PRIMARY KEY,
    date TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_games_date
    ON games (date);

CREATE TABLE IF NOT EXISTS settings (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    data TEXT NOT NULL
);
"""


class Database:
    """SQLite database wrapper with schema management and migration support."""

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the active connection or raise if disconnected."""
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the database, apply pragmas, create schema, and harden file permissions."""
        parent = Path(self._path).parent
        parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.execute("PRAGMA busy_timeout=5000")
        self._conn.executescript(_SCHEMA_SQL)

        self._harden_permissions()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def migrate_from_export(self, export_path: str | None) -> int:
        """Import players, games, and settings from a previous full ledger export.

        Returns the number of games imported. Skips the import when the path
        is None, the file does not exist, or the database already holds players
        or games.
        The entire import runs in a single transaction; any failure causes
        a full rollback.
        """
        if export_path is None:
            return 0

        json_path = Path(export_path)
        if not json_path.exists():
            return 0

        conn = self.connection
        players = conn.execute("SELECT COUNT(*) FROM players").fetchone()[0]
        games = conn.execute("SELECT COUNT(*) FROM games").fetchone()[0]
        if players or games:
            logger.info("ledger already has data, skipping import", players=players, games=games)
            return 0

        document = self._parse_export(json_path, export_path)
        self._insert_export(conn, document)

        count = len(document.games)
        logger.info(
            "imported ledger export",
            players=len(document.players),
            games=count,
            path=export_path,
        )
        return count

    @staticmethod
    def _parse_export(json_path: Path, display_path: str) -> LedgerExport:
        """Parse and validate an exported ledger document."""
        try:
            raw = json_path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to read ledger export: {display_path}"
            raise OSError(msg) from exc

        try:
            return LedgerExport.model_validate_json(raw)
        except ValidationError as exc:
            msg = f"Invalid ledger export in {display_path}"
            raise OSError(msg) from exc

    @staticmethod
    def _insert_export(conn: sqlite3.Connection, document: LedgerExport) -> None:
        """Insert all exported records in a single transaction."""
        try:
            conn.execute("BEGIN")
            for player in document.players:
                conn.execute(
                    "INSERT INTO players (id, name, data) VALUES (?, ?, ?)",
                    (player.id, player.name, player.model_dump_json()),
                )
            for game in document.games:
                conn.execute(
                    "INSERT INTO games (id, date, data) VALUES (?, ?, ?)",
                    (game.id, game.date.isoformat(), game.model_dump_json()),
                )
            conn.execute(
                "INSERT OR REPLACE INTO settings (id, data) VALUES (1, ?)",
                (document.settings.model_dump_json(),),
            )
            conn.execute("COMMIT")
        except Exception:
            conn.execute("ROLLBACK")
            raise

    def _harden_permissions(self) -> None:
        """Set restrictive file permissions on POSIX systems (best effort).

        Hardens the main DB file and WAL/SHM sibling files created by WAL mode,
        since they also contain database content.
        """
        if os.name != "posix":  # pragma: no cover
            return
        for suffix in ("", "-wal", "-shm"):
            p = Path(self._path + suffix)
            if p.exists():
                try:
                    p.chmod(_DB_FILE_PERMISSIONS)
                except OSError:
                    logger.warning("could not set file permissions", permissions=oct(_DB_FILE_PERMISSIONS), path=str(p))
