"""Write a JSON export of the stored ledger into the export directory.

Usage: uv run python bin/export-ledger.py [--history]

Without flags the full ledger (players, games, settings) is exported;
--history exports games only.
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from ledger.export import ExportKind, export_filename, render_export
from ledger.service import LedgerService
from server.settings import LedgerServerSettings
from shared.db import Database, SqliteGameRepository, SqlitePlayerRepository, SqliteSettingsRepository
from shared.storage import LocalExportStorage


async def main() -> None:
    args = sys.argv[1:]
    if args not in ([], ["--history"]):
        print(f"Usage: {sys.argv[0]} [--history]")
        sys.exit(1)

    kind = ExportKind.HISTORY if args else ExportKind.LEDGER
    settings = LedgerServerSettings()

    db = Database(settings.database_path)
    db.connect()

    try:
        service = LedgerService(SqlitePlayerRepository(db), SqliteGameRepository(db), SqliteSettingsRepository(db))
        if kind == ExportKind.HISTORY:
            document = await service.export_history()
        else:
            document = await service.export_ledger()

        storage = LocalExportStorage(settings.export_dir)
        path = storage.save_export(export_filename(kind, document.export_date), render_export(document))
        print(f"Exported {len(document.games)} games to {path}")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(main())
