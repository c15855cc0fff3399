"""Export documents: full ledger dump and game history."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from ledger.scoring import DEFAULT_CONFIGURATION, ScoringConfiguration
from ledger.types import Game, Player


class ExportKind(StrEnum):
    LEDGER = "ledger"
    HISTORY = "history"


_FILENAME_PREFIXES = {
    ExportKind.LEDGER: "riichi-ledger",
    ExportKind.HISTORY: "game-history",
}


class HistoryExport(BaseModel):
    """Games-only export."""

    model_config = ConfigDict(frozen=True)

    games: list[Game] = Field(default_factory=list)
    export_date: AwareDatetime


class LedgerExport(HistoryExport):
    """Full dump of players, games, and the active scoring settings."""

    players: list[Player] = Field(default_factory=list)
    settings: ScoringConfiguration = DEFAULT_CONFIGURATION


def export_filename(kind: ExportKind, when: datetime | None = None) -> str:
    """Download filename, e.g. 'riichi-ledger-2025-01-15.json'."""
    when = when or datetime.now(tz=UTC)
    return f"{_FILENAME_PREFIXES[kind]}-{when.date().isoformat()}.json"


def render_export(document: HistoryExport) -> str:
    """Serialize an export document as indented JSON."""
    return document.model_dump_json(indent=2)
