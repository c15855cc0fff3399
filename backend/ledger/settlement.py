"""
Settlement of a finished table: placement, uma, and money.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from ledger.exceptions import IncompleteSelectionError, ScoreConservationError
from ledger.scoring import NUM_PLAYERS
from ledger.types import Game, SettledResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ledger.scoring import ScoringConfiguration
    from ledger.types import RawEntry

logger = structlog.get_logger()

BASELINE_SCORE = 25000
TABLE_TOTAL = BASELINE_SCORE * NUM_PLAYERS
POINTS_PER_UNIT = 1000


def check_conservation(entries: Sequence[RawEntry]) -> None:
    """Raise ScoreConservationError unless the scores add up to the table total."""
    total = sum(entry.score for entry in entries)
    if total != TABLE_TOTAL:
        raise ScoreConservationError(total, TABLE_TOTAL)


def rank_seats(entries: Sequence[RawEntry]) -> list[int]:
    """
    Map each seat to its placement (1-based).

    Seats are sorted once by score descending. The sort is stable, so among
    equal scores the earlier seat places higher.
    """
    ranked = sorted(range(len(entries)), key=lambda seat: -entries[seat].score)
    positions = [0] * len(entries)
    for index, seat in enumerate(ranked):
        positions[seat] = index + 1
    return positions


def settle(entries: Sequence[RawEntry], config: ScoringConfiguration) -> tuple[SettledResult, ...]:
    """
    Convert four raw seat scores into ranked, monetized results.

    Output is in the same seat order as entries. Nothing is computed unless
    exactly four entries are given and their scores sum to TABLE_TOTAL.
    """
    if len(entries) != NUM_PLAYERS:
        raise IncompleteSelectionError(reason=f"expected {NUM_PLAYERS} entries, got {len(entries)}")
    check_conservation(entries)

    positions = rank_seats(entries)
    results = []
    for entry, position in zip(entries, positions, strict=True):
        diff = entry.score - BASELINE_SCORE
        uma = config.uma[position - 1]
        total_points = Decimal(diff) / POINTS_PER_UNIT + uma
        results.append(
            SettledResult(
                player=entry.player,
                score=entry.score,
                diff=diff,
                position=position,
                uma=uma,
                total_points=total_points,
                money=total_points * config.point_value,
            ),
        )

    logger.debug("settled table", preset=config.preset, positions=positions)
    return tuple(results)


def settle_game(
    entries: Sequence[RawEntry],
    config: ScoringConfiguration,
    *,
    game_id: str | None = None,
    date: datetime | None = None,
) -> Game:
    """Settle entries and wrap the results in a new Game record."""
    results = settle(entries, config)
    return Game(
        id=game_id or str(uuid4()),
        date=date or datetime.now(tz=UTC),
        results=results,
    )
