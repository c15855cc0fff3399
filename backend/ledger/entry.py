"""
Seat entry parsing: turns the four (player, score) form fields into RawEntry values.

This is the check that must pass before settlement is attempted: every seat
has a known player and an integer score, and no player sits twice.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ledger.exceptions import DuplicatePlayerError, IncompleteSelectionError
from ledger.scoring import NUM_PLAYERS
from ledger.types import RawEntry

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ledger.types import Player

ScoreInput = int | str | None

# Optional sign followed by ASCII digits; no underscores or non-ASCII digits.
_SCORE_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_score(value: ScoreInput) -> int | None:
    """Parse one score field. Returns None for empty or non-integer input."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if value is None:
        return None
    match = _SCORE_PATTERN.fullmatch(value.strip())
    if match is None:
        return None
    return int(match.group())


def parse_entries(
    player_ids: Sequence[str | None],
    scores: Sequence[ScoreInput],
    players: Mapping[str, Player],
) -> list[RawEntry]:
    """
    Validate the seat selections and build RawEntry values in seat order.

    Raises IncompleteSelectionError naming every seat without a known player
    or a valid score, and DuplicatePlayerError when a player fills two seats.
    """
    if len(player_ids) != NUM_PLAYERS or len(scores) != NUM_PLAYERS:
        raise IncompleteSelectionError(
            reason=f"expected {NUM_PLAYERS} seats, got {len(player_ids)} players and {len(scores)} scores",
        )

    missing: list[int] = []
    invalid: list[int] = []
    selected: list[Player | None] = []
    parsed: list[int | None] = []
    for seat in range(NUM_PLAYERS):
        player_id = player_ids[seat]
        player = players.get(player_id) if player_id else None
        if player is None:
            missing.append(seat)
        score = parse_score(scores[seat])
        if score is None:
            invalid.append(seat)
        selected.append(player)
        parsed.append(score)

    if missing or invalid:
        raise IncompleteSelectionError(missing_seats=tuple(missing), invalid_seats=tuple(invalid))

    entries = [
        RawEntry(player=player, score=score)
        for player, score in zip(selected, parsed, strict=True)
        if player is not None and score is not None
    ]

    seats_by_player: dict[str, list[int]] = {}
    for seat, entry in enumerate(entries):
        seats_by_player.setdefault(entry.player.id, []).append(seat)
    for player_id, seats in seats_by_player.items():
        if len(seats) > 1:
            raise DuplicatePlayerError(player_id, tuple(seats))

    return entries
