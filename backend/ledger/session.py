"""Session totals over a user-chosen subset of settled games."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from ledger.types import SessionTotal

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from ledger.types import Game


def aggregate(games: Iterable[Game], selected_ids: Collection[str]) -> list[SessionTotal]:
    """
    Sum money and game counts per player across the selected games.

    Games are visited in the given order; unknown ids in selected_ids match
    nothing. A player seated more than once in a game counts that game once.
    The result is sorted by total money descending, and players with
    equal totals keep the order in which they were first encountered.
    """
    if not selected_ids:
        return []

    money: dict[str, Decimal] = {}
    played: dict[str, int] = {}
    names: dict[str, str] = {}
    for game in games:
        if game.id not in selected_ids:
            continue
        seated: set[str] = set()
        for result in game.results:
            player_id = result.player.id
            names.setdefault(player_id, result.player.name)
            money[player_id] = money.get(player_id, Decimal(0)) + result.money
            if player_id not in seated:
                seated.add(player_id)
                played[player_id] = played.get(player_id, 0) + 1

    totals = [
        SessionTotal(
            player_id=player_id,
            name=name,
            total_money=money[player_id],
            games_played=played[player_id],
        )
        for player_id, name in names.items()
    ]
    return sorted(totals, key=lambda t: -t.total_money)
