"""Factories for ledger tests."""

from datetime import UTC, datetime

from ledger.scoring import PRESETS, ScoringPreset
from ledger.settlement import settle_game
from ledger.types import Game, Player, RawEntry

TENPIN = PRESETS[ScoringPreset.TENPIN]
TENGO = PRESETS[ScoringPreset.TENGO]

ALICE = Player(id="p-alice", name="Alice")
BOB = Player(id="p-bob", name="Bob")
CAROL = Player(id="p-carol", name="Carol")
DAVE = Player(id="p-dave", name="Dave")
ERIN = Player(id="p-erin", name="Erin")

TABLE = (ALICE, BOB, CAROL, DAVE)


def make_entries(scores: tuple[int, ...], players: tuple[Player, ...] = TABLE) -> list[RawEntry]:
    return [RawEntry(player=p, score=s) for p, s in zip(players, scores, strict=True)]


def make_game(
    game_id: str,
    scores: tuple[int, ...],
    players: tuple[Player, ...] = TABLE,
    *,
    config=TENPIN,
    date: datetime | None = None,
) -> Game:
    return settle_game(
        make_entries(scores, players),
        config,
        game_id=game_id,
        date=date or datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC),
    )
