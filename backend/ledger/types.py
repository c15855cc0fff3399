"""
Pydantic models for ledger records.

Contains the player identity, the raw per-seat input to a settlement, the
settled per-seat result, the settled game record handed to persistence, and
the derived per-player session rollup.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger.scoring import NUM_PLAYERS


class Player(BaseModel):
    """Registered player. Also stored as a snapshot inside settled results."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    name: str = Field(min_length=1)


class RawEntry(BaseModel):
    """One seat's unsettled contribution to a game."""

    model_config = ConfigDict(frozen=True)

    player: Player
    score: int


class SettledResult(BaseModel):
    """One seat's outcome after settlement."""

    model_config = ConfigDict(frozen=True)

    player: Player
    score: int  # raw table points, preserved verbatim
    diff: int  # score - 25000
    position: int = Field(ge=1, le=NUM_PLAYERS)
    uma: Decimal
    total_points: Decimal  # diff / 1000 + uma
    money: Decimal  # total_points * point_value


class Game(BaseModel):
    """A settled table. Results are in seat order, not placement order."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: datetime
    results: tuple[SettledResult, ...]

    @field_validator("results")
    @classmethod
    def _validate_results(cls, v: tuple[SettledResult, ...]) -> tuple[SettledResult, ...]:
        if len(v) != NUM_PLAYERS:
            raise ValueError(f"A game must have exactly {NUM_PLAYERS} results, got {len(v)}")
        return v


class SessionTotal(BaseModel):
    """Per-player rollup over a selection of games. Derived, never persisted."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    name: str
    total_money: Decimal = Decimal(0)
    games_played: int = 0
