from decimal import Decimal
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from ledger.scoring import ScoringPreset


class PlayerNameRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str


class UpdateSettingsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    preset: ScoringPreset
    uma: tuple[Decimal, Decimal, Decimal, Decimal] | None = None
    point_value: Decimal | None = None

    @model_validator(mode="after")
    def _custom_values_only_for_custom(self) -> Self:
        if self.preset != ScoringPreset.CUSTOM and (self.uma is not None or self.point_value is not None):
            raise ValueError("uma and point_value can only be set for the custom preset")
        return self


class GameEntryRequest(BaseModel):
    """Seat selections and raw score fields, in seat order."""

    model_config = ConfigDict(extra="forbid")

    player_ids: list[str | None]
    scores: list[StrictInt | str | None]


class SessionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    game_ids: list[str] = Field(default_factory=list)
