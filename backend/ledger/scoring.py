"""Scoring configuration: uma tables, point values, and named presets."""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

NUM_PLAYERS = 4

Uma = tuple[Decimal, Decimal, Decimal, Decimal]


class ScoringPreset(StrEnum):
    """Named scoring conventions."""

    TENPIN = "tenpin"  # 1 per 1000 points
    TENGO = "tengo"  # 0.5 per 1000 points
    CUSTOM = "custom"


class ScoringConfiguration(BaseModel):
    """
    Rules applied to a single settlement.

    uma holds the placement bonus for 1st through 4th place; point_value
    converts normalized points (thousands of table points plus uma) into money.
    """

    model_config = ConfigDict(frozen=True)

    preset: ScoringPreset = ScoringPreset.CUSTOM
    uma: Uma = (Decimal(0), Decimal(0), Decimal(0), Decimal(0))
    point_value: Decimal = Decimal(0)


def _uma(*values: int) -> Uma:
    first, second, third, fourth = (Decimal(v) for v in values)
    return (first, second, third, fourth)


PRESETS: dict[ScoringPreset, ScoringConfiguration] = {
    ScoringPreset.TENPIN: ScoringConfiguration(
        preset=ScoringPreset.TENPIN,
        uma=_uma(30, 10, -10, -30),
        point_value=Decimal(1),
    ),
    ScoringPreset.TENGO: ScoringConfiguration(
        preset=ScoringPreset.TENGO,
        uma=_uma(30, 10, -10, -30),
        point_value=Decimal("0.5"),
    ),
    ScoringPreset.CUSTOM: ScoringConfiguration(
        preset=ScoringPreset.CUSTOM,
        uma=_uma(0, 0, 0, 0),
        point_value=Decimal(0),
    ),
}

DEFAULT_CONFIGURATION = PRESETS[ScoringPreset.TENPIN]


def preset_configuration(preset: ScoringPreset) -> ScoringConfiguration:
    """Return the fixed configuration of a named preset."""
    return PRESETS[preset]


def apply_preset(current: ScoringConfiguration, preset: ScoringPreset) -> ScoringConfiguration:
    """
    Switch the active preset.

    Named presets replace uma and point value wholesale. Switching to custom
    keeps whatever uma and point value are currently in effect so the user
    can edit from there.
    """
    if preset == ScoringPreset.CUSTOM:
        return current.model_copy(update={"preset": ScoringPreset.CUSTOM})
    return preset_configuration(preset)


def custom_configuration(
    uma: tuple[Decimal | int | str, ...] | list[Decimal | int | str],
    point_value: Decimal | int | str,
) -> ScoringConfiguration:
    """Build a user-edited configuration. Raises pydantic ValidationError unless uma has 4 entries."""
    return ScoringConfiguration.model_validate(
        {"preset": ScoringPreset.CUSTOM, "uma": tuple(uma), "point_value": point_value},
    )
