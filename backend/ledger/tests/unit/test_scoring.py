from decimal import Decimal

import pytest
from pydantic import ValidationError

from ledger.scoring import (
    DEFAULT_CONFIGURATION,
    PRESETS,
    ScoringConfiguration,
    ScoringPreset,
    apply_preset,
    custom_configuration,
    preset_configuration,
)


class TestPresets:
    def test_tenpin(self):
        config = preset_configuration(ScoringPreset.TENPIN)

        assert config.uma == (30, 10, -10, -30)
        assert config.point_value == 1

    def test_tengo_shares_uma_with_half_point_value(self):
        tengo = preset_configuration(ScoringPreset.TENGO)

        assert tengo.uma == PRESETS[ScoringPreset.TENPIN].uma
        assert tengo.point_value == Decimal("0.5")

    def test_custom_defaults_to_zero(self):
        config = preset_configuration(ScoringPreset.CUSTOM)

        assert config.uma == (0, 0, 0, 0)
        assert config.point_value == 0

    def test_default_is_tenpin(self):
        assert DEFAULT_CONFIGURATION.preset == ScoringPreset.TENPIN

    @pytest.mark.parametrize("preset", [ScoringPreset.TENPIN, ScoringPreset.TENGO])
    def test_named_preset_uma_is_balanced(self, preset):
        assert sum(PRESETS[preset].uma) == 0


class TestApplyPreset:
    def test_named_preset_replaces_values(self):
        current = custom_configuration((15, 5, -5, -15), "0.3")

        result = apply_preset(current, ScoringPreset.TENGO)

        assert result == PRESETS[ScoringPreset.TENGO]

    def test_custom_keeps_current_values(self):
        result = apply_preset(PRESETS[ScoringPreset.TENGO], ScoringPreset.CUSTOM)

        assert result.preset == ScoringPreset.CUSTOM
        assert result.uma == (30, 10, -10, -30)
        assert result.point_value == Decimal("0.5")


class TestCustomConfiguration:
    def test_accepts_strings_and_ints(self):
        config = custom_configuration(["20", 10, "-10", -20], "2.5")

        assert config.preset == ScoringPreset.CUSTOM
        assert config.uma == (Decimal(20), Decimal(10), Decimal(-10), Decimal(-20))
        assert config.point_value == Decimal("2.5")

    def test_requires_four_uma_values(self):
        with pytest.raises(ValidationError):
            custom_configuration((30, 10, -10), 1)

    def test_is_frozen(self):
        config = custom_configuration((30, 10, -10, -30), 1)

        with pytest.raises(ValidationError):
            config.point_value = Decimal(2)  # type: ignore[misc]

    def test_json_round_trip_is_exact(self):
        config = custom_configuration(("15.5", 5, -5, "-15.5"), "0.1")

        assert ScoringConfiguration.model_validate_json(config.model_dump_json()) == config
