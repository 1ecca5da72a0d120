"""
Unit tests for difficulty presets.
"""

import pytest

from note_puzzle.core.models import DEFAULT_DIFFICULTY, Difficulty, DifficultySettings


class TestDifficulty:
    """Tests for the Difficulty enum and its presets."""

    @pytest.mark.parametrize(
        "difficulty,fraction,decoys,label",
        [
            (Difficulty.EASY, 0.7, 1, "Easy"),
            (Difficulty.MEDIUM, 0.4, 3, "Medium"),
            (Difficulty.HARD, 0.1, 6, "Hard"),
        ],
    )
    def test_settings_when_preset_then_matches_table(self, difficulty, fraction, decoys, label):
        settings = difficulty.settings

        assert settings.prefill_fraction == fraction
        assert settings.decoy_count == decoys
        assert difficulty.label == label

    def test_default_when_unspecified_then_medium(self):
        assert DEFAULT_DIFFICULTY is Difficulty.MEDIUM

    def test_init_when_value_string_then_resolves_member(self):
        assert Difficulty("hard") is Difficulty.HARD
        assert str(Difficulty.HARD) == "hard"

    def test_init_when_unknown_value_then_raises_error(self):
        with pytest.raises(ValueError):
            Difficulty("nightmare")


class TestDifficultySettings:
    """Tests for DifficultySettings validation."""

    def test_init_when_fraction_above_one_then_raises_error(self):
        with pytest.raises(ValueError, match="prefill_fraction must be within"):
            DifficultySettings(prefill_fraction=1.5, decoy_count=0, label="Too easy")

    def test_init_when_negative_decoys_then_raises_error(self):
        with pytest.raises(ValueError, match="decoy_count must be non-negative"):
            DifficultySettings(prefill_fraction=0.5, decoy_count=-1, label="Odd")
