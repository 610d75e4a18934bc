"""Tests for the shared growth timing rules."""

import pytest
from garden_shared import (
    BASIC_GROWTH_MS,
    DEFAULT_GROWTH_MS,
    PlotStage,
    growing_threshold,
    growth_duration_ms,
    next_stage,
)


class TestGrowthDuration:
    """Tests for growth_duration_ms."""

    @pytest.mark.parametrize("seed_class", ["fire", "water", "wind", "earth"])
    def test_basic_classes_take_five_minutes(self, seed_class):
        assert growth_duration_ms(seed_class) == BASIC_GROWTH_MS == 300_000

    def test_other_classes_take_ten_minutes(self):
        assert growth_duration_ms("lightning") == DEFAULT_GROWTH_MS == 600_000

    def test_pot_speed_multiplier_floors(self):
        assert growth_duration_ms("fire", 0.67) == 201_000
        assert growth_duration_ms("ice", 0.5) == 300_000


class TestNextStage:
    """Tests for one-step stage advancement."""

    PLANTED_AT = 1_000_000
    MATURE_AT = 1_300_000

    def test_threshold_is_halfway(self):
        assert growing_threshold(self.PLANTED_AT, self.MATURE_AT) == 1_150_000

    def test_planted_stays_before_halfway(self):
        stage = next_stage("planted", self.PLANTED_AT, self.MATURE_AT, 1_149_999)
        assert stage == PlotStage.PLANTED

    def test_planted_becomes_growing_at_halfway(self):
        stage = next_stage("planted", self.PLANTED_AT, self.MATURE_AT, 1_150_000)
        assert stage == PlotStage.GROWING

    def test_growing_becomes_mature_at_mature_at(self):
        assert next_stage("growing", self.PLANTED_AT, self.MATURE_AT, 1_299_999) == PlotStage.GROWING
        assert next_stage("growing", self.PLANTED_AT, self.MATURE_AT, 1_300_000) == PlotStage.MATURE

    def test_never_skips_growing(self):
        """A planted plot long past maturity still goes through growing first."""
        stage = next_stage("planted", self.PLANTED_AT, self.MATURE_AT, 9_999_999)
        assert stage == PlotStage.GROWING

    @pytest.mark.parametrize("stage", ["empty", "mature"])
    def test_inactive_stages_unchanged(self, stage):
        assert next_stage(stage, self.PLANTED_AT, self.MATURE_AT, 9_999_999) == stage

    def test_missing_timestamps_unchanged(self):
        assert next_stage("planted", None, None, 9_999_999) == PlotStage.PLANTED

    def test_unknown_stage_rejected(self):
        with pytest.raises(ValueError):
            next_stage("withered", self.PLANTED_AT, self.MATURE_AT, 0)
