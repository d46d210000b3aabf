"""Tests for support/resistance detection."""

import pytest

from indexes import ConfigError, PricePosition, SupportResistance, Unavailable


class TestSupportResistance:

    def test_resistance_from_swing_high(self):
        sr = SupportResistance(5)
        values = sr.update_many([100.0, 101.0, 105.0, 101.0])
        assert values[-1] is Unavailable

        sr.update(100.0)
        result = sr.value
        assert sr.resistance_levels == [105.0]
        assert sr.support_levels == []
        assert result.nearest_resistance == 105.0
        assert result.nearest_support is None
        assert result.resistance_strength == pytest.approx(95.0)
        assert result.support_strength == 0.0
        assert result.breakout_potential == 0.0
        assert result.price_position == PricePosition.BELOW_SUPPORT

    def test_support_and_position_between_levels(self):
        sr = SupportResistance(5)
        sr.update_many([100.0, 101.0, 105.0, 101.0, 100.0, 99.0, 97.0, 99.0, 100.0])

        result = sr.value
        assert sr.support_levels == [97.0]
        assert result.nearest_support == 97.0
        assert result.nearest_resistance == 105.0
        assert result.support_strength == pytest.approx(97.0)
        assert result.resistance_strength == pytest.approx(95.0)
        assert result.breakout_potential == pytest.approx(95.0)
        assert result.price_position == PricePosition.NEAR_SUPPORT

    def test_tied_extremes_are_not_pivots(self):
        sr = SupportResistance(3)
        sr.update_many([1.0, 2.0, 2.0, 1.0])
        assert sr.resistance_levels == []

    def test_broken_levels_are_dropped(self):
        sr = SupportResistance(3, threshold=0.02)
        sr.update_many([100.0, 105.0, 100.0])
        assert sr.resistance_levels == [105.0]

        sr.update(110.0)
        assert sr.resistance_levels == []
        assert sr.support_levels == [100.0]
        assert sr.value.price_position == PricePosition.ABOVE_RESISTANCE

    def test_short_window_never_pivots(self):
        sr = SupportResistance(2)
        sr.update_many([1.0, 5.0, 1.0, 5.0])
        assert sr.support_levels == []
        assert sr.resistance_levels == []
        assert sr.value.price_position == PricePosition.UNKNOWN

    def test_max_levels(self):
        sr = SupportResistance(3, max_levels=2)
        sr.update_many([1.0, 10.0, 1.0, 9.0, 1.0, 8.0, 1.0, 7.0, 1.0])
        # peaks 10, 9, 8, 7; the oldest are dropped first
        assert sr.resistance_levels == [8.0, 7.0]

    def test_invalid_config(self):
        with pytest.raises(ConfigError):
            SupportResistance(20, threshold=0)
        with pytest.raises(ConfigError):
            SupportResistance(20, threshold=1.5)
        with pytest.raises(ConfigError):
            SupportResistance(20, max_levels=0)

    def test_reset(self):
        sr = SupportResistance(3)
        sr.update_many([1.0, 2.0, 1.0])
        sr.reset()
        assert sr.value is Unavailable
        assert sr.resistance_levels == []
