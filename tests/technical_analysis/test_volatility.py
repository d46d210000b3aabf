"""Tests for ATR and StandardDeviation."""

import math

import pandas as pd
import pytest

from indexes import ATR, ConfigError, InvalidDataError, Sample, StandardDeviation, Unavailable, VolatilityLevel


def _bar(high, low, close):
    return Sample(close=close, high=high, low=low)


class TestATR:

    def test_wilder_smoothed_true_range(self):
        atr = ATR(3)
        atr.update(_bar(10.0, 8.0, 9.0))
        assert atr.true_range == 2.0
        atr.update(_bar(11.0, 9.0, 10.5))
        assert atr.value is Unavailable

        atr.update(_bar(12.0, 10.0, 11.0))
        assert atr.value == pytest.approx(2.0)

        atr.update(_bar(15.0, 11.0, 14.0))
        assert atr.true_range == 4.0
        assert atr.value == pytest.approx(8.0 / 3.0)

    def test_gap_uses_previous_close(self):
        atr = ATR(1)
        atr.update(_bar(15.0, 11.0, 14.0))
        atr.update(_bar(9.0, 8.0, 8.5))
        assert atr.true_range == 6.0
        assert atr.value == 6.0

    def test_non_negative_on_random_bars(self, bars):
        atr = ATR(14)
        values = atr.update_many(bars)
        assert values[12] is Unavailable
        assert all(v >= 0.0 for v in values[13:])

    def test_rejects_bad_bar(self):
        atr = ATR(3)
        with pytest.raises(InvalidDataError):
            atr.update(_bar(8.0, 10.0, 9.0))

    def test_reset(self):
        atr = ATR(1)
        atr.update(_bar(10.0, 8.0, 9.0))
        atr.reset()
        assert atr.value is Unavailable
        assert atr.true_range is Unavailable
        atr.update(_bar(30.0, 29.0, 29.5))
        assert atr.value == 1.0


class TestStandardDeviation:

    def test_sample_statistics(self):
        sd = StandardDeviation(3)
        values = sd.update_many([2.0, 4.0, 6.0])
        assert values[1] is Unavailable

        result = values[2]
        assert result.mean == pytest.approx(4.0)
        assert result.variance == pytest.approx(4.0)
        assert result.std_dev == pytest.approx(2.0)
        assert result.z_score == pytest.approx(1.0)
        assert result.coefficient_of_variation == pytest.approx(50.0)
        assert result.volatility_level == VolatilityLevel.VERY_HIGH

    def test_population_statistics(self):
        sd = StandardDeviation(3, sample=False)
        sd.update_many([2.0, 4.0, 6.0])
        assert sd.value.variance == pytest.approx(8.0 / 3.0)
        assert sd.value.std_dev == pytest.approx(math.sqrt(8.0 / 3.0))

    def test_flat_window(self):
        sd = StandardDeviation(4)
        sd.update_many([50.0] * 4)
        result = sd.value
        assert result.std_dev == pytest.approx(0.0, abs=1e-12)
        assert result.z_score == 0.0
        assert result.volatility_level == VolatilityLevel.VERY_LOW
        assert not sd.is_outlier(500.0)

    def test_zero_mean_has_zero_cv(self):
        sd = StandardDeviation(2)
        sd.update_many([-1.0, 1.0])
        assert sd.value.coefficient_of_variation == 0.0

    def test_matches_pandas_rolling_std(self, closes):
        sd = StandardDeviation(20)
        values = sd.update_many(closes)
        expected = pd.Series(closes).rolling(20).std()

        for got, want in zip(values[19:], expected[19:]):
            assert got.std_dev == pytest.approx(want, rel=1e-8)

    def test_is_outlier(self):
        sd = StandardDeviation(5)
        assert not sd.is_outlier(1000.0)

        sd.update_many([10.0, 11.0, 9.0, 10.0, 10.0])
        assert sd.is_outlier(20.0)
        assert not sd.is_outlier(10.5)
        with pytest.raises(ConfigError):
            sd.is_outlier(20.0, threshold=-1.0)

    def test_period_limits(self):
        with pytest.raises(ConfigError):
            StandardDeviation(1)
        assert StandardDeviation(1, sample=False).period == 1
