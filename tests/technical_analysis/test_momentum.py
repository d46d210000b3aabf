"""Tests for RSI, Momentum, ROC, CCI and Williams %R."""

import pytest

from indexes import (
    CCI,
    ROC,
    RSI,
    ConfigError,
    InvalidDataError,
    MarketCondition,
    Momentum,
    Sample,
    TradingSignal,
    Unavailable,
    WilliamsR,
)


def _wilder_rsi(values, period):
    """Reference Wilder RSI computed in one pass over the whole series."""
    deltas = [b - a for a, b in zip(values, values[1:])]
    gains = [max(d, 0.0) for d in deltas]
    losses = [max(-d, 0.0) for d in deltas]
    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
    if avg_loss == 0:
        return 100.0
    return 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)


def _bar(high, low, close):
    return Sample(close=close, high=high, low=low)


class TestRSI:

    def test_unavailable_during_warmup(self):
        rsi = RSI(14)
        values = rsi.update_many([10, 12, 11, 13, 15, 14])

        assert all(v is Unavailable for v in values)
        assert rsi.condition is Unavailable
        assert not rsi.is_ready

    def test_ready_after_period_plus_one(self):
        rsi = RSI(3)
        values = rsi.update_many([1.0, 2.0, 3.0, 2.0])
        assert values[2] is Unavailable
        assert values[3] is not Unavailable
        assert rsi.warmup_period == 4

    def test_simple_smoothing_value(self):
        rsi = RSI(2, smoothing='simple')
        rsi.update_many([10.0, 12.0, 11.0])
        # avg gain 1.0, avg loss 0.5
        assert rsi.value == pytest.approx(100.0 - 100.0 / 3.0)

    def test_wilders_matches_reference(self, closes):
        rsi = RSI(14)
        rsi.update_many(closes)
        assert rsi.value == pytest.approx(_wilder_rsi(closes, 14), rel=1e-9)

    @pytest.mark.parametrize("smoothing", ['wilders', 'simple', 'ema'])
    def test_bounded(self, closes, smoothing):
        rsi = RSI(14, smoothing=smoothing)
        for value in rsi.update_many(closes):
            if value is not Unavailable:
                assert 0.0 <= value <= 100.0

    def test_monotonic_up_is_100(self):
        rsi = RSI(5)
        rsi.update_many(range(1, 20))
        assert rsi.value == 100.0
        assert rsi.condition == MarketCondition.OVERBOUGHT

    def test_monotonic_down_is_0(self):
        rsi = RSI(5)
        rsi.update_many(range(20, 1, -1))
        assert rsi.value == 0.0
        assert rsi.condition == MarketCondition.OVERSOLD

    def test_flat_series_is_100(self):
        rsi = RSI(5)
        rsi.update_many([42.0] * 10)
        assert rsi.value == 100.0

    def test_invalid_config(self):
        with pytest.raises(ConfigError):
            RSI(1)
        with pytest.raises(ConfigError):
            RSI(14, smoothing='hull')
        with pytest.raises(ConfigError):
            RSI(14, overbought=30, oversold=70)

    def test_reset(self):
        rsi = RSI(2)
        rsi.update_many([1.0, 2.0, 3.0])
        rsi.reset()
        assert rsi.value is Unavailable
        assert rsi.average_gain is Unavailable


class TestMomentum:

    def test_n_bar_difference(self):
        momentum = Momentum(2)
        values = momentum.update_many([10.0, 11.0, 13.0, 12.0])

        assert values[1] is Unavailable
        assert values[2].value == pytest.approx(3.0)
        assert values[2].ratio == pytest.approx(130.0)
        assert values[3].value == pytest.approx(1.0)
        assert values[3].ratio == pytest.approx(12.0 / 11.0 * 100.0)

    def test_zero_reference_ratio(self):
        momentum = Momentum(2)
        momentum.update_many([0.0, 1.0, 2.0])
        assert momentum.value.value == 2.0
        assert momentum.value.ratio is None


class TestROC:

    def test_percentage_change(self):
        roc = ROC(2)
        roc.update_many([100.0, 101.0, 103.0])

        result = roc.value
        assert result.value == pytest.approx(3.0)
        assert result.momentum == pytest.approx(30.0)
        assert result.acceleration is None
        assert result.signal == TradingSignal.BUY

    def test_acceleration_and_signals(self):
        roc = ROC(1, signal_threshold=2.0)
        roc.update_many([100.0, 101.0])
        assert roc.value.signal == TradingSignal.HOLD

        roc.update(95.0)
        result = roc.value
        assert result.signal == TradingSignal.SELL
        assert result.acceleration == pytest.approx((95.0 - 101.0) / 101.0 * 100.0 - 1.0)

    def test_momentum_is_clamped(self):
        roc = ROC(1)
        roc.update_many([10.0, 30.0])
        assert roc.value.momentum == 100.0

    def test_zero_reference_skips_step(self):
        roc = ROC(1)
        values = roc.update_many([10.0, 11.0, 0.0, 5.0, 6.0])

        assert values[1].value == pytest.approx(10.0)
        assert values[2].value == pytest.approx(-100.0)
        assert values[3] is Unavailable
        assert values[4].value == pytest.approx(20.0)
        assert values[4].acceleration == pytest.approx(120.0)

    def test_invalid_threshold(self):
        with pytest.raises(ConfigError):
            ROC(12, signal_threshold=0)


class TestCCI:

    def test_value_and_condition(self):
        cci = CCI(5)
        for price in [1.0, 1.0, 1.0, 1.0]:
            cci.update(_bar(price, price, price))
        assert cci.value is Unavailable

        cci.update(_bar(10.0, 10.0, 10.0))
        # mean 2.8, mean deviation 2.88
        assert cci.value == pytest.approx(7.2 / (0.015 * 2.88))
        assert cci.condition == MarketCondition.OVERBOUGHT

    def test_oversold_mirror(self):
        cci = CCI(5)
        for price in [10.0, 10.0, 10.0, 10.0, 1.0]:
            cci.update(_bar(price, price, price))
        assert cci.value == pytest.approx(-7.2 / (0.015 * 2.88))
        assert cci.condition == MarketCondition.OVERSOLD

    def test_flat_window_reads_zero(self):
        cci = CCI(3)
        for _ in range(3):
            cci.update(_bar(11.0, 9.0, 10.0))
        assert cci.value == 0.0
        assert cci.condition == MarketCondition.NEUTRAL

    def test_rejects_inconsistent_bar(self):
        cci = CCI(3)
        with pytest.raises(InvalidDataError):
            cci.update(_bar(9.0, 11.0, 10.0))
        with pytest.raises(InvalidDataError):
            cci.update(_bar(11.0, 9.0, 12.0))

    def test_typical_price_on_random_bars(self, bars):
        cci = CCI(20)
        values = cci.update_many(bars)
        assert values[18] is Unavailable
        assert all(v is not Unavailable for v in values[19:])


class TestWilliamsR:

    def test_value(self):
        wr = WilliamsR(3)
        wr.update(_bar(10.0, 8.0, 9.0))
        wr.update(_bar(12.0, 9.0, 11.0))
        assert wr.value is Unavailable

        wr.update(_bar(11.0, 7.0, 10.0))
        # highest 12, lowest 7
        assert wr.value == pytest.approx(-40.0)
        assert wr.condition == MarketCondition.NEUTRAL

    def test_close_at_high_and_low(self):
        wr = WilliamsR(2)
        wr.update(_bar(10.0, 5.0, 7.0))
        wr.update(_bar(12.0, 6.0, 12.0))
        assert wr.value == 0.0
        assert wr.condition == MarketCondition.EXTREME_OVERBOUGHT

        wr.update(_bar(12.0, 4.0, 4.0))
        assert wr.value == -100.0
        assert wr.condition == MarketCondition.EXTREME_OVERSOLD

    def test_flat_range(self):
        wr = WilliamsR(2)
        wr.update(_bar(5.0, 5.0, 5.0))
        wr.update(_bar(5.0, 5.0, 5.0))
        assert wr.value == -50.0

    def test_bounded_on_random_bars(self, bars):
        wr = WilliamsR(14)
        for value in wr.update_many(bars):
            if value is not Unavailable:
                assert -100.0 <= value <= 0.0

    def test_invalid_thresholds(self):
        with pytest.raises(ConfigError):
            WilliamsR(14, overbought=-80, oversold=-20)
