"""Tests for the exponential smoothing primitives."""

import pytest

from indexes import ConfigError, EmaSmoothing, ExponentialSmoother, Unavailable, WildersSmoothing


def _closed_form(values, decay):
    current = values[0]
    for value in values[1:]:
        current = decay * value + (1 - decay) * current
    return current


class TestExponentialSmoother:

    def test_two_period_ema_scenario(self):
        smoother = ExponentialSmoother(2 / 3)

        assert smoother.update(10.0) == 10.0
        assert smoother.update(20.0) == pytest.approx(2 / 3 * 20 + 1 / 3 * 10)
        assert smoother.value == pytest.approx(16.666666666666668)

    def test_matches_closed_form(self, rng):
        values = rng.normal(100.0, 10.0, 250).tolist()
        smoother = ExponentialSmoother(0.1)
        for value in values:
            smoother.update(value)

        assert smoother.value == pytest.approx(_closed_form(values, 0.1), rel=1e-12)

    def test_decay_one_tracks_latest_value(self):
        smoother = ExponentialSmoother(1.0)
        for value in [3.0, 9.0, -4.0]:
            smoother.update(value)
        assert smoother.value == -4.0

    @pytest.mark.parametrize("decay", [0, -0.5, 1.5, float("nan"), float("inf"), "0.5", None])
    def test_rejects_out_of_range_decay(self, decay):
        with pytest.raises(ConfigError):
            ExponentialSmoother(decay)

    def test_seed_count_averages_initial_values(self):
        smoother = ExponentialSmoother(0.5, seed_count=3)

        assert smoother.update(1.0) is Unavailable
        assert smoother.update(2.0) is Unavailable
        assert not smoother.is_ready
        assert smoother.update(6.0) == pytest.approx(3.0)
        assert smoother.is_ready
        assert smoother.update(5.0) == pytest.approx(4.0)
        assert smoother.count == 4

    def test_reset(self):
        smoother = ExponentialSmoother(0.5)
        smoother.update(4.0)
        smoother.reset()

        assert smoother.value is Unavailable
        assert smoother.count == 0
        assert smoother.update(8.0) == 8.0


class TestPeriodSmoothers:

    def test_ema_decay_from_period(self):
        assert EmaSmoothing(9).decay == pytest.approx(0.2)
        assert EmaSmoothing(1).decay == 1.0

    def test_wilders_decay_from_period(self):
        assert WildersSmoothing(14).decay == pytest.approx(1 / 14)

    def test_wilders_recursion(self):
        smoother = WildersSmoothing(4, seed_count=4)
        for value in [1.0, 2.0, 3.0, 4.0]:
            smoother.update(value)
        assert smoother.value == pytest.approx(2.5)

        smoother.update(6.5)
        assert smoother.value == pytest.approx((2.5 * 3 + 6.5) / 4)

    @pytest.mark.parametrize("cls", [EmaSmoothing, WildersSmoothing])
    def test_rejects_bad_period(self, cls):
        with pytest.raises(ConfigError):
            cls(0)
