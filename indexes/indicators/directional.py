"""
Directional movement and stop-and-reverse indicators.

Classes:
    ADX: Average Directional Index with +DI/-DI
    ParabolicSAR: Wilder's Parabolic Stop And Reverse
"""

import logging
from typing import Any, Optional

from ..base import BaseIndicator
from ..exceptions import ConfigError
from ..primitives import GainLossTracker, WildersSmoothing
from ..results import ADXResult, SARResult
from ..signals import TrendDirection, TrendStrength
from ..types import MaybeValue, Unavailable
from ..validation import validate_multiplier, validate_period, validate_thresholds

logger = logging.getLogger(__name__)


class ADX(BaseIndicator):
    """
    Average Directional Index (ADX).

    Mathematical Formula:
        +DM = High - PrevHigh   if it exceeds PrevLow - Low and is positive, else 0
        -DM = PrevLow - Low     if it exceeds High - PrevHigh and is positive, else 0
        ±DI = 100 * Wilder(±DM, n) / Wilder(TR, n)
        DX  = 100 * |+DI - -DI| / (+DI + -DI)
        ADX = Wilder(DX, m)

    Every Wilder average is seeded with the mean of its first values, so
    +DI/-DI appear after n + 1 bars and ADX after n + m bars. A zero smoothed
    true range gives DI of 0; a zero DI sum gives DX of 0.

    Trend strength: >= 50 very strong, >= 25 strong, otherwise weak.
    """

    required_inputs = ('high', 'low', 'close')
    result_type = ADXResult

    def __init__(
        self,
        period: int = 14,
        adx_smoothing: int = 14,
        strong_trend: float = 25.0,
        very_strong_trend: float = 50.0,
    ):
        """
        Initialize ADX indicator.

        Args:
            period (int): Smoothing period for TR and directional movement.
            adx_smoothing (int): Smoothing period applied to DX.
            strong_trend (float): ADX level from which a trend counts as strong.
            very_strong_trend (float): ADX level from which a trend counts as very strong.
        """
        super().__init__(period)

        self.adx_smoothing = validate_period(adx_smoothing, "adx_smoothing", indicator_name=self._name)
        validate_thresholds(very_strong_trend, strong_trend, "very_strong_trend", "strong_trend", self._name)
        self.strong_trend = float(strong_trend)
        self.very_strong_trend = float(very_strong_trend)

        self._ready_threshold = self.period + self.adx_smoothing

        self._directional_movement = GainLossTracker(self.period, 'wilders')
        self._true_range = WildersSmoothing(self.period, seed_count=self.period)
        self._adx = WildersSmoothing(self.adx_smoothing, seed_count=self.adx_smoothing)

        self._previous_high: Optional[float] = None
        self._previous_low: Optional[float] = None
        self._previous_close: Optional[float] = None

        self._plus_di: MaybeValue[float] = Unavailable
        self._minus_di: MaybeValue[float] = Unavailable
        self._dx: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)
        high, low, close = fields['high'], fields['low'], fields['close']

        if self._previous_close is not None:
            true_range = max(
                high - low,
                abs(high - self._previous_close),
                abs(low - self._previous_close),
            )

            up_move = high - self._previous_high
            down_move = self._previous_low - low
            plus_dm = up_move if up_move > down_move and up_move > 0 else 0.0
            minus_dm = down_move if down_move > up_move and down_move > 0 else 0.0

            self._directional_movement.push_movement(plus_dm, minus_dm)
            smoothed_tr = self._true_range.update(true_range)

            if self._directional_movement.is_ready:
                if smoothed_tr == 0:
                    self._plus_di = 0.0
                    self._minus_di = 0.0
                else:
                    self._plus_di = 100.0 * self._directional_movement.average_gain() / smoothed_tr
                    self._minus_di = 100.0 * self._directional_movement.average_loss() / smoothed_tr

                di_sum = self._plus_di + self._minus_di
                self._dx = 0.0 if di_sum == 0 else 100.0 * abs(self._plus_di - self._minus_di) / di_sum
                self._adx.update(self._dx)

        self._previous_high = high
        self._previous_low = low
        self._previous_close = close

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[ADXResult]:
        adx = self._adx.value
        if adx is Unavailable:
            return Unavailable

        return ADXResult(
            adx=adx,
            plus_di=self._plus_di,
            minus_di=self._minus_di,
            dx=self._dx,
            trend_strength=self._classify_strength(adx),
            trend_direction=self.trend_direction,
        )

    @property
    def plus_di(self) -> MaybeValue[float]:
        return self._plus_di

    @property
    def minus_di(self) -> MaybeValue[float]:
        return self._minus_di

    @property
    def trend_direction(self) -> MaybeValue[TrendDirection]:
        """UP when +DI leads, DOWN when -DI leads, SIDEWAYS when they are equal."""
        if self._plus_di is Unavailable:
            return Unavailable
        if self._plus_di > self._minus_di:
            return TrendDirection.UP
        if self._plus_di < self._minus_di:
            return TrendDirection.DOWN
        return TrendDirection.SIDEWAYS

    def _classify_strength(self, adx: float) -> TrendStrength:
        if adx >= self.very_strong_trend:
            return TrendStrength.VERY_STRONG
        if adx >= self.strong_trend:
            return TrendStrength.STRONG
        return TrendStrength.WEAK

    def reset(self) -> None:
        super().reset()
        self._directional_movement.reset()
        self._true_range.reset()
        self._adx.reset()
        self._previous_high = None
        self._previous_low = None
        self._previous_close = None
        self._plus_di = Unavailable
        self._minus_di = Unavailable
        self._dx = Unavailable


class ParabolicSAR(BaseIndicator):
    """
    Parabolic Stop And Reverse (SAR).

    State machine:
        - first bar: remembered, no output
        - second bar: UP if the high rose, otherwise DOWN; SAR starts at the
          opposite extreme of the two bars, EP at the favourable one
        - every later bar: a low at or below SAR (UP) or a high at or above SAR
          (DOWN) reverses the trend, otherwise the trend continues

    On continuation a new extreme point raises the acceleration factor by
    ``increment`` (capped at ``maximum``), then
    ``SAR += AF * (EP - SAR)``. In an uptrend SAR never rises above the low of
    the current or previous bar; a downtrend mirrors this with highs.

    On reversal SAR jumps to the old EP, kept outside the current and previous
    bar, EP becomes the current bar's extreme and AF resets to ``start``.
    """

    required_inputs = ('high', 'low')
    result_type = SARResult

    def __init__(self, start: float = 0.02, increment: float = 0.02, maximum: float = 0.20):
        """
        Initialize Parabolic SAR.

        Args:
            start (float): Initial acceleration factor.
            increment (float): Step added on every new extreme point.
            maximum (float): Cap on the acceleration factor.

        Raises:
            ConfigError: Unless 0 < start < maximum <= 1 and increment > 0.
        """
        super().__init__(period=2)

        if not isinstance(start, (int, float)) or isinstance(start, bool) or not 0 < start < 1:
            raise ConfigError("start", start, "number in (0, 1)", self._name)
        if not isinstance(maximum, (int, float)) or isinstance(maximum, bool) or not start < maximum <= 1:
            raise ConfigError("maximum", maximum, f"number in ({start}, 1]", self._name)
        self.start = float(start)
        self.maximum = float(maximum)
        self.increment = validate_multiplier(increment, "increment", self._name)

        self._trend: Optional[TrendDirection] = None
        self._sar: Optional[float] = None
        self._extreme_point: Optional[float] = None
        self._acceleration_factor = self.start
        self._trend_periods = 0
        self._reversal = False

        self._previous_high: Optional[float] = None
        self._previous_low: Optional[float] = None

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)
        high, low = fields['high'], fields['low']

        if self._previous_high is None:
            pass
        elif self._trend is None:
            self._start_trend(high, low)
        elif self._is_reversal(high, low):
            self._reverse(high, low)
        else:
            self._continue_trend(high, low)

        self._previous_high = high
        self._previous_low = low

        self._update_metadata(data_point)
        self._store_output(self.value)

    def _start_trend(self, high: float, low: float) -> None:
        if high > self._previous_high:
            self._trend = TrendDirection.UP
            self._sar = min(self._previous_low, low)
            self._extreme_point = max(high, self._previous_high)
        else:
            self._trend = TrendDirection.DOWN
            self._sar = max(self._previous_high, high)
            self._extreme_point = min(low, self._previous_low)

        self._acceleration_factor = self.start
        self._trend_periods = 1
        self._reversal = False

    def _is_reversal(self, high: float, low: float) -> bool:
        if self._trend is TrendDirection.UP:
            return low <= self._sar
        return high >= self._sar

    def _reverse(self, high: float, low: float) -> None:
        old_extreme = self._extreme_point
        if self._trend is TrendDirection.UP:
            self._trend = TrendDirection.DOWN
            self._sar = max(old_extreme, high, self._previous_high)
            self._extreme_point = low
        else:
            self._trend = TrendDirection.UP
            self._sar = min(old_extreme, low, self._previous_low)
            self._extreme_point = high

        self._acceleration_factor = self.start
        self._trend_periods = 1
        self._reversal = True
        logger.debug(f"{self._name} reversed to {self._trend.value} at SAR={self._sar}")

    def _continue_trend(self, high: float, low: float) -> None:
        if self._trend is TrendDirection.UP and high > self._extreme_point:
            self._extreme_point = high
            self._acceleration_factor = min(self._acceleration_factor + self.increment, self.maximum)
        elif self._trend is TrendDirection.DOWN and low < self._extreme_point:
            self._extreme_point = low
            self._acceleration_factor = min(self._acceleration_factor + self.increment, self.maximum)

        sar = self._sar + self._acceleration_factor * (self._extreme_point - self._sar)
        if self._trend is TrendDirection.UP:
            sar = min(sar, low, self._previous_low)
        else:
            sar = max(sar, high, self._previous_high)

        self._sar = sar
        self._trend_periods += 1
        self._reversal = False

    @property
    def value(self) -> MaybeValue[SARResult]:
        if self._trend is None:
            return Unavailable

        return SARResult(
            sar=self._sar,
            trend=self._trend,
            acceleration_factor=self._acceleration_factor,
            extreme_point=self._extreme_point,
            reversal=self._reversal,
            trend_periods=self._trend_periods,
        )

    @property
    def trend(self) -> Optional[TrendDirection]:
        return self._trend

    @property
    def acceleration_factor(self) -> float:
        return self._acceleration_factor

    def reset(self) -> None:
        super().reset()
        self._trend = None
        self._sar = None
        self._extreme_point = None
        self._acceleration_factor = self.start
        self._trend_periods = 0
        self._reversal = False
        self._previous_high = None
        self._previous_low = None
