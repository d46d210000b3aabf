"""
Momentum technical indicators.

This module implements indicators that measure the speed and strength of price movements.
All indicators use O(1) streaming updates except CCI, whose mean deviation
is a pass over its window.

Classes:
    RSI: Relative Strength Index with configurable smoothing strategies
    Momentum: Absolute n-bar price change and its ratio form
    ROC: Rate of Change with normalized momentum and acceleration
    CCI: Commodity Channel Index over the typical price
    WilliamsR: Williams %R oscillator
"""

from typing import Any, Optional

from ..base import BaseIndicator
from ..exceptions import ConfigError
from ..primitives import ExtremaTracker, GainLossTracker, RollingAccumulator
from ..primitives.gain_loss import SMOOTHING_METHODS, Smoothing
from ..results import MomentumResult, ROCResult
from ..signals import MarketCondition, TradingSignal, classify_level
from ..types import MaybeValue, Unavailable
from ..validation import validate_multiplier, validate_period, validate_thresholds


class RSI(BaseIndicator):
    """
    Relative Strength Index (RSI) momentum indicator.

    Measures the speed and change of price movements to identify
    overbought/oversold conditions.

    Mathematical Formula:
        RSI = 100 - (100 / (1 + RS))
        where RS = Average Gain / Average Loss

        Gains = max(0, current_price - previous_price)
        Losses = max(0, previous_price - current_price)

    Smoothing Methods:
        - 'wilders': Original Wilder's smoothing (α = 1/N), seeded with the first N movements
        - 'simple': Rolling mean of the last N movements
        - 'ema': Standard EMA smoothing (α = 2/(N+1))

    An average loss of zero yields 100, so a flat series reads 100 rather
    than an undefined ratio.

    Example:
        >>> rsi = RSI(period=14, smoothing='wilders')
        >>> for bar in market_data:
        ...     rsi.update(bar)
        ...     if rsi.is_ready and rsi.value > 70:
        ...         print(f"Overbought: RSI = {rsi.value:.1f}")
    """

    required_inputs = ('close',)  # Default, overridden by input_field parameter

    def __init__(
        self,
        period: int = 14,
        input_field: str = 'close',
        smoothing: Smoothing = 'wilders',
        overbought: float = 70.0,
        oversold: float = 30.0,
    ):
        """
        Initialize Relative Strength Index indicator.

        Args:
            period (int): Number of periods for RSI calculation.
                Standard period is 14. Must be positive integer >= 2.
            input_field (str): Sample field to use for calculation. Defaults to 'close'.
            smoothing (str): 'wilders', 'simple' or 'ema'.
            overbought (float): Upper threshold for :attr:`condition`.
            oversold (float): Lower threshold for :attr:`condition`.

        Raises:
            ConfigError: If period < 2, smoothing is unknown or thresholds are inverted.
        """
        # RSI requires at least 2 periods for gain/loss calculation
        validate_period(period, minimum=2, indicator_name="RSI")

        super().__init__(period, input_field)

        # Override required_inputs based on input_field parameter
        self.required_inputs = (self.input_field,)

        # One extra sample for the first gain/loss
        self._ready_threshold = self.period + 1

        if smoothing not in SMOOTHING_METHODS:
            raise ConfigError("smoothing", smoothing, f"one of {list(SMOOTHING_METHODS)}", self._name)
        self.smoothing = smoothing
        self._tracker = GainLossTracker(self.period, smoothing)

        validate_thresholds(overbought, oversold, indicator_name=self._name)
        self.overbought = float(overbought)
        self.oversold = float(oversold)

        self._rsi_value: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        """
        Process a new data point and update the RSI value.

        Args:
            data_point: Sample, mapping or bare number carrying the input field.

        Raises:
            MissingInputError: If required input field is missing.
            InvalidDataError: If input data contains invalid values.
        """
        fields = self._validate_input_data(data_point)

        self._tracker.update(fields[self.input_field])

        avg_gain = self._tracker.average_gain()
        avg_loss = self._tracker.average_loss()
        if avg_gain is Unavailable or avg_loss is Unavailable:
            self._rsi_value = Unavailable
        elif avg_loss == 0:
            # No losses in the window
            self._rsi_value = 100.0
        else:
            rs = avg_gain / avg_loss
            self._rsi_value = 100.0 - (100.0 / (1.0 + rs))

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        """
        Get the current RSI value.

        Returns:
            MaybeValue[float]: RSI between 0 and 100, or Unavailable during warm-up.
        """
        return self._rsi_value

    @property
    def condition(self) -> MaybeValue[MarketCondition]:
        """OVERBOUGHT / OVERSOLD / NEUTRAL against the configured thresholds."""
        if self._rsi_value is Unavailable:
            return Unavailable
        return classify_level(self._rsi_value, self.overbought, self.oversold)

    @property
    def average_gain(self) -> MaybeValue[float]:
        return self._tracker.average_gain()

    @property
    def average_loss(self) -> MaybeValue[float]:
        return self._tracker.average_loss()

    def reset(self) -> None:
        super().reset()
        self._tracker.reset()
        self._rsi_value = Unavailable


class Momentum(BaseIndicator):
    """
    Price momentum over ``period`` bars.

    Mathematical Formula:
        Momentum = Price - Price[n bars ago]
        Ratio = Price / Price[n bars ago] * 100

    The ratio is None when the reference price is zero.
    """

    required_inputs = ('close',)
    result_type = MomentumResult

    def __init__(self, period: int = 10, input_field: str = 'close'):
        super().__init__(period, input_field)
        self.required_inputs = (self.input_field,)

        # Current price plus the n prices behind it
        self._window = RollingAccumulator(self.period + 1)
        self._ready_threshold = self.period + 1

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)

        self._window.push(fields[self.input_field])

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[MomentumResult]:
        if not self._window.is_full:
            return Unavailable

        price = self._window.newest()
        reference = self._window.oldest()
        ratio = price / reference * 100.0 if reference != 0 else None
        return MomentumResult(value=price - reference, ratio=ratio)

    def reset(self) -> None:
        super().reset()
        self._window.reset()


class ROC(BaseIndicator):
    """
    Rate of Change (ROC) indicator.

    Mathematical Formula:
        ROC = (Price - Price[n bars ago]) / Price[n bars ago] * 100

    Besides the raw percentage the result carries a momentum score (ROC
    scaled so that ±10% maps to ±100, clamped), the acceleration against the
    previous ROC, and a BUY/SELL/HOLD signal at ±``signal_threshold``.

    A step whose reference price is zero yields Unavailable and leaves the
    previous ROC (used for acceleration) untouched.
    """

    required_inputs = ('close',)
    result_type = ROCResult

    def __init__(self, period: int = 12, input_field: str = 'close', signal_threshold: float = 2.0):
        """
        Initialize Rate of Change indicator.

        Args:
            period (int): Look-back distance in bars.
            input_field (str): Sample field to use for calculation. Defaults to 'close'.
            signal_threshold (float): Percentage beyond which a BUY or SELL is signalled.
        """
        super().__init__(period, input_field)
        self.required_inputs = (self.input_field,)

        self.signal_threshold = validate_multiplier(signal_threshold, "signal_threshold", self._name)

        self._window = RollingAccumulator(self.period + 1)
        self._ready_threshold = self.period + 1

        self._roc_value: MaybeValue[ROCResult] = Unavailable
        self._previous_roc: Optional[float] = None

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)

        self._window.push(fields[self.input_field])

        self._roc_value = Unavailable
        if self._window.is_full:
            reference = self._window.oldest()
            if reference != 0:
                roc = (self._window.newest() - reference) / reference * 100.0
                acceleration = roc - self._previous_roc if self._previous_roc is not None else None
                self._previous_roc = roc
                self._roc_value = ROCResult(
                    value=roc,
                    momentum=max(-100.0, min(100.0, roc * 10.0)),
                    acceleration=acceleration,
                    signal=self._signal(roc),
                )

        self._update_metadata(data_point)
        self._store_output(self.value)

    def _signal(self, roc: float) -> TradingSignal:
        if roc > self.signal_threshold:
            return TradingSignal.BUY
        if roc < -self.signal_threshold:
            return TradingSignal.SELL
        return TradingSignal.HOLD

    @property
    def value(self) -> MaybeValue[ROCResult]:
        return self._roc_value

    def reset(self) -> None:
        super().reset()
        self._window.reset()
        self._roc_value = Unavailable
        self._previous_roc = None


class CCI(BaseIndicator):
    """
    Commodity Channel Index (CCI).

    Mathematical Formula:
        TP = (High + Low + Close) / 3
        CCI = (TP - SMA(TP, n)) / (constant * MeanDeviation(TP, n))

    The mean absolute deviation is taken around the current SMA of the
    window. A zero mean deviation yields 0.

    Conditions:
        >= +200 extreme overbought, >= +100 overbought,
        <= -200 extreme oversold, <= -100 oversold.
    """

    required_inputs = ('high', 'low', 'close')

    def __init__(
        self,
        period: int = 20,
        constant: float = 0.015,
        overbought: float = 100.0,
        oversold: float = -100.0,
        extreme_overbought: float = 200.0,
        extreme_oversold: float = -200.0,
    ):
        super().__init__(period)

        self.constant = validate_multiplier(constant, "constant", self._name)

        validate_thresholds(overbought, oversold, indicator_name=self._name)
        validate_thresholds(extreme_overbought, overbought, "extreme_overbought", "overbought", self._name)
        validate_thresholds(oversold, extreme_oversold, "oversold", "extreme_oversold", self._name)
        self.overbought = float(overbought)
        self.oversold = float(oversold)
        self.extreme_overbought = float(extreme_overbought)
        self.extreme_oversold = float(extreme_oversold)

        self._typical_prices = RollingAccumulator(self.period)
        self._cci_value: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)

        typical_price = (fields['high'] + fields['low'] + fields['close']) / 3.0
        self._typical_prices.push(typical_price)

        if self._typical_prices.is_full:
            mean = self._typical_prices.current_mean()
            mean_deviation = sum(abs(tp - mean) for tp in self._typical_prices) / self.period
            if mean_deviation == 0:
                self._cci_value = 0.0
            else:
                self._cci_value = (typical_price - mean) / (self.constant * mean_deviation)

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        return self._cci_value

    @property
    def condition(self) -> MaybeValue[MarketCondition]:
        if self._cci_value is Unavailable:
            return Unavailable
        return classify_level(
            self._cci_value, self.overbought, self.oversold,
            self.extreme_overbought, self.extreme_oversold,
        )

    def reset(self) -> None:
        super().reset()
        self._typical_prices.reset()
        self._cci_value = Unavailable


class WilliamsR(BaseIndicator):
    """
    Williams %R oscillator.

    Mathematical Formula:
        %R = (Highest High - Close) / (Highest High - Lowest Low) * -100

    The result is clamped to [-100, 0]; a flat window (zero range) reads -50.

    Conditions:
        >= -10 extreme overbought, >= -20 overbought,
        <= -90 extreme oversold, <= -80 oversold.
    """

    required_inputs = ('high', 'low', 'close')

    def __init__(
        self,
        period: int = 14,
        overbought: float = -20.0,
        oversold: float = -80.0,
        extreme_overbought: float = -10.0,
        extreme_oversold: float = -90.0,
    ):
        super().__init__(period)

        validate_thresholds(overbought, oversold, indicator_name=self._name)
        validate_thresholds(extreme_overbought, overbought, "extreme_overbought", "overbought", self._name)
        validate_thresholds(oversold, extreme_oversold, "oversold", "extreme_oversold", self._name)
        self.overbought = float(overbought)
        self.oversold = float(oversold)
        self.extreme_overbought = float(extreme_overbought)
        self.extreme_oversold = float(extreme_oversold)

        self._extrema = ExtremaTracker(self.period)
        self._wr_value: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)

        self._extrema.update(fields['high'], fields['low'])

        if self._extrema.is_ready:
            highest = self._extrema.highest()
            price_range = self._extrema.range()
            if price_range == 0:
                self._wr_value = -50.0
            else:
                raw = (highest - fields['close']) / price_range * -100.0
                self._wr_value = max(-100.0, min(0.0, raw))

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        return self._wr_value

    @property
    def condition(self) -> MaybeValue[MarketCondition]:
        if self._wr_value is Unavailable:
            return Unavailable
        return classify_level(
            self._wr_value, self.overbought, self.oversold,
            self.extreme_overbought, self.extreme_oversold,
        )

    def reset(self) -> None:
        super().reset()
        self._extrema.reset()
        self._wr_value = Unavailable
