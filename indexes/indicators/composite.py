"""
Composite technical indicators.

This module implements composite indicators that are built from other indicators.
"""

from typing import Any, List, Optional, Tuple

from ..base import BaseIndicator
from ..exceptions import ConfigError
from ..primitives import EmaSmoothing, ExtremaTracker, RollingAccumulator
from ..results import BollingerResult, MACDResult, MovingAverageResult, StochasticResult
from ..signals import Crossover, TradingSignal, classify_level
from ..types import MaybeValue, Unavailable
from ..validation import validate_multiplier, validate_period, validate_thresholds
from .trend import EMA, SMA


class BollingerBands(BaseIndicator):
    """
    Bollinger Bands (BBands) indicator.

    Comprises a middle band (SMA) and upper/lower bands based on standard deviation.

    Mathematical Formula:
        Middle Band = SMA(period)
        Upper Band = Middle Band + (K * StdDev(period))
        Lower Band = Middle Band - (K * StdDev(period))
        Bandwidth = (Upper Band - Lower Band) / Middle Band

    The deviation is the population deviation of the very window the middle
    band averages, so the middle band always equals the SMA exactly.

    Attributes:
        middle_band (SMA): The middle band (SMA) indicator.
    """

    required_inputs = ('close',)
    result_type = BollingerResult

    def __init__(self, period: int = 20, k: float = 2.0, input_field: str = 'close'):
        """
        Initialize Bollinger Bands indicator.

        Args:
            period (int): The lookback period for SMA and StdDev.
            k (float): The number of standard deviations for the bands.
            input_field (str): The input field to use.
        """
        super().__init__(period, input_field)
        self.required_inputs = (self.input_field,)

        self._k = validate_multiplier(k, "k", self._name)

        self.middle_band = SMA(self.period, self.input_field)
        self._children: List[BaseIndicator] = [self.middle_band]

    def update(self, data_point: Any) -> None:
        """
        Update the Bollinger Bands with a new data point.

        Args:
            data_point: Sample, mapping or bare number carrying the input field.
        """
        fields = self._validate_input_data(data_point)

        self.middle_band.update({self.input_field: fields[self.input_field]})

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[BollingerResult]:
        """
        Get the current Bollinger Bands values.

        Returns:
            MaybeValue[BollingerResult]: Upper, middle and lower band plus bandwidth,
                or Unavailable during warm-up.
        """
        if not self.is_ready:
            return Unavailable

        middle = self.middle_band.value
        std_dev = self.middle_band.accumulator.current_std()

        upper = middle + self._k * std_dev
        lower = middle - self._k * std_dev

        bandwidth = (upper - lower) / middle if middle != 0 else 0.0

        return BollingerResult(upper=upper, middle=middle, lower=lower, bandwidth=bandwidth)

    @property
    def k(self) -> float:
        return self._k


class MACD(BaseIndicator):
    """
    Moving Average Convergence Divergence (MACD) indicator.

    A trend-following momentum indicator that shows the relationship between two
    exponential moving averages (EMAs) of a security's price.

    Mathematical Formula:
        MACD Line = EMA(fast_period) - EMA(slow_period)
        Signal Line = EMA(MACD Line, signal_period)
        Histogram = MACD Line - Signal Line

    Both price EMAs are seeded with the first value. The signal line starts
    receiving the MACD line once ``slow_period`` samples were seen, and the
    indicator is ready after ``slow_period + signal_period - 1`` samples.

    Attributes:
        fast_ema (EMA): The fast EMA indicator.
        slow_ema (EMA): The slow EMA indicator.
    """

    required_inputs = ('close',)
    result_type = MACDResult

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        input_field: str = 'close',
    ):
        """
        Initialize MACD indicator.

        Args:
            fast_period (int): The period for the fast EMA.
            slow_period (int): The period for the slow EMA.
            signal_period (int): The period for the signal line EMA.
            input_field (str): The input field to use.

        Raises:
            ConfigError: If a period is invalid or fast_period >= slow_period.
        """
        fast_period = validate_period(fast_period, "fast_period", indicator_name="MACD")
        slow_period = validate_period(slow_period, "slow_period", indicator_name="MACD")
        signal_period = validate_period(signal_period, "signal_period", indicator_name="MACD")
        if fast_period >= slow_period:
            raise ConfigError("fast_period", fast_period, f"value less than slow_period ({slow_period})", "MACD")

        # The warm-up period is determined by the slow EMA plus the signal EMA.
        super().__init__(period=slow_period + signal_period - 1, input_field=input_field)
        self.required_inputs = (self.input_field,)

        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period

        self.fast_ema = EMA(fast_period, self.input_field)
        self.slow_ema = EMA(slow_period, self.input_field)
        # Fed with the MACD line, not with the input field
        self._signal_smoother = EmaSmoothing(signal_period)

        self._children: List[BaseIndicator] = [self.fast_ema, self.slow_ema]
        self._macd_value: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        """
        Update the MACD with a new data point.

        Args:
            data_point: Sample, mapping or bare number carrying the input field.
        """
        fields = self._validate_input_data(data_point)
        value = {self.input_field: fields[self.input_field]}

        self.fast_ema.update(value)
        self.slow_ema.update(value)

        if self._data_count + 1 >= self.slow_period:
            self._macd_value = self.fast_ema.value - self.slow_ema.value
            self._signal_smoother.update(self._macd_value)

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[MACDResult]:
        """
        Get the current MACD values.

        Returns:
            MaybeValue[MACDResult]: MACD line, signal line, histogram and trading
                signal, or Unavailable during warm-up.
        """
        if not self.is_ready:
            return Unavailable

        macd = self._macd_value
        signal = self._signal_smoother.value

        if macd > signal:
            trading_signal = TradingSignal.BUY
        elif macd < signal:
            trading_signal = TradingSignal.SELL
        else:
            trading_signal = TradingSignal.HOLD

        return MACDResult(macd=macd, signal=signal, histogram=macd - signal, trading_signal=trading_signal)

    def reset(self) -> None:
        super().reset()
        self._signal_smoother.reset()
        self._macd_value = Unavailable


class Stochastic(BaseIndicator):
    """
    Stochastic Oscillator (Fast and Slow variants).

    A momentum indicator comparing a particular closing price of a security
    to a range of its prices over a certain period of time.

    Mathematical Formula:
        Raw %K = 100 * (Current Close - Lowest Low) / (Highest High - Lowest Low)
        Slow %K = SMA(Raw %K, smooth_k) [if smooth_k > 1]
        Fast %K = Raw %K [if smooth_k = 1]
        %D = SMA(%K, d_period)

    A flat range gives a raw %K of 50. The result also carries:
        condition: OVERBOUGHT at %K >= overbought, OVERSOLD at %K <= oversold
        crossover: %K crossing %D since the previous bar
        signal: BUY when %K > %D below overbought, SELL when %K < %D above oversold
        strength: (|%K - 50| / 50 + |%K - %D| / 20) / 2 * 100, capped at 100
    """

    required_inputs = ('high', 'low', 'close')
    result_type = StochasticResult

    def __init__(
        self,
        k_period: int = 14,
        d_period: int = 3,
        smooth_k: int = 3,
        overbought: float = 80.0,
        oversold: float = 20.0,
    ):
        """
        Initialize Stochastic Oscillator.

        Args:
            k_period (int): The lookback period for %K.
            d_period (int): The smoothing period for %D.
            smooth_k (int): The smoothing period for %K (default 3 for Slow Stochastic).
            overbought (float): Upper %K threshold.
            oversold (float): Lower %K threshold.
        """
        k_period = validate_period(k_period, "k_period", indicator_name="Stochastic")
        d_period = validate_period(d_period, "d_period", indicator_name="Stochastic")
        smooth_k = validate_period(smooth_k, "smooth_k", indicator_name="Stochastic")

        super().__init__(period=k_period)

        validate_thresholds(overbought, oversold, indicator_name=self._name)
        self.overbought = float(overbought)
        self.oversold = float(oversold)

        self.k_period = k_period
        self.d_period = d_period
        self.smooth_k = smooth_k
        self._ready_threshold = k_period + smooth_k - 1 + d_period - 1

        self._extrema = ExtremaTracker(k_period)
        self._k_window = RollingAccumulator(smooth_k)
        self._d_window = RollingAccumulator(d_period)

        self._previous: Optional[Tuple[float, float]] = None
        self._result: MaybeValue[StochasticResult] = Unavailable

    def update(self, data_point: Any) -> None:
        """
        Update the Stochastic Oscillator with a new data point.

        Args:
            data_point: Sample or mapping with high, low and close.
        """
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)

        self._extrema.update(fields['high'], fields['low'])

        if self._extrema.is_ready:
            price_range = self._extrema.range()
            if price_range == 0:
                raw_k = 50.0
            else:
                raw_k = 100.0 * (fields['close'] - self._extrema.lowest()) / price_range
            self._k_window.push(raw_k)

            if self._k_window.is_full:
                self._d_window.push(self._k_window.current_mean())

                if self._d_window.is_full:
                    k = self._k_window.current_mean()
                    d = self._d_window.current_mean()
                    self._result = self._build_result(k, d)
                    self._previous = (k, d)

        self._update_metadata(data_point)
        self._store_output(self.value)

    def _build_result(self, k: float, d: float) -> StochasticResult:
        if self._previous is None:
            crossover = Crossover.NONE
        else:
            prev_k, prev_d = self._previous
            if k > d and prev_k <= prev_d:
                crossover = Crossover.BULLISH
            elif k < d and prev_k >= prev_d:
                crossover = Crossover.BEARISH
            else:
                crossover = Crossover.NONE

        if k > d and k < self.overbought:
            signal = TradingSignal.BUY
        elif k < d and k > self.oversold:
            signal = TradingSignal.SELL
        else:
            signal = TradingSignal.HOLD

        trend_strength = abs(k - 50.0) / 50.0
        momentum = abs(k - d) / 20.0
        strength = min((trend_strength + momentum) / 2.0 * 100.0, 100.0)

        return StochasticResult(
            k=k,
            d=d,
            condition=classify_level(k, self.overbought, self.oversold),
            crossover=crossover,
            signal=signal,
            strength=strength,
        )

    @property
    def value(self) -> MaybeValue[StochasticResult]:
        return self._result

    def reset(self) -> None:
        super().reset()
        self._extrema.reset()
        self._k_window.reset()
        self._d_window.reset()
        self._previous = None
        self._result = Unavailable


class MovingAverages(BaseIndicator):
    """
    Bundle of short/medium/long SMAs and EMAs plus a MACD over one series.

    Every child is fed each sample; a field of the result is Unavailable until
    its own child is ready, so the bundle itself is ready from the first sample.
    """

    required_inputs = ('close',)
    result_type = MovingAverageResult

    def __init__(
        self,
        short_period: int = 20,
        medium_period: int = 50,
        long_period: int = 200,
        macd_fast: int = 12,
        macd_slow: int = 26,
        macd_signal: int = 9,
        input_field: str = 'close',
    ):
        super().__init__(period=1, input_field=input_field)
        self.required_inputs = (self.input_field,)

        self.sma_short = SMA(short_period, self.input_field)
        self.sma_medium = SMA(medium_period, self.input_field)
        self.sma_long = SMA(long_period, self.input_field)
        self.ema_short = EMA(short_period, self.input_field)
        self.ema_medium = EMA(medium_period, self.input_field)
        self.ema_long = EMA(long_period, self.input_field)
        self.macd = MACD(macd_fast, macd_slow, macd_signal, self.input_field)

        self._children: List[BaseIndicator] = [
            self.sma_short, self.sma_medium, self.sma_long,
            self.ema_short, self.ema_medium, self.ema_long,
            self.macd,
        ]

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        value = {self.input_field: fields[self.input_field]}

        for child in self._children:
            child.update(value)

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[MovingAverageResult]:
        if not self.is_ready:
            return Unavailable

        return MovingAverageResult(
            sma_short=self.sma_short.value,
            sma_medium=self.sma_medium.value,
            sma_long=self.sma_long.value,
            ema_short=self.ema_short.value,
            ema_medium=self.ema_medium.value,
            ema_long=self.ema_long.value,
            macd=self.macd.value,
        )
