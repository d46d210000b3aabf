"""
Volatility technical indicators.

Classes:
    ATR: Average True Range with Wilder smoothing
    StandardDeviation: Rolling standard deviation with z-score and volatility bucket
"""

from typing import Any, Optional

from ..base import BaseIndicator
from ..primitives import RollingAccumulator, WildersSmoothing
from ..results import StdDevResult
from ..signals import classify_volatility
from ..types import MaybeValue, Unavailable
from ..validation import validate_multiplier, validate_period


class ATR(BaseIndicator):
    """
    Average True Range (ATR) indicator.

    Mathematical Formula:
        TR = max(High - Low, |High - PrevClose|, |Low - PrevClose|)
        ATR = Wilder(TR, n), seeded with the mean of the first n TRs

    The first bar has no previous close, so its true range is High - Low.
    """

    required_inputs = ('high', 'low', 'close')

    def __init__(self, period: int = 14):
        """
        Initialize Average True Range indicator.

        Args:
            period (int): Smoothing period. Standard period is 14.

        Raises:
            ConfigError: If period is not a positive integer.
        """
        super().__init__(period)

        self._smoother = WildersSmoothing(self.period, seed_count=self.period)
        self._previous_close: Optional[float] = None
        self._true_range: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)

        high, low, close = fields['high'], fields['low'], fields['close']
        if self._previous_close is None:
            true_range = high - low
        else:
            true_range = max(
                high - low,
                abs(high - self._previous_close),
                abs(low - self._previous_close),
            )

        self._true_range = true_range
        self._smoother.update(true_range)
        self._previous_close = close

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        """Current ATR, or Unavailable until ``period`` true ranges were seen."""
        return self._smoother.value

    @property
    def true_range(self) -> MaybeValue[float]:
        """True range of the latest bar."""
        return self._true_range

    def reset(self) -> None:
        super().reset()
        self._smoother.reset()
        self._previous_close = None
        self._true_range = Unavailable


class StandardDeviation(BaseIndicator):
    """
    Rolling standard deviation of a price series.

    Mathematical Formula:
        Sample:      σ = sqrt(Σ(x - μ)² / (n - 1))
        Population:  σ = sqrt(Σ(x - μ)² / n)
        Z-Score = (x - μ) / σ            (0 when σ == 0)
        CV = σ / |μ| * 100               (0 when μ == 0)

    The coefficient of variation drives the volatility bucket:
    < 5 very low, < 15 low, < 25 normal, < 50 high, otherwise very high.

    Example:
        >>> sd = StandardDeviation(period=20)
        >>> for bar in market_data:
        ...     sd.update(bar)
        ...     if sd.is_ready:
        ...         print(sd.value.std_dev, sd.value.volatility_level)
    """

    required_inputs = ('close',)
    result_type = StdDevResult

    def __init__(self, period: int = 20, input_field: str = 'close', sample: bool = True):
        """
        Initialize the standard deviation indicator.

        Args:
            period (int): Window length. Must be >= 2 for sample deviation.
            input_field (str): Sample field to use for calculation. Defaults to 'close'.
            sample (bool): Use sample (n - 1) rather than population (n) variance.

        Raises:
            ConfigError: If period is too small for the chosen variance.
        """
        self.sample = bool(sample)
        validate_period(period, minimum=2 if self.sample else 1, indicator_name="StandardDeviation")

        super().__init__(period, input_field)
        self.required_inputs = (self.input_field,)

        self._ddof = 1 if self.sample else 0
        self._window = RollingAccumulator(self.period)

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)

        self._window.push(fields[self.input_field])

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[StdDevResult]:
        if not self.is_ready:
            return Unavailable

        variance = self._window.current_variance(self._ddof)
        std_dev = self._window.current_std(self._ddof)
        mean = self._window.current_mean()
        latest = self._window.newest()

        z_score = (latest - mean) / std_dev if std_dev != 0 else 0.0
        coefficient_of_variation = std_dev / abs(mean) * 100.0 if mean != 0 else 0.0

        return StdDevResult(
            std_dev=std_dev,
            variance=variance,
            mean=mean,
            z_score=z_score,
            coefficient_of_variation=coefficient_of_variation,
            volatility_level=classify_volatility(coefficient_of_variation),
        )

    def is_outlier(self, value: float, threshold: float = 2.0) -> bool:
        """
        Check whether ``value`` lies more than ``threshold`` deviations from the window mean.

        Returns False during warm-up or when the window is flat.
        """
        threshold = validate_multiplier(threshold, "threshold", self._name)
        if not self.is_ready:
            return False

        std_dev = self._window.current_std(self._ddof)
        if std_dev == 0:
            return False
        return abs(value - self._window.current_mean()) / std_dev > threshold

    def reset(self) -> None:
        super().reset()
        self._window.reset()
