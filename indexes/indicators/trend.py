"""
Trend-following technical indicators.

This module implements moving average indicators that follow price trends.
Both are thin policies over the shared primitives, so every update is O(1).

Classes:
    SMA: Simple Moving Average backed by a RollingAccumulator
    EMA: Exponential Moving Average backed by an ExponentialSmoother
"""

from typing import Any, Optional

from ..base import BaseIndicator
from ..primitives import ExponentialSmoother, RollingAccumulator
from ..signals import TrendDirection, compare_direction
from ..types import MaybeValue, Unavailable
from ..validation import validate_decay


class SMA(BaseIndicator):
    """
    Simple Moving Average (SMA) indicator.

    Calculates the arithmetic mean of prices over a specified period. The
    running sum lives in a RollingAccumulator, which evicts the oldest value
    on each push and periodically recomputes its sums to bound drift.

    Mathematical Formula:
        SMA = (P1 + P2 + ... + Pn) / n

    Example:
        >>> sma = SMA(period=20, input_field='close')
        >>> for bar in market_data:
        ...     sma.update(bar)
        ...     if sma.is_ready:
        ...         print(f"SMA(20): {sma.value:.2f}")
    """

    required_inputs = ('close',)  # Default, overridden by input_field parameter

    def __init__(self, period: int, input_field: str = 'close'):
        """
        Initialize Simple Moving Average indicator.

        Args:
            period (int): Number of periods for the moving average calculation.
                Must be positive integer >= 1.
            input_field (str): Sample field to use for calculation. Defaults to 'close'.

        Raises:
            ConfigError: If period is not a positive integer.
        """
        super().__init__(period, input_field)

        # Override required_inputs based on input_field parameter
        self.required_inputs = (self.input_field,)

        self._accumulator = RollingAccumulator(self.period)
        self._previous_value: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        """
        Process a new data point and update the SMA value.

        Args:
            data_point: Sample, mapping or bare number carrying the input field.

        Raises:
            MissingInputError: If required input field is missing.
            InvalidDataError: If input data contains invalid values (NaN, None, inf).
        """
        fields = self._validate_input_data(data_point)

        self._previous_value = self.value
        self._accumulator.push(fields[self.input_field])

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        """
        Get the current Simple Moving Average value.

        Returns:
            MaybeValue[float]: Current SMA value, or Unavailable until ``period`` samples were seen.
        """
        if not self.is_ready:
            return Unavailable

        return self._accumulator.current_mean()

    @property
    def trend(self) -> TrendDirection:
        """Direction of the latest SMA against the previous one (SIDEWAYS until two values exist)."""
        current = self.value
        if current is Unavailable or self._previous_value is Unavailable:
            return TrendDirection.SIDEWAYS
        return compare_direction(current, self._previous_value)

    @property
    def accumulator(self) -> RollingAccumulator:
        """Window backing this average, shared with indicators built on top of it."""
        return self._accumulator

    def reset(self) -> None:
        """Reset the indicator to its initial state, including the rolling window."""
        super().reset()
        self._accumulator.reset()
        self._previous_value = Unavailable


class EMA(BaseIndicator):
    """
    Exponential Moving Average (EMA) indicator.

    Calculates exponentially-weighted moving average that gives more weight
    to recent prices.

    Mathematical Formula:
        EMA_today = α * Price_today + (1-α) * EMA_yesterday
        where α = 2 / (period + 1) by default, or custom alpha if provided

    Initialization Strategy:
        - Default: seeded with the first value, ready after one sample
        - ``sma_seed=True``: seeded with the SMA of the first ``period`` values,
          ready after ``period`` samples

    Example:
        >>> ema = EMA(period=12, input_field='close')
        >>> ema_custom = EMA(period=12, alpha=0.1)
        >>> for bar in market_data:
        ...     ema.update(bar)
        ...     print(f"EMA(12): {ema.value:.2f}")
    """

    required_inputs = ('close',)  # Default, overridden by input_field parameter

    def __init__(
        self,
        period: int,
        input_field: str = 'close',
        alpha: Optional[float] = None,
        sma_seed: bool = False,
    ):
        """
        Initialize Exponential Moving Average indicator.

        Args:
            period (int): Number of periods for the EMA. Must be positive integer >= 1.
            input_field (str): Sample field to use for calculation. Defaults to 'close'.
            alpha (Optional[float]): Custom smoothing factor in (0, 1].
                If None, uses standard EMA formula: α = 2/(period+1).
            sma_seed (bool): Seed with the mean of the first ``period`` values.

        Raises:
            ConfigError: If period is not positive or alpha is out of range.
        """
        super().__init__(period, input_field)

        # Override required_inputs based on input_field parameter
        self.required_inputs = (self.input_field,)

        if alpha is not None:
            self._alpha = validate_decay(alpha, "alpha", self._name)
        else:
            # Standard EMA formula: α = 2/(N+1)
            self._alpha = 2.0 / (self.period + 1)

        self.sma_seed = bool(sma_seed)
        seed_count = self.period if self.sma_seed else 1
        self._smoother = ExponentialSmoother(self._alpha, seed_count)
        self._ready_threshold = seed_count

    def update(self, data_point: Any) -> None:
        """
        Process a new data point and update the EMA value.

        Args:
            data_point: Sample, mapping or bare number carrying the input field.

        Raises:
            MissingInputError: If required input field is missing.
            InvalidDataError: If input data contains invalid values.
        """
        fields = self._validate_input_data(data_point)

        self._smoother.update(fields[self.input_field])

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        """Current EMA value, or Unavailable while seeding."""
        return self._smoother.value

    @property
    def alpha(self) -> float:
        """Smoothing factor (alpha) used by this EMA."""
        return self._alpha

    def reset(self) -> None:
        super().reset()
        self._smoother.reset()
