"""
Fixed-window numeric accumulator.

Classes:
    RollingAccumulator: Rolling sum, mean, variance, min and max over the last N values.
"""

import logging
import math
from collections import deque
from typing import Deque, Iterator, Optional, Tuple

from ..types import MaybeValue, Unavailable
from ..validation import validate_period

logger = logging.getLogger(__name__)


class RollingAccumulator:
    """
    O(1) amortized rolling aggregates over the trailing ``period`` values.

    Sum and sum of squares are kept relative to a shift constant (the window
    mean at the last restabilization), which keeps the variance formula away
    from catastrophic cancellation on large price levels. Every
    ``restabilize_every`` evictions both sums are recomputed from the window
    contents so floating-point drift stays bounded on arbitrarily long runs.

    Min and max come from monotonic deques of ``(value, index)`` pairs: each
    value enters and leaves each deque at most once.

    Attributes:
        period (int): Window length.
        restabilize_every (int): Evictions between full recomputes of the sums.
    """

    def __init__(self, period: int, restabilize_every: Optional[int] = None):
        """
        Initialize the accumulator.

        Args:
            period (int): Window length. Must be >= 1.
            restabilize_every (Optional[int]): Evictions between full recomputes.
                Defaults to ``period``, which keeps the recompute cost O(1) amortized.

        Raises:
            ConfigError: If period or restabilize_every is not a positive integer.
        """
        self.period = validate_period(period)
        if restabilize_every is None:
            self.restabilize_every = self.period
        else:
            self.restabilize_every = validate_period(restabilize_every, "restabilize_every")

        self._values: Deque[float] = deque(maxlen=self.period)
        self._min_deque: Deque[Tuple[float, int]] = deque()
        self._max_deque: Deque[Tuple[float, int]] = deque()
        self._count = 0
        self._evictions = 0

        # Sums of (x - shift) and (x - shift)^2
        self._shift = 0.0
        self._sum = 0.0
        self._sum_sq = 0.0

    def push(self, value: float) -> Optional[float]:
        """
        Append a value, evicting the oldest one when the window is full.

        Args:
            value (float): The new data point.

        Returns:
            Optional[float]: The evicted value, or None if the window was not full.
        """
        if not self._values:
            self._shift = value

        evicted = None
        if len(self._values) == self.period:
            evicted = self._values[0]
            delta = evicted - self._shift
            self._sum -= delta
            self._sum_sq -= delta * delta
            self._evictions += 1

        # Drop the front entry once its index falls out of the window
        if self._min_deque and self._min_deque[0][1] <= self._count - self.period:
            self._min_deque.popleft()
        if self._max_deque and self._max_deque[0][1] <= self._count - self.period:
            self._max_deque.popleft()

        # Remove values that can never be the extremum again
        while self._min_deque and self._min_deque[-1][0] >= value:
            self._min_deque.pop()
        self._min_deque.append((value, self._count))

        while self._max_deque and self._max_deque[-1][0] <= value:
            self._max_deque.pop()
        self._max_deque.append((value, self._count))

        self._values.append(value)
        delta = value - self._shift
        self._sum += delta
        self._sum_sq += delta * delta
        self._count += 1

        if self._evictions >= self.restabilize_every:
            self._restabilize()

        return evicted

    def _restabilize(self) -> None:
        """Recompute both running sums from the window, re-centred on its mean."""
        shift = math.fsum(self._values) / len(self._values)
        self._shift = shift
        self._sum = math.fsum(v - shift for v in self._values)
        self._sum_sq = math.fsum((v - shift) * (v - shift) for v in self._values)
        self._evictions = 0
        logger.debug("Restabilized rolling sums (period=%d, pushes=%d)", self.period, self._count)

    @property
    def is_full(self) -> bool:
        """True once ``period`` values have been pushed."""
        return len(self._values) == self.period

    @property
    def count(self) -> int:
        """Total number of values pushed since construction or the last reset."""
        return self._count

    def current_sum(self) -> float:
        """Sum of the values currently in the window (0.0 when empty)."""
        if not self._values:
            return 0.0
        return self._shift * len(self._values) + self._sum

    def current_mean(self) -> MaybeValue[float]:
        """Mean of the current window, or Unavailable when empty."""
        if not self._values:
            return Unavailable
        return self._shift + self._sum / len(self._values)

    def current_variance(self, ddof: int = 0) -> MaybeValue[float]:
        """
        Variance of the current window.

        Args:
            ddof (int): Delta degrees of freedom: 0 for population, 1 for sample variance.

        Returns:
            MaybeValue[float]: The variance (never negative), or Unavailable
                while the window holds ``ddof`` values or fewer.
        """
        n = len(self._values)
        if n - ddof <= 0:
            return Unavailable

        variance = (self._sum_sq - self._sum * self._sum / n) / (n - ddof)
        return variance if variance > 0.0 else 0.0

    def current_std(self, ddof: int = 0) -> MaybeValue[float]:
        """Standard deviation of the current window (see :meth:`current_variance`)."""
        variance = self.current_variance(ddof)
        if variance is Unavailable:
            return Unavailable
        return math.sqrt(variance)

    def current_min(self) -> MaybeValue[float]:
        """Minimum of the window, or Unavailable until the window is full."""
        if not self.is_full:
            return Unavailable
        return self._min_deque[0][0]

    def current_max(self) -> MaybeValue[float]:
        """Maximum of the window, or Unavailable until the window is full."""
        if not self.is_full:
            return Unavailable
        return self._max_deque[0][0]

    def bars_since_min(self) -> MaybeValue[int]:
        """Bars between the newest value and the most recent occurrence of the minimum."""
        if not self.is_full:
            return Unavailable
        return self._count - 1 - self._min_deque[0][1]

    def bars_since_max(self) -> MaybeValue[int]:
        """Bars between the newest value and the most recent occurrence of the maximum."""
        if not self.is_full:
            return Unavailable
        return self._count - 1 - self._max_deque[0][1]

    def oldest(self) -> MaybeValue[float]:
        """Oldest value still in the window."""
        return self._values[0] if self._values else Unavailable

    def newest(self) -> MaybeValue[float]:
        """Most recently pushed value."""
        return self._values[-1] if self._values else Unavailable

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def reset(self) -> None:
        """Reset the accumulator to its initial state."""
        self._values.clear()
        self._min_deque.clear()
        self._max_deque.clear()
        self._count = 0
        self._evictions = 0
        self._shift = 0.0
        self._sum = 0.0
        self._sum_sq = 0.0

    def __repr__(self) -> str:
        return f"RollingAccumulator(period={self.period}, size={len(self._values)})"
