"""
Exponential smoothing primitives.

This module implements the exponential recursion shared by EMA, RSI, ATR and
ADX, with the decay factor supplied directly or derived from a period.

Classes:
    ExponentialSmoother: Exponential recursion with an explicit decay factor
    EmaSmoothing: Standard exponential moving average smoothing (α = 2/(N+1))
    WildersSmoothing: Wilder's exponential smoothing (α = 1/N)
"""

from ..types import MaybeValue, Unavailable
from ..validation import validate_decay, validate_period


class ExponentialSmoother:
    """
    Stateful exponential moving average recursion.

    Mathematical Formula:
        current = decay * value + (1 - decay) * previous

    The recursion is seeded with the mean of the first ``seed_count`` values
    (``seed_count=1`` seeds with the first value itself). No past values are
    retained; after seeding every update is a single multiply-add.

    Attributes:
        decay (float): Weight of the newest observation, in (0, 1].
        seed_count (int): Number of values averaged into the seed.
    """

    def __init__(self, decay: float, seed_count: int = 1):
        """
        Initialize the smoother.

        Args:
            decay (float): Decay factor in (0, 1]. Out-of-range values are rejected, never clamped.
            seed_count (int): Number of initial values averaged into the seed.

        Raises:
            ConfigError: If decay is outside (0, 1] or seed_count is not a positive integer.
        """
        self.decay = validate_decay(decay)
        self.seed_count = validate_period(seed_count, "seed_count")
        self._current: MaybeValue[float] = Unavailable
        self._seed_sum = 0.0
        self._count = 0

    def update(self, value: float) -> MaybeValue[float]:
        """
        Update the smoothed value with a new data point.

        Args:
            value (float): New value to incorporate into smoothed result.

        Returns:
            MaybeValue[float]: The updated smoothed value, or Unavailable while
                the seed is still being collected.
        """
        self._count += 1

        if self._current is Unavailable:
            self._seed_sum += value
            if self._count >= self.seed_count:
                self._current = self._seed_sum / self.seed_count
            return self._current

        self._current = self.decay * value + (1.0 - self.decay) * self._current
        return self._current

    @property
    def value(self) -> MaybeValue[float]:
        """Current smoothed value, or Unavailable before the seed is complete."""
        return self._current

    @property
    def is_ready(self) -> bool:
        return self._current is not Unavailable

    @property
    def count(self) -> int:
        """Number of values seen since construction or the last reset."""
        return self._count

    def reset(self) -> None:
        """Reset the smoother to its initial state."""
        self._current = Unavailable
        self._seed_sum = 0.0
        self._count = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(decay={self.decay:.6g}, seed_count={self.seed_count})"


class EmaSmoothing(ExponentialSmoother):
    """
    Standard Exponential Moving Average smoothing.

    Uses α = 2/(N+1) as the smoothing factor, which gives more weight to
    recent values than Wilder's smoothing for the same period.
    """

    def __init__(self, period: int, seed_count: int = 1):
        self.period = validate_period(period)
        super().__init__(2.0 / (self.period + 1), seed_count)


class WildersSmoothing(ExponentialSmoother):
    """
    Wilder's exponential smoothing.

    Uses α = 1/N, the original smoothing used by J. Welles Wilder Jr. in
    RSI, ATR and ADX. The classic definitions seed with the simple average
    of the first N values, which is what ``seed_count=period`` gives.

    Mathematical Formula:
        smoothed = (previous * (N - 1) + value) / N
    """

    def __init__(self, period: int, seed_count: int = 1):
        self.period = validate_period(period)
        super().__init__(1.0 / self.period, seed_count)
