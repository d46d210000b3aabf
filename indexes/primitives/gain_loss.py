"""
Directional movement tracker for ratio indicators (RSI, MFI, ADX).
"""

from typing import Literal, Optional

from ..exceptions import ConfigError
from ..types import MaybeValue, Unavailable
from ..validation import validate_period
from .rolling import RollingAccumulator
from .smoothing import EmaSmoothing, WildersSmoothing

SMOOTHING_METHODS = ('simple', 'wilders', 'ema')

Smoothing = Literal['simple', 'wilders', 'ema']


class GainLossTracker:
    """
    Tracks upward and downward movement magnitudes over a window.

    Each :meth:`update` computes ``delta = value - previous`` and records
    ``max(delta, 0)`` as a gain and ``max(-delta, 0)`` as a loss. The very
    first update has no delta and only seeds ``previous``.

    Smoothing Methods:
        - 'simple': rolling mean of the last N movements (Cutler's variant)
        - 'wilders': Wilder's smoothing (α = 1/N) seeded with the mean of the first N movements
        - 'ema': EMA smoothing (α = 2/(N+1)) with the same seed

    Averages are Unavailable until N movements have been recorded, whichever
    method is used.
    """

    def __init__(self, period: int, smoothing: Smoothing = 'simple'):
        """
        Initialize the tracker.

        Args:
            period (int): Number of movements averaged.
            smoothing (str): One of 'simple', 'wilders', 'ema'.

        Raises:
            ConfigError: If period is not positive or smoothing is unknown.
        """
        self.period = validate_period(period)

        if smoothing == 'simple':
            self._gains = RollingAccumulator(self.period)
            self._losses = RollingAccumulator(self.period)
        elif smoothing == 'wilders':
            self._gains = WildersSmoothing(self.period, seed_count=self.period)
            self._losses = WildersSmoothing(self.period, seed_count=self.period)
        elif smoothing == 'ema':
            self._gains = EmaSmoothing(self.period, seed_count=self.period)
            self._losses = EmaSmoothing(self.period, seed_count=self.period)
        else:
            raise ConfigError("smoothing", smoothing, f"one of {list(SMOOTHING_METHODS)}")

        self.smoothing = smoothing
        self._previous: Optional[float] = None
        self._movements = 0

    def update(self, value: float) -> None:
        """Record the movement from the previous value to ``value``."""
        if self._previous is None:
            self._previous = value
            return

        delta = value - self._previous
        self._previous = value
        self.push_movement(max(delta, 0.0), max(-delta, 0.0))

    def push_movement(self, gain: float, loss: float) -> None:
        """
        Record an already-split movement.

        Used by policies whose magnitudes are not plain deltas, such as money
        flow (MFI) or directional movement (ADX).
        """
        if self.smoothing == 'simple':
            self._gains.push(gain)
            self._losses.push(loss)
        else:
            self._gains.update(gain)
            self._losses.update(loss)
        self._movements += 1

    @property
    def is_ready(self) -> bool:
        return self._movements >= self.period

    @property
    def previous(self) -> Optional[float]:
        return self._previous

    def average_gain(self) -> MaybeValue[float]:
        """Average gain over the window, or Unavailable during warm-up."""
        if not self.is_ready:
            return Unavailable
        if self.smoothing == 'simple':
            return self._gains.current_mean()
        return self._gains.value

    def average_loss(self) -> MaybeValue[float]:
        """Average loss over the window, or Unavailable during warm-up."""
        if not self.is_ready:
            return Unavailable
        if self.smoothing == 'simple':
            return self._losses.current_mean()
        return self._losses.value

    def reset(self) -> None:
        """Reset the tracker to its initial state."""
        self._gains.reset()
        self._losses.reset()
        self._previous = None
        self._movements = 0
