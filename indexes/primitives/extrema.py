"""Rolling high/low tracker."""

from typing import Optional

from ..types import MaybeValue, Unavailable
from .rolling import RollingAccumulator


class ExtremaTracker:
    """
    Highest high and lowest low over the trailing ``period`` bars.

    Wraps two RollingAccumulators, so both extrema and their positions are
    O(1) amortized. Used by Stochastic, Williams %R and Support/Resistance.
    """

    def __init__(self, period: int):
        self._highs = RollingAccumulator(period)
        self._lows = RollingAccumulator(period)
        self.period = self._highs.period

    def update(self, high: float, low: Optional[float] = None) -> None:
        """Record one bar. A single-series caller may omit ``low``."""
        self._highs.push(high)
        self._lows.push(high if low is None else low)

    @property
    def is_ready(self) -> bool:
        return self._highs.is_full

    def highest(self) -> MaybeValue[float]:
        return self._highs.current_max()

    def lowest(self) -> MaybeValue[float]:
        return self._lows.current_min()

    def bars_since_highest(self) -> MaybeValue[int]:
        return self._highs.bars_since_max()

    def bars_since_lowest(self) -> MaybeValue[int]:
        return self._lows.bars_since_min()

    def range(self) -> MaybeValue[float]:
        """Highest high minus lowest low."""
        if not self.is_ready:
            return Unavailable
        return self.highest() - self.lowest()

    def reset(self) -> None:
        self._highs.reset()
        self._lows.reset()
