"""
Support and resistance level detection.

Classes:
    SupportResistance: Swing-pivot support/resistance with nearest-level strengths
"""

from collections import deque
from typing import Any, Deque, List, Optional

from ..base import BaseIndicator
from ..exceptions import ConfigError
from ..primitives import ExtremaTracker
from ..results import SupportResistanceResult
from ..signals import PricePosition
from ..types import MaybeValue, Unavailable
from ..validation import validate_period


class SupportResistance(BaseIndicator):
    """
    Support and resistance levels from swing pivots.

    Each bar looks at the last ``period`` prices. When the price in the middle
    of that window is strictly above every other price it is recorded as a
    resistance level; strictly below every other price, a support level.
    Candidates come from an ExtremaTracker: the window maximum (or minimum)
    sitting exactly at the midpoint.

    Levels that the price has moved decisively through are dropped: a support
    above ``price * (1 + threshold)`` or a resistance below
    ``price * (1 - threshold)``.

    Result fields:
        nearest_support: highest support below the price (None if there is none)
        nearest_resistance: lowest resistance above the price (None if there is none)
        support_strength / resistance_strength: ``(1 - distance / price) * 100``, clamped to [0, 100]
        breakout_potential: the weaker of the two strengths
        price_position: where the price sits between the nearest levels
    """

    required_inputs = ('close',)
    result_type = SupportResistanceResult

    def __init__(
        self,
        period: int = 20,
        threshold: float = 0.02,
        input_field: str = 'close',
        max_levels: int = 100,
    ):
        """
        Initialize the support/resistance detector.

        Args:
            period (int): Pivot window length. Windows shorter than 3 never produce pivots.
            threshold (float): Fraction of the price beyond which a broken level is dropped, in (0, 1).
            input_field (str): Sample field to use for calculation. Defaults to 'close'.
            max_levels (int): Number of levels kept per side; the oldest are dropped first.
        """
        super().__init__(period, input_field)
        self.required_inputs = (self.input_field,)

        if not isinstance(threshold, (int, float)) or isinstance(threshold, bool) or not 0 < threshold < 1:
            raise ConfigError("threshold", threshold, "number in (0, 1)", self._name)
        self.threshold = float(threshold)
        self.max_levels = validate_period(max_levels, "max_levels", indicator_name=self._name)

        self._extrema = ExtremaTracker(self.period)
        self._window: Deque[float] = deque(maxlen=self.period)
        self._support_levels: List[float] = []
        self._resistance_levels: List[float] = []
        self._result: MaybeValue[SupportResistanceResult] = Unavailable

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        price = fields[self.input_field]

        self._extrema.update(price)
        self._window.append(price)

        if self._extrema.is_ready:
            self._detect_pivots()
            self._clean_levels(price)
            self._result = self._evaluate(price)

        self._update_metadata(data_point)
        self._store_output(self.value)

    def _detect_pivots(self) -> None:
        if self.period < 3:
            return

        # Distance from the newest bar back to the window midpoint
        mid_offset = self.period - 1 - self.period // 2

        if self._extrema.bars_since_highest() == mid_offset:
            candidate = self._extrema.highest()
            if self._is_unique(candidate):
                self._add_level(self._resistance_levels, candidate)

        if self._extrema.bars_since_lowest() == mid_offset:
            candidate = self._extrema.lowest()
            if self._is_unique(candidate):
                self._add_level(self._support_levels, candidate)

    def _is_unique(self, candidate: float) -> bool:
        return sum(1 for price in self._window if price == candidate) == 1

    def _add_level(self, levels: List[float], level: float) -> None:
        levels.append(level)
        if len(levels) > self.max_levels:
            del levels[0]

    def _clean_levels(self, price: float) -> None:
        upper = price * (1.0 + self.threshold)
        lower = price * (1.0 - self.threshold)
        self._support_levels = [level for level in self._support_levels if level < upper]
        self._resistance_levels = [level for level in self._resistance_levels if level > lower]

    def _evaluate(self, price: float) -> SupportResistanceResult:
        support = max((level for level in self._support_levels if level < price), default=None)
        resistance = min((level for level in self._resistance_levels if level > price), default=None)

        support_strength = self._strength(price, support)
        resistance_strength = self._strength(price, resistance)

        return SupportResistanceResult(
            nearest_support=support,
            nearest_resistance=resistance,
            support_strength=support_strength,
            resistance_strength=resistance_strength,
            breakout_potential=min(support_strength, resistance_strength),
            price_position=self._price_position(price, support, resistance),
        )

    @staticmethod
    def _strength(price: float, level: Optional[float]) -> float:
        if level is None or price == 0:
            return 0.0
        distance = abs(price - level) / abs(price)
        return max(0.0, min(1.0, 1.0 - distance)) * 100.0

    @staticmethod
    def _price_position(price: float, support: Optional[float], resistance: Optional[float]) -> PricePosition:
        if support is not None and resistance is not None:
            mid_point = (support + resistance) / 2.0
            if abs(price - mid_point) < (resistance - support) * 0.1:
                return PricePosition.MIDDLE
            if price > mid_point:
                return PricePosition.NEAR_RESISTANCE
            return PricePosition.NEAR_SUPPORT
        if support is not None:
            # Nothing overhead: every known resistance has been cleared
            return PricePosition.ABOVE_RESISTANCE
        if resistance is not None:
            return PricePosition.BELOW_SUPPORT
        return PricePosition.UNKNOWN

    @property
    def value(self) -> MaybeValue[SupportResistanceResult]:
        return self._result

    @property
    def support_levels(self) -> List[float]:
        return list(self._support_levels)

    @property
    def resistance_levels(self) -> List[float]:
        return list(self._resistance_levels)

    def reset(self) -> None:
        super().reset()
        self._extrema.reset()
        self._window.clear()
        self._support_levels = []
        self._resistance_levels = []
        self._result = Unavailable
