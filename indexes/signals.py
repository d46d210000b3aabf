"""
Signal and condition classifications derived from indicator values.

These enums label a computed value (overbought, trending up, ...); they never
feed back into the numeric computation.
"""

from enum import Enum
from typing import Optional


class TradingSignal(Enum):
    """Directional recommendation."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class TrendDirection(Enum):
    """Direction of a trend or of a moving average."""
    UP = "up"
    DOWN = "down"
    SIDEWAYS = "sideways"


class MarketCondition(Enum):
    """Position of an oscillator relative to its threshold bands."""
    EXTREME_OVERBOUGHT = "extreme_overbought"
    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"
    OVERSOLD = "oversold"
    EXTREME_OVERSOLD = "extreme_oversold"


class TrendStrength(Enum):
    """ADX trend strength bucket."""
    WEAK = "weak"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


class VolatilityLevel(Enum):
    """Coefficient-of-variation bucket."""
    VERY_LOW = "very_low"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    VERY_HIGH = "very_high"


class Crossover(Enum):
    """Line crossover detected on the latest bar."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NONE = "none"


class PricePosition(Enum):
    """Where the price sits relative to the nearest support and resistance."""
    ABOVE_RESISTANCE = "above_resistance"
    BELOW_SUPPORT = "below_support"
    NEAR_RESISTANCE = "near_resistance"
    NEAR_SUPPORT = "near_support"
    MIDDLE = "middle"
    UNKNOWN = "unknown"


def classify_level(
    value: float,
    overbought: float,
    oversold: float,
    extreme_overbought: Optional[float] = None,
    extreme_oversold: Optional[float] = None,
) -> MarketCondition:
    """
    Classify an oscillator value against its thresholds.

    Bounds are inclusive: a value equal to ``overbought`` is OVERBOUGHT.
    Extreme bands are checked first when given.
    """
    if extreme_overbought is not None and value >= extreme_overbought:
        return MarketCondition.EXTREME_OVERBOUGHT
    if value >= overbought:
        return MarketCondition.OVERBOUGHT
    if extreme_oversold is not None and value <= extreme_oversold:
        return MarketCondition.EXTREME_OVERSOLD
    if value <= oversold:
        return MarketCondition.OVERSOLD
    return MarketCondition.NEUTRAL


def compare_direction(current: float, previous: Optional[float]) -> TrendDirection:
    """UP if ``current`` rose from ``previous``, DOWN if it fell, otherwise SIDEWAYS."""
    if previous is None or current == previous:
        return TrendDirection.SIDEWAYS
    return TrendDirection.UP if current > previous else TrendDirection.DOWN


def classify_volatility(coefficient_of_variation: float) -> VolatilityLevel:
    """Bucket a coefficient of variation (percent)."""
    if coefficient_of_variation < 5.0:
        return VolatilityLevel.VERY_LOW
    if coefficient_of_variation < 15.0:
        return VolatilityLevel.LOW
    if coefficient_of_variation < 25.0:
        return VolatilityLevel.NORMAL
    if coefficient_of_variation < 50.0:
        return VolatilityLevel.HIGH
    return VolatilityLevel.VERY_HIGH
