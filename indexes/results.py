"""Result records returned by multi-output indicators."""

from dataclasses import dataclass
from typing import Optional

from .signals import (
    Crossover,
    MarketCondition,
    PricePosition,
    TradingSignal,
    TrendDirection,
    TrendStrength,
    VolatilityLevel,
)
from .types import MaybeValue


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram (always ``macd - signal``)."""
    macd: float
    signal: float
    histogram: float
    trading_signal: TradingSignal


@dataclass(frozen=True)
class BollingerResult:
    upper: float
    middle: float
    lower: float
    bandwidth: float


@dataclass(frozen=True)
class StochasticResult:
    k: float
    d: float
    condition: MarketCondition
    crossover: Crossover
    signal: TradingSignal
    strength: float


@dataclass(frozen=True)
class ADXResult:
    adx: float
    plus_di: float
    minus_di: float
    dx: float
    trend_strength: TrendStrength
    trend_direction: TrendDirection


@dataclass(frozen=True)
class SARResult:
    """
    Parabolic SAR output for one bar.

    ``reversal`` is True on the bar where the trend flipped; ``trend_periods``
    counts bars since the current trend started (1 on a reversal bar).
    """
    sar: float
    trend: TrendDirection
    acceleration_factor: float
    extreme_point: float
    reversal: bool
    trend_periods: int


@dataclass(frozen=True)
class MomentumResult:
    """Absolute momentum and its ratio form; ``ratio`` is None when the reference price is 0."""
    value: float
    ratio: Optional[float]


@dataclass(frozen=True)
class ROCResult:
    value: float
    momentum: float
    acceleration: Optional[float]
    signal: TradingSignal


@dataclass(frozen=True)
class StdDevResult:
    std_dev: float
    variance: float
    mean: float
    z_score: float
    coefficient_of_variation: float
    volatility_level: VolatilityLevel


@dataclass(frozen=True)
class SupportResistanceResult:
    nearest_support: Optional[float]
    nearest_resistance: Optional[float]
    support_strength: float
    resistance_strength: float
    breakout_potential: float
    price_position: PricePosition


@dataclass(frozen=True)
class MovingAverageResult:
    """Snapshot of the moving-average bundle; each field is Unavailable until its child is ready."""
    sma_short: MaybeValue[float]
    sma_medium: MaybeValue[float]
    sma_long: MaybeValue[float]
    ema_short: MaybeValue[float]
    ema_medium: MaybeValue[float]
    ema_long: MaybeValue[float]
    macd: MaybeValue[MACDResult]
