"""
indexes: incremental technical-analysis indicators.

A streaming indicator library: every indicator is fed one sample at a time
and answers with its current value, or ``Unavailable`` while warming up.
Indicators are thin policies over a few shared primitives (rolling
accumulator, exponential smoother, gain/loss tracker, extrema tracker), so
each update costs O(1) amortized.

Example Usage:
    import indexes

    # Factory pattern - primary interface
    rsi = indexes.create('rsi', period=14)
    macd = indexes.create('macd', fast_period=12, slow_period=26, signal_period=9)

    # Direct class access
    bands = indexes.BollingerBands(period=20, k=2.0)

    for bar in bars:
        rsi.update(bar)
        if rsi.is_ready:
            print(rsi.value, rsi.condition)

    # Utility functions
    names = indexes.list_indicators()
    info = indexes.describe('rsi')
"""

__version__ = "1.0.0"

# Public API exports
from .types import Sample, Unavailable, UnavailableType, MaybeValue, is_available
from .base import BaseIndicator
from .exceptions import (
    IndicatorError,
    ConfigError,
    MissingInputError,
    InsufficientDataError,
    InvalidDataError,
    IndicatorNotFoundError,
)
from .primitives import (
    RollingAccumulator,
    ExponentialSmoother,
    EmaSmoothing,
    WildersSmoothing,
    GainLossTracker,
    ExtremaTracker,
)
from .indicators import (
    SMA, EMA,
    RSI, Momentum, ROC, CCI, WilliamsR,
    ATR, StandardDeviation,
    OBV, MFI,
    ADX, ParabolicSAR,
    SupportResistance,
    MACD, BollingerBands, Stochastic, MovingAverages,
)
from .results import (
    MACDResult,
    BollingerResult,
    StochasticResult,
    ADXResult,
    SARResult,
    MomentumResult,
    ROCResult,
    StdDevResult,
    SupportResistanceResult,
    MovingAverageResult,
)
from .signals import (
    TradingSignal,
    TrendDirection,
    MarketCondition,
    TrendStrength,
    VolatilityLevel,
    Crossover,
    PricePosition,
)
from .factory import (
    create,
    list_indicators,
    describe,
    validate_period,
    validate_decay,
    validate_multiplier,
    validate_input_field,
)

__all__ = [
    # Core types
    "Sample",
    "Unavailable",
    "UnavailableType",
    "MaybeValue",
    "is_available",
    "BaseIndicator",

    # Factory functions
    "create",
    "list_indicators",
    "describe",

    # Primitives
    "RollingAccumulator",
    "ExponentialSmoother",
    "EmaSmoothing",
    "WildersSmoothing",
    "GainLossTracker",
    "ExtremaTracker",

    # Indicators
    "SMA",
    "EMA",
    "RSI",
    "Momentum",
    "ROC",
    "CCI",
    "WilliamsR",
    "ATR",
    "StandardDeviation",
    "OBV",
    "MFI",
    "ADX",
    "ParabolicSAR",
    "SupportResistance",
    "MACD",
    "BollingerBands",
    "Stochastic",
    "MovingAverages",

    # Result records
    "MACDResult",
    "BollingerResult",
    "StochasticResult",
    "ADXResult",
    "SARResult",
    "MomentumResult",
    "ROCResult",
    "StdDevResult",
    "SupportResistanceResult",
    "MovingAverageResult",

    # Signals
    "TradingSignal",
    "TrendDirection",
    "MarketCondition",
    "TrendStrength",
    "VolatilityLevel",
    "Crossover",
    "PricePosition",

    # Validation utilities
    "validate_period",
    "validate_decay",
    "validate_multiplier",
    "validate_input_field",

    # Exceptions
    "IndicatorError",
    "ConfigError",
    "MissingInputError",
    "InsufficientDataError",
    "InvalidDataError",
    "IndicatorNotFoundError",

    # Metadata
    "__version__",
]
