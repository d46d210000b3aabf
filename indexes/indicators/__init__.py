"""
Technical Analysis Indicators Module

Concrete implementations of streaming technical indicators built on BaseIndicator.
Each indicator is a policy over the shared primitives in ``indexes.primitives``.
"""

from .trend import SMA, EMA
from .momentum import RSI, Momentum, ROC, CCI, WilliamsR
from .volatility import ATR, StandardDeviation
from .volume import OBV, MFI
from .directional import ADX, ParabolicSAR
from .levels import SupportResistance
from .composite import MACD, BollingerBands, Stochastic, MovingAverages

__all__ = [
    # Trend indicators
    "SMA",
    "EMA",

    # Momentum indicators
    "RSI",
    "Momentum",
    "ROC",
    "CCI",
    "WilliamsR",

    # Volatility indicators
    "ATR",
    "StandardDeviation",

    # Volume indicators
    "OBV",
    "MFI",

    # Directional indicators
    "ADX",
    "ParabolicSAR",

    # Levels
    "SupportResistance",

    # Composite indicators
    "MACD",
    "BollingerBands",
    "Stochastic",
    "MovingAverages",
]
