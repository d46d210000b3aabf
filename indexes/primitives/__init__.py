"""
Incremental primitives shared by every indicator policy.

Each primitive owns a small amount of running state and updates it in O(1)
amortized time per sample.
"""

from .rolling import RollingAccumulator
from .smoothing import ExponentialSmoother, EmaSmoothing, WildersSmoothing
from .gain_loss import GainLossTracker
from .extrema import ExtremaTracker

__all__ = [
    "RollingAccumulator",
    "ExponentialSmoother",
    "EmaSmoothing",
    "WildersSmoothing",
    "GainLossTracker",
    "ExtremaTracker",
]
