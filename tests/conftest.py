"""Shared fixtures for the indicator test suite."""

import numpy as np
import pandas as pd
import pytest

from indexes import Sample


def _make_ohlcv(n: int = 300, seed: int = 7, start: float = 100.0) -> pd.DataFrame:
    """Random-walk OHLCV frame with low <= close <= high and positive prices."""
    rng = np.random.default_rng(seed)
    close = start + np.cumsum(rng.normal(0.0, 1.0, n))
    close = np.maximum(close, 5.0)
    high = close + rng.uniform(0.05, 1.5, n)
    low = np.maximum(close - rng.uniform(0.05, 1.5, n), close * 0.5)
    volume = rng.uniform(1_000.0, 5_000.0, n)
    index = pd.date_range("2024-01-01", periods=n, freq="D")
    return pd.DataFrame({"high": high, "low": low, "close": close, "volume": volume}, index=index)


@pytest.fixture
def rng():
    """Seeded numpy generator so randomized tests are reproducible."""
    return np.random.default_rng(12345)


@pytest.fixture
def make_ohlcv():
    """Factory fixture: ``make_ohlcv(n, seed, start)`` returns an OHLCV DataFrame."""
    return _make_ohlcv


@pytest.fixture
def ohlcv():
    """300 daily OHLCV bars."""
    return _make_ohlcv()


@pytest.fixture
def bars(ohlcv):
    """The ``ohlcv`` frame as a list of Sample records."""
    return [
        Sample(close=float(row.close), high=float(row.high), low=float(row.low),
               volume=float(row.volume), timestamp=ts)
        for ts, row in zip(ohlcv.index, ohlcv.itertuples(index=False))
    ]


@pytest.fixture
def closes(ohlcv):
    """Close prices of the ``ohlcv`` frame as plain floats."""
    return [float(c) for c in ohlcv["close"]]
