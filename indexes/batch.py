"""
pandas adapter for running streaming indicators over whole series.

The streaming core never imports pandas; this module feeds a ``Series`` or an
OHLCV ``DataFrame`` through an indicator one row at a time and collects the
value observed after each row.

Single-value indicators produce a nullable ``Float64`` Series with ``<NA>``
during warm-up. Indicators returning result records produce a DataFrame with
one column per record field (nested records are flattened with a prefix),
enum fields rendered as their string values.
"""

import dataclasses
import logging
import typing
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .base import BaseIndicator
from .factory import create
from .types import Unavailable

logger = logging.getLogger(__name__)

PandasData = Union[pd.Series, pd.DataFrame]


def _records(data: PandasData) -> List[Any]:
    """Turn a Series into bare numbers, or a DataFrame into per-row mappings."""
    if isinstance(data, pd.Series):
        return data.tolist()

    frame = data.rename(columns=lambda c: str(c).lower())
    rows = frame.to_dict('records')
    if isinstance(frame.index, pd.DatetimeIndex):
        for row, timestamp in zip(rows, frame.index):
            row.setdefault('timestamp', timestamp)
    return rows


def _nested_type(annotation: Any) -> Optional[type]:
    """Return the record type behind a field annotation such as ``MaybeValue[MACDResult]``."""
    for candidate in (annotation, *typing.get_args(annotation)):
        if isinstance(candidate, type) and dataclasses.is_dataclass(candidate):
            return candidate
    return None


def _flatten(record: Any, result_type: type, prefix: str = "") -> Dict[str, Any]:
    """Map every leaf field of ``result_type`` to its value in ``record`` (None when absent)."""
    flat: Dict[str, Any] = {}
    hints = typing.get_type_hints(result_type)
    for field in dataclasses.fields(result_type):
        item = getattr(record, field.name) if record is not None else None
        nested = _nested_type(hints[field.name])
        if nested is not None:
            inner = item if dataclasses.is_dataclass(item) else None
            flat.update(_flatten(inner, nested, f"{prefix}{field.name}_"))
        else:
            flat[f"{prefix}{field.name}"] = item
    return flat


def _column(values: Sequence[Any]) -> pd.api.extensions.ExtensionArray:
    """Build a nullable column whose dtype follows the first present value."""
    present = [v for v in values if v is not None and v is not Unavailable]
    cleaned = [pd.NA if v is None or v is Unavailable else v for v in values]

    if not present:
        return pd.array(cleaned, dtype="Float64")

    sample = present[0]
    if isinstance(sample, Enum):
        return pd.array([v if v is pd.NA else v.value for v in cleaned], dtype="string")
    if isinstance(sample, bool):
        return pd.array(cleaned, dtype="boolean")
    if isinstance(sample, int):
        return pd.array(cleaned, dtype="Int64")
    return pd.array(cleaned, dtype="Float64")


def run(indicator: BaseIndicator, data: PandasData) -> PandasData:
    """
    Feed ``data`` through ``indicator`` and collect its value after every row.

    Args:
        indicator (BaseIndicator): A freshly constructed (or reset) indicator.
            Its state advances; call ``reset()`` to reuse it.
        data (PandasData): A Series (or 1-D numpy array) of the indicator's
            input field, or a DataFrame with the required columns (names
            matched case-insensitively).

    Returns:
        PandasData: A ``Float64`` Series for single-value indicators, otherwise a
            DataFrame of result fields, indexed like ``data``.

    Raises:
        TypeError: If ``data`` is not a pandas Series, DataFrame or numpy array.
        MissingInputError: If a required column is absent.
        InvalidDataError: If a row contains NaN or non-numeric input.
    """
    if isinstance(data, np.ndarray):
        data = pd.Series(data)
    if not isinstance(data, (pd.Series, pd.DataFrame)):
        raise TypeError(f"expected a pandas Series or DataFrame, got {type(data).__name__}")

    values = indicator.update_many(_records(data))
    name = indicator.__class__.__name__
    logger.debug(f"Ran {name} over {len(values)} rows")

    result_type = getattr(indicator, 'result_type', None)
    if result_type is None:
        return pd.Series(_column(values), index=data.index, name=name)

    rows = [_flatten(None if v is Unavailable else v, result_type) for v in values]
    column_names = list(_flatten(None, result_type))
    columns = {column: _column([row[column] for row in rows]) for column in column_names}
    return pd.DataFrame(columns, index=data.index)


def compute(name: str, data: PandasData, **params) -> PandasData:
    """
    Create the indicator ``name`` through the factory and run it over ``data``.

    Example:
        >>> rsi = compute('rsi', prices, period=14)
        >>> bands = compute('bbands', ohlcv_frame, period=20, k=2.0)
    """
    return run(create(name, **params), data)
