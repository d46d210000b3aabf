"""Base class for streaming technical indicators."""

import logging
import math
import numbers
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .exceptions import InsufficientDataError, InvalidDataError, MissingInputError
from .types import Unavailable
from .validation import validate_input_field, validate_period

logger = logging.getLogger(__name__)


def _read_field(data_point: Any, field: str) -> Any:
    """Read ``field`` from a mapping or from an attribute-style sample."""
    if isinstance(data_point, Mapping):
        return data_point.get(field)
    return getattr(data_point, field, None)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class BaseIndicator(ABC):
    """
    Abstract base for streaming technical indicators.

    Every indicator is a policy over the incremental primitives: it is
    constructed with validated parameters, fed one sample at a time through
    :meth:`update`, and queried through :attr:`value`, which returns either a
    number, a result record, or :data:`~indexes.types.Unavailable` during
    warm-up.

    Samples may be a :class:`~indexes.types.Sample`, any mapping with the
    required fields, or a bare number that stands for ``input_field``.
    """

    # Class attribute to be overridden by subclasses
    required_inputs: Tuple[str, ...] = ()

    # Record type returned by multi-output indicators (None for a plain float)
    result_type: Optional[type] = None

    HISTORY_SIZE = 1000

    def __init__(self, period: int, input_field: str = 'close'):
        """Initialize indicator with period and input field."""
        self._name = self.__class__.__name__

        self.period = validate_period(period, indicator_name=self._name)
        self.input_field = validate_input_field(input_field, self._name)

        self._output_history: deque = deque(maxlen=self.HISTORY_SIZE)

        # State management
        self._ready_threshold = self.period
        self._data_count = 0

        # Composite pattern support
        self._children: List['BaseIndicator'] = []

        self._last_update_time: Optional[Any] = None

        logger.debug(f"Initialized {self._name} with period={self.period}, input_field={self.input_field}")

    @abstractmethod
    def update(self, data_point: Any) -> None:
        """
        Process a new data point and update the indicator state.

        Implementations should:
        1. Validate the input data point
        2. Update their primitives incrementally
        3. Record metadata and store the new value in the output history

        Args:
            data_point: Market data containing every field in required_inputs.

        Raises:
            MissingInputError: If required input fields are missing.
            InvalidDataError: If input data contains invalid values.
        """

    @property
    @abstractmethod
    def value(self) -> Any:
        """
        Get the current value of the indicator.

        Returns:
            A float for single-output indicators, a result record for
            multi-output indicators, or Unavailable during warm-up.
        """

    @property
    def is_ready(self) -> bool:
        """True once the warm-up period is over."""
        return self._data_count >= self._ready_threshold

    @property
    def warmup_period(self) -> int:
        """Number of samples required before the first value is produced."""
        return self._ready_threshold

    @property
    def data_count(self) -> int:
        return self._data_count

    @property
    def last_update_time(self) -> Optional[Any]:
        return self._last_update_time

    @property
    def children(self) -> List['BaseIndicator']:
        """Child indicators owned by a composite (empty for leaf indicators)."""
        return self._children.copy()

    def require_value(self) -> Any:
        """
        Return the current value, raising instead of returning Unavailable.

        Raises:
            InsufficientDataError: If the indicator is still warming up.
        """
        current = self.value
        if current is Unavailable:
            raise InsufficientDataError(self._data_count, self._ready_threshold, self._name)
        return current

    def update_many(self, data_points: Iterable[Any]) -> List[Any]:
        """Feed samples in order and return the value observed after each one."""
        values = []
        for data_point in data_points:
            self.update(data_point)
            values.append(self.value)
        return values

    def get_history(self, n: int = 10) -> List[Any]:
        """
        Retrieve the last n values from the indicator's history.

        Args:
            n (int): Number of recent values to return. Defaults to 10.

        Returns:
            List: Recent values, oldest first. Warm-up steps appear as Unavailable.
        """
        if n <= 0:
            return []

        history_length = len(self._output_history)
        start_idx = max(0, history_length - n)

        return list(self._output_history)[start_idx:]

    def reset(self) -> None:
        """Reset the indicator (and its children) to the post-construction state."""
        self._output_history.clear()
        self._data_count = 0
        self._last_update_time = None

        for child in self._children:
            child.reset()

        logger.debug(f"Reset {self._name} indicator state")

    def _validate_input_data(self, data_point: Any) -> Dict[str, float]:
        """
        Validate a data point and extract its required fields.

        Args:
            data_point: Sample, mapping or bare number.

        Returns:
            Dict[str, float]: The required fields as floats.

        Raises:
            MissingInputError: If required input fields are missing.
            InvalidDataError: If a field is not a finite number.
        """
        if _is_number(data_point):
            data_point = {self.input_field: data_point}

        fields: Dict[str, Any] = {}
        missing_fields = []
        for field in self.required_inputs:
            raw = _read_field(data_point, field)
            if raw is None:
                missing_fields.append(field)
            else:
                fields[field] = raw

        if missing_fields:
            raise MissingInputError(missing_fields, list(self.required_inputs), self._name)

        for field, raw in fields.items():
            if not _is_number(raw):
                raise InvalidDataError(field, raw, "value is not a number", self._name)
            if math.isnan(raw):
                raise InvalidDataError(field, raw, "value is NaN", self._name)
            if math.isinf(raw):
                raise InvalidDataError(field, raw, "value is infinite", self._name)
            fields[field] = float(raw)

        return fields

    def _validate_price_bar(self, fields: Dict[str, float]) -> None:
        """
        Check the high/low/close relationship of a validated bar.

        Raises:
            InvalidDataError: If high < low, or close lies outside [low, high].
        """
        high = fields['high']
        low = fields['low']
        if high < low:
            raise InvalidDataError('high', high, f"below low ({low})", self._name)

        close = fields.get('close')
        if close is not None and not low <= close <= high:
            raise InvalidDataError('close', close, f"outside bar range [{low}, {high}]", self._name)

    def _update_metadata(self, data_point: Any) -> None:
        """Count the processed sample and remember its timestamp, if any."""
        self._data_count += 1

        if not _is_number(data_point):
            timestamp = _read_field(data_point, 'timestamp')
            if timestamp is not None:
                self._last_update_time = timestamp

    def _store_output(self, output_value: Any) -> None:
        self._output_history.append(output_value)

    def __repr__(self) -> str:
        ready_status = "ready" if self.is_ready else f"warming up ({self._data_count}/{self._ready_threshold})"
        return f"{self._name}(period={self.period}, {ready_status})"

    def __str__(self) -> str:
        return self.__repr__()
