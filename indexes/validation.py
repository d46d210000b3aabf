"""Parameter validators shared by primitives, indicators and the factory."""

import math
import numbers
from typing import Any, Optional

from .exceptions import ConfigError

VALID_INPUT_FIELDS = ('high', 'low', 'close', 'volume')


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_period(period: Any, name: str = "period", minimum: int = 1,
                    indicator_name: Optional[str] = None) -> int:
    """
    Validate a window length.

    Args:
        period (Any): The period value to validate.
        name (str): Parameter name for error messages.
        minimum (int): Smallest accepted value (2 for ratio or sample-variance windows).
        indicator_name (Optional[str]): Indicator reported in the error message.

    Returns:
        int: Validated period value.

    Raises:
        ConfigError: If period is not an integer >= minimum.
    """
    if not _is_int(period):
        raise ConfigError(name, period, f"integer >= {minimum}", indicator_name)

    if period < minimum:
        raise ConfigError(name, period, f"integer >= {minimum}", indicator_name)

    return int(period)


def validate_decay(decay: Any, name: str = "decay", indicator_name: Optional[str] = None) -> float:
    """
    Validate an exponential decay factor.

    Args:
        decay (Any): The decay (alpha) value to validate.
        name (str): Parameter name for error messages.
        indicator_name (Optional[str]): Indicator reported in the error message.

    Returns:
        float: Validated decay value in (0, 1].

    Raises:
        ConfigError: If decay is not a finite number in (0, 1].
    """
    if not _is_real(decay) or not 0 < decay <= 1:
        raise ConfigError(name, decay, "number in (0, 1]", indicator_name)

    return float(decay)


def validate_multiplier(value: Any, name: str = "k", indicator_name: Optional[str] = None) -> float:
    """Validate a strictly positive multiplier (Bollinger k, CCI constant, SAR increment)."""
    if not _is_real(value) or value <= 0:
        raise ConfigError(name, value, "positive number (> 0)", indicator_name)

    return float(value)


def validate_input_field(input_field: Any, indicator_name: Optional[str] = None) -> str:
    """
    Validate input field parameter.

    Args:
        input_field (Any): The input field to validate.
        indicator_name (Optional[str]): Indicator reported in the error message.

    Returns:
        str: Validated, lower-cased input field.

    Raises:
        ConfigError: If input field is not one of the sample fields.
    """
    if not isinstance(input_field, str):
        raise ConfigError("input_field", input_field, "string", indicator_name)

    if input_field.lower() not in VALID_INPUT_FIELDS:
        raise ConfigError("input_field", input_field, f"one of {list(VALID_INPUT_FIELDS)}", indicator_name)

    return input_field.lower()


def validate_thresholds(upper: Any, lower: Any, upper_name: str = "overbought",
                        lower_name: str = "oversold", indicator_name: Optional[str] = None) -> None:
    """Validate an upper/lower threshold pair where upper must exceed lower."""
    if not _is_real(upper):
        raise ConfigError(upper_name, upper, "finite number", indicator_name)
    if not _is_real(lower):
        raise ConfigError(lower_name, lower, "finite number", indicator_name)
    if upper <= lower:
        raise ConfigError(upper_name, upper, f"value greater than {lower_name} ({lower})", indicator_name)
