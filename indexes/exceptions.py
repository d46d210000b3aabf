"""
Exceptions raised by primitives, indicators and the factory.

Every error derives from IndicatorError and is tagged with the indicator
that raised it when that is known.
"""

import difflib
from typing import Any, Iterable, List, Optional


class IndicatorError(Exception):
    """Base class; the message is prefixed with ``[indicator_name]`` when given."""

    def __init__(self, message: str, indicator_name: Optional[str] = None):
        self.indicator_name = indicator_name
        self.detail = message
        super().__init__(f"[{indicator_name}] {message}" if indicator_name else message)


class ConfigError(IndicatorError, ValueError):
    """A construction parameter is out of range or of the wrong type."""

    def __init__(self, parameter_name: str, value: Any, expected: str, indicator_name: Optional[str] = None):
        self.parameter_name = parameter_name
        self.value = value
        self.expected = expected
        super().__init__(f"{parameter_name}={value!r} rejected, expected {expected}", indicator_name)


class MissingInputError(IndicatorError):
    """A sample lacks a field the indicator reads."""

    def __init__(self, missing_fields: Iterable[str], required_fields: Iterable[str],
                 indicator_name: Optional[str] = None):
        self.missing_fields = list(missing_fields)
        self.required_fields = list(required_fields)
        super().__init__(
            f"sample has no {', '.join(self.missing_fields)} (reads {', '.join(self.required_fields)})",
            indicator_name,
        )


class InsufficientDataError(IndicatorError):
    """A value was demanded while the indicator is still warming up."""

    def __init__(self, current_count: int, required_count: int, indicator_name: Optional[str] = None):
        self.current_count = current_count
        self.required_count = required_count
        super().__init__(f"still warming up: {current_count} of {required_count} samples seen", indicator_name)


class InvalidDataError(IndicatorError):
    """A sample field is not a finite number, or breaks a bar invariant."""

    def __init__(self, field_name: str, value: Any, reason: str, indicator_name: Optional[str] = None):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"{field_name}={value!r} rejected: {reason}", indicator_name)


class IndicatorNotFoundError(IndicatorError):
    """The factory has no indicator under the requested name or alias."""

    def __init__(self, indicator_name: str, available_indicators: Optional[List[str]] = None):
        self.available_indicators = sorted(available_indicators or [])
        self.suggestions = difflib.get_close_matches(str(indicator_name).lower(), self.available_indicators, n=3)

        message = f"no indicator named {indicator_name!r}"
        if self.suggestions:
            message += f"; did you mean {', '.join(self.suggestions)}?"
        if self.available_indicators:
            message += f" Known: {', '.join(self.available_indicators)}"
        super().__init__(message)
        # Set after super(): the name here is the lookup key, not a raising indicator
        self.indicator_name = indicator_name
