"""
Core value types shared by primitives and indicators.

Sample is one market observation. Unavailable is the warm-up marker returned
by every query that cannot be answered yet; it is a singleton, it is falsy and
it refuses arithmetic, so it can never be confused with 0.0 or NaN.
"""

from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union


class UnavailableType:
    """Type of the :data:`Unavailable` singleton."""

    _instance: Optional["UnavailableType"] = None

    def __new__(cls) -> "UnavailableType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Unavailable"

    def __reduce__(self):
        return (UnavailableType, ())

    def __copy__(self) -> "UnavailableType":
        return self

    def __deepcopy__(self, memo: Any) -> "UnavailableType":
        return self


Unavailable = UnavailableType()

T = TypeVar("T")
MaybeValue = Union[T, UnavailableType]


def is_available(value: Any) -> bool:
    """Return True if ``value`` is a computed result rather than the warm-up marker."""
    return value is not Unavailable


@dataclass(frozen=True)
class Sample:
    """
    One timestamp-ordered observation.

    Only ``close`` is mandatory; indicators that need ``high``, ``low`` or
    ``volume`` reject samples without them at update time.
    """

    close: float
    high: Optional[float] = None
    low: Optional[float] = None
    volume: Optional[float] = None
    timestamp: Optional[Any] = None
