"""
Name-based construction of indicators.

Every built-in indicator is listed once in ``_BUILTINS`` under a canonical
snake_case name plus any number of aliases. Lookups are case-insensitive.
"""

import inspect
from typing import Any, Dict, List, Sequence, Tuple, Type

from .base import BaseIndicator
from .exceptions import ConfigError, IndicatorNotFoundError
from .indicators import (
    ADX, ATR, CCI, EMA, MACD, MFI, OBV, ROC, RSI, SMA,
    BollingerBands, Momentum, MovingAverages, ParabolicSAR,
    StandardDeviation, Stochastic, SupportResistance, WilliamsR,
)
from .validation import (  # noqa: F401 - re-exported
    validate_decay,
    validate_input_field,
    validate_multiplier,
    validate_period,
)

# (canonical name, class, aliases)
_BUILTINS: Sequence[Tuple[str, Type[BaseIndicator], Tuple[str, ...]]] = (
    # Trend
    ('sma', SMA, ('simple_ma', 'simple_moving_average')),
    ('ema', EMA, ('exp_ma', 'exponential_moving_average')),
    # Momentum
    ('rsi', RSI, ('relative_strength_index',)),
    ('momentum', Momentum, ('mom',)),
    ('roc', ROC, ('rate_of_change',)),
    ('cci', CCI, ('commodity_channel_index',)),
    ('williams_r', WilliamsR, ('williamsr', 'willr', 'williams_percent_r')),
    # Volatility
    ('atr', ATR, ('average_true_range',)),
    ('std_dev', StandardDeviation, ('stddev', 'standard_deviation')),
    # Volume
    ('obv', OBV, ('on_balance_volume',)),
    ('mfi', MFI, ('money_flow_index',)),
    # Directional
    ('adx', ADX, ('average_directional_index',)),
    ('parabolic_sar', ParabolicSAR, ('psar', 'sar')),
    # Levels
    ('support_resistance', SupportResistance, ('sr', 'levels')),
    # Composite
    ('macd', MACD, ('moving_average_convergence_divergence',)),
    ('bollinger_bands', BollingerBands, ('bbands', 'bb')),
    ('stochastic', Stochastic, ('stoch',)),
    ('moving_averages', MovingAverages, ('ma',)),
)


class IndicatorRegistry:
    """Maps canonical names and aliases to indicator classes."""

    def __init__(self, entries: Sequence[Tuple[str, Type[BaseIndicator], Tuple[str, ...]]] = _BUILTINS):
        self._lookup: Dict[str, Type[BaseIndicator]] = {}
        self._names: Dict[Type[BaseIndicator], List[str]] = {}
        for name, indicator_class, aliases in entries:
            self.register(name, indicator_class, aliases)

    def register(self, name: str, indicator_class: Type[BaseIndicator], aliases: Sequence[str] = ()) -> None:
        """
        Add ``indicator_class`` under ``name`` and its aliases.

        Raises:
            ConfigError: If a name or alias is already taken by another class.
        """
        keys = [name.lower()] + [alias.lower() for alias in aliases]
        for key in keys:
            existing = self._lookup.get(key)
            if existing is not None and existing is not indicator_class:
                raise ConfigError("name", key, f"unused name (taken by {existing.__name__})")

        names = self._names.setdefault(indicator_class, [])
        for key in keys:
            self._lookup[key] = indicator_class
            if key not in names:
                names.append(key)

    def get(self, name: str) -> Type[BaseIndicator]:
        """Resolve a name or alias; raises IndicatorNotFoundError when unknown."""
        key = name.lower() if isinstance(name, str) else name
        try:
            return self._lookup[key]
        except (KeyError, TypeError):
            raise IndicatorNotFoundError(str(name), self.list_indicators()) from None

    def list_indicators(self) -> List[str]:
        """Canonical names, sorted; aliases are not included."""
        return sorted(names[0] for names in self._names.values())

    def names_for(self, name: str) -> List[str]:
        """Canonical name followed by every alias of the class behind ``name``."""
        return list(self._names[self.get(name)])


_REGISTRY = IndicatorRegistry()


def create(name: str, **kwargs) -> BaseIndicator:
    """
    Build an indicator from its name or alias.

    Args:
        name (str): Canonical name or alias, in any case (see list_indicators()).
        **kwargs: Constructor parameters, validated by the indicator itself.

    Returns:
        BaseIndicator: A fresh indicator in its warm-up state.

    Raises:
        IndicatorNotFoundError: If no indicator is registered under ``name``.
        ConfigError: If a keyword is unknown, a required one is missing or a value is invalid.

    Examples:
        >>> rsi = create('rsi', period=14)
        >>> bands = create('BBands', period=20, k=2.0)
    """
    indicator_class = _REGISTRY.get(name)
    try:
        return indicator_class(**kwargs)
    except TypeError as e:
        # Signature mismatch (unknown or missing keyword)
        accepted = list(_parameters(indicator_class))
        raise ConfigError(
            parameter_name="constructor",
            value=kwargs,
            expected=f"keywords among {accepted}",
            indicator_name=indicator_class.__name__,
        ) from e


def list_indicators() -> List[str]:
    """Sorted canonical names of every registered indicator."""
    return _REGISTRY.list_indicators()


def _parameters(indicator_class: Type[BaseIndicator]) -> Dict[str, Dict[str, Any]]:
    empty = inspect.Parameter.empty
    parameters = {}
    for param_name, param in inspect.signature(indicator_class.__init__).parameters.items():
        if param_name == 'self' or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        parameters[param_name] = {
            'type': 'Any' if param.annotation is empty else param.annotation,
            'default': None if param.default is empty else param.default,
            'required': param.default is empty,
        }
    return parameters


def describe(name: str) -> Dict[str, Any]:
    """
    Summarize an indicator for discovery tools.

    Returns:
        Dict[str, Any]: ``name`` (class name), ``aliases`` (canonical name
            first), ``parameters`` (type, default and required flag per
            constructor keyword), ``docstring``, ``required_inputs`` and
            ``result_type`` (None for single-value indicators).

    Raises:
        IndicatorNotFoundError: If no indicator is registered under ``name``.
    """
    indicator_class = _REGISTRY.get(name)
    return {
        'name': indicator_class.__name__,
        'aliases': _REGISTRY.names_for(name),
        'parameters': _parameters(indicator_class),
        'docstring': inspect.getdoc(indicator_class),
        'required_inputs': indicator_class.required_inputs,
        'result_type': indicator_class.result_type,
    }
