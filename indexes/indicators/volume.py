"""
Volume-based technical indicators.

Classes:
    OBV: On-Balance Volume
    MFI: Money Flow Index
"""

from typing import Any, Dict, Optional

from ..base import BaseIndicator
from ..exceptions import ConfigError, InvalidDataError
from ..primitives import GainLossTracker
from ..signals import MarketCondition, TrendDirection, classify_level
from ..types import MaybeValue, Unavailable
from ..validation import validate_thresholds


def _check_volume(fields: Dict[str, float], indicator_name: str) -> float:
    volume = fields['volume']
    if volume < 0:
        raise InvalidDataError('volume', volume, "volume cannot be negative", indicator_name)
    return volume


class OBV(BaseIndicator):
    """
    On-Balance Volume (OBV).

    Cumulative volume signed by the close-to-close direction: added on an up
    close, subtracted on a down close, unchanged on a flat close. The running
    total is seeded with the first bar's volume.
    """

    required_inputs = ('close', 'volume')

    def __init__(self):
        super().__init__(period=1)

        self._obv: MaybeValue[float] = Unavailable
        self._previous_close: Optional[float] = None
        self._flow_direction = TrendDirection.SIDEWAYS

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        volume = _check_volume(fields, self._name)
        close = fields['close']

        if self._previous_close is None:
            self._obv = volume
            self._flow_direction = TrendDirection.SIDEWAYS
        else:
            if close > self._previous_close:
                self._obv += volume
                self._flow_direction = TrendDirection.UP
            elif close < self._previous_close:
                self._obv -= volume
                self._flow_direction = TrendDirection.DOWN
            else:
                self._flow_direction = TrendDirection.SIDEWAYS
        self._previous_close = close

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        return self._obv

    @property
    def flow_direction(self) -> TrendDirection:
        """Direction of the latest close relative to the previous one."""
        return self._flow_direction

    def reset(self) -> None:
        super().reset()
        self._obv = Unavailable
        self._previous_close = None
        self._flow_direction = TrendDirection.SIDEWAYS


class MFI(BaseIndicator):
    """
    Money Flow Index (MFI), a volume-weighted RSI.

    Mathematical Formula:
        TP = (High + Low + Close) / 3
        Raw Money Flow = TP * Volume
        Positive flow when TP rises, negative flow when TP falls, none when unchanged
        MFI = 100 - 100 / (1 + ΣPositive / ΣNegative)   over the last n flows

    A window without negative flow reads 100.
    """

    required_inputs = ('high', 'low', 'close', 'volume')

    def __init__(self, period: int = 14, overbought: float = 80.0, oversold: float = 20.0):
        """
        Initialize Money Flow Index indicator.

        Args:
            period (int): Number of money flows summed. Standard period is 14.
            overbought (float): Upper threshold for :attr:`condition`, at most 100.
            oversold (float): Lower threshold for :attr:`condition`, at least 0.

        Raises:
            ConfigError: If period is invalid or thresholds are outside [0, 100] or inverted.
        """
        super().__init__(period)

        validate_thresholds(overbought, oversold, indicator_name=self._name)
        if overbought > 100:
            raise ConfigError("overbought", overbought, "value <= 100", self._name)
        if oversold < 0:
            raise ConfigError("oversold", oversold, "value >= 0", self._name)
        self.overbought = float(overbought)
        self.oversold = float(oversold)

        self._ready_threshold = self.period + 1
        self._flows = GainLossTracker(self.period, 'simple')
        self._previous_typical_price: Optional[float] = None
        self._mfi_value: MaybeValue[float] = Unavailable

    def update(self, data_point: Any) -> None:
        fields = self._validate_input_data(data_point)
        self._validate_price_bar(fields)
        volume = _check_volume(fields, self._name)

        typical_price = (fields['high'] + fields['low'] + fields['close']) / 3.0
        if self._previous_typical_price is not None:
            money_flow = typical_price * volume
            if typical_price > self._previous_typical_price:
                self._flows.push_movement(money_flow, 0.0)
            elif typical_price < self._previous_typical_price:
                self._flows.push_movement(0.0, money_flow)
            else:
                self._flows.push_movement(0.0, 0.0)
        self._previous_typical_price = typical_price

        positive = self._flows.average_gain()
        negative = self._flows.average_loss()
        if positive is Unavailable or negative is Unavailable:
            self._mfi_value = Unavailable
        elif negative == 0:
            self._mfi_value = 100.0
        else:
            self._mfi_value = 100.0 - 100.0 / (1.0 + positive / negative)

        self._update_metadata(data_point)
        self._store_output(self.value)

    @property
    def value(self) -> MaybeValue[float]:
        return self._mfi_value

    @property
    def positive_money_flow(self) -> MaybeValue[float]:
        """Sum of positive money flow over the window."""
        average = self._flows.average_gain()
        return Unavailable if average is Unavailable else average * self.period

    @property
    def negative_money_flow(self) -> MaybeValue[float]:
        """Sum of negative money flow over the window."""
        average = self._flows.average_loss()
        return Unavailable if average is Unavailable else average * self.period

    @property
    def condition(self) -> MaybeValue[MarketCondition]:
        if self._mfi_value is Unavailable:
            return Unavailable
        return classify_level(self._mfi_value, self.overbought, self.oversold)

    def reset(self) -> None:
        super().reset()
        self._flows.reset()
        self._previous_typical_price = None
        self._mfi_value = Unavailable
