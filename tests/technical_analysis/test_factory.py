"""Tests for the indicator factory."""

import pytest

import indexes
from indexes import (
    RSI,
    BollingerBands,
    ConfigError,
    IndicatorNotFoundError,
    ParabolicSAR,
    WilliamsR,
)
from indexes.factory import IndicatorRegistry


class TestCreate:

    def test_create_by_name(self):
        rsi = indexes.create('rsi', period=7)
        assert isinstance(rsi, RSI)
        assert rsi.period == 7

    @pytest.mark.parametrize("name, cls", [
        ('BB', BollingerBands),
        ('bbands', BollingerBands),
        ('psar', ParabolicSAR),
        ('Sar', ParabolicSAR),
        ('willr', WilliamsR),
    ])
    def test_aliases_are_case_insensitive(self, name, cls):
        assert isinstance(indexes.create(name), cls)

    def test_unknown_indicator(self):
        with pytest.raises(IndicatorNotFoundError) as excinfo:
            indexes.create('ichimoku')
        assert 'sma' in excinfo.value.available_indicators

    def test_unknown_keyword_becomes_config_error(self):
        with pytest.raises(ConfigError) as excinfo:
            indexes.create('sma', window=3)
        assert isinstance(excinfo.value.__cause__, TypeError)

    def test_missing_required_parameter(self):
        with pytest.raises(ConfigError):
            indexes.create('ema')

    def test_invalid_value_propagates(self):
        with pytest.raises(ConfigError):
            indexes.create('rsi', period=1)


class TestRegistryQueries:

    def test_list_indicators(self):
        names = indexes.list_indicators()
        assert names == sorted(names)
        assert len(names) == 18
        assert 'bollinger_bands' in names
        assert 'bb' not in names

    def test_describe(self):
        info = indexes.describe('bbands')
        assert info['name'] == 'BollingerBands'
        assert 'bb' in info['aliases']
        assert info['parameters']['k']['default'] == 2.0
        assert info['parameters']['period']['required'] is False
        assert info['required_inputs'] == ('close',)

    def test_describe_required_parameter(self):
        info = indexes.describe('sma')
        assert info['parameters']['period']['required'] is True

    def test_describe_unknown(self):
        with pytest.raises(IndicatorNotFoundError):
            indexes.describe('nope')

    def test_unknown_name_suggests_close_matches(self):
        with pytest.raises(IndicatorNotFoundError) as excinfo:
            indexes.create('rsii')
        assert 'rsi' in excinfo.value.suggestions
        assert 'did you mean' in str(excinfo.value)

    def test_describe_lists_canonical_name_first(self):
        assert indexes.describe('PSAR')['aliases'][0] == 'parabolic_sar'


class TestIndicatorRegistry:

    def test_custom_registry(self):
        registry = IndicatorRegistry([('fast', RSI, ('quick',))])
        assert registry.get('QUICK') is RSI
        assert registry.list_indicators() == ['fast']
        assert registry.names_for('fast') == ['fast', 'quick']

    def test_name_clash_is_rejected(self):
        registry = IndicatorRegistry([('fast', RSI, ())])
        with pytest.raises(ConfigError):
            registry.register('fast', WilliamsR)

    def test_reregistering_same_class_adds_alias(self):
        registry = IndicatorRegistry([('fast', RSI, ())])
        registry.register('fast', RSI, ('speedy',))
        assert registry.names_for('speedy') == ['fast', 'speedy']
