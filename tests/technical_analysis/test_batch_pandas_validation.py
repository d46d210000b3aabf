"""Batch adapter tests, validated against pandas reference computations."""

import numpy as np
import pandas as pd
import pytest

from indexes import ATR, SMA, InvalidDataError, MissingInputError
from indexes.batch import compute, run


class TestSingleValueIndicators:

    def test_sma_matches_rolling_mean(self, ohlcv):
        result = run(SMA(20), ohlcv['close'])

        assert isinstance(result, pd.Series)
        assert result.dtype == 'Float64'
        assert result.name == 'SMA'
        assert result.index.equals(ohlcv.index)
        assert result.iloc[:19].isna().all()

        expected = ohlcv['close'].rolling(20).mean()
        np.testing.assert_allclose(result.iloc[19:].to_numpy(dtype=float), expected.iloc[19:].to_numpy(), rtol=1e-12)

    def test_ema_matches_ewm(self, ohlcv):
        result = compute('ema', ohlcv['close'], period=10)
        expected = ohlcv['close'].ewm(span=10, adjust=False).mean()
        np.testing.assert_allclose(result.to_numpy(dtype=float), expected.to_numpy(), rtol=1e-10)

    def test_atr_from_frame(self, ohlcv):
        result = compute('atr', ohlcv, period=14)
        assert result.iloc[:13].isna().all()
        assert result.iloc[13:].notna().all()
        assert (result.iloc[13:] >= 0).all()

    def test_numpy_input(self):
        result = run(SMA(2), np.array([1.0, 2.0, 3.0]))
        assert result.iloc[1] == pytest.approx(1.5)
        assert list(result.index) == [0, 1, 2]

    def test_rejects_plain_list(self):
        with pytest.raises(TypeError):
            run(SMA(2), [1.0, 2.0])


class TestRecordIndicators:

    def test_std_dev_columns(self, ohlcv):
        result = compute('std_dev', ohlcv['close'], period=20)

        assert list(result.columns) == [
            'std_dev', 'variance', 'mean', 'z_score', 'coefficient_of_variation', 'volatility_level',
        ]
        assert result['std_dev'].iloc[:19].isna().all()
        expected = ohlcv['close'].rolling(20).std()
        np.testing.assert_allclose(
            result['std_dev'].iloc[19:].to_numpy(dtype=float), expected.iloc[19:].to_numpy(), rtol=1e-8,
        )
        assert pd.api.types.is_string_dtype(result['volatility_level'])
        assert result['volatility_level'].iloc[-1] in {'very_low', 'low', 'normal', 'high', 'very_high'}

    def test_bollinger_middle_is_rolling_mean(self, ohlcv):
        result = compute('bbands', ohlcv, period=20, k=2.0)
        expected = ohlcv['close'].rolling(20).mean()

        np.testing.assert_allclose(result['middle'].iloc[19:].to_numpy(dtype=float), expected.iloc[19:].to_numpy(), rtol=1e-12)
        assert (result['upper'].iloc[19:] >= result['lower'].iloc[19:]).all()

    def test_macd_histogram(self, ohlcv):
        result = compute('macd', ohlcv['close'])
        ready = result.dropna()
        assert len(ready) == len(ohlcv) - 33
        np.testing.assert_array_equal(
            ready['histogram'].to_numpy(dtype=float),
            (ready['macd'] - ready['signal']).to_numpy(dtype=float),
        )

    def test_nested_records_are_prefixed(self, ohlcv):
        result = compute('ma', ohlcv['close'], short_period=5, medium_period=10, long_period=20)

        assert 'macd_macd' in result.columns
        assert 'macd_trading_signal' in result.columns
        assert result['sma_short'].iloc[:4].isna().all()
        assert result['ema_short'].notna().all()
        assert result['macd_histogram'].iloc[:33].isna().all()
        assert result['macd_histogram'].iloc[33:].notna().all()

    def test_sar_column_dtypes(self, ohlcv):
        result = compute('psar', ohlcv)

        assert result['reversal'].dtype == 'boolean'
        assert result['trend_periods'].dtype == 'Int64'
        assert result['sar'].dtype == 'Float64'
        assert pd.isna(result['sar'].iloc[0])
        assert result['trend'].iloc[1:].isin(['up', 'down']).all()

    def test_momentum_ratio_none_is_na(self):
        result = compute('momentum', pd.Series([0.0, 1.0, 2.0]), period=2)
        assert result['value'].iloc[2] == 2.0
        assert pd.isna(result['ratio'].iloc[2])


class TestFrameHandling:

    def test_column_names_are_case_insensitive(self, ohlcv):
        frame = ohlcv.rename(columns=str.title)
        result = compute('sma', frame, period=5)
        assert result.iloc[4] == pytest.approx(frame['Close'].iloc[:5].mean())

    def test_timestamps_reach_the_indicator(self, ohlcv):
        indicator = SMA(5)
        run(indicator, ohlcv)
        assert indicator.last_update_time == ohlcv.index[-1]

    def test_missing_column(self, ohlcv):
        with pytest.raises(MissingInputError):
            run(ATR(14), ohlcv[['close']])

    def test_nan_row(self, ohlcv):
        frame = ohlcv.copy()
        frame.iloc[5, frame.columns.get_loc('close')] = np.nan
        with pytest.raises(InvalidDataError):
            run(SMA(3), frame)
