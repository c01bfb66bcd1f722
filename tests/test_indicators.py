"""Unit tests for indicators."""

import numpy as np
import pandas as pd
import pytest

from natgas_backtest.core.errors import InvalidWindow
from natgas_backtest.indicators import SMA, RSI, PriceField, compute_indicators, rsi, sma


def test_sma_values_and_leading_nan():
    s = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0])
    out = sma(s, 3)
    assert out.isna().tolist() == [True, True, False, False, False]
    assert out.iloc[2:].tolist() == pytest.approx([2.0, 3.0, 4.0])


def test_sma_window_longer_than_series():
    out = sma(pd.Series(np.arange(50, dtype=float)), 200)
    assert len(out) == 50
    assert out.isna().all()


@pytest.mark.parametrize("n", [0, -1, 2.5, True, None])
def test_invalid_window(n):
    with pytest.raises(InvalidWindow):
        sma(pd.Series([1.0, 2.0, 3.0]), n)
    with pytest.raises(InvalidWindow):
        rsi(pd.Series([1.0, 2.0, 3.0]), n)


def test_indicator_handle_validates_on_creation():
    with pytest.raises(InvalidWindow):
        SMA(0)


def test_rsi_initial_value_is_simple_average():
    # diffs +1, +1, -1 => avg gain 2/3, avg loss 1/3
    out = rsi(pd.Series([1.0, 2.0, 3.0, 2.0]), 3)
    assert out.iloc[:3].isna().all()
    assert out.iloc[3] == pytest.approx(200 / 3)


def test_rsi_uses_wilder_smoothing():
    # next diff +2: gain (2/3*2 + 2)/3 = 10/9, loss (1/3*2)/3 = 2/9 => 83.33
    # a plain 3-bar rolling mean would give 75
    out = rsi(pd.Series([1.0, 2.0, 3.0, 2.0, 4.0]), 3)
    assert out.iloc[4] == pytest.approx(250 / 3)


def test_rsi_bounds_and_flat_series():
    up = rsi(pd.Series(np.arange(1, 20, dtype=float)), 3)
    assert up.dropna().eq(100.0).all()
    flat = rsi(pd.Series([5.0] * 10), 3)
    assert flat.dropna().eq(50.0).all()


def test_rsi_insufficient_history():
    assert rsi(pd.Series([1.0, 2.0, 3.0]), 3).isna().all()


def test_compute_indicators_keys_by_handle(make_bars):
    df = make_bars(np.arange(1, 11, dtype=float))
    fast, slow = SMA(2), SMA(5)
    frame = compute_indicators(df, [fast, slow])
    assert len(frame[fast]) == len(df)
    assert frame[slow].iloc[4] == pytest.approx(3.0)
    assert frame[PriceField.CLOSE].iloc[-1] == 10.0
    with pytest.raises(KeyError):
        frame[RSI(3)]
    assert list(frame.to_frame().columns[-2:]) == ["SMA2", "SMA5"]
