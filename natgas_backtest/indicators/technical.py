"""
Indicator math over a single price series. Pure functions; undefined values are NaN.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from natgas_backtest.core.errors import InvalidWindow


def check_window(n: int) -> None:
    """Raise InvalidWindow unless n is a positive integer."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
        raise InvalidWindow(f"window must be a positive integer, got {n!r}")


def sma(series: pd.Series, n: int) -> pd.Series:
    """
    Simple moving average. out[i] = mean(series[i-n+1..i]) for i >= n-1, else NaN.
    A window longer than the series yields an all-NaN result.
    """
    check_window(n)
    return series.astype(float).rolling(window=n, min_periods=n).mean()


def rsi(series: pd.Series, n: int) -> pd.Series:
    """
    Wilder RSI. The first average gain/loss is the simple mean of the first n
    differences (placed at index n), then avg = (prev * (n - 1) + current) / n.
    NaN until n + 1 observations are available.
    """
    check_window(n)
    values = series.astype(float).to_numpy()
    out = np.full(len(values), np.nan)
    if len(values) <= n:
        return pd.Series(out, index=series.index)

    delta = np.diff(values)
    gains = np.clip(delta, 0.0, None)
    losses = np.clip(-delta, 0.0, None)

    avg_gain = gains[:n].mean()
    avg_loss = losses[:n].mean()
    out[n] = _rsi_value(avg_gain, avg_loss)
    for i in range(n + 1, len(values)):
        avg_gain = (avg_gain * (n - 1) + gains[i - 1]) / n
        avg_loss = (avg_loss * (n - 1) + losses[i - 1]) / n
        out[i] = _rsi_value(avg_gain, avg_loss)
    return pd.Series(out, index=series.index)


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    total = avg_gain + avg_loss
    if total == 0:
        return 50.0
    return 100.0 * avg_gain / total
