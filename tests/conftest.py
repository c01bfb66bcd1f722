"""Shared fixtures: synthetic OHLCV frames."""

import numpy as np
import pandas as pd
import pytest


def build_bars(closes, opens=None, start="2020-01-01"):
    closes = np.asarray(closes, dtype=float)
    opens = closes if opens is None else np.asarray(opens, dtype=float)
    return pd.DataFrame({
        "time": pd.bdate_range(start, periods=len(closes)),
        "open": opens,
        "high": np.maximum(opens, closes) + 0.5,
        "low": np.minimum(opens, closes) - 0.5,
        "close": closes,
        "volume": 1000.0,
    })


@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def wave_bars():
    """Uptrend with a ~19 bar oscillation: RSI dips inside an SMA uptrend."""
    i = np.arange(300)
    closes = 100 + 0.2 * i + 5 * np.sin(i / 3)
    return build_bars(closes, opens=closes - 0.25)
