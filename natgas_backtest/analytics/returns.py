"""
Returns exploration for a price series: daily returns, largest moves,
distribution summary and per-year volatility.
"""

from __future__ import annotations
from typing import Dict

import numpy as np
import pandas as pd

QUANTILES = (0.01, 0.05, 0.25, 0.5, 0.75, 0.95, 0.99)


def daily_returns(df: pd.DataFrame, field: str = "close") -> pd.Series:
    """Simple period returns indexed by bar time. First bar dropped."""
    prices = pd.Series(df[field].astype(float).values, index=pd.DatetimeIndex(df["time"]))
    return prices.pct_change().iloc[1:].rename("return")


def extreme_moves(returns: pd.Series, n: int = 1) -> Dict[str, pd.Series]:
    """The n largest up moves and n largest down moves, with their dates."""
    clean = returns.dropna()
    return {
        "up": clean.nlargest(n),
        "down": clean.nsmallest(n),
    }


def return_distribution(returns: pd.Series) -> pd.Series:
    """Count, moments (skew, excess kurtosis), extremes and quantiles."""
    clean = returns.dropna()
    stats = {
        "count": float(len(clean)),
        "mean": clean.mean(),
        "std": clean.std(),
        "skew": clean.skew(),
        "kurtosis": clean.kurt(),
        "min": clean.min(),
        "max": clean.max(),
    }
    for q in QUANTILES:
        stats[f"q{int(round(q * 100)):02d}"] = clean.quantile(q) if len(clean) else np.nan
    return pd.Series(stats, name="returns")


def yearly_volatility(returns: pd.Series, periods_per_year: int = 252) -> pd.DataFrame:
    """Per calendar year: observations, mean, std and annualized volatility."""
    clean = returns.dropna()
    grouped = clean.groupby(clean.index.year)
    out = pd.DataFrame({
        "count": grouped.count(),
        "mean": grouped.mean(),
        "std": grouped.std(),
    })
    out["annualized_vol"] = out["std"] * np.sqrt(periods_per_year)
    out.index.name = "year"
    return out
