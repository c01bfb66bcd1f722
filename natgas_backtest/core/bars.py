"""
OHLCV frame helpers: normalize vendor columns, validate date order, slice ranges.
Canonical frame columns: time, open, high, low, close, volume.
"""

from __future__ import annotations
import logging
from typing import Iterable, Optional, Union

import pandas as pd

from natgas_backtest.core.errors import MissingPrices, NonMonotonicDates
from natgas_backtest.core.types import Bar

logger = logging.getLogger("natgas_backtest.data")

OHLCV_COLUMNS = ["time", "open", "high", "low", "close", "volume"]

# First match wins; futures settlement price is preferred as the close
_ALIASES = {
    "time": ("time", "date", "datetime", "timestamp"),
    "open": ("open",),
    "high": ("high",),
    "low": ("low",),
    "close": ("settle", "close", "last", "adj close"),
    "volume": ("volume", "vol"),
}


def normalize_bars(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map vendor column names (e.g. Date/Open/High/Low/Settle/Volume) onto the
    canonical OHLCV frame, coerce types, drop rows without a close, sort by time
    and validate.
    """
    lower = {str(c).strip().lower(): c for c in df.columns}
    picked = {}
    for target, candidates in _ALIASES.items():
        for cand in candidates:
            if cand in lower:
                picked[target] = lower[cand]
                break
    missing = [c for c in OHLCV_COLUMNS if c not in picked and c != "volume"]
    if missing:
        raise ValueError(f"Missing OHLCV columns: {missing}")
    out = pd.DataFrame({k: df[v].values for k, v in picked.items()})
    if "volume" not in out:
        out["volume"] = 0.0
    out["time"] = pd.to_datetime(out["time"])
    for col in OHLCV_COLUMNS[1:]:
        out[col] = pd.to_numeric(out[col], errors="coerce")
    dropped = int(out["close"].isna().sum())
    if dropped:
        logger.info("Dropping %d rows without a close price", dropped)
        out = out[out["close"].notna()].copy()
    no_open = out["open"].isna()
    if no_open.any():
        logger.info("Filling %d missing opens from the close", int(no_open.sum()))
        out.loc[no_open, "open"] = out.loc[no_open, "close"]
    out["volume"] = out["volume"].fillna(0.0)
    # Vendors often deliver newest first
    out = out.sort_values("time", kind="mergesort")[OHLCV_COLUMNS].reset_index(drop=True)
    validate_bars(out)
    return out


def validate_bars(df: pd.DataFrame) -> None:
    """
    Raise NonMonotonicDates unless bar times are unique and strictly increasing,
    and MissingPrices if any open or close is NaN.
    """
    for col in ("open", "close"):
        if col in df and df[col].isna().any():
            pos = int(df[col].isna().values.argmax())
            raise MissingPrices(f"bar {pos} at {df['time'].iloc[pos]} has no {col} price")
    times = pd.to_datetime(df["time"])
    if len(times) < 2:
        return
    deltas = times.diff().iloc[1:]
    bad = deltas <= pd.Timedelta(0)
    if bad.any():
        pos = int(bad.values.argmax()) + 1
        raise NonMonotonicDates(
            f"bar {pos} at {times.iloc[pos]} does not follow {times.iloc[pos - 1]}"
        )


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """Build a canonical frame from Bar records."""
    rows = [
        {"time": b.time, "open": b.open, "high": b.high, "low": b.low,
         "close": b.close, "volume": b.volume}
        for b in bars
    ]
    df = pd.DataFrame(rows, columns=OHLCV_COLUMNS)
    df["time"] = pd.to_datetime(df["time"])
    validate_bars(df)
    return df


def slice_range(
    df: pd.DataFrame,
    start: Optional[Union[str, pd.Timestamp]] = None,
    end: Optional[Union[str, pd.Timestamp]] = None,
) -> pd.DataFrame:
    """Keep bars with start <= time <= end (either bound optional)."""
    mask = pd.Series(True, index=df.index)
    if start is not None:
        mask &= df["time"] >= pd.Timestamp(start)
    if end is not None:
        mask &= df["time"] <= pd.Timestamp(end)
    return df[mask].reset_index(drop=True)
