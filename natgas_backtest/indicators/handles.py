"""
Typed indicator declarations. Signals hold these handles directly instead of
looking columns up by name.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Mapping, Union

import pandas as pd

from natgas_backtest.indicators.technical import check_window, rsi, sma


class PriceField(str, Enum):
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    VOLUME = "volume"


class IndicatorKind(str, Enum):
    SMA = "SMA"
    RSI = "RSI"


@dataclass(frozen=True)
class Indicator:
    """Named indicator over one price field. Window is validated on creation."""
    label: str
    kind: IndicatorKind
    window: int
    source: PriceField = PriceField.CLOSE

    def __post_init__(self) -> None:
        check_window(self.window)

    def compute(self, bars: pd.DataFrame) -> pd.Series:
        prices = bars[self.source.value]
        if self.kind == IndicatorKind.SMA:
            out = sma(prices, self.window)
        else:
            out = rsi(prices, self.window)
        return out.rename(self.label)


def SMA(window: int, label: str = "", source: PriceField = PriceField.CLOSE) -> Indicator:
    return Indicator(label or f"SMA{window}", IndicatorKind.SMA, window, source)


def RSI(window: int, label: str = "", source: PriceField = PriceField.CLOSE) -> Indicator:
    return Indicator(label or f"RSI{window}", IndicatorKind.RSI, window, source)


Operand = Union[Indicator, PriceField]


class IndicatorFrame(Mapping[Operand, pd.Series]):
    """Computed indicator and price series keyed by handle, all aligned to the bars."""

    def __init__(self, bars: pd.DataFrame, series: Dict[Indicator, pd.Series]):
        self._bars = bars
        self._series = dict(series)

    def __getitem__(self, key: Operand) -> pd.Series:
        if isinstance(key, PriceField):
            return self._bars[key.value]
        try:
            return self._series[key]
        except KeyError:
            raise KeyError(f"indicator {key.label!r} was not computed for this strategy") from None

    def __iter__(self) -> Iterator[Operand]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    @property
    def index(self) -> pd.Index:
        return self._bars.index

    def to_frame(self) -> pd.DataFrame:
        """Bars plus one column per indicator label."""
        df = self._bars.copy()
        for ind, values in self._series.items():
            df[ind.label] = values.values
        return df


def compute_indicators(bars: pd.DataFrame, indicators: Iterable[Indicator]) -> IndicatorFrame:
    """Compute every indicator once over the full bar frame."""
    return IndicatorFrame(bars, {ind: ind.compute(bars) for ind in indicators})
