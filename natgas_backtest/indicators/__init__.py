"""Indicators: SMA, Wilder RSI and typed indicator handles."""

from natgas_backtest.indicators.technical import sma, rsi, check_window
from natgas_backtest.indicators.handles import (
    SMA,
    RSI,
    Indicator,
    IndicatorFrame,
    IndicatorKind,
    Operand,
    PriceField,
    compute_indicators,
)

__all__ = [
    "sma",
    "rsi",
    "check_window",
    "SMA",
    "RSI",
    "Indicator",
    "IndicatorFrame",
    "IndicatorKind",
    "Operand",
    "PriceField",
    "compute_indicators",
]
