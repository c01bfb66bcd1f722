"""Core: config, types, bars, errors, logging."""

from natgas_backtest.core.config import load_config, Config
from natgas_backtest.core.types import (
    ALL,
    Bar,
    EventKind,
    Fill,
    Order,
    OrderSide,
    PortfolioSnapshot,
    Position,
    PositionState,
    SimulationEvent,
    Trade,
)
from natgas_backtest.core.errors import (
    BacktestError,
    InvalidOrderSize,
    InvalidWindow,
    MissingPrices,
    NonMonotonicDates,
)
from natgas_backtest.core.bars import normalize_bars, validate_bars, bars_to_frame, slice_range
from natgas_backtest.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "ALL",
    "Bar",
    "EventKind",
    "Fill",
    "Order",
    "OrderSide",
    "PortfolioSnapshot",
    "Position",
    "PositionState",
    "SimulationEvent",
    "Trade",
    "BacktestError",
    "InvalidOrderSize",
    "InvalidWindow",
    "MissingPrices",
    "NonMonotonicDates",
    "normalize_bars",
    "validate_bars",
    "bars_to_frame",
    "slice_range",
    "setup_logging",
]
