"""
Error taxonomy. Fatal conditions are exceptions; recoverable ones are
reported as SimulationEvent records (see core.types).
"""

from __future__ import annotations


class BacktestError(ValueError):
    """Base class for fatal backtest errors."""


class InvalidWindow(BacktestError):
    """Indicator lookback window is not a positive integer."""


class InvalidOrderSize(BacktestError):
    """Sizing produced a negative or NaN quantity."""


class NonMonotonicDates(BacktestError):
    """Bar dates are not unique and strictly increasing."""


class MissingPrices(BacktestError):
    """A bar has no open or close price."""
