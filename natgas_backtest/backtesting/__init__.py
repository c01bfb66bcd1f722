"""Backtesting: bar-by-bar long-only simulator."""

from natgas_backtest.backtesting.engine import BacktestResult, Simulator

__all__ = ["BacktestResult", "Simulator"]
