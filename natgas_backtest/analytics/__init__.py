"""Analytics: trade statistics and returns exploration."""

from natgas_backtest.analytics.metrics import (
    TradeStats,
    compute_trade_stats,
    equity_returns,
    sharpe_ratio,
    sortino_ratio,
    max_drawdown,
    max_drawdown_abs,
    win_rate,
    profit_factor,
    expectancy,
)
from natgas_backtest.analytics.returns import (
    daily_returns,
    extreme_moves,
    return_distribution,
    yearly_volatility,
)

__all__ = [
    "TradeStats",
    "compute_trade_stats",
    "equity_returns",
    "sharpe_ratio",
    "sortino_ratio",
    "max_drawdown",
    "max_drawdown_abs",
    "win_rate",
    "profit_factor",
    "expectancy",
    "daily_returns",
    "extreme_moves",
    "return_distribution",
    "yearly_volatility",
]
