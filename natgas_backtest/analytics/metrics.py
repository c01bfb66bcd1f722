"""
Trade statistics: P&L summary over closed round trips plus Sharpe, Sortino and
drawdown from the daily equity curve.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Sequence

import numpy as np

from natgas_backtest.core.types import Fill, PortfolioSnapshot, Trade


@dataclass
class TradeStats:
    """Aggregate backtest statistics."""
    num_transactions: int
    num_trades: int
    net_pnl: float
    total_return_pct: float
    avg_trade_pnl: float
    median_trade_pnl: float
    largest_winner: float
    largest_loser: float
    gross_profit: float
    gross_loss: float
    pct_positive: float
    pct_negative: float
    avg_win: float
    avg_loss: float
    avg_win_loss_ratio: float
    profit_factor: float
    sharpe_ratio: float
    sortino_ratio: float
    max_drawdown: float
    max_drawdown_pct: float
    profit_to_max_drawdown: float
    max_equity: float
    min_equity: float
    end_equity: float

    def to_dict(self) -> dict:
        return asdict(self)


def sharpe_ratio(returns: Sequence[float], risk_free_rate: float = 0.0, periods_per_year: float = 252.0) -> float:
    """Annualized Sharpe (sample std). returns = list of period returns."""
    if len(returns) < 2:
        return 0.0
    arr = np.asarray(returns, dtype=float)
    excess = arr - risk_free_rate / periods_per_year
    std = excess.std(ddof=1)
    if std <= 1e-12:
        return 0.0
    return float(np.sqrt(periods_per_year) * excess.mean() / std)


def sortino_ratio(returns: Sequence[float], risk_free_rate: float = 0.0, periods_per_year: float = 252.0) -> float:
    """Annualized Sortino (downside deviation)."""
    if len(returns) < 2:
        return 0.0
    arr = np.asarray(returns, dtype=float)
    excess = arr - risk_free_rate / periods_per_year
    downside = arr[arr < 0]
    if len(downside) < 2 or downside.std(ddof=1) <= 1e-12:
        return sharpe_ratio(returns, risk_free_rate, periods_per_year)
    return float(np.sqrt(periods_per_year) * excess.mean() / downside.std(ddof=1))


def max_drawdown(equity: Sequence[float]) -> float:
    """Max drawdown in percent of the running peak (e.g. -15.0 = 15% below peak)."""
    if len(equity) == 0:
        return 0.0
    arr = np.asarray(equity, dtype=float)
    peak = np.maximum.accumulate(arr)
    dd = (arr - peak) / np.where(peak != 0, peak, 1)
    return float(np.min(dd)) * 100.0


def max_drawdown_abs(equity: Sequence[float]) -> float:
    """Largest peak-to-trough decline in currency (<= 0)."""
    if len(equity) == 0:
        return 0.0
    arr = np.asarray(equity, dtype=float)
    peak = np.maximum.accumulate(arr)
    return float(np.min(arr - peak))


def win_rate(pnls: Sequence[float]) -> float:
    """Fraction of trades with positive PnL."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def profit_factor(pnls: Sequence[float]) -> float:
    """Gross profit / gross loss. inf with profits and no losses, 0 with neither."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return float("inf") if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: Sequence[float]) -> float:
    """Average PnL per trade."""
    if not pnls:
        return 0.0
    return sum(pnls) / len(pnls)


def equity_returns(equity: Sequence[float]) -> List[float]:
    """Period-over-period simple returns of an equity curve."""
    arr = np.asarray(equity, dtype=float)
    if len(arr) < 2:
        return []
    prev = arr[:-1]
    rets = np.diff(arr) / np.where(prev != 0, prev, np.nan)
    return [float(r) for r in rets if not np.isnan(r)]


def compute_trade_stats(
    trades: Sequence[Trade],
    transactions: Sequence[Fill],
    snapshots: Sequence[PortfolioSnapshot],
    initial_equity: float,
    periods_per_year: float = 252.0,
) -> TradeStats:
    """
    Per-trade figures use closed round trips only. net_pnl is end equity minus
    initial equity, so it includes any open position marked at the last close.
    """
    pnls = [t.pnl for t in trades if t.is_closed]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    equity = [s.equity for s in snapshots] or [initial_equity]
    end_equity = equity[-1]
    net_pnl = end_equity - initial_equity
    rets = equity_returns([initial_equity] + equity)
    mdd = max_drawdown_abs([initial_equity] + equity)
    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = sum(losses) / len(losses) if losses else 0.0
    if mdd < 0:
        profit_to_mdd = -net_pnl / mdd
    else:
        profit_to_mdd = float("inf") if net_pnl > 0 else 0.0
    return TradeStats(
        num_transactions=len(transactions),
        num_trades=len(pnls),
        net_pnl=net_pnl,
        total_return_pct=(net_pnl / initial_equity) * 100.0 if initial_equity else 0.0,
        avg_trade_pnl=expectancy(pnls),
        median_trade_pnl=float(np.median(pnls)) if pnls else 0.0,
        largest_winner=max(wins) if wins else 0.0,
        largest_loser=min(losses) if losses else 0.0,
        gross_profit=sum(wins),
        gross_loss=sum(losses),
        pct_positive=win_rate(pnls) * 100.0,
        pct_negative=(len(losses) / len(pnls)) * 100.0 if pnls else 0.0,
        avg_win=avg_win,
        avg_loss=avg_loss,
        avg_win_loss_ratio=avg_win / -avg_loss if avg_loss < 0 else 0.0,
        profit_factor=profit_factor(pnls),
        sharpe_ratio=sharpe_ratio(rets, periods_per_year=periods_per_year),
        sortino_ratio=sortino_ratio(rets, periods_per_year=periods_per_year),
        max_drawdown=mdd,
        max_drawdown_pct=max_drawdown([initial_equity] + equity),
        profit_to_max_drawdown=profit_to_mdd,
        max_equity=max(equity),
        min_equity=min(equity),
        end_equity=end_equity,
    )
