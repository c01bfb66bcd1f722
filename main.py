#!/usr/bin/env python3
"""
Natural gas backtest CLI: backtest | explore
Usage:
  python main.py backtest [--config config.yaml] [--data NG.csv]
  python main.py explore [--config config.yaml] [--data NG.csv]
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from natgas_backtest.analytics.returns import (
    daily_returns,
    extreme_moves,
    return_distribution,
    yearly_volatility,
)
from natgas_backtest.backtesting.engine import Simulator
from natgas_backtest.core.bars import normalize_bars, slice_range
from natgas_backtest.core.config import Config, load_config
from natgas_backtest.core.errors import BacktestError
from natgas_backtest.core.logger import setup_logging
from natgas_backtest.risk.sizing import MaxDollarSizing
from natgas_backtest.strategies.sma_rsi import SmaRsiStrategy

logger = logging.getLogger("natgas_backtest")


def _load_bars(config: Config, data_path: Path | None) -> pd.DataFrame | None:
    path = data_path or config.data_path
    if path is None or not Path(path).exists():
        logger.error("No price data: set data.path in config.yaml, DATA_PATH in .env, or pass --data")
        return None
    return normalize_bars(pd.read_csv(path))


def run_backtest(config_path: Path | None, data_path: Path | None) -> int:
    """Run the SMA/RSI backtest over the configured date range."""
    config = load_config(config_path, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, config.json_logs)
    try:
        df = _load_bars(config, data_path)
        if df is None:
            return 1
        df = slice_range(df, config.backtest_start, config.backtest_end)
        strategy = SmaRsiStrategy(
            sma_long=config.sma_long,
            sma_short=config.sma_short,
            rsi_len=config.rsi_len,
            rsi_entry=config.rsi_entry,
            rsi_exit=config.rsi_exit,
        )
        sim = Simulator(
            strategy=strategy,
            sizing=MaxDollarSizing(config.trade_size, config.max_size, config.integer_qty),
            initial_equity=config.initial_equity,
            allow_pyramiding=config.allow_pyramiding,
            symbol=config.symbol,
        )
        result = sim.run(df)
    except BacktestError as e:
        logger.error("Backtest aborted: %s", e)
        return 1

    s = result.stats
    if s:
        print("\n--- Backtest Results ---")
        print(f"Transactions: {s.num_transactions}  Round trips: {s.num_trades}")
        print(f"Net P&L: {s.net_pnl:.2f} ({s.total_return_pct:.2f}%)")
        print(f"Avg / median trade P&L: {s.avg_trade_pnl:.2f} / {s.median_trade_pnl:.2f}")
        print(f"Largest winner / loser: {s.largest_winner:.2f} / {s.largest_loser:.2f}")
        print(f"Gross profit / loss: {s.gross_profit:.2f} / {s.gross_loss:.2f}")
        print(f"Percent positive / negative: {s.pct_positive:.1f}% / {s.pct_negative:.1f}%")
        print(f"Profit factor: {s.profit_factor:.2f}")
        print(f"Annualized Sharpe: {s.sharpe_ratio:.2f}")
        print(f"Max drawdown: {s.max_drawdown:.2f} ({s.max_drawdown_pct:.2f}%)")
        print(f"Profit / max drawdown: {s.profit_to_max_drawdown:.2f}")
        print(f"End equity: {s.end_equity:.2f}")
    for event in result.events:
        print(f"{event.kind.value}: {event.time} {event.message}")
    return 0


def run_explore(config_path: Path | None, data_path: Path | None) -> int:
    """Print return distribution, largest moves and per-year volatility."""
    config = load_config(config_path, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, config.json_logs)
    try:
        df = _load_bars(config, data_path)
    except BacktestError as e:
        logger.error("Bad price data: %s", e)
        return 1
    if df is None:
        return 1
    rets = daily_returns(df)
    moves = extreme_moves(rets, n=5)
    print("\n--- Return distribution ---")
    print(return_distribution(rets).to_string())
    print("\n--- Largest up moves ---")
    print(moves["up"].to_string())
    print("\n--- Largest down moves ---")
    print(moves["down"].to_string())
    print("\n--- Volatility by year ---")
    print(yearly_volatility(rets).to_string())
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Natural gas backtest CLI")
    parser.add_argument("mode", choices=["backtest", "explore"], help="Run backtest or explore returns")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--data", type=Path, default=None, help="OHLCV CSV (overrides config)")
    args = parser.parse_args()
    if args.mode == "backtest":
        return run_backtest(args.config, args.data)
    return run_explore(args.config, args.data)


if __name__ == "__main__":
    sys.exit(main())
