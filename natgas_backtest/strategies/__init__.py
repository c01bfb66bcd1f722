"""Strategies: base interface and implementations."""

from natgas_backtest.strategies.base import BaseStrategy, Rule, RuleKind
from natgas_backtest.strategies.sma_rsi import SmaRsiStrategy

__all__ = ["BaseStrategy", "Rule", "RuleKind", "SmaRsiStrategy"]
