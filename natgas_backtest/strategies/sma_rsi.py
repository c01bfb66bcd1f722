"""
SMA trend filter + short RSI mean reversion (Henry Hub reference strategy).
Long when SMA_short > SMA_long and RSI dips below rsi_entry (entry fires once per dip).
Exit when SMA_short < SMA_long or RSI crosses above rsi_exit.
"""

from __future__ import annotations
from typing import Dict, List

from natgas_backtest.indicators.handles import RSI, SMA, Indicator
from natgas_backtest.signals.expressions import (
    Compare,
    Formula,
    Relationship,
    SignalNode,
    Threshold,
)
from natgas_backtest.strategies.base import BaseStrategy, Rule, RuleKind


class SmaRsiStrategy(BaseStrategy):
    def __init__(
        self,
        sma_long: int = 200,
        sma_short: int = 50,
        rsi_len: int = 3,
        rsi_entry: float = 30.0,
        rsi_exit: float = 70.0,
    ):
        self.sma_long = SMA(sma_long)
        self.sma_short = SMA(sma_short)
        self.rsi = RSI(rsi_len)
        self.rsi_entry = rsi_entry
        self.rsi_exit = rsi_exit

        self.long_filter = Compare(self.sma_short, self.sma_long, Relationship.GT)
        self.long_threshold = Threshold(self.rsi, rsi_entry, Relationship.LT)
        self.long_entry = Formula(self.long_filter, self.long_threshold, cross_only=True)
        self.exit_filter = Compare(self.sma_short, self.sma_long, Relationship.LT)
        self.exit_threshold = Threshold(self.rsi, rsi_exit, Relationship.GT, cross_only=True)

    def indicators(self) -> List[Indicator]:
        return [self.sma_long, self.sma_short, self.rsi]

    def signals(self) -> Dict[str, SignalNode]:
        return {
            "long_filter": self.long_filter,
            "long_threshold": self.long_threshold,
            "long_entry": self.long_entry,
            "exit_filter": self.exit_filter,
            "exit_threshold": self.exit_threshold,
        }

    def rules(self) -> List[Rule]:
        return [
            Rule(RuleKind.ENTER, "long_entry", self.long_entry),
            Rule(RuleKind.EXIT, "exit_filter", self.exit_filter),
            Rule(RuleKind.EXIT, "exit_threshold", self.exit_threshold),
        ]
