"""Abstract strategy: indicator declarations, named signals and entry/exit rules."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

import pandas as pd

from natgas_backtest.indicators.handles import Indicator, IndicatorFrame, compute_indicators
from natgas_backtest.signals.expressions import SignalNode, evaluate_signals


class RuleKind(str, Enum):
    ENTER = "enter"
    EXIT = "exit"


@dataclass(frozen=True)
class Rule:
    """Go long (ENTER) or liquidate (EXIT) on the bar after `signal` is True.

    `quantity` sizes an EXIT: None or ALL liquidates, a number sells that many
    units (clipped to the position, which records an OversizedExit event).
    """
    kind: RuleKind
    label: str
    signal: SignalNode
    quantity: Optional[Union[float, str]] = None


class BaseStrategy(ABC):
    """Strategy declares indicators, signals and rules; the simulator does the rest."""

    @abstractmethod
    def indicators(self) -> List[Indicator]:
        """Indicators every signal of this strategy may reference."""
        pass

    @abstractmethod
    def rules(self) -> List[Rule]:
        """Entry and exit rules, each holding the signal node that triggers it."""
        pass

    def signals(self) -> Dict[str, SignalNode]:
        """Labelled signals for inspection. Defaults to the rule signals."""
        return {rule.label: rule.signal for rule in self.rules()}

    def compute_indicators(self, df: pd.DataFrame) -> IndicatorFrame:
        return compute_indicators(df, self.indicators())

    def compute_signals(self, df: pd.DataFrame) -> pd.DataFrame:
        """Bars, indicator columns and one bool column per signal label."""
        frame = self.compute_indicators(df)
        out = frame.to_frame()
        sigs = evaluate_signals(self.signals(), frame)
        for label in sigs.columns:
            out[label] = sigs[label].values
        return out
