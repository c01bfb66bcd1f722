"""Signals: typed Compare/Threshold/Formula expressions and their evaluation."""

from natgas_backtest.signals.expressions import (
    BoolOp,
    Compare,
    Formula,
    Relationship,
    SignalNode,
    Threshold,
    crossings,
    evaluate,
    evaluate_signals,
    relate,
)

__all__ = [
    "BoolOp",
    "Compare",
    "Formula",
    "Relationship",
    "SignalNode",
    "Threshold",
    "crossings",
    "evaluate",
    "evaluate_signals",
    "relate",
]
