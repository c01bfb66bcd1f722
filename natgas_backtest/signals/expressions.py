"""
Signal expressions: Compare, Threshold and Formula nodes evaluated over an
IndicatorFrame into boolean series. Undefined (NaN) inputs evaluate to False.
"""

from __future__ import annotations
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union

import pandas as pd

from natgas_backtest.indicators.handles import IndicatorFrame, Operand


class Relationship(str, Enum):
    GT = "gt"
    LT = "lt"
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"


class BoolOp(str, Enum):
    AND = "and"
    OR = "or"


_OPS = {
    Relationship.GT: operator.gt,
    Relationship.LT: operator.lt,
    Relationship.EQ: operator.eq,
    Relationship.GTE: operator.ge,
    Relationship.LTE: operator.le,
}


@dataclass(frozen=True)
class Compare:
    """left REL right, bar by bar."""
    left: Operand
    right: Operand
    relationship: Relationship
    cross_only: bool = False


@dataclass(frozen=True)
class Threshold:
    """operand REL value."""
    operand: Operand
    value: float
    relationship: Relationship
    cross_only: bool = False


@dataclass(frozen=True)
class Formula:
    """left AND/OR right over two signal nodes."""
    left: "SignalNode"
    right: "SignalNode"
    cross_only: bool = False
    op: BoolOp = BoolOp.AND


SignalNode = Union[Compare, Threshold, Formula]


def relate(left: pd.Series, right: Union[pd.Series, float], relationship: Relationship) -> pd.Series:
    """Apply a relationship; False wherever either side is NaN."""
    result = _OPS[Relationship(relationship)](left, right).astype(bool)
    undefined = left.isna()
    if isinstance(right, pd.Series):
        undefined = undefined | right.isna()
    return result & ~undefined


def crossings(condition: pd.Series) -> pd.Series:
    """
    True only where condition turns True after a False/undefined bar.
    The first bar has no predecessor and is never a crossing.
    """
    condition = condition.astype(bool)
    previous = condition.shift(1, fill_value=True).astype(bool)
    return condition & ~previous


def evaluate(node: SignalNode, frame: IndicatorFrame) -> pd.Series:
    """Evaluate a signal node into a bool Series aligned with the frame's bars."""
    if isinstance(node, Compare):
        out = relate(frame[node.left], frame[node.right], node.relationship)
    elif isinstance(node, Threshold):
        out = relate(frame[node.operand], float(node.value), node.relationship)
    elif isinstance(node, Formula):
        left = evaluate(node.left, frame)
        right = evaluate(node.right, frame)
        out = (left & right) if node.op == BoolOp.AND else (left | right)
    else:
        raise TypeError(f"not a signal node: {node!r}")
    if node.cross_only:
        out = crossings(out)
    return out


def evaluate_signals(signals: Mapping[str, SignalNode], frame: IndicatorFrame) -> pd.DataFrame:
    """Evaluate labelled signal nodes into a bool DataFrame, one column per label."""
    return pd.DataFrame(
        {label: evaluate(node, frame).values for label, node in signals.items()},
        index=frame.index,
    )
