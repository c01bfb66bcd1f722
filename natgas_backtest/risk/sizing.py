"""
Order sizing policies. A policy maps (fill price, current position quantity)
to the number of units to buy. The simulator rejects negative or NaN results.
"""

from __future__ import annotations
import math
from typing import Callable, Optional

SizingPolicy = Callable[[float, float], float]


def round_quantity(qty: float, step_size: float) -> float:
    """Truncate toward zero to a multiple of step_size."""
    if math.isnan(qty) or step_size <= 0:
        return qty
    return round(math.trunc(qty / step_size) * step_size, 8)


class MaxDollarSizing:
    """
    Spend trade_size per entry without letting the position's value exceed max_size:
    qty = min(trade_size, max(0, max_size - position_qty * price)) / price.
    Whole units when integer_qty (truncated).
    """

    def __init__(self, trade_size: float, max_size: Optional[float] = None, integer_qty: bool = True):
        self.trade_size = trade_size
        self.max_size = trade_size if max_size is None else max_size
        self.integer_qty = integer_qty

    def __call__(self, price: float, position_qty: float = 0.0) -> float:
        if price <= 0 or math.isnan(price):
            return float("nan")
        headroom = max(0.0, self.max_size - position_qty * price)
        qty = min(self.trade_size, headroom) / price
        return round_quantity(qty, 1.0) if self.integer_qty else qty

    def __repr__(self) -> str:
        return f"MaxDollarSizing(trade_size={self.trade_size}, max_size={self.max_size}, integer_qty={self.integer_qty})"


class FixedQuantitySizing:
    """Always buy the same number of units."""

    def __init__(self, quantity: float = 1.0):
        self.quantity = quantity

    def __call__(self, price: float, position_qty: float = 0.0) -> float:
        return self.quantity
