"""
Core data types for bars, orders, fills, positions, trades and snapshots.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class PositionState(str, Enum):
    FLAT = "FLAT"
    LONG = "LONG"


class EventKind(str, Enum):
    NO_FILL_WINDOW = "NoFillWindow"
    OVERSIZED_EXIT = "OversizedExit"


# Order quantity meaning "liquidate the whole position"
ALL = "all"


@dataclass(frozen=True)
class Bar:
    """OHLCV candle."""
    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class Order:
    """
    Order created on a signal bar, filled at the next bar's open.
    quantity is None for entries (sized at fill time), ALL for liquidation.
    """
    side: OrderSide
    created: datetime
    signal: str
    quantity: Union[float, str, None] = None


@dataclass(frozen=True)
class Fill:
    """Executed order (one transaction)."""
    time: datetime
    side: OrderSide
    quantity: float
    price: float
    signal: str
    realized_pnl: float = 0.0


@dataclass
class Position:
    """Open position state. quantity is never negative."""
    quantity: float = 0.0
    avg_cost: float = 0.0

    @property
    def state(self) -> PositionState:
        return PositionState.LONG if self.quantity > 0 else PositionState.FLAT

    def market_value(self, price: float) -> float:
        return self.quantity * price


@dataclass
class Trade:
    """Flat-to-flat round trip. exit_time is None while still open."""
    entry_time: datetime
    entry_price: float
    quantity: float
    exit_time: Optional[datetime] = None
    exit_price: Optional[float] = None
    pnl: float = 0.0
    fills: int = 0

    @property
    def is_closed(self) -> bool:
        return self.exit_time is not None

    @property
    def pnl_pct(self) -> float:
        cost = self.entry_price * self.quantity
        return (self.pnl / cost) * 100 if cost else 0.0


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Equity curve point, marked at the bar close."""
    time: datetime
    cash: float
    quantity: float
    position_value: float
    equity: float


@dataclass(frozen=True)
class SimulationEvent:
    """Recovered condition reported to the caller."""
    kind: EventKind
    time: datetime
    message: str
    details: dict = field(default_factory=dict)
