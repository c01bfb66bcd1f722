"""
Backtest simulator: long-only, one asset, signals evaluated on the bar close,
orders filled at the next bar's open. No slippage, fees or partial fills.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from natgas_backtest.analytics.metrics import TradeStats, compute_trade_stats
from natgas_backtest.core.bars import bars_to_frame, validate_bars
from natgas_backtest.core.errors import InvalidOrderSize
from natgas_backtest.core.types import (
    ALL,
    Bar,
    EventKind,
    Fill,
    Order,
    OrderSide,
    PortfolioSnapshot,
    Position,
    PositionState,
    SimulationEvent,
    Trade,
)
from natgas_backtest.risk.sizing import SizingPolicy
from natgas_backtest.signals.expressions import evaluate
from natgas_backtest.strategies.base import BaseStrategy, Rule, RuleKind

logger = logging.getLogger("natgas_backtest.backtest")


@dataclass
class BacktestResult:
    """Backtest output: trade log, fills, equity snapshots, recovered events and stats."""
    trades: List[Trade] = field(default_factory=list)
    transactions: List[Fill] = field(default_factory=list)
    snapshots: List[PortfolioSnapshot] = field(default_factory=list)
    events: List[SimulationEvent] = field(default_factory=list)
    stats: Optional[TradeStats] = None

    @property
    def equity_curve(self) -> pd.Series:
        return pd.Series(
            [s.equity for s in self.snapshots],
            index=pd.DatetimeIndex([s.time for s in self.snapshots]),
            name="equity",
        )

    def snapshots_frame(self) -> pd.DataFrame:
        return pd.DataFrame([s.__dict__ for s in self.snapshots])

    def trades_frame(self) -> pd.DataFrame:
        return pd.DataFrame([t.__dict__ for t in self.trades])


class Simulator:
    """
    Walks bars in time order. On each bar: fill the order queued on the previous
    bar at this bar's open, mark to market at the close, then evaluate rules.
    Exit rules win over entry rules on the same bar. Entries while LONG are
    ignored unless allow_pyramiding.
    """

    def __init__(
        self,
        strategy: BaseStrategy,
        sizing: SizingPolicy,
        initial_equity: float = 100000.0,
        allow_pyramiding: bool = False,
        symbol: str = "NG",
    ):
        self.strategy = strategy
        self.sizing = sizing
        self.initial_equity = initial_equity
        self.allow_pyramiding = allow_pyramiding
        self.symbol = symbol
        self._entry_label = "entry"
        self.reset()

    def reset(self) -> None:
        """Clear account state. Called at the start of every run."""
        self.cash = float(self.initial_equity)
        self.position = Position()
        self.trades: List[Trade] = []
        self.transactions: List[Fill] = []
        self.snapshots: List[PortfolioSnapshot] = []
        self.events: List[SimulationEvent] = []
        self._open_trade: Optional[Trade] = None

    @property
    def state(self) -> PositionState:
        return self.position.state

    def run(self, bars: Union[pd.DataFrame, Iterable[Bar]]) -> BacktestResult:
        """Run the strategy over the full bar sequence. Raises on malformed input."""
        df = bars if isinstance(bars, pd.DataFrame) else bars_to_frame(bars)
        df = df.reset_index(drop=True)
        validate_bars(df)
        self.reset()

        entries, exits = self._rule_arrays(df)
        times = list(pd.to_datetime(df["time"]))
        opens = df["open"].astype(float).to_numpy()
        closes = df["close"].astype(float).to_numpy()
        n = len(df)
        logger.info(
            "Backtest %s: %d bars, equity=%.2f, sizing=%r",
            self.symbol, n, self.initial_equity, self.sizing,
        )

        pending: Optional[Order] = None
        for i in range(n):
            t = times[i]
            if pending is not None:
                self.execute(pending, t, float(opens[i]))
                pending = None
            self.mark_to_market(t, float(closes[i]))

            order = self._decide(t, entries[i], exits[i])
            if order is None:
                continue
            if i == n - 1:
                self._record_event(
                    EventKind.NO_FILL_WINDOW, t,
                    f"{order.side.value} from {order.signal} on final bar dropped",
                    signal=order.signal,
                )
                continue
            pending = order

        if self._open_trade is not None:
            logger.info(
                "Position still open at end of data: qty=%.4f avg_cost=%.4f",
                self.position.quantity, self.position.avg_cost,
            )

        stats = compute_trade_stats(self.trades, self.transactions, self.snapshots, self.initial_equity)
        return BacktestResult(
            trades=list(self.trades),
            transactions=list(self.transactions),
            snapshots=list(self.snapshots),
            events=list(self.events),
            stats=stats,
        )

    def _rule_arrays(self, df: pd.DataFrame) -> Tuple[np.ndarray, List[Optional[Rule]]]:
        """Per bar: entry flag, and the first exit rule that fired (or None)."""
        frame = self.strategy.compute_indicators(df)
        n = len(df)
        entries = np.zeros(n, dtype=bool)
        exits: List[Optional[Rule]] = [None] * n
        entry_labels: List[str] = []
        for rule in self.strategy.rules():
            fired = evaluate(rule.signal, frame).to_numpy(dtype=bool)
            if rule.kind == RuleKind.ENTER:
                entries |= fired
                entry_labels.append(rule.label)
            else:
                for i in np.flatnonzero(fired):
                    if exits[i] is None:
                        exits[i] = rule
        self._entry_label = "|".join(entry_labels) or "entry"
        return entries, exits

    def _decide(self, t: datetime, entry: bool, exit_rule: Optional[Rule]) -> Optional[Order]:
        if self.state == PositionState.LONG:
            if exit_rule is not None:
                qty = ALL if exit_rule.quantity is None else exit_rule.quantity
                return Order(OrderSide.SELL, t, exit_rule.label, quantity=qty)
            if entry and self.allow_pyramiding:
                return Order(OrderSide.BUY, t, self._entry_label)
            return None
        if entry:
            return Order(OrderSide.BUY, t, self._entry_label)
        return None

    def execute(self, order: Order, t: datetime, price: float) -> Optional[Fill]:
        """Fill an order at price. Returns the Fill, or None when nothing trades.

        A SELL for more than the position (from an EXIT rule with a fixed
        quantity, or a manual order) is clipped and recorded as OversizedExit.
        """
        if order.side == OrderSide.BUY:
            return self._buy(order, t, price)
        return self._sell(order, t, price)

    def _buy(self, order: Order, t: datetime, price: float) -> Optional[Fill]:
        if order.quantity is None:
            qty = self.sizing(price, self.position.quantity)
        else:
            qty = order.quantity
        qty = self._check_quantity(qty, order)
        if qty == 0:
            logger.debug("%s: sized to zero units at %.4f, no fill", t, price)
            return None

        cost = qty * price
        held = self.position.quantity
        self.position.avg_cost = (held * self.position.avg_cost + cost) / (held + qty)
        self.position.quantity = held + qty
        self.cash -= cost

        if self._open_trade is None:
            self._open_trade = Trade(entry_time=t, entry_price=price, quantity=0.0)
            self.trades.append(self._open_trade)
        self._open_trade.quantity += qty
        self._open_trade.entry_price = self.position.avg_cost
        self._open_trade.fills += 1

        fill = Fill(t, OrderSide.BUY, qty, price, order.signal)
        self.transactions.append(fill)
        logger.debug("BUY %.4f @ %.4f on %s (%s)", qty, price, t, order.signal)
        return fill

    def _sell(self, order: Order, t: datetime, price: float) -> Optional[Fill]:
        held = self.position.quantity
        if order.quantity == ALL or order.quantity is None:
            qty = held
        else:
            qty = self._check_quantity(order.quantity, order)
            if qty > held:
                self._record_event(
                    EventKind.OVERSIZED_EXIT, t,
                    f"exit of {qty} clipped to position {held}",
                    requested=qty, held=held, signal=order.signal,
                )
                qty = held
        if qty == 0:
            return None

        realized = (price - self.position.avg_cost) * qty
        self.cash += qty * price
        self.position.quantity = held - qty
        if self.position.quantity == 0:
            self.position.avg_cost = 0.0

        trade = self._open_trade
        if trade is not None:
            trade.pnl += realized
            trade.fills += 1
            if self.position.quantity == 0:
                trade.exit_time = t
                trade.exit_price = price
                self._open_trade = None
                logger.info(
                    "Trade closed %s -> %s qty=%.4f entry=%.4f exit=%.4f pnl=%.2f",
                    trade.entry_time.date(), t.date(), trade.quantity,
                    trade.entry_price, price, trade.pnl,
                )

        fill = Fill(t, OrderSide.SELL, qty, price, order.signal, realized_pnl=realized)
        self.transactions.append(fill)
        return fill

    def mark_to_market(self, t: datetime, close: float) -> PortfolioSnapshot:
        value = self.position.quantity * close
        snap = PortfolioSnapshot(
            time=t,
            cash=self.cash,
            quantity=self.position.quantity,
            position_value=value,
            equity=self.cash + value,
        )
        self.snapshots.append(snap)
        return snap

    def _check_quantity(self, qty: float, order: Order) -> float:
        try:
            qty = float(qty)
        except (TypeError, ValueError):
            raise InvalidOrderSize(f"{order.signal}: quantity {qty!r} is not a number") from None
        if math.isnan(qty) or qty < 0:
            raise InvalidOrderSize(f"{order.signal}: computed quantity {qty} on {order.created}")
        return qty

    def _record_event(self, kind: EventKind, t: datetime, message: str, **details) -> None:
        logger.warning("%s on %s: %s", kind.value, t, message)
        self.events.append(SimulationEvent(kind, t, message, details))
