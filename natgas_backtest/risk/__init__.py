"""Risk: pluggable order sizing policies."""

from natgas_backtest.risk.sizing import (
    FixedQuantitySizing,
    MaxDollarSizing,
    SizingPolicy,
    round_quantity,
)

__all__ = ["FixedQuantitySizing", "MaxDollarSizing", "SizingPolicy", "round_quantity"]
