"""Unit tests for risk.sizing."""

import math

import pytest

from natgas_backtest.risk import FixedQuantitySizing, MaxDollarSizing, round_quantity


def test_round_quantity_truncates():
    assert round_quantity(333.9, 1.0) == 333.0
    assert round_quantity(0.129, 0.01) == pytest.approx(0.12)


def test_max_dollar_whole_units():
    size = MaxDollarSizing(trade_size=10000, max_size=10000)
    assert size(30.0) == 333.0
    assert size(30.0, 333) == 0.0  # 10 dollars of headroom
    assert size(20.0, 333) == 167.0  # position now worth 6660


def test_max_dollar_fractional():
    size = MaxDollarSizing(trade_size=10000, integer_qty=False)
    assert size(30.0) == pytest.approx(333.3333, rel=1e-6)


def test_max_dollar_trade_size_caps_each_entry():
    size = MaxDollarSizing(trade_size=1000, max_size=5000)
    assert size(10.0, 100) == 100.0


def test_max_dollar_bad_price():
    assert math.isnan(MaxDollarSizing(1000)(0.0))


def test_fixed_quantity():
    assert FixedQuantitySizing(3)(12.5, 10) == 3
