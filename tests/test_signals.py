"""Unit tests for signal expressions."""

import numpy as np
import pandas as pd

from natgas_backtest.indicators import SMA, PriceField, compute_indicators
from natgas_backtest.signals import (
    BoolOp,
    Compare,
    Formula,
    Relationship,
    Threshold,
    crossings,
    evaluate,
    evaluate_signals,
    relate,
)


def test_relate_undefined_is_false():
    a = pd.Series([1.0, np.nan, 3.0, 0.0])
    b = pd.Series([0.0, 0.0, np.nan, 1.0])
    assert relate(a, b, Relationship.GT).tolist() == [True, False, False, False]
    assert relate(a, b, Relationship.LT).tolist() == [False, False, False, True]
    assert relate(a, 3.0, Relationship.GTE).tolist() == [False, False, True, False]
    assert relate(a, 3.0, Relationship.EQ).tolist() == [False, False, True, False]
    assert relate(a, b, Relationship.EQ).tolist() == [False, False, False, False]
    assert relate(a, 1.0, Relationship.LTE).tolist() == [True, False, False, True]
    assert relate(a, b, Relationship.LTE).tolist() == [False, False, False, True]


def test_crossings_fire_only_on_transition():
    cond = pd.Series([False, True, True, False, True, True, True])
    assert crossings(cond).tolist() == [False, True, False, False, True, False, False]


def test_crossings_first_bar_never_fires():
    assert crossings(pd.Series([True, True, False, True])).tolist() == [False, False, False, True]


def test_threshold_cross_only_vs_level(make_bars):
    df = make_bars([10, 20, 30, 25, 35, 40, 10])
    level = Threshold(PriceField.CLOSE, 22, Relationship.GT)
    cross = Threshold(PriceField.CLOSE, 22, Relationship.GT, cross_only=True)
    frame = compute_indicators(df, [])
    assert evaluate(level, frame).tolist() == [False, False, True, True, True, True, False]
    assert evaluate(cross, frame).tolist() == [False, False, True, False, False, False, False]


def test_cross_from_undefined_counts_as_transition(make_bars):
    df = make_bars([1, 2, 3, 4, 5])
    frame = compute_indicators(df, [SMA(3)])
    sig = Threshold(SMA(3), 0, Relationship.GT, cross_only=True)
    # SMA3 undefined on bars 0-1, first defined (and > 0) on bar 2
    assert evaluate(sig, frame).tolist() == [False, False, True, False, False]


def test_compare_undefined_propagates_false(make_bars):
    df = make_bars(np.arange(1, 8, dtype=float))
    fast, slow = SMA(2), SMA(5)
    frame = compute_indicators(df, [fast, slow])
    out = evaluate(Compare(fast, slow, Relationship.GT), frame)
    assert out.tolist() == [False, False, False, False, True, True, True]


def test_formula_and_with_cross(make_bars):
    df = make_bars([5, 15, 15, 5, 15, 15, 15])
    frame = compute_indicators(df, [])
    above = Threshold(PriceField.CLOSE, 10, Relationship.GT)
    high_open = Threshold(PriceField.OPEN, 10, Relationship.GT)
    both = Formula(above, high_open, cross_only=True)
    assert evaluate(both, frame).tolist() == [False, True, False, False, True, False, False]


def test_formula_or(make_bars):
    df = make_bars([5, 15, 5], opens=[15, 5, 5])
    frame = compute_indicators(df, [])
    either = Formula(
        Threshold(PriceField.CLOSE, 10, Relationship.GT),
        Threshold(PriceField.OPEN, 10, Relationship.GT),
        op=BoolOp.OR,
    )
    assert evaluate(either, frame).tolist() == [True, True, False]


def test_evaluate_signals_frame(make_bars):
    df = make_bars([1, 2, 3])
    frame = compute_indicators(df, [])
    out = evaluate_signals({"up": Threshold(PriceField.CLOSE, 1.5, Relationship.GT)}, frame)
    assert list(out.columns) == ["up"]
    assert out["up"].tolist() == [False, True, True]
