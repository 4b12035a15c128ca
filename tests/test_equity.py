"""Property-based tests for the equity/drawdown tracker.

**Feature: trade-analytics**
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradestats.engine.daily import aggregate_daily, sorted_dates
from tradestats.engine.equity import (
    compute_equity_curve,
    compute_trade_curve,
    find_new_highs,
)
from tradestats.models import Trade

START = date(2024, 1, 1)


def daily_trades(pnls: list[float]) -> list[Trade]:
    """One trade per consecutive day with the given P&L values."""
    return [
        Trade(date=START + timedelta(days=i), ticker="AAPL", pnl=pnl)
        for i, pnl in enumerate(pnls)
    ]


def curve_for(pnls: list[float], starting_equity: float = 0.0):
    buckets = aggregate_daily(daily_trades(pnls))
    return compute_equity_curve(sorted_dates(buckets), buckets, starting_equity)


pnl_lists = st.lists(
    st.floats(min_value=-10000.0, max_value=10000.0, allow_nan=False, allow_infinity=False),
    min_size=0,
    max_size=60,
)
equities = st.floats(min_value=-50000.0, max_value=50000.0, allow_nan=False, allow_infinity=False)


class TestEquityAccumulation:
    """
    **Feature: trade-analytics, Property: Equity Accumulation Identity**

    *For any* trade list, the last point's cumulative equity equals the
    starting equity plus the sum of all included P&L.
    """

    @given(pnls=pnl_lists, starting_equity=equities)
    @settings(max_examples=100)
    def test_last_point_equals_start_plus_total(self, pnls: list[float], starting_equity: float):
        curve = curve_for(pnls, starting_equity)

        if not pnls:
            assert curve.points == ()
            assert curve.ending_equity == starting_equity
            return

        assert curve.points[-1].cumulative == pytest.approx(starting_equity + sum(pnls), abs=1e-6)

    @given(pnls=pnl_lists, starting_equity=equities)
    @settings(max_examples=100)
    def test_each_point_adds_its_pnl(self, pnls: list[float], starting_equity: float):
        curve = curve_for(pnls, starting_equity)

        previous = starting_equity
        for point in curve.points:
            assert point.cumulative == previous + point.pnl
            previous = point.cumulative

    def test_one_point_per_traded_day(self):
        trades = [
            Trade(date=date(2024, 1, 2), ticker="AAPL", pnl=10.0),
            Trade(date=date(2024, 1, 2), ticker="ES", pnl=-4.0),
            Trade(date=date(2024, 1, 9), ticker="ES", pnl=6.0),
        ]
        buckets = aggregate_daily(trades)

        curve = compute_equity_curve(sorted_dates(buckets), buckets, 100.0)

        assert [p.date for p in curve.points] == [date(2024, 1, 2), date(2024, 1, 9)]
        assert curve.points[0].trade_count == 2
        assert curve.points[0].win_count == 1
        assert curve.points[0].loss_count == 1


class TestDrawdown:
    """
    **Feature: trade-analytics, Property: Drawdown Non-Negativity**

    *For any* curve, drawdown is non-negative and equals the running peak
    (seeded by the starting equity) minus cumulative equity.
    """

    @given(pnls=pnl_lists, starting_equity=equities)
    @settings(max_examples=100)
    def test_drawdown_is_peak_minus_cumulative(self, pnls: list[float], starting_equity: float):
        curve = curve_for(pnls, starting_equity)

        peak = starting_equity
        for point in curve.points:
            peak = max(peak, point.cumulative)
            assert point.drawdown >= 0
            assert point.drawdown == pytest.approx(peak - point.cumulative, abs=1e-6)
            assert point.drawdown_percent >= 0

        assert curve.max_drawdown == max((p.drawdown for p in curve.points), default=0.0)

    def test_basic_drawdown_scenario(self):
        """Equity 1000 -> 1200 -> 700 -> 800."""
        curve = curve_for([200.0, -500.0, 100.0], starting_equity=1000.0)

        assert [p.cumulative for p in curve.points] == [1200.0, 700.0, 800.0]
        assert [p.drawdown for p in curve.points] == [0.0, 500.0, 400.0]
        assert curve.points[1].drawdown_percent == pytest.approx(41.67, abs=0.01)
        assert curve.max_drawdown == 500.0
        assert curve.max_drawdown_percent == pytest.approx(41.67, abs=0.01)
        assert curve.max_drawdown_start == START + timedelta(days=1)
        assert curve.max_drawdown_end == START + timedelta(days=1)
        assert curve.peak == 1200.0
        assert curve.current_drawdown == 400.0
        assert not curve.at_peak

    def test_new_high_resets_drawdown_episode(self):
        """A later, smaller drawdown does not replace the worst episode."""
        curve = curve_for([100.0, -50.0, -25.0, 200.0, -30.0])

        assert curve.max_drawdown == 75.0
        assert curve.max_drawdown_start == START + timedelta(days=1)
        assert curve.max_drawdown_end == START + timedelta(days=2)
        assert curve.peak == 225.0
        assert curve.current_drawdown == 30.0

    @pytest.mark.parametrize("starting_equity", [0.0, -500.0])
    def test_non_positive_peak_has_zero_percent(self, starting_equity: float):
        curve = curve_for([-100.0, -50.0], starting_equity)

        assert curve.max_drawdown == 150.0
        assert all(p.drawdown_percent == 0.0 for p in curve.points)
        assert curve.max_drawdown_percent == 0.0

    def test_empty_curve(self):
        curve = compute_equity_curve([], {}, 250.0)

        assert curve.points == ()
        assert curve.peak == 250.0
        assert curve.max_drawdown == 0.0
        assert curve.max_drawdown_start is None
        assert curve.ending_equity == 250.0


class TestTradeCurve:
    """Per-trade curves keep same-day trades as separate points."""

    def test_one_point_per_trade(self):
        trades = [
            Trade(id="t1", date=date(2024, 6, 10), time="09:30", ticker="AAPL", pnl=100.0),
            Trade(id="t2", date=date(2024, 6, 10), time="11:00", ticker="AAPL", pnl=-40.0),
            Trade(id="t3", date=date(2024, 6, 11), ticker="ES", pnl=0.0),
        ]

        curve = compute_trade_curve(trades, 1000.0)

        assert [p.trade_id for p in curve.points] == ["t1", "t2", "t3"]
        assert [p.cumulative for p in curve.points] == [1100.0, 1060.0, 1060.0]
        assert [p.time for p in curve.points] == ["09:30", "11:00", None]
        assert curve.points[2].win_count == 0
        assert curve.points[2].loss_count == 0
        assert curve.max_drawdown == 40.0


class TestNewHighs:
    def test_marks_points_above_previous_peak(self):
        curve = curve_for([50.0, -10.0, 20.0, 100.0], starting_equity=0.0)

        assert find_new_highs(curve) == [0, 2, 3]

    def test_starting_equity_is_first_peak(self):
        curve = curve_for([-10.0, 5.0, 10.0], starting_equity=100.0)

        assert find_new_highs(curve) == [2]
