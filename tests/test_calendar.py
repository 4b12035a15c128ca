"""Property-based tests for calendar week rollups.

**Feature: trade-analytics**
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradestats.engine.calendar_grid import (
    month_calendar,
    phantom_saturday,
    phantom_week,
    week_totals,
)
from tradestats.models import Trade

FEB = date(2024, 2, 1)
MAR = date(2024, 3, 1)
# Sunday 2024-02-25 to Saturday 2024-03-02
STRADDLE_SATURDAY = date(2024, 3, 2)


@pytest.fixture
def straddling_trades() -> list[Trade]:
    """Trades in the week that spans February and March 2024."""
    return [
        Trade(date=date(2024, 2, 27), ticker="AAPL", pnl=100.0),
        Trade(date=date(2024, 2, 28), close_date=date(2024, 3, 1), ticker="ES", pnl=70.0),
        Trade(date=date(2024, 2, 29), ticker="AAPL", pnl=50.0),
        Trade(date=date(2024, 2, 29), ticker="MSFT", pnl=-20.0),
        Trade(date=date(2024, 3, 1), ticker="ES", pnl=-30.0),
        Trade(date=date(2024, 3, 2), ticker="NQ", pnl=200.0),
        Trade(date=date(2024, 3, 2), ticker="TSLA", status="OPEN", pnl=500.0),
    ]


class TestWeekClamping:
    """
    **Feature: trade-analytics, Property: Week Clamping**

    A week straddling two months reports only the displayed month's days;
    the two clamped halves sum to the whole week.
    """

    def test_february_half(self, straddling_trades):
        totals = week_totals(STRADDLE_SATURDAY, FEB, straddling_trades)

        assert totals.start == date(2024, 2, 25)
        assert totals.end == date(2024, 2, 29)
        assert totals.week_pnl == 200.0
        assert totals.week_trades == 4
        assert totals.week_days == 3

    def test_march_half(self, straddling_trades):
        totals = week_totals(STRADDLE_SATURDAY, MAR, straddling_trades)

        assert totals.start == date(2024, 3, 1)
        assert totals.end == date(2024, 3, 2)
        assert totals.week_pnl == 170.0
        assert totals.week_trades == 2
        assert totals.week_days == 2

    def test_trades_placed_by_open_date(self, straddling_trades):
        """The ES trade closed on March 1 still counts on February 28."""
        totals = week_totals(date(2024, 3, 2), FEB, straddling_trades[1:2])

        assert totals.week_pnl == 70.0

    def test_any_day_of_week_is_accepted(self, straddling_trades):
        assert week_totals(date(2024, 2, 27), FEB, straddling_trades) == week_totals(
            STRADDLE_SATURDAY, FEB, straddling_trades
        )

    @given(
        trades=st.lists(
            st.builds(
                Trade,
                date=st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 4, 30)),
                ticker=st.just("AAPL"),
                pnl=st.integers(min_value=-500, max_value=500).map(float),
            ),
            max_size=40,
        ),
        day=st.dates(min_value=date(2024, 1, 7), max_value=date(2024, 4, 24)),
    )
    @settings(max_examples=100)
    def test_clamped_halves_sum_to_full_week(self, trades, day):
        """
        *For any* week and trades, summing the clamped totals of each month
        the week touches gives the unclamped week total.
        """
        sunday = day - timedelta(days=(day.weekday() + 1) % 7)
        saturday = sunday + timedelta(days=6)
        months = {sunday.replace(day=1), saturday.replace(day=1)}

        halves = [week_totals(saturday, month, trades) for month in months]

        in_week = [t for t in trades if sunday <= t.date <= saturday]
        assert sum(h.week_pnl for h in halves) == pytest.approx(sum(t.pnl for t in in_week))
        assert sum(h.week_trades for h in halves) == len(in_week)
        assert sum(h.week_days for h in halves) == len({t.date for t in in_week})

    @given(
        day=st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 12, 31)),
        month=st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 12, 31)),
    )
    @settings(max_examples=100)
    def test_clamp_is_idempotent(self, day, month):
        """Re-clamping a clamped week to the same month changes nothing."""
        trades = [Trade(date=day, ticker="AAPL", pnl=1.0)]

        first = week_totals(day, month, trades)
        again = week_totals(first.end, month, trades) if first.start <= first.end else first

        assert again == first


class TestPhantomWeek:
    """
    **Feature: trade-analytics, Property: Phantom Week**

    The trailing week is drawn only when the month does not end on a
    Saturday and the clamped week has trading days.
    """

    def test_february_phantom_has_data(self, straddling_trades):
        assert phantom_saturday(FEB) == STRADDLE_SATURDAY

        totals = phantom_week(FEB, straddling_trades)

        assert totals is not None
        assert totals.week_pnl == 200.0
        assert totals.end == date(2024, 2, 29)

    def test_month_ending_on_saturday_has_no_phantom(self):
        assert phantom_saturday(date(2024, 8, 15)) is None
        assert phantom_week(date(2024, 8, 1), [Trade(date=date(2024, 8, 31), ticker="A", pnl=5.0)]) is None

    def test_month_ending_on_sunday(self):
        """March 2024 ends on a Sunday; its trailing week is just that day."""
        assert phantom_saturday(MAR) == date(2024, 4, 6)

        totals = phantom_week(MAR, [Trade(date=date(2024, 3, 31), ticker="A", pnl=5.0)])

        assert totals is not None
        assert totals.start == totals.end == date(2024, 3, 31)

    def test_empty_trailing_week_is_none(self, straddling_trades):
        assert phantom_week(date(2024, 1, 1), straddling_trades) is None


class TestMonthCalendar:
    def test_february_grid(self, straddling_trades):
        grid = month_calendar(FEB, straddling_trades)

        assert [d.date for d in grid.days] == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29)]
        assert grid.days[2].pnl == 30.0
        assert grid.days[2].trades == 2
        assert grid.total_pnl == 200.0
        assert grid.total_trades == 4
        assert grid.trading_days == 3
        assert grid.win_days == 3
        assert grid.loss_days == 0
        assert grid.best_day.date == date(2024, 2, 27)
        assert grid.worst_day is None
        assert grid.day_win_rate == 100.0
        assert grid.average_daily_pnl == pytest.approx(200.0 / 3)
        assert grid.cumulative == (100.0, 170.0, 200.0)

        assert [w.saturday for w in grid.weeks] == [
            date(2024, 2, 3),
            date(2024, 2, 10),
            date(2024, 2, 17),
            date(2024, 2, 24),
            date(2024, 3, 2),
        ]
        assert grid.weeks[-1].phantom
        assert grid.weeks[-1].totals.week_pnl == 200.0
        assert not any(w.phantom for w in grid.weeks[:-1])
        assert grid.weeks[0].totals.start == date(2024, 2, 1)

    def test_march_grid(self, straddling_trades):
        grid = month_calendar(MAR, straddling_trades)

        assert grid.total_pnl == 170.0
        assert grid.win_days == 1
        assert grid.loss_days == 1
        assert grid.worst_day.pnl == -30.0
        assert grid.day_win_rate == 50.0
        assert grid.weeks[0].saturday == STRADDLE_SATURDAY
        assert grid.weeks[0].totals.week_pnl == 170.0

    def test_empty_month(self):
        grid = month_calendar(date(2024, 7, 1), [])

        assert grid.days == ()
        assert grid.total_pnl == 0.0
        assert grid.best_day is None
        assert grid.day_win_rate == 0.0
        assert not any(w.phantom for w in grid.weeks)
