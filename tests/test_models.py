"""Tests for trade and settings models.

**Feature: trade-analytics**
"""

from datetime import date

import pytest
from pydantic import ValidationError

from tradestats.models import ConsistencySettings, DailyBucket, Trade, TradingGoals


class TestTrade:
    def test_defaults(self):
        trade = Trade(date=date(2024, 1, 2), ticker="AAPL")

        assert trade.status == "CLOSED"
        assert trade.direction == "LONG"
        assert trade.asset_type == "STOCK"
        assert trade.tags == frozenset()
        assert trade.id

    def test_ids_are_unique(self):
        ids = {Trade(date=date(2024, 1, 2), ticker="AAPL").id for _ in range(50)}

        assert len(ids) == 50

    def test_effective_date(self):
        same_day = Trade(date=date(2024, 1, 2), ticker="AAPL")
        held = Trade(date=date(2024, 1, 2), close_date=date(2024, 1, 9), ticker="AAPL")

        assert same_day.effective_date == date(2024, 1, 2)
        assert held.effective_date == date(2024, 1, 9)

    def test_trades_are_immutable(self):
        trade = Trade(date=date(2024, 1, 2), ticker="AAPL", pnl=5.0)

        with pytest.raises(ValidationError):
            trade.pnl = 10.0

    @pytest.mark.parametrize(
        "fields",
        [
            {"ticker": "AAPL"},
            {"date": date(2024, 1, 2), "ticker": ""},
            {"date": date(2024, 1, 2), "ticker": "AAPL", "direction": "SIDEWAYS"},
            {"date": date(2024, 1, 2), "ticker": "AAPL", "asset_type": "BONDS"},
            {"date": date(2024, 1, 2), "ticker": "AAPL", "status": "PENDING"},
        ],
    )
    def test_invalid_trades(self, fields):
        with pytest.raises(ValidationError):
            Trade(**fields)

    @pytest.mark.parametrize("field", ["pnl", "entry_price", "exit_price", "size", "strike_price", "premium"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_rejected(self, field, value):
        with pytest.raises(ValidationError):
            Trade(date=date(2024, 1, 2), ticker="AAPL", **{field: value})

    def test_close_date_before_open_rejected(self):
        with pytest.raises(ValidationError, match="before open date"):
            Trade(date=date(2024, 1, 5), close_date=date(2024, 1, 2), ticker="AAPL")

    def test_close_date_same_day_allowed(self):
        trade = Trade(date=date(2024, 1, 5), close_date=date(2024, 1, 5), ticker="AAPL")

        assert trade.effective_date == date(2024, 1, 5)


class TestCloseTrade:
    def test_close_returns_new_trade(self):
        opened = Trade(date=date(2024, 1, 2), ticker="TSLA", status="OPEN", exit_price=None)

        closed = opened.close(date(2024, 1, 4), -30.0, exit_price=175.0)

        assert opened.status == "OPEN"
        assert closed.status == "CLOSED"
        assert closed.id == opened.id
        assert closed.pnl == -30.0
        assert closed.exit_price == 175.0
        assert closed.effective_date == date(2024, 1, 4)

    def test_close_same_day(self):
        opened = Trade(date=date(2024, 1, 2), ticker="TSLA", status="OPEN")

        assert opened.close(date(2024, 1, 2), 5.0).effective_date == date(2024, 1, 2)

    def test_close_before_open_rejected(self):
        opened = Trade(date=date(2024, 1, 2), ticker="TSLA", status="OPEN")

        with pytest.raises(ValueError, match="before open date"):
            opened.close(date(2024, 1, 1), 5.0)

    def test_close_twice_rejected(self):
        trade = Trade(date=date(2024, 1, 2), ticker="TSLA", pnl=5.0)

        with pytest.raises(ValueError, match="already closed"):
            trade.close(date(2024, 1, 3), 5.0)

    def test_close_with_non_finite_pnl_rejected(self):
        opened = Trade(date=date(2024, 1, 2), ticker="TSLA", status="OPEN", tags=frozenset({"gap"}))

        with pytest.raises(ValidationError):
            opened.close(date(2024, 1, 3), float("nan"))
        assert opened.close(date(2024, 1, 3), 5.0).tags == frozenset({"gap"})


class TestSettingsModels:
    def test_consistency_defaults(self):
        config = ConsistencySettings()

        assert config.win_rate_target == 60.0
        assert config.profit_factor_target == 2.0
        assert config.max_drawdown_limit == 25.0
        assert config.streak_target == 10.0

    def test_goals_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            TradingGoals(yearly_pnl_goal=-1)

    def test_bucket_counts_validated(self):
        with pytest.raises(ValidationError):
            DailyBucket(date=date(2024, 1, 2), trade_count=1, win_count=1, loss_count=1)
