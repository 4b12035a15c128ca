"""Tests for the metric registry.

**Feature: trade-analytics**
"""

from datetime import date

import pytest

from tradestats.engine.metrics import (
    METRICS,
    Metric,
    evaluate_metrics,
    get_metric,
    higher_is_better,
    lower_is_better,
    register_metric,
)
from tradestats.engine.summary import compute_trade_stats
from tradestats.models import Trade, TradeStats

BUILTIN_METRICS = [
    "total_pnl",
    "win_rate",
    "profit_factor",
    "expectancy",
    "average_win",
    "average_loss",
    "risk_reward_ratio",
    "sharpe_ratio",
    "recovery_factor",
    "max_drawdown",
    "max_drawdown_percent",
    "consistency_score",
    "current_streak",
    "trading_days",
]


@pytest.fixture
def stats() -> TradeStats:
    return compute_trade_stats([
        Trade(date=date(2024, 1, 2), ticker="AAPL", pnl=200.0),
        Trade(date=date(2024, 1, 3), ticker="AAPL", pnl=-50.0),
        Trade(date=date(2024, 1, 4), ticker="AAPL", pnl=-25.0),
    ])


class TestMetricRegistry:
    def test_builtin_metrics_registered(self):
        for metric_id in BUILTIN_METRICS:
            assert metric_id in METRICS, f"Missing built-in metric '{metric_id}'"

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            get_metric("alpha")

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError, match="already registered"):
            register_metric(get_metric("win_rate"))

    def test_register_custom_metric(self, stats):
        metric = Metric(
            id="largest_win",
            label="Largest Win",
            compute=lambda s: s.largest_win,
            classify=higher_is_better(100, 0),
            format=lambda value: f"{value:.0f}",
        )
        register_metric(metric)
        try:
            [value] = evaluate_metrics(stats, ["largest_win"])
        finally:
            METRICS.pop("largest_win")

        assert value.value == 200.0
        assert value.display == "200"
        assert value.tier == "good"


class TestMetricEvaluation:
    """
    **Feature: trade-analytics, Property: Metric Classification**

    Every metric yields a value, a display string and a tier.
    """

    def test_evaluates_all_by_default(self, stats):
        values = evaluate_metrics(stats)

        assert [v.id for v in values] == list(METRICS)
        for value in values:
            assert value.tier in ("good", "neutral", "bad")
            assert value.display

    def test_values_and_tiers(self, stats):
        values = {v.id: v for v in evaluate_metrics(stats, ["total_pnl", "win_rate", "profit_factor", "current_streak"])}

        assert values["total_pnl"].display == "+$125.00"
        assert values["total_pnl"].tier == "good"
        assert values["win_rate"].value == pytest.approx(100 / 3)
        assert values["win_rate"].tier == "bad"
        assert values["profit_factor"].value == pytest.approx(200 / 75)
        assert values["profit_factor"].tier == "good"
        assert values["current_streak"].value == -2
        assert values["current_streak"].display == "2L"
        assert values["current_streak"].tier == "bad"

    def test_empty_stats(self):
        values = {v.id: v for v in evaluate_metrics(TradeStats())}

        assert values["consistency_score"].value == 0.0
        assert values["total_pnl"].tier == "neutral"
        assert values["current_streak"].display == "0"

    def test_classifiers(self):
        classify = higher_is_better(1.5, 1.0)
        assert [classify(v) for v in (2.0, 1.5, 1.2, 0.5)] == ["good", "good", "neutral", "bad"]

        classify = lower_is_better(10, 25)
        assert [classify(v) for v in (5, 10, 20, 30)] == ["good", "good", "neutral", "bad"]
