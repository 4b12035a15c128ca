"""Metric registry.

Each metric pairs a pure ``compute`` over a TradeStats bundle with a
``classify`` that buckets the value into a tier, and a formatter for display.
Built-in metrics are registered in ``METRICS``; callers can add their own
with ``register_metric``.
"""

from collections.abc import Callable, Iterable
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradestats.models import TradeStats

Tier = Literal["good", "neutral", "bad"]


class Metric(BaseModel):
    """A named statistic with its classification and formatting."""

    id: str = Field(..., min_length=1, description="Registry key")
    label: str = Field(..., description="Display label")
    compute: Callable[[TradeStats], float]
    classify: Callable[[float], Tier]
    format: Callable[[float], str]

    model_config = {"frozen": True}


class MetricValue(BaseModel):
    """A metric evaluated against a statistics bundle."""

    id: str
    label: str
    value: float
    display: str
    tier: Tier

    model_config = {"frozen": True}


def higher_is_better(good: float, neutral: float) -> Callable[[float], Tier]:
    """Classifier: ``good`` and above is good, ``neutral`` and above is neutral."""

    def classify(value: float) -> Tier:
        if value >= good:
            return "good"
        if value >= neutral:
            return "neutral"
        return "bad"

    return classify


def lower_is_better(good: float, neutral: float) -> Callable[[float], Tier]:
    """Classifier: ``good`` and below is good, ``neutral`` and below is neutral."""

    def classify(value: float) -> Tier:
        if value <= good:
            return "good"
        if value <= neutral:
            return "neutral"
        return "bad"

    return classify


def by_sign(value: float) -> Tier:
    if value > 0:
        return "good"
    if value < 0:
        return "bad"
    return "neutral"


def _money(value: float) -> str:
    sign = "+" if value > 0 else "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _percent(value: float) -> str:
    return f"{value:.1f}%"


def _ratio(value: float) -> str:
    return f"{value:.2f}"


def _count(value: float) -> str:
    return str(int(value))


def _current_streak(stats: TradeStats) -> float:
    # Loss streaks count negative
    streak = stats.streaks
    return -streak.current_streak if streak.current_streak_type == "loss" else streak.current_streak


METRICS: dict[str, Metric] = {}


def register_metric(metric: Metric, replace: bool = False) -> None:
    """Add a metric to the registry.

    Raises:
        ValueError: If the ID is already registered and ``replace`` is False.
    """
    if metric.id in METRICS and not replace:
        raise ValueError(f"Metric already registered: {metric.id}")
    METRICS[metric.id] = metric


def get_metric(metric_id: str) -> Metric:
    """Look up a registered metric.

    Raises:
        ValueError: If the metric is unknown.
    """
    if metric_id not in METRICS:
        raise ValueError(f"Unknown metric: {metric_id}. Must be one of {list(METRICS)}")
    return METRICS[metric_id]


def evaluate_metrics(stats: TradeStats, metric_ids: Optional[Iterable[str]] = None) -> list[MetricValue]:
    """Evaluate metrics against a statistics bundle.

    Args:
        stats: Statistics bundle.
        metric_ids: Metrics to evaluate, in order; all registered when None.

    Returns:
        Evaluated metrics.
    """
    results = []
    for metric_id in metric_ids if metric_ids is not None else list(METRICS):
        metric = get_metric(metric_id)
        value = metric.compute(stats)
        results.append(
            MetricValue(
                id=metric.id,
                label=metric.label,
                value=value,
                display=metric.format(value),
                tier=metric.classify(value),
            )
        )
    return results


for _metric in (
    Metric(id="total_pnl", label="Total P&L", compute=lambda s: s.total_pnl, classify=by_sign, format=_money),
    Metric(
        id="win_rate",
        label="Win Rate",
        compute=lambda s: s.win_rate,
        classify=higher_is_better(50, 40),
        format=_percent,
    ),
    Metric(
        id="profit_factor",
        label="Profit Factor",
        compute=lambda s: s.profit_factor,
        classify=higher_is_better(1.5, 1.0),
        format=_ratio,
    ),
    Metric(id="expectancy", label="Expectancy", compute=lambda s: s.expectancy, classify=by_sign, format=_money),
    Metric(
        id="average_win",
        label="Avg Win",
        compute=lambda s: s.average_win,
        classify=by_sign,
        format=_money,
    ),
    Metric(
        id="average_loss",
        label="Avg Loss",
        compute=lambda s: -s.average_loss,
        classify=lambda value: "neutral" if value == 0 else "bad",
        format=_money,
    ),
    Metric(
        id="risk_reward_ratio",
        label="Risk/Reward",
        compute=lambda s: s.risk_reward_ratio,
        classify=higher_is_better(1.5, 1.0),
        format=_ratio,
    ),
    Metric(
        id="sharpe_ratio",
        label="Sharpe Ratio",
        compute=lambda s: s.sharpe_ratio,
        classify=higher_is_better(1.0, 0.0),
        format=_ratio,
    ),
    Metric(
        id="recovery_factor",
        label="Recovery Factor",
        compute=lambda s: s.recovery_factor,
        classify=higher_is_better(2.0, 1.0),
        format=_ratio,
    ),
    Metric(
        id="max_drawdown",
        label="Max Drawdown",
        compute=lambda s: s.equity.max_drawdown,
        classify=lambda value: "good" if value == 0 else "neutral",
        format=_money,
    ),
    Metric(
        id="max_drawdown_percent",
        label="Max Drawdown %",
        compute=lambda s: s.equity.max_drawdown_percent,
        classify=lower_is_better(10, 25),
        format=_percent,
    ),
    Metric(
        id="consistency_score",
        label="Consistency",
        compute=lambda s: float(s.consistency.score) if s.consistency else 0.0,
        classify=higher_is_better(70, 40),
        format=_count,
    ),
    Metric(
        id="current_streak",
        label="Current Streak",
        compute=_current_streak,
        classify=by_sign,
        format=lambda value: f"{abs(int(value))}{'W' if value > 0 else 'L' if value < 0 else ''}",
    ),
    Metric(
        id="trading_days",
        label="Trading Days",
        compute=lambda s: float(s.trading_days),
        classify=lambda value: "neutral",
        format=_count,
    ),
):
    register_metric(_metric)
