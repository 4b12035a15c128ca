"""Trading performance analytics engine.

Pure functions over immutable trade snapshots: daily aggregation, equity and
drawdown tracking, streaks, consistency scoring, period re-baselining and
calendar rollups.
"""

from tradestats.engine.daily import (
    aggregate_daily,
    closed_trades,
    parse_trades,
    sort_trades,
    sorted_dates,
)
from tradestats.engine.equity import compute_equity_curve, compute_trade_curve, find_new_highs
from tradestats.engine.streaks import compute_streaks
from tradestats.engine.consistency import (
    GRADE_THRESHOLDS,
    PROFIT_FACTOR_CAP,
    grade_for,
    profit_factor,
    score_consistency,
)
from tradestats.engine.periods import filter_trades, period_window, resolve_period, week_start
from tradestats.engine.calendar_grid import month_calendar, phantom_week, week_totals
from tradestats.engine.summary import (
    RECOVERY_FACTOR_CAP,
    compute_goal_progress,
    compute_period_summary,
    compute_trade_stats,
)
from tradestats.engine.metrics import METRICS, evaluate_metrics, get_metric, register_metric

__all__ = [
    "aggregate_daily",
    "closed_trades",
    "parse_trades",
    "sort_trades",
    "sorted_dates",
    "compute_equity_curve",
    "compute_trade_curve",
    "find_new_highs",
    "compute_streaks",
    "GRADE_THRESHOLDS",
    "PROFIT_FACTOR_CAP",
    "grade_for",
    "profit_factor",
    "score_consistency",
    "filter_trades",
    "period_window",
    "resolve_period",
    "week_start",
    "month_calendar",
    "phantom_week",
    "week_totals",
    "RECOVERY_FACTOR_CAP",
    "compute_goal_progress",
    "compute_period_summary",
    "compute_trade_stats",
    "METRICS",
    "evaluate_metrics",
    "get_metric",
    "register_metric",
]
