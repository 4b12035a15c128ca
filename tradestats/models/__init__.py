"""Data models for tradestats."""

from tradestats.models.trade import Trade
from tradestats.models.settings import ConsistencySettings, TradingGoals
from tradestats.models.equity import DailyBucket, EquityCurve, EquityPoint
from tradestats.models.stats import (
    ConsistencyScore,
    GoalProgress,
    GroupStats,
    PeriodSummary,
    StreakSummary,
    TradeStats,
)
from tradestats.models.period import CustomFilter, DateRange, PeriodResult
from tradestats.models.calendar import (
    CalendarDay,
    CalendarWeek,
    MonthCalendar,
    WeekTotals,
)

__all__ = [
    "Trade",
    "ConsistencySettings",
    "TradingGoals",
    "DailyBucket",
    "EquityCurve",
    "EquityPoint",
    "ConsistencyScore",
    "GoalProgress",
    "GroupStats",
    "PeriodSummary",
    "StreakSummary",
    "TradeStats",
    "CustomFilter",
    "DateRange",
    "PeriodResult",
    "CalendarDay",
    "CalendarWeek",
    "MonthCalendar",
    "WeekTotals",
]
