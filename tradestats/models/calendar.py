"""Calendar grid models."""

from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field


class WeekTotals(BaseModel):
    """Totals for a Sunday-Saturday week clamped to a displayed month."""

    start: date_type = Field(..., description="First day counted (after clamping)")
    end: date_type = Field(..., description="Last day counted (after clamping)")
    week_pnl: float = Field(default=0.0)
    week_trades: int = Field(default=0, ge=0)
    week_days: int = Field(default=0, ge=0, description="Distinct dates with at least one trade")

    model_config = {"frozen": True}


class CalendarDay(BaseModel):
    """One traded day on the calendar grid."""

    date: date_type
    pnl: float = 0.0
    trades: int = 0

    model_config = {"frozen": True}


class CalendarWeek(BaseModel):
    """One grid row, identified by its Saturday."""

    saturday: date_type
    totals: WeekTotals
    phantom: bool = Field(default=False, description="Trailing week drawn in the next month's empty cells")

    model_config = {"frozen": True}


class MonthCalendar(BaseModel):
    """Calendar grid data and monthly breakdown for one displayed month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    days: tuple[CalendarDay, ...] = Field(default=())
    weeks: tuple[CalendarWeek, ...] = Field(default=())
    total_pnl: float = 0.0
    total_trades: int = 0
    trading_days: int = 0
    win_days: int = 0
    loss_days: int = 0
    best_day: Optional[CalendarDay] = None
    worst_day: Optional[CalendarDay] = None
    average_daily_pnl: float = 0.0
    average_daily_trades: float = 0.0
    day_win_rate: float = 0.0
    cumulative: tuple[float, ...] = Field(default=(), description="Running P&L after each traded day")

    model_config = {"frozen": True}
