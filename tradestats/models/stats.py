"""Statistics bundle models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradestats.models.equity import EquityCurve

StreakType = Literal["win", "loss"]


class StreakSummary(BaseModel):
    """Win/loss day streaks."""

    current_streak: int = Field(default=0, ge=0)
    current_streak_type: Optional[StreakType] = Field(default=None)
    longest_win_streak: int = Field(default=0, ge=0)
    longest_loss_streak: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class ConsistencyScore(BaseModel):
    """Composite 0-100 consistency score and its four sub-scores."""

    score: int = Field(..., ge=0, le=100)
    grade: str = Field(..., description="Letter grade for the score")
    win_rate_score: float = Field(..., ge=0, le=25)
    profit_factor_score: float = Field(..., ge=0, le=25)
    drawdown_score: float = Field(..., ge=0, le=25)
    streak_score: float = Field(..., ge=0, le=25)

    model_config = {"frozen": True}


class GroupStats(BaseModel):
    """Trade count, P&L and wins for one ticker, direction or tag."""

    count: int = Field(default=0, ge=0)
    pnl: float = Field(default=0.0)
    wins: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def win_rate(self) -> float:
        return self.wins / self.count * 100 if self.count else 0.0


class TradeStats(BaseModel):
    """Scalar statistics computed from the closed trades."""

    total_trades: int = Field(default=0, ge=0)
    winning_trades: int = Field(default=0, ge=0)
    losing_trades: int = Field(default=0, ge=0)
    break_even_trades: int = Field(default=0, ge=0)
    open_trades: int = Field(default=0, ge=0, description="Open trades, excluded from every statistic")
    win_rate: float = Field(default=0.0, ge=0, le=100)
    total_pnl: float = Field(default=0.0)
    average_pnl: float = Field(default=0.0)
    average_win: float = Field(default=0.0)
    average_loss: float = Field(default=0.0, description="Average losing trade, as a positive magnitude")
    largest_win: float = Field(default=0.0)
    largest_loss: float = Field(default=0.0)
    gross_profit: float = Field(default=0.0)
    gross_loss: float = Field(default=0.0, description="Sum of losses, as a positive magnitude")
    profit_factor: float = Field(default=0.0, ge=0)
    risk_reward_ratio: float = Field(default=0.0, ge=0)
    expectancy: float = Field(default=0.0)
    sharpe_ratio: float = Field(default=0.0)
    recovery_factor: float = Field(default=0.0)
    trading_days: int = Field(default=0, ge=0)
    average_daily_pnl: float = Field(default=0.0)
    equity: EquityCurve = Field(default_factory=EquityCurve)
    streaks: StreakSummary = Field(default_factory=StreakSummary)
    consistency: Optional[ConsistencyScore] = Field(default=None)
    by_ticker: dict[str, GroupStats] = Field(default_factory=dict)
    by_direction: dict[str, GroupStats] = Field(default_factory=dict)
    by_tag: dict[str, GroupStats] = Field(default_factory=dict)

    model_config = {"frozen": True}


class PeriodSummary(BaseModel):
    """P&L and trade counts for the standard calendar periods."""

    all_time_pnl: float = 0.0
    all_time_trades: int = 0
    ytd_pnl: float = 0.0
    ytd_trades: int = 0
    mtd_pnl: float = 0.0
    mtd_trades: int = 0
    wtd_pnl: float = 0.0
    wtd_trades: int = 0
    last_year_pnl: float = 0.0
    last_year_trades: int = 0
    current_year: int
    last_year: int
    monthly_by_year: dict[int, dict[int, float]] = Field(
        default_factory=dict, description="Net P&L keyed by year, then month (1-12)"
    )

    model_config = {"frozen": True}


class GoalProgress(BaseModel):
    """Progress toward yearly and monthly P&L goals."""

    yearly_progress: float = Field(default=0.0, le=100, description="Percent of yearly goal, capped at 100")
    monthly_progress: float = Field(default=0.0, le=100, description="Percent of monthly goal, capped at 100")
    projected_year_end: float = Field(default=0.0)
    on_track: bool = Field(default=False)

    model_config = {"frozen": True}
