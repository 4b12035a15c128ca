"""User-configurable settings passed into the engine."""

from pydantic import BaseModel, Field


class ConsistencySettings(BaseModel):
    """Targets used to normalize each consistency sub-score."""

    win_rate_target: float = Field(default=60.0, gt=0, description="Win rate (%) worth full points")
    profit_factor_target: float = Field(default=2.0, gt=0, description="Profit factor worth full points")
    max_drawdown_limit: float = Field(default=25.0, gt=0, description="Drawdown (%) that zeroes the score")
    streak_target: float = Field(default=10.0, gt=0, description="Win-day streak worth full points")

    model_config = {"frozen": True}


class TradingGoals(BaseModel):
    """P&L goals; zero means no goal is set."""

    yearly_pnl_goal: float = Field(default=0.0, ge=0, description="Yearly P&L goal")
    monthly_pnl_goal: float = Field(default=0.0, ge=0, description="Monthly P&L goal")

    model_config = {"frozen": True}
