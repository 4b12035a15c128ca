"""Daily bucket and equity curve models."""

from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class DailyBucket(BaseModel):
    """Net realized P&L and trade counts for one effective date."""

    date: date_type = Field(..., description="Effective date")
    pnl: float = Field(default=0.0, description="Net P&L for the day")
    trade_count: int = Field(default=0, ge=0, description="Closed trades on the day")
    win_count: int = Field(default=0, ge=0, description="Trades with positive P&L")
    loss_count: int = Field(default=0, ge=0, description="Trades with negative P&L")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_counts(self) -> "DailyBucket":
        if self.win_count + self.loss_count > self.trade_count:
            raise ValueError("win_count + loss_count cannot exceed trade_count")
        return self


class EquityPoint(BaseModel):
    """One point on an equity curve (a day, or a single trade)."""

    date: date_type = Field(..., description="Effective date")
    pnl: float = Field(..., description="Net P&L contributed by this point")
    cumulative: float = Field(..., description="Equity after this point")
    drawdown: float = Field(..., ge=0, description="Peak minus cumulative")
    drawdown_percent: float = Field(..., ge=0, description="Drawdown as % of peak")
    trade_count: int = Field(default=0, ge=0)
    win_count: int = Field(default=0, ge=0)
    loss_count: int = Field(default=0, ge=0)
    trade_id: Optional[str] = Field(default=None, description="Set on per-trade points")
    time: Optional[str] = Field(default=None, description="Set on per-trade points")

    model_config = {"frozen": True}


class EquityCurve(BaseModel):
    """Equity curve with drawdown statistics."""

    points: tuple[EquityPoint, ...] = Field(default=())
    starting_equity: float = Field(default=0.0, description="Equity before the first point")
    peak: float = Field(default=0.0, description="Final high-water mark")
    max_drawdown: float = Field(default=0.0, ge=0)
    max_drawdown_percent: float = Field(default=0.0, ge=0)
    max_drawdown_start: Optional[date_type] = Field(default=None)
    max_drawdown_end: Optional[date_type] = Field(default=None)
    current_drawdown: float = Field(default=0.0, ge=0)
    current_drawdown_percent: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}

    @property
    def ending_equity(self) -> float:
        if not self.points:
            return self.starting_equity
        return self.points[-1].cumulative

    @property
    def at_peak(self) -> bool:
        return self.current_drawdown == 0
