"""Period selection models."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from tradestats.models.equity import EquityPoint

Period = Literal["all", "ytd", "mtd", "wtd", "custom"]
CustomFilterKind = Literal["dateRange", "daysBack", "tradesBack"]

PERIODS: tuple[str, ...] = ("all", "ytd", "mtd", "wtd", "custom")


class CustomFilter(BaseModel):
    """A custom period: an explicit date range, the last N days or the last N trades."""

    kind: CustomFilterKind = Field(..., description="Custom filter type")
    start: Optional[date_type] = Field(default=None, description="Range start (dateRange)")
    end: Optional[date_type] = Field(default=None, description="Range end, inclusive (dateRange)")
    days_back: Optional[int] = Field(default=None, ge=0, description="Number of days (daysBack)")
    trades_back: Optional[int] = Field(default=None, ge=0, description="Number of trades (tradesBack)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "CustomFilter":
        if self.kind == "dateRange":
            if self.start is None or self.end is None:
                raise ValueError("dateRange filter requires start and end")
            if self.start > self.end:
                raise ValueError("dateRange start must not be after end")
        elif self.kind == "daysBack" and self.days_back is None:
            raise ValueError("daysBack filter requires days_back")
        elif self.kind == "tradesBack" and self.trades_back is None:
            raise ValueError("tradesBack filter requires trades_back")
        return self


class DateRange(BaseModel):
    """Display range for a period's chart."""

    start: date_type
    end: date_type

    model_config = {"frozen": True}


class PeriodResult(BaseModel):
    """Equity view scoped to a period and re-baselined to the period start."""

    period: Period = Field(..., description="Resolved period")
    data: tuple[EquityPoint, ...] = Field(default=())
    date_range: Optional[DateRange] = Field(default=None)
    starting_equity: float = Field(default=0.0, description="Account equity at the start of the period")
    trade_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def period_pnl(self) -> float:
        return sum(point.pnl for point in self.data)

    @property
    def ending_equity(self) -> float:
        if not self.data:
            return self.starting_equity
        return self.data[-1].cumulative
