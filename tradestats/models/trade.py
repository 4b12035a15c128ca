"""Trade data model."""

import uuid
from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

Direction = Literal["LONG", "SHORT"]
AssetType = Literal["STOCK", "OPTIONS", "FUTURES", "FOREX", "CRYPTO"]
TradeStatus = Literal["OPEN", "CLOSED"]

ASSET_TYPES: tuple[str, ...] = ("STOCK", "OPTIONS", "FUTURES", "FOREX", "CRYPTO")


class Trade(BaseModel):
    """Represents a journaled trade, open or closed."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Opaque trade ID")
    date: date_type = Field(..., description="Date the trade was opened")
    close_date: Optional[date_type] = Field(default=None, description="Date the trade was closed")
    time: Optional[str] = Field(default=None, description="Intraday marker for same-day ordering")
    ticker: str = Field(..., min_length=1, description="Traded symbol")
    direction: Direction = Field(default="LONG", description="Trade direction")
    asset_type: AssetType = Field(default="STOCK", description="Asset class")
    status: TradeStatus = Field(default="CLOSED", description="Trade status")
    entry_price: Optional[float] = Field(default=None, allow_inf_nan=False, description="Entry price")
    exit_price: Optional[float] = Field(default=None, allow_inf_nan=False, description="Exit price")
    size: Optional[float] = Field(default=None, allow_inf_nan=False, description="Position size")
    pnl: float = Field(default=0.0, allow_inf_nan=False, description="Realized P&L in account currency")
    tags: frozenset[str] = Field(default_factory=frozenset, description="Tag names")
    notes: Optional[str] = Field(default=None, description="User notes")

    # Options-specific fields
    option_type: Optional[Literal["CALL", "PUT"]] = Field(default=None, description="Option type")
    strike_price: Optional[float] = Field(default=None, allow_inf_nan=False, description="Strike price")
    expiration_date: Optional[date_type] = Field(default=None, description="Option expiration")
    premium: Optional[float] = Field(default=None, allow_inf_nan=False, description="Option premium")
    underlying_ticker: Optional[str] = Field(default=None, description="Underlying symbol")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_close_date(self) -> "Trade":
        if self.close_date is not None and self.close_date < self.date:
            raise ValueError(
                f"Close date {self.close_date.isoformat()} is before open date {self.date.isoformat()}"
            )
        return self

    @property
    def effective_date(self) -> date_type:
        """Date the P&L was realized: the close date if set, else the open date."""
        return self.close_date or self.date

    @property
    def is_closed(self) -> bool:
        return self.status == "CLOSED"

    def close(
        self,
        close_date: date_type,
        pnl: float,
        exit_price: Optional[float] = None,
    ) -> "Trade":
        """Close an open trade.

        Args:
            close_date: Date the position was closed.
            pnl: Realized P&L.
            exit_price: Optional exit price.

        Returns:
            A new CLOSED trade; the original is left untouched.

        Raises:
            ValueError: If the trade is already closed or the closing
                values are invalid.
        """
        if self.is_closed:
            raise ValueError(f"Trade {self.id} is already closed")
        if close_date < self.date:
            raise ValueError(
                f"Close date {close_date.isoformat()} is before open date {self.date.isoformat()}"
            )
        # Re-validate so the closing values get the same checks as a new trade
        return self.model_validate(
            {
                **self.model_dump(),
                "status": "CLOSED",
                "close_date": close_date,
                "pnl": pnl,
                "exit_price": exit_price if exit_price is not None else self.exit_price,
            }
        )
