"""Daily aggregation of closed trades.

Groups closed trades by effective date into DailyBucket values. Sums are
computed with ``math.fsum`` so the result does not depend on the order the
trades arrive in.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from tradestats.models import DailyBucket, Trade

logger = logging.getLogger(__name__)


def parse_trades(records: Iterable[Mapping[str, Any]]) -> list[Trade]:
    """Build trades from raw records, skipping any that fail validation.

    Args:
        records: Mappings of Trade field names to values.

    Returns:
        Valid trades, in input order.
    """
    trades = []
    for index, record in enumerate(records):
        try:
            trades.append(Trade.model_validate(record))
        except ValidationError as e:
            logger.warning("Skipping malformed trade record %d: %s", index, e.errors()[0]["msg"])
    return trades


def closed_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Return only closed trades; open trades never contribute to statistics."""
    return [trade for trade in trades if trade.is_closed]


def trade_sort_key(trade: Trade) -> tuple[date, str, str]:
    """Sort key: effective date, then intraday time, then ID."""
    return (trade.effective_date, trade.time or "", trade.id)


def sort_trades(trades: Iterable[Trade], descending: bool = False) -> list[Trade]:
    """Sort trades by effective date with a deterministic tie-break.

    Args:
        trades: Trades in any order.
        descending: Newest first when True.

    Returns:
        New sorted list; the input is not modified.
    """
    return sorted(trades, key=trade_sort_key, reverse=descending)


def aggregate_daily(trades: Iterable[Trade]) -> dict[date, DailyBucket]:
    """Group closed trades into per-day buckets keyed by effective date.

    Trades with exactly zero P&L count toward ``trade_count`` but toward
    neither wins nor losses.

    Args:
        trades: Closed trades in any order.

    Returns:
        Mapping of date to bucket, iterating in ascending date order.
    """
    pnls: dict[date, list[float]] = {}
    wins: dict[date, int] = {}
    losses: dict[date, int] = {}

    for trade in trades:
        day = trade.effective_date
        pnls.setdefault(day, []).append(trade.pnl)
        if trade.pnl > 0:
            wins[day] = wins.get(day, 0) + 1
        elif trade.pnl < 0:
            losses[day] = losses.get(day, 0) + 1

    return {
        day: DailyBucket(
            date=day,
            pnl=math.fsum(pnls[day]),
            trade_count=len(pnls[day]),
            win_count=wins.get(day, 0),
            loss_count=losses.get(day, 0),
        )
        for day in sorted(pnls)
    }


def sorted_dates(buckets: dict[date, DailyBucket]) -> list[date]:
    """Bucket dates in ascending order."""
    return sorted(buckets)
