"""Equity curve and drawdown tracking."""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from tradestats.models import DailyBucket, EquityCurve, EquityPoint, Trade


def drawdown_percent(drawdown: float, peak: float) -> float:
    """Drawdown as a percentage of peak; 0 when the peak is not positive."""
    return drawdown / peak * 100 if peak > 0 else 0.0


def _walk(
    steps: Iterable[tuple[DailyBucket, Optional[str], Optional[str]]],
    starting_equity: float,
) -> EquityCurve:
    """Accumulate equity over ordered steps, tracking peak and drawdown.

    Each step is a bucket plus the trade ID and time for per-trade curves.
    """
    equity = peak = starting_equity
    max_drawdown = 0.0
    max_drawdown_percent = 0.0
    max_drawdown_start: Optional[date] = None
    max_drawdown_end: Optional[date] = None
    drawdown_start: Optional[date] = None
    in_drawdown = False
    drawdown = 0.0
    points = []

    for bucket, trade_id, time in steps:
        equity += bucket.pnl

        # A new high-water mark ends the current drawdown episode
        if equity > peak:
            peak = equity
            in_drawdown = False
            drawdown_start = None

        drawdown = peak - equity
        percent = drawdown_percent(drawdown, peak)

        if drawdown > 0 and not in_drawdown:
            in_drawdown = True
            drawdown_start = bucket.date

        # Worst episode is chosen by absolute drawdown, not percentage
        if drawdown > max_drawdown:
            max_drawdown = drawdown
            max_drawdown_percent = percent
            max_drawdown_start = drawdown_start
            max_drawdown_end = bucket.date

        points.append(
            EquityPoint(
                date=bucket.date,
                pnl=bucket.pnl,
                cumulative=equity,
                drawdown=drawdown,
                drawdown_percent=percent,
                trade_count=bucket.trade_count,
                win_count=bucket.win_count,
                loss_count=bucket.loss_count,
                trade_id=trade_id,
                time=time,
            )
        )

    return EquityCurve(
        points=tuple(points),
        starting_equity=starting_equity,
        peak=peak,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown_percent,
        max_drawdown_start=max_drawdown_start,
        max_drawdown_end=max_drawdown_end,
        current_drawdown=drawdown,
        current_drawdown_percent=drawdown_percent(drawdown, peak),
    )


def compute_equity_curve(
    sorted_dates: Sequence[date],
    buckets: dict[date, DailyBucket],
    starting_equity: float = 0.0,
) -> EquityCurve:
    """Build the daily equity curve.

    Args:
        sorted_dates: Bucket dates in ascending order.
        buckets: Daily buckets keyed by date.
        starting_equity: Equity before the first day.

    Returns:
        One point per traded day, with max drawdown statistics.
    """
    return _walk(((buckets[day], None, None) for day in sorted_dates), starting_equity)


def compute_trade_curve(trades: Sequence[Trade], starting_equity: float = 0.0) -> EquityCurve:
    """Build an equity curve with one point per trade.

    Args:
        trades: Closed trades, already in display order.
        starting_equity: Equity before the first trade.

    Returns:
        One point per trade, so several same-day trades stay distinguishable.
    """
    steps = (
        (
            DailyBucket(
                date=trade.effective_date,
                pnl=trade.pnl,
                trade_count=1,
                win_count=1 if trade.pnl > 0 else 0,
                loss_count=1 if trade.pnl < 0 else 0,
            ),
            trade.id,
            trade.time,
        )
        for trade in trades
    )
    return _walk(steps, starting_equity)


def find_new_highs(curve: EquityCurve) -> list[int]:
    """Indices of points that set a new high-water mark."""
    highs = []
    peak = curve.starting_equity
    for index, point in enumerate(curve.points):
        if point.cumulative > peak:
            peak = point.cumulative
            highs.append(index)
    return highs
