"""Period resolution and re-baselining.

An equity view for a period (year/month/week to date, a date range, the last
N days or the last N trades) starts from the account equity at the start of
that period, not from zero. That baseline is replayed from *all* closed trades
before the window, ignoring tag and asset filters; only the displayed curve is
filtered.

Periods select trades by effective date (close date, else open date).
"""

import calendar
import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from typing import Optional

from tradestats.engine.daily import aggregate_daily, closed_trades, sort_trades, sorted_dates
from tradestats.engine.equity import compute_equity_curve, compute_trade_curve
from tradestats.models import CustomFilter, DateRange, PeriodResult, Trade
from tradestats.models.period import PERIODS, Period

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def week_start(day: date) -> date:
    """Most recent Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_end(day: date) -> date:
    """Last day of the month containing ``day``."""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def filter_trades(
    trades: Iterable[Trade],
    tag_filter: Iterable[str] = (),
    asset_filter: Iterable[str] = (),
) -> list[Trade]:
    """Apply asset (any-of) and tag (all-of) filters.

    Args:
        trades: Trades to filter.
        tag_filter: Tags a trade must all carry; empty means no tag filter.
        asset_filter: Asset types to keep; empty means every asset type.

    Returns:
        Matching trades, in input order.
    """
    assets = set(asset_filter)
    tags = set(tag_filter)
    return [
        trade
        for trade in trades
        if (not assets or trade.asset_type in assets) and tags <= trade.tags
    ]


def period_window(
    period: Period,
    custom: Optional[CustomFilter] = None,
    today: Optional[date] = None,
) -> tuple[Optional[date], Optional[date]]:
    """Inclusive effective-date window for a date-bounded period.

    Args:
        period: Period selector.
        custom: Custom filter when ``period`` is ``custom``.
        today: Reference date; defaults to today.

    Returns:
        (start, end); either may be None for an open bound. A ``daysBack``
        of 0 yields a window whose start is after its end, which selects
        nothing.

    Raises:
        ValueError: For an unknown period, a missing custom filter, or a
            ``tradesBack`` filter (which has no date window).
    """
    today = today or date.today()

    if period == "all":
        return None, None
    if period == "ytd":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if period == "mtd":
        return today.replace(day=1), month_end(today)
    if period == "wtd":
        return week_start(today), None
    if period == "custom":
        if custom is None:
            raise ValueError("Custom period requires a custom filter")
        if custom.kind == "dateRange":
            return custom.start, custom.end
        if custom.kind == "daysBack":
            return today - timedelta(days=custom.days_back - 1), today
        raise ValueError("tradesBack filters select by count and have no date window")
    raise ValueError(f"Invalid period: {period}. Must be one of {list(PERIODS)}")


def _in_window(day: date, start: Optional[date], end: Optional[date]) -> bool:
    return (start is None or day >= start) and (end is None or day <= end)


def _display_range(
    period: Period,
    custom: Optional[CustomFilter],
    selected: Sequence[Trade],
    start: Optional[date],
    today: date,
) -> Optional[DateRange]:
    """Chart range for a period, padded so the last point is not clipped."""
    if period in ("ytd", "mtd", "wtd"):
        return DateRange(start=start, end=today + ONE_DAY)
    if custom is not None and custom.kind == "dateRange":
        return DateRange(start=custom.start, end=custom.end)
    if custom is not None and custom.kind == "daysBack":
        return DateRange(start=min(start, today), end=today + ONE_DAY)
    if not selected:
        return None
    return DateRange(
        start=selected[0].effective_date - ONE_DAY,
        end=selected[-1].effective_date + ONE_DAY,
    )


def resolve_period(
    trades: Iterable[Trade],
    period: Period = "all",
    tag_filter: Iterable[str] = (),
    asset_filter: Iterable[str] = (),
    custom: Optional[CustomFilter] = None,
    starting_equity: float = 0.0,
    today: Optional[date] = None,
) -> PeriodResult:
    """Resolve a period into a re-baselined equity view.

    Args:
        trades: All trades; open trades are ignored.
        period: ``all``, ``ytd``, ``mtd``, ``wtd`` or ``custom``.
        tag_filter: Tags every displayed trade must carry.
        asset_filter: Asset types to display.
        custom: Custom filter when ``period`` is ``custom``.
        starting_equity: Account equity before the first trade ever.
        today: Reference date; defaults to today.

    Returns:
        The filtered curve seeded with the equity at the period start.
        Week-to-date views have one point per trade, all others one per day.

    Raises:
        ValueError: For an unknown period or a missing custom filter.
    """
    if period not in PERIODS:
        raise ValueError(f"Invalid period: {period}. Must be one of {list(PERIODS)}")
    if period == "custom" and custom is None:
        raise ValueError("Custom period requires a custom filter")

    today = today or date.today()
    closed = closed_trades(trades)
    filtered = sort_trades(filter_trades(closed, tag_filter, asset_filter))

    start: Optional[date] = None
    if period == "custom" and custom.kind == "tradesBack":
        # The window is defined by count, so "before" means "not selected"
        selected = sort_trades(sort_trades(filtered, descending=True)[: custom.trades_back])
        selected_ids = {trade.id for trade in selected}
        prior = [trade.pnl for trade in closed if trade.id not in selected_ids]
    else:
        start, end = period_window(period, custom, today)
        selected = [trade for trade in filtered if _in_window(trade.effective_date, start, end)]
        prior = [
            trade.pnl
            for trade in closed
            if start is not None and trade.effective_date < start
        ]

    period_start_equity = starting_equity + math.fsum(prior)
    logger.debug(
        "Resolved period %s: start=%s, %d trades, starting equity %.2f",
        period,
        start,
        len(selected),
        period_start_equity,
    )

    if period == "wtd":
        curve = compute_trade_curve(selected, period_start_equity)
    else:
        buckets = aggregate_daily(selected)
        curve = compute_equity_curve(sorted_dates(buckets), buckets, period_start_equity)

    return PeriodResult(
        period=period,
        data=curve.points,
        date_range=_display_range(period, custom, selected, start, today),
        starting_equity=period_start_equity,
        trade_count=len(selected),
    )
