"""Calendar grid rollups.

The calendar grid places each trade on the date it was *opened*, while
period views place it on its effective (close) date. Both placements are
kept: ``week_totals`` and ``month_calendar`` answer "when did I open
positions", ``resolve_period`` answers "when was P&L realized".

Weeks run Sunday to Saturday and are identified by their Saturday. A week is
clamped to the displayed month, so the same physical week can report
different totals depending on which month's grid asks for it.
"""

import math
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Optional

from tradestats.engine.daily import closed_trades
from tradestats.engine.periods import month_end, week_start
from tradestats.models import (
    CalendarDay,
    CalendarWeek,
    MonthCalendar,
    Trade,
    WeekTotals,
)

SATURDAY = 5


def _daily_by_open_date(trades: Iterable[Trade], start: date, end: date) -> dict[date, list[float]]:
    """P&L values of closed trades opened within [start, end], keyed by open date."""
    days: dict[date, list[float]] = {}
    for trade in closed_trades(trades):
        if start <= trade.date <= end:
            days.setdefault(trade.date, []).append(trade.pnl)
    return days


def week_totals(saturday: date, displayed_month: date, trades: Iterable[Trade]) -> WeekTotals:
    """Totals for one grid week, clamped to the displayed month.

    Args:
        saturday: Saturday ending the week (any day of the week is accepted).
        displayed_month: Any date in the month being displayed.
        trades: All trades; open trades are ignored.

    Returns:
        P&L, trade count and traded-day count for the clamped week.
    """
    sunday = week_start(saturday)
    first = displayed_month.replace(day=1)
    start = max(sunday, first)
    end = min(sunday + timedelta(days=6), month_end(displayed_month))

    days = _daily_by_open_date(trades, start, end)
    return WeekTotals(
        start=start,
        end=end,
        week_pnl=math.fsum(pnl for pnls in days.values() for pnl in pnls),
        week_trades=sum(len(pnls) for pnls in days.values()),
        week_days=len(days),
    )


def phantom_saturday(displayed_month: date) -> Optional[date]:
    """Saturday after the month's last day, or None when the month ends on a Saturday."""
    last = month_end(displayed_month)
    days_until = (SATURDAY - last.weekday()) % 7
    if days_until == 0:
        return None
    return last + timedelta(days=days_until)


def phantom_week(displayed_month: date, trades: Iterable[Trade]) -> Optional[WeekTotals]:
    """Totals for the trailing week drawn in the grid's empty cells.

    The week is clamped to the displayed month, so it never includes the
    next month's days.

    Returns:
        Week totals, or None when there is no trailing week or it has no
        trading days.
    """
    saturday = phantom_saturday(displayed_month)
    if saturday is None:
        return None
    totals = week_totals(saturday, displayed_month, trades)
    return totals if totals.week_days > 0 else None


def month_calendar(displayed_month: date, trades: Iterable[Trade]) -> MonthCalendar:
    """Calendar grid data and monthly breakdown for a month.

    Args:
        displayed_month: Any date in the month to display.
        trades: All trades; open trades are ignored.

    Returns:
        Traded days, one week row per Saturday in the month (plus the
        phantom week when it has data) and the monthly breakdown.
    """
    trades = list(trades)
    first = displayed_month.replace(day=1)
    last = month_end(displayed_month)
    by_day = _daily_by_open_date(trades, first, last)

    days = []
    cumulative = []
    running = 0.0
    for day in sorted(by_day):
        pnl = math.fsum(by_day[day])
        days.append(CalendarDay(date=day, pnl=pnl, trades=len(by_day[day])))
        running += pnl
        cumulative.append(running)

    weeks = []
    saturday = week_start(first) + timedelta(days=6)
    while saturday <= last:
        weeks.append(CalendarWeek(saturday=saturday, totals=week_totals(saturday, first, trades)))
        saturday += timedelta(days=7)
    phantom = phantom_week(first, trades)
    if phantom is not None:
        weeks.append(CalendarWeek(saturday=saturday, totals=phantom, phantom=True))

    win_days = sum(1 for day in days if day.pnl > 0)
    loss_days = sum(1 for day in days if day.pnl < 0)
    best = max(days, key=lambda day: day.pnl, default=None)
    worst = min(days, key=lambda day: day.pnl, default=None)
    total_pnl = math.fsum(day.pnl for day in days)
    total_trades = sum(day.trades for day in days)
    decided = win_days + loss_days

    return MonthCalendar(
        year=first.year,
        month=first.month,
        days=tuple(days),
        weeks=tuple(weeks),
        total_pnl=total_pnl,
        total_trades=total_trades,
        trading_days=len(days),
        win_days=win_days,
        loss_days=loss_days,
        best_day=best if best is not None and best.pnl > 0 else None,
        worst_day=worst if worst is not None and worst.pnl < 0 else None,
        average_daily_pnl=total_pnl / len(days) if days else 0.0,
        average_daily_trades=total_trades / len(days) if days else 0.0,
        day_win_rate=win_days / decided * 100 if decided else 0.0,
        cumulative=tuple(cumulative),
    )
