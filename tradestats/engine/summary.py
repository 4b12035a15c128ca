"""Trade statistics bundle.

Runs the full pipeline over the closed trades: daily aggregation, then the
equity/drawdown tracker and streak detector, then the consistency scorer,
plus the per-trade ratios shown alongside them.

Undefined ratios use documented sentinels instead of NaN/Infinity:

- profit factor and risk/reward: ``PROFIT_FACTOR_CAP`` with no losses
- recovery factor: ``RECOVERY_FACTOR_CAP`` with profit and no drawdown
- Sharpe ratio: 0 with fewer than two trading days or no variance
- averages over empty sets: 0
"""

import math
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from tradestats.engine.consistency import (
    GRADE_THRESHOLDS,
    capped_ratio,
    profit_factor,
    score_consistency,
)
from tradestats.engine.daily import aggregate_daily, closed_trades, sort_trades, sorted_dates
from tradestats.engine.equity import compute_equity_curve
from tradestats.engine.periods import week_start
from tradestats.engine.streaks import compute_streaks
from tradestats.models import (
    ConsistencySettings,
    EquityCurve,
    GoalProgress,
    GroupStats,
    PeriodSummary,
    Trade,
    TradeStats,
    TradingGoals,
)

# Recovery factor reported when there is profit but no drawdown
RECOVERY_FACTOR_CAP = 10.0

TRADING_DAYS_PER_YEAR = 252
DAYS_PER_YEAR = 365


def sharpe_ratio(daily_pnls: Sequence[float]) -> float:
    """Annualized mean over population standard deviation of daily P&L."""
    if len(daily_pnls) < 2:
        return 0.0
    mean = math.fsum(daily_pnls) / len(daily_pnls)
    variance = math.fsum((pnl - mean) ** 2 for pnl in daily_pnls) / len(daily_pnls)
    std_dev = math.sqrt(variance)
    if std_dev == 0:
        return 0.0
    return mean / std_dev * math.sqrt(TRADING_DAYS_PER_YEAR)


def recovery_factor(total_pnl: float, max_drawdown: float) -> float:
    """Net profit over max drawdown."""
    return capped_ratio(total_pnl, max_drawdown, cap=RECOVERY_FACTOR_CAP)


def _group(trades: Iterable[Trade], keys) -> dict[str, GroupStats]:
    """Group trades by every key returned for each trade."""
    counts: dict[str, int] = {}
    pnls: dict[str, list[float]] = {}
    wins: dict[str, int] = {}
    for trade in trades:
        for key in keys(trade):
            counts[key] = counts.get(key, 0) + 1
            pnls.setdefault(key, []).append(trade.pnl)
            if trade.pnl > 0:
                wins[key] = wins.get(key, 0) + 1
    return {
        key: GroupStats(count=counts[key], pnl=math.fsum(pnls[key]), wins=wins.get(key, 0))
        for key in sorted(counts)
    }


def compute_trade_stats(
    trades: Iterable[Trade],
    settings: Optional[ConsistencySettings] = None,
    starting_equity: float = 0.0,
    thresholds: Sequence[tuple[int, str]] = GRADE_THRESHOLDS,
) -> TradeStats:
    """Compute the full statistics bundle.

    Args:
        trades: All trades; open trades are counted but excluded from every
            statistic.
        settings: Consistency targets; defaults when omitted.
        starting_equity: Account equity before the first trade.
        thresholds: Grade thresholds for the consistency score.

    Returns:
        Statistics bundle. With no closed trades every value is zero, the
        equity curve is empty and there is no consistency score.
    """
    trades = list(trades)
    closed = sort_trades(closed_trades(trades))
    open_count = len(trades) - len(closed)

    if not closed:
        return TradeStats(
            open_trades=open_count,
            equity=EquityCurve(starting_equity=starting_equity, peak=starting_equity),
        )

    wins = [trade.pnl for trade in closed if trade.pnl > 0]
    losses = [trade.pnl for trade in closed if trade.pnl < 0]
    total = len(closed)

    total_pnl = math.fsum(trade.pnl for trade in closed)
    gross_profit = math.fsum(wins)
    gross_loss = abs(math.fsum(losses))
    average_win = gross_profit / len(wins) if wins else 0.0
    average_loss = gross_loss / len(losses) if losses else 0.0
    win_rate = len(wins) / total * 100
    loss_rate = len(losses) / total * 100
    pf = profit_factor(gross_profit, gross_loss)

    buckets = aggregate_daily(closed)
    dates = sorted_dates(buckets)
    equity = compute_equity_curve(dates, buckets, starting_equity)
    streaks = compute_streaks(dates, buckets)
    consistency = score_consistency(
        win_rate,
        pf,
        equity.max_drawdown_percent,
        streaks.longest_win_streak,
        settings,
        thresholds,
    )

    return TradeStats(
        total_trades=total,
        winning_trades=len(wins),
        losing_trades=len(losses),
        break_even_trades=total - len(wins) - len(losses),
        open_trades=open_count,
        win_rate=win_rate,
        total_pnl=total_pnl,
        average_pnl=total_pnl / total,
        average_win=average_win,
        average_loss=average_loss,
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        profit_factor=pf,
        risk_reward_ratio=capped_ratio(average_win, average_loss),
        expectancy=(win_rate / 100 * average_win) - (loss_rate / 100 * average_loss),
        sharpe_ratio=sharpe_ratio([buckets[day].pnl for day in dates]),
        recovery_factor=recovery_factor(total_pnl, equity.max_drawdown),
        trading_days=len(dates),
        average_daily_pnl=total_pnl / len(dates),
        equity=equity,
        streaks=streaks,
        consistency=consistency,
        by_ticker=_group(closed, lambda trade: [trade.ticker]),
        by_direction={
            "LONG": GroupStats(),
            "SHORT": GroupStats(),
            **_group(closed, lambda trade: [trade.direction]),
        },
        by_tag=_group(closed, lambda trade: sorted(trade.tags)),
    )


def compute_period_summary(trades: Iterable[Trade], today: Optional[date] = None) -> PeriodSummary:
    """P&L and trade counts for all-time, YTD, MTD, WTD and last year.

    Trades are placed by effective date. Also returns net P&L per month
    for every year, for year-over-year comparison.

    Args:
        trades: All trades; open trades are ignored.
        today: Reference date; defaults to today.
    """
    today = today or date.today()
    closed = sort_trades(closed_trades(trades))
    sunday = week_start(today)

    def _select(predicate) -> list[float]:
        return [trade.pnl for trade in closed if predicate(trade.effective_date)]

    ytd = _select(lambda day: day.year == today.year)
    mtd = _select(lambda day: (day.year, day.month) == (today.year, today.month))
    wtd = _select(lambda day: day >= sunday)
    last_year = _select(lambda day: day.year == today.year - 1)

    monthly: dict[int, dict[int, list[float]]] = {}
    for trade in closed:
        day = trade.effective_date
        monthly.setdefault(day.year, {}).setdefault(day.month, []).append(trade.pnl)

    return PeriodSummary(
        all_time_pnl=math.fsum(trade.pnl for trade in closed),
        all_time_trades=len(closed),
        ytd_pnl=math.fsum(ytd),
        ytd_trades=len(ytd),
        mtd_pnl=math.fsum(mtd),
        mtd_trades=len(mtd),
        wtd_pnl=math.fsum(wtd),
        wtd_trades=len(wtd),
        last_year_pnl=math.fsum(last_year),
        last_year_trades=len(last_year),
        current_year=today.year,
        last_year=today.year - 1,
        monthly_by_year={
            year: {month: math.fsum(pnls) for month, pnls in sorted(months.items())}
            for year, months in sorted(monthly.items())
        },
    )


def compute_goal_progress(
    summary: PeriodSummary,
    goals: TradingGoals,
    today: Optional[date] = None,
) -> GoalProgress:
    """Progress toward P&L goals and a straight-line year-end projection.

    Args:
        summary: Period summary for ``today``.
        goals: Yearly and monthly goals; a zero goal reports 0 progress.
        today: Reference date; defaults to today.
    """
    today = today or date.today()
    yearly = summary.ytd_pnl / goals.yearly_pnl_goal * 100 if goals.yearly_pnl_goal > 0 else 0.0
    monthly = summary.mtd_pnl / goals.monthly_pnl_goal * 100 if goals.monthly_pnl_goal > 0 else 0.0
    day_of_year = today.timetuple().tm_yday
    projected = summary.ytd_pnl / day_of_year * DAYS_PER_YEAR

    return GoalProgress(
        yearly_progress=min(yearly, 100.0),
        monthly_progress=min(monthly, 100.0),
        projected_year_end=projected,
        on_track=projected >= goals.yearly_pnl_goal,
    )
