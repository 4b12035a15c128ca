"""Win/loss day streak detection."""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from tradestats.models import DailyBucket, StreakSummary
from tradestats.models.stats import StreakType


def _day_type(pnl: float) -> Optional[StreakType]:
    if pnl > 0:
        return "win"
    if pnl < 0:
        return "loss"
    return None


def compute_streaks(
    sorted_dates: Sequence[date],
    buckets: dict[date, DailyBucket],
) -> StreakSummary:
    """Compute current and longest win/loss streaks by net daily P&L.

    A zero-P&L day ends any running streak without counting as either.
    The current streak is measured backward from the most recent day and
    counts consecutive traded days, not consecutive calendar days.

    Args:
        sorted_dates: Bucket dates in ascending order.
        buckets: Daily buckets keyed by date.

    Returns:
        Streak summary; all zeros for an empty series.
    """
    longest_win = longest_loss = 0
    win_run = loss_run = 0

    for day in sorted_dates:
        pnl = buckets[day].pnl
        if pnl > 0:
            win_run += 1
            loss_run = 0
            longest_win = max(longest_win, win_run)
        elif pnl < 0:
            loss_run += 1
            win_run = 0
            longest_loss = max(longest_loss, loss_run)
        else:
            win_run = loss_run = 0

    current = 0
    current_type = _day_type(buckets[sorted_dates[-1]].pnl) if sorted_dates else None
    if current_type is not None:
        for day in reversed(sorted_dates):
            if _day_type(buckets[day].pnl) != current_type:
                break
            current += 1

    return StreakSummary(
        current_streak=current,
        current_streak_type=current_type,
        longest_win_streak=longest_win,
        longest_loss_streak=longest_loss,
    )
