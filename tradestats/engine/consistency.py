"""Consistency scoring.

The score blends four sub-scores of up to 25 points each:

- win rate against ``win_rate_target``
- profit factor against ``profit_factor_target``
- max drawdown percent against ``max_drawdown_limit`` (starts at 25, loses points)
- longest win-day streak against ``streak_target``

A trader with profits and no losses has an undefined profit factor; it is
reported as ``PROFIT_FACTOR_CAP`` so the score and any serialized output stay
finite.
"""

import math
from collections.abc import Sequence
from typing import Optional

from tradestats.models import ConsistencyScore, ConsistencySettings

MAX_SUB_SCORE = 25.0

# Profit factor reported when there are profits but no losses
PROFIT_FACTOR_CAP = 10.0

GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
    (30, "D"),
)
FAILING_GRADE = "F"


def capped_ratio(numerator: float, denominator: float, cap: float = PROFIT_FACTOR_CAP) -> float:
    """Ratio of two positive magnitudes, bounded for a zero denominator.

    Returns ``cap`` when the numerator is positive and the denominator is
    zero, and 0 when both are zero.
    """
    if denominator > 0:
        return numerator / denominator
    return cap if numerator > 0 else 0.0


def profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit over gross loss (both positive magnitudes).

    Returns ``PROFIT_FACTOR_CAP`` when there is profit but no loss and 0
    when there is neither.
    """
    return capped_ratio(gross_profit, gross_loss)


def _clamp(value: float) -> float:
    return min(max(value, 0.0), MAX_SUB_SCORE)


def validate_thresholds(thresholds: Sequence[tuple[int, str]]) -> None:
    """Ensure grade thresholds are strictly descending.

    Raises:
        ValueError: If thresholds are empty or not strictly descending.
    """
    if not thresholds:
        raise ValueError("Grade thresholds cannot be empty")
    floors = [floor for floor, _ in thresholds]
    if any(upper <= lower for upper, lower in zip(floors, floors[1:])):
        raise ValueError(f"Grade thresholds must be strictly descending: {floors}")


def grade_for(
    score: float,
    thresholds: Sequence[tuple[int, str]] = GRADE_THRESHOLDS,
    failing_grade: str = FAILING_GRADE,
) -> str:
    """Map a score to a letter grade.

    Args:
        score: Consistency score.
        thresholds: (minimum score, grade) pairs, highest first.
        failing_grade: Grade for scores below every threshold.

    Returns:
        Letter grade.
    """
    validate_thresholds(thresholds)
    for floor, grade in thresholds:
        if score >= floor:
            return grade
    return failing_grade


def score_consistency(
    win_rate: float,
    profit_factor: float,
    max_drawdown_percent: float,
    longest_win_streak: int,
    settings: Optional[ConsistencySettings] = None,
    thresholds: Sequence[tuple[int, str]] = GRADE_THRESHOLDS,
) -> ConsistencyScore:
    """Compute the 0-100 consistency score.

    Args:
        win_rate: Win rate percentage (0-100).
        profit_factor: Profit factor, already capped for the no-loss case.
        max_drawdown_percent: Worst drawdown as a percentage of peak.
        longest_win_streak: Longest run of winning days.
        settings: Targets; defaults when omitted.
        thresholds: Grade thresholds.

    Returns:
        Total score, grade and the four sub-scores.
    """
    settings = settings or ConsistencySettings()

    win_rate_score = _clamp(win_rate / settings.win_rate_target * MAX_SUB_SCORE)
    profit_factor_score = _clamp(profit_factor / settings.profit_factor_target * MAX_SUB_SCORE)
    drawdown_score = _clamp(
        MAX_SUB_SCORE - max_drawdown_percent / settings.max_drawdown_limit * MAX_SUB_SCORE
    )
    streak_score = _clamp(longest_win_streak / settings.streak_target * MAX_SUB_SCORE)

    total = win_rate_score + profit_factor_score + drawdown_score + streak_score
    # Round half up
    score = min(max(int(math.floor(total + 0.5)), 0), 100)

    return ConsistencyScore(
        score=score,
        grade=grade_for(score, thresholds),
        win_rate_score=win_rate_score,
        profit_factor_score=profit_factor_score,
        drawdown_score=drawdown_score,
        streak_score=streak_score,
    )
