"""
Metric helper functions for engagement analytics.
Implements the shared algorithms for streak detection, windowed completion
rates and variance-based stability scores.

All statistical methods use plain numpy/pandas; every ratio and average is
guarded so empty input yields 0 instead of NaN.
"""
import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Set

import numpy as np
import pandas as pd

from glowhabit.utils.time_utils import DateLike, last_n_days, resolve_today, unique_sorted_dates


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (-2.5 -> -2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return numerator / denominator


def mean_or_zero(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def to_date_set(dates: Iterable[DateLike]) -> Set[date]:
    return set(unique_sorted_dates(dates))


# =============================================================================
# STREAKS
# =============================================================================

def current_streak(dates: Iterable[DateLike], as_of_date: Optional[DateLike] = None) -> int:
    """
    Length of the run of consecutive completed days ending today.

    A run that ended yesterday still counts (one-day grace) so a streak is
    not shown as broken before the user had a chance to act today.

    Args:
        dates: Completed days (ISO strings or dates, any order, duplicates ok)
        as_of_date: The day treated as "today"

    Returns:
        Number of consecutive days, 0 after two consecutive misses
    """
    done = to_date_set(dates)
    if not done:
        return 0

    today = resolve_today(as_of_date)
    yesterday = today - timedelta(days=1)

    if today in done:
        count = 1
    elif yesterday in done:
        count = 0
    else:
        return 0

    cursor = yesterday
    while cursor in done:
        count += 1
        cursor -= timedelta(days=1)
    return count


def run_lengths(dates: Iterable[DateLike]) -> np.ndarray:
    """
    Lengths of every maximal run of consecutive days, in chronological order.

    Uses run-length encoding over day ordinals: a gap other than one day
    starts a new run.
    """
    ordered = unique_sorted_dates(dates)
    if not ordered:
        return np.array([], dtype=int)

    ordinals = np.array([d.toordinal() for d in ordered])
    breaks = np.concatenate(([True], np.diff(ordinals) != 1))
    run_ids = np.cumsum(breaks) - 1
    return np.bincount(run_ids)


def longest_streak(dates: Iterable[DateLike], as_of_date: Optional[DateLike] = None) -> int:
    """
    Longest run of consecutive completed days ever recorded.

    Never smaller than the current streak for the same dates.
    """
    dates = list(dates)
    runs = run_lengths(dates)
    longest = int(runs.max()) if len(runs) else 0
    return max(longest, current_streak(dates, as_of_date))


# =============================================================================
# RATES
# =============================================================================

def window_completion_rate(dates: Iterable[DateLike], window_days: int = 30,
                           as_of_date: Optional[DateLike] = None) -> int:
    """
    Percent of the trailing ``window_days`` calendar days (today included)
    present in ``dates``, rounded to an integer.
    """
    if window_days <= 0:
        return 0
    done = {d.isoformat() for d in to_date_set(dates)}
    window = last_n_days(window_days, as_of_date)
    hits = sum(1 for day in window if day in done)
    return round_half_up(safe_ratio(hits, window_days) * 100)


def daily_completion_matrix(completion_sets: Dict[str, Iterable[str]], days: List[str]) -> pd.DataFrame:
    """
    Boolean frame with one row per day and one column per entity.

    Args:
        completion_sets: entity id -> completed ISO dates
        days: ISO dates to use as the row index, in the order given

    Returns:
        DataFrame indexed by day; an empty entity mapping yields zero columns
    """
    index = pd.Index(days, name='date')
    columns = {
        entity_id: index.isin(list(completed))
        for entity_id, completed in completion_sets.items()
    }
    return pd.DataFrame(columns, index=index, dtype=bool)


def calendar_days(start: DateLike, end: DateLike) -> List[str]:
    """Every ISO date from start to end inclusive."""
    return [d.date().isoformat() for d in pd.date_range(resolve_today(start), resolve_today(end), freq='D')]


# =============================================================================
# STABILITY
# =============================================================================

def stability_score(scores: Sequence[float]) -> int:
    """
    100 minus the population standard deviation of ``scores``, floored at 0.

    Equal scores give 100; one dominant or neglected value lowers it. The
    result is rounded, so a spread with deviation under 0.5 still gives 100.
    """
    if len(scores) == 0:
        return 100
    std = float(np.sqrt(np.var(np.asarray(scores, dtype=float))))
    return max(0, round_half_up(100 - std))


def emotional_stability(scores: Sequence[float]) -> int:
    """
    Stability of sentiment scores over time (0-100).

    The spread of scores is expected to stay under ~50, so the standard
    deviation is doubled before subtracting. Fewer than two scores count as
    fully stable.
    """
    if len(scores) < 2:
        return 100
    std = float(np.std(np.asarray(scores, dtype=float)))
    return round_half_up(max(0.0, 100 - std * 2))
