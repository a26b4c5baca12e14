from datetime import date
from typing import Iterable, NamedTuple, Optional

from glowhabit.helpers.metric_helpers import current_streak, longest_streak, to_date_set
from glowhabit.utils.time_utils import DateLike, resolve_today


class StreakResult(NamedTuple):
    current_streak: int
    longest_streak: int
    streak_active: bool
    last_completed_date: Optional[date]


class StreakService:
    """
    Consecutive-day streaks over a completion set.

    The same calculation serves habits, journal entries, routines,
    skin care and deep-work sessions; callers pass the dates.
    """

    @staticmethod
    def current(dates: Iterable[DateLike], as_of_date: Optional[DateLike] = None) -> int:
        return current_streak(dates, as_of_date)

    @staticmethod
    def longest(dates: Iterable[DateLike], as_of_date: Optional[DateLike] = None) -> int:
        return longest_streak(dates, as_of_date)

    @staticmethod
    def calculate_streak(dates: Iterable[DateLike], as_of_date: Optional[DateLike] = None) -> StreakResult:
        """
        Calculate current and longest streak for a completion set.

        Args:
            dates: Completed days as ISO strings or dates
            as_of_date: Calculate as of this date (default: today)

        Returns:
            StreakResult with current, longest, and status
        """
        today = resolve_today(as_of_date)
        done = sorted(d for d in to_date_set(dates) if d <= today)
        current = current_streak(done, today)

        return StreakResult(
            current_streak=current,
            longest_streak=longest_streak(done, today),
            streak_active=current > 0,
            last_completed_date=done[-1] if done else None,
        )
