"""
Rate Service - Rolling completion rates and daily/monthly progress.
"""
import logging
from typing import Dict, Iterable, List, Optional

from glowhabit import settings
from glowhabit.helpers.metric_helpers import (
    calendar_days, daily_completion_matrix, round_half_up, safe_ratio, window_completion_rate,
)
from glowhabit.models import Habit
from glowhabit.services.streak_service import StreakService
from glowhabit.utils.time_utils import DateLike, month_bounds, resolve_today, to_iso

logger = logging.getLogger(__name__)


class RateService:

    @staticmethod
    def completion_rate(dates: Iterable[DateLike], window_days: Optional[int] = None,
                        as_of_date: Optional[DateLike] = None) -> int:
        """
        Percent of the trailing window (today included) present in ``dates``.

        Entity creation dates are ignored: a habit created mid-window is
        measured over the full window.
        """
        if window_days is None:
            window_days = settings.COMPLETION_WINDOW_DAYS
        return window_completion_rate(dates, window_days, as_of_date)

    @staticmethod
    def daily_progress(habits: List[Habit], on_date: DateLike) -> Dict:
        """
        Fraction of habits completed on a day.

        Returns:
            {'date', 'completed', 'total', 'percentage'}; percentage is 0
            when there are no habits
        """
        day = to_iso(on_date)
        completed = sum(1 for h in habits if day in h.completed_dates)
        total = len(habits)
        return {
            'date': day,
            'completed': completed,
            'total': total,
            'percentage': round_half_up(safe_ratio(completed, total) * 100),
        }

    @staticmethod
    def monthly_progress(habits: List[Habit], month: DateLike) -> List[Dict]:
        """daily_progress for every day of the month containing ``month``."""
        start, end = month_bounds(month)
        days = calendar_days(start, end)
        matrix = daily_completion_matrix({h.id: h.completed_dates for h in habits}, days)

        total = len(habits)
        completed_per_day = matrix.sum(axis=1).astype(int)
        return [
            {
                'date': day,
                'completed': int(completed),
                'total': total,
                'percentage': round_half_up(safe_ratio(int(completed), total) * 100),
            }
            for day, completed in completed_per_day.items()
        ]

    @staticmethod
    def today_progress(habits: List[Habit], as_of_date: Optional[DateLike] = None) -> Dict:
        return RateService.daily_progress(habits, resolve_today(as_of_date))

    @staticmethod
    def habit_stats(habit: Habit, as_of_date: Optional[DateLike] = None) -> Dict:
        """Streaks, trailing completion rate and lifetime completions for one habit."""
        streak = StreakService.calculate_streak(habit.completed_dates, as_of_date)
        return {
            'currentStreak': streak.current_streak,
            'longestStreak': streak.longest_streak,
            'completionRate': RateService.completion_rate(habit.completed_dates, as_of_date=as_of_date),
            'totalCompletions': len(habit.completed_dates),
        }

    @staticmethod
    def best_habit(habits: List[Habit], as_of_date: Optional[DateLike] = None) -> Optional[Habit]:
        """Habit with the highest trailing rate; the earliest wins ties."""
        if not habits:
            return None
        best = habits[0]
        best_rate = RateService.completion_rate(best.completed_dates, as_of_date=as_of_date)
        for habit in habits[1:]:
            rate = RateService.completion_rate(habit.completed_dates, as_of_date=as_of_date)
            if rate > best_rate:
                best, best_rate = habit, rate
        return best

    @staticmethod
    def weakest_habit(habits: List[Habit], as_of_date: Optional[DateLike] = None) -> Optional[Habit]:
        if not habits:
            return None
        weakest = habits[0]
        weakest_rate = RateService.completion_rate(weakest.completed_dates, as_of_date=as_of_date)
        for habit in habits[1:]:
            rate = RateService.completion_rate(habit.completed_dates, as_of_date=as_of_date)
            if rate < weakest_rate:
                weakest, weakest_rate = habit, rate
        return weakest
