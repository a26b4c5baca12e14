"""
Routine Service - Morning/night routine and skin-care statistics.
"""
import logging
from collections import Counter
from datetime import timedelta
from typing import Dict, List, Optional

from glowhabit.helpers.metric_helpers import mean_or_zero, round_half_up
from glowhabit.models import RoutineCompletion, SkinCareCompletion, SkinCareRoutine
from glowhabit.services.streak_service import StreakService
from glowhabit.utils.constants import DEFAULT_WINDOW_DAYS, ROUTINE_MORNING, ROUTINE_NIGHT
from glowhabit.utils.time_utils import DateLike, resolve_today

logger = logging.getLogger(__name__)

# date.weekday(): Sunday, Monday, Wednesday, Friday
ALTERNATE_WEEKDAYS = {6, 0, 2, 4}
TOP_PRODUCTS = 5


def _consistency(count: int, window_days: int = DEFAULT_WINDOW_DAYS) -> int:
    """Completions per window day as a percent, capped at 100."""
    return min(100, round_half_up(count / window_days * 100))


class RoutineService:

    @staticmethod
    def routine_stats(routine_id: str, completions: List[RoutineCompletion],
                      as_of_date: Optional[DateLike] = None) -> Dict:
        """
        Stats for one routine.

        Returns:
            {'consistencyRate', 'averageCompletionTime', 'currentStreak',
             'longestStreak', 'totalCompletions'}
        """
        today = resolve_today(as_of_date)
        own = [c for c in completions if c.routine_id == routine_id]
        if not own:
            return {
                'consistencyRate': 0,
                'averageCompletionTime': 0,
                'currentStreak': 0,
                'longestStreak': 0,
                'totalCompletions': 0,
            }

        cutoff = (today - timedelta(days=DEFAULT_WINDOW_DAYS)).isoformat()
        recent = [c for c in own if c.date >= cutoff]
        durations = [c.duration for c in own if c.duration]
        streak = StreakService.calculate_streak([c.date for c in own], today)

        return {
            'consistencyRate': _consistency(len(recent)),
            'averageCompletionTime': round_half_up(mean_or_zero(durations)),
            'currentStreak': streak.current_streak,
            'longestStreak': streak.longest_streak,
            'totalCompletions': len(own),
        }

    @staticmethod
    def is_completed_on(routine_id: str, completions: List[RoutineCompletion], on_date: DateLike) -> bool:
        day = resolve_today(on_date).isoformat()
        return any(c.routine_id == routine_id and c.date == day for c in completions)

    @staticmethod
    def skincare_stats(routines: List[SkinCareRoutine], completions: List[SkinCareCompletion],
                       as_of_date: Optional[DateLike] = None) -> Dict:
        """
        Morning/night consistency, streaks across both, and the most used products.

        A product counts once per completion in which its step was done.
        """
        today = resolve_today(as_of_date)
        cutoff = (today - timedelta(days=DEFAULT_WINDOW_DAYS)).isoformat()
        recent = [c for c in completions if c.date >= cutoff]
        streak = StreakService.calculate_streak({c.date for c in completions}, today)

        steps_by_routine = {r.id: r.steps for r in routines}
        product_counts = Counter()
        for completion in completions:
            done = set(completion.completed_steps)
            for step in steps_by_routine.get(completion.routine_id, []):
                if step.product_name and step.id in done:
                    product_counts[step.product_name] += 1

        return {
            'morningConsistency': _consistency(sum(1 for c in recent if c.type == ROUTINE_MORNING)),
            'nightConsistency': _consistency(sum(1 for c in recent if c.type == ROUTINE_NIGHT)),
            'currentStreak': streak.current_streak,
            'longestStreak': streak.longest_streak,
            'totalCompletions': len(completions),
            'mostUsedProducts': [
                {'name': name, 'count': count}
                for name, count in product_counts.most_common(TOP_PRODUCTS)
            ],
        }

    @staticmethod
    def is_alternate_day(on_date: Optional[DateLike] = None) -> bool:
        """Days for alternate-day steps (exfoliants, actives)."""
        return resolve_today(on_date).weekday() in ALTERNATE_WEEKDAYS
