"""
Deep Work Service - Project execution and focus-session statistics.

Weeks run Monday to Sunday. Hours are session minutes / 60, unrounded.
"""
import logging
from datetime import timedelta
from typing import Dict, List, Optional

import pandas as pd
from dateutil import parser as date_parser

from glowhabit.helpers.metric_helpers import round_half_up
from glowhabit.models import DeepWorkSession, Project
from glowhabit.services.streak_service import StreakService
from glowhabit.utils.constants import (
    DEFAULT_WEEKLY_TARGET_HOURS, TREND_DOWN, TREND_STABLE, TREND_UP,
)
from glowhabit.utils.time_utils import DateLike, resolve_today, week_bounds

logger = logging.getLogger(__name__)

DEFAULT_BEST_HOUR = 9
TREND_UP_FACTOR = 1.1
TREND_DOWN_FACTOR = 0.9


def _sessions_between(sessions: List[DeepWorkSession], start, end) -> List[DeepWorkSession]:
    first, last = start.isoformat(), end.isoformat()
    return [s for s in sessions if first <= s.date <= last]


def _minutes_between(sessions: List[DeepWorkSession], start, end) -> int:
    return sum(s.duration for s in _sessions_between(sessions, start, end))


def _hour_label(hour: int) -> str:
    if hour < 12:
        return 'Morning'
    if hour < 17:
        return 'Afternoon'
    return 'Evening'


class DeepWorkService:

    @staticmethod
    def project_stats(project: Project, sessions: List[DeepWorkSession],
                      as_of_date: Optional[DateLike] = None) -> Dict:
        """
        Returns:
            {'totalHours', 'weeklyHours', 'consistencyStreak',
             'weeklyExecutionScore', 'progress'}
        """
        today = resolve_today(as_of_date)
        own = [s for s in sessions if s.project_id == project.id]
        week_start, week_end = week_bounds(today)

        weekly_hours = _minutes_between(own, week_start, week_end) / 60
        target = project.weekly_target or DEFAULT_WEEKLY_TARGET_HOURS
        execution = min(100, round_half_up(weekly_hours / target * 100))

        return {
            'totalHours': sum(s.duration for s in own) / 60,
            'weeklyHours': weekly_hours,
            'consistencyStreak': StreakService.current([s.date for s in own], today),
            'weeklyExecutionScore': execution,
            'progress': execution,
        }

    @staticmethod
    def best_hour(sessions: List[DeepWorkSession]) -> int:
        """Hour of day with the most focused minutes; earliest hour wins ties."""
        rows = []
        for session in sessions:
            try:
                rows.append({'hour': date_parser.isoparse(session.completed_at).hour,
                             'minutes': session.duration})
            except (ValueError, OverflowError):
                logger.debug(f"Skipping session {session.id} with bad completedAt")
        if not rows:
            return DEFAULT_BEST_HOUR

        minutes_by_hour = pd.DataFrame(rows).groupby('hour')['minutes'].sum()
        if minutes_by_hour.max() <= 0:
            return DEFAULT_BEST_HOUR
        return int(minutes_by_hour.idxmax())

    @staticmethod
    def deep_work_stats(sessions: List[DeepWorkSession], as_of_date: Optional[DateLike] = None) -> Dict:
        """
        Returns:
            {'totalHours', 'focusStreak', 'bestTimeOfDay', 'weeklyTrend', 'sessionsThisWeek'}
        """
        today = resolve_today(as_of_date)
        week_start, week_end = week_bounds(today)
        last_start, last_end = week_start - timedelta(days=7), week_end - timedelta(days=7)

        this_week = _minutes_between(sessions, week_start, week_end)
        last_week = _minutes_between(sessions, last_start, last_end)
        if this_week > last_week * TREND_UP_FACTOR:
            trend = TREND_UP
        elif this_week < last_week * TREND_DOWN_FACTOR:
            trend = TREND_DOWN
        else:
            trend = TREND_STABLE

        return {
            'totalHours': sum(s.duration for s in sessions) / 60,
            'focusStreak': StreakService.current([s.date for s in sessions], today),
            'bestTimeOfDay': _hour_label(DeepWorkService.best_hour(sessions)),
            'weeklyTrend': trend,
            'sessionsThisWeek': len(_sessions_between(sessions, week_start, week_end)),
        }
