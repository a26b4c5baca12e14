"""
Analytics Service - One dashboard snapshot composed from every engine.

Everything is recomputed from the EventLog on each call; the only write is
the glow-moment seen-set when a repository is supplied.
"""
import logging
from datetime import datetime
from typing import Dict, Optional

from glowhabit.repositories import GlowMomentRepository
from glowhabit.services.achievement_service import AchievementService
from glowhabit.services.correlation_service import CorrelationService
from glowhabit.services.deep_work_service import DeepWorkService
from glowhabit.services.event_log_service import EventLog
from glowhabit.services.glow_moment_service import GlowMomentService
from glowhabit.services.journal_service import JournalService
from glowhabit.services.life_balance_service import LifeBalanceService
from glowhabit.services.rate_service import RateService
from glowhabit.services.routine_service import RoutineService
from glowhabit.utils.logging_utils import log_function_call, session_context
from glowhabit.utils.time_utils import DateLike, resolve_today

logger = logging.getLogger(__name__)


class AnalyticsService:

    def __init__(self, event_log: EventLog, as_of_date: Optional[DateLike] = None,
                 now: Optional[datetime] = None):
        self.event_log = event_log
        self.today = resolve_today(as_of_date)
        self.now = now

    def habit_analytics(self) -> Dict:
        habits = self.event_log.habits
        best = RateService.best_habit(habits, self.today)
        weakest = RateService.weakest_habit(habits, self.today)
        return {
            'today': RateService.today_progress(habits, self.today),
            'monthly': RateService.monthly_progress(habits, self.today),
            'habits': {h.id: RateService.habit_stats(h, self.today) for h in habits},
            'bestHabitId': best.id if best else None,
            'weakestHabitId': weakest.id if weakest else None,
        }

    def journal_analytics(self) -> Dict:
        entries = self.event_log.journal_entries
        return {
            'stats': JournalService.journal_stats(entries, self.today),
            'mood': JournalService.mood_analytics(entries, as_of_date=self.today),
            'moodTrend': JournalService.mood_trend(entries, as_of_date=self.today),
            'habitMoodCorrelation': CorrelationService.habit_mood_correlation(entries),
        }

    def routine_analytics(self) -> Dict:
        log = self.event_log
        return {
            'routines': {
                r.id: RoutineService.routine_stats(r.id, log.routine_completions, self.today)
                for r in log.routines
            },
            'skincare': RoutineService.skincare_stats(
                log.skincare_routines, log.skincare_completions, self.today
            ),
            'isAlternateDay': RoutineService.is_alternate_day(self.today),
        }

    def deep_work_analytics(self) -> Dict:
        log = self.event_log
        return {
            'projects': {
                p.id: DeepWorkService.project_stats(p, log.sessions, self.today)
                for p in log.projects
            },
            'stats': DeepWorkService.deep_work_stats(log.sessions, self.today),
        }

    def gamification(self, glow_repository: Optional[GlowMomentRepository] = None) -> Dict:
        counters = AchievementService.build_counters(self.event_log, self.today)
        achievements = AchievementService.evaluate(counters, self.now)
        moments = GlowMomentService.evaluate(counters, self.now)
        new_moment = GlowMomentService.check_new(moments, glow_repository) if glow_repository else None

        return {
            'achievements': [a.to_dict() for a in achievements],
            'unlockedAchievements': [a.id for a in AchievementService.unlocked(achievements)],
            'inProgressAchievements': [a.id for a in AchievementService.in_progress(achievements)],
            'totalPoints': AchievementService.total_points(achievements),
            'glowMoments': [m.to_dict() for m in moments],
            'newGlowMoment': new_moment.to_dict() if new_moment else None,
            'rewards': GlowMomentService.rewards(moments),
        }

    def snapshot(self, glow_repository: Optional[GlowMomentRepository] = None) -> Dict:
        """
        Everything the dashboard shows, as plain values.

        Log records emitted while building it share one session id.
        """
        with session_context():
            return self._snapshot(glow_repository)

    @log_function_call()
    def _snapshot(self, glow_repository: Optional[GlowMomentRepository]) -> Dict:
        return {
            'date': self.today.isoformat(),
            'habits': self.habit_analytics(),
            'journal': self.journal_analytics(),
            'lifeBalance': LifeBalanceService.score(self.event_log.habits, self.event_log.goals, self.today),
            'routines': self.routine_analytics(),
            'deepWork': self.deep_work_analytics(),
            'gamification': self.gamification(glow_repository),
        }
