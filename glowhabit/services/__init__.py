"""
Services package for GlowHabit.

Analytics engines, leaf-first:

Core Engines:
- event_log_service: Read-only snapshot of completion records
- streak_service: Current/longest consecutive-day streaks
- rate_service: Rolling completion rates, daily and monthly progress
- sentiment_service: Lexicon scoring and mood mapping
- correlation_service: Habit completion vs. journal sentiment
- life_balance_service: Life-area scores, trends and stability
- achievement_service: Achievement rule table and points

Supporting Services:
- journal_service: Entry saving and journal/mood statistics
- routine_service: Routine and skin-care statistics
- deep_work_service: Project and focus-session statistics
- glow_moment_service: One-time unlocks and rewards
- suggestion_service: Remote suggestion client with local fallback
- analytics_service: Dashboard snapshot across all engines
"""

from .event_log_service import EventLog
from .streak_service import StreakResult, StreakService
from .rate_service import RateService
from .sentiment_service import SentimentResult, SentimentService
from .correlation_service import CorrelationService
from .life_balance_service import AreaScore, LifeBalanceService
from .achievement_service import Achievement, AchievementDefinition, AchievementService

from .journal_service import JournalService
from .routine_service import RoutineService
from .deep_work_service import DeepWorkService
from .glow_moment_service import GlowMoment, GlowMomentService
from .suggestion_service import SuggestionService
from .analytics_service import AnalyticsService

__all__ = [
    # Core
    'EventLog',
    'StreakResult',
    'StreakService',
    'RateService',
    'SentimentResult',
    'SentimentService',
    'CorrelationService',
    'AreaScore',
    'LifeBalanceService',
    'Achievement',
    'AchievementDefinition',
    'AchievementService',

    # Supporting
    'JournalService',
    'RoutineService',
    'DeepWorkService',
    'GlowMoment',
    'GlowMomentService',
    'SuggestionService',
    'AnalyticsService',
]
