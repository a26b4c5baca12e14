"""
Achievement Service - Evaluates the fixed achievement table against live counters.

Achievements are re-derived on every call from a counter snapshot; nothing
about unlock state is persisted. A counter that regresses (e.g. the perfect
day flag on a new day) re-locks its achievement.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from glowhabit.exceptions import AnalyticsError
from glowhabit.helpers.metric_helpers import round_half_up
from glowhabit.services.event_log_service import EventLog
from glowhabit.services.streak_service import StreakService
from glowhabit.utils.constants import (
    LIFE_AREAS, ROUTINE_MORNING, ROUTINE_NIGHT,
    TIER_BRONZE, TIER_GOLD, TIER_PLATINUM, TIER_POINTS, TIER_SILVER,
)
from glowhabit.utils.time_utils import DateLike, resolve_today

logger = logging.getLogger(__name__)

# Counter names shared with the glow-moment rules
TOTAL_COMPLETIONS = 'total_completions'
ANY_COMPLETION = 'any_completion'
LONGEST_HABIT_STREAK = 'longest_habit_streak'
JOURNAL_ENTRIES = 'journal_entries'
ANY_JOURNAL_ENTRY = 'any_journal_entry'
JOURNAL_STREAK = 'journal_streak'
ANY_GOAL = 'any_goal'
ANY_COMPLETED_GOAL = 'any_completed_goal'
COMPLETED_GOALS = 'completed_goals'
MORNING_ROUTINE_DONE = 'morning_routine_done'
NIGHT_ROUTINE_DONE = 'night_routine_done'
ROUTINE_STREAK = 'routine_streak'
PERFECT_DAY = 'perfect_day'
LIFE_AREA_COUNT = 'life_area_count'


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    name: str
    description: str
    icon: str
    category: str
    tier: str
    counter: str
    requirement: int


ACHIEVEMENT_DEFINITIONS = [
    # Habits
    AchievementDefinition('first_habit', 'First Step', 'Complete your first habit',
                          'Footprints', 'habits', TIER_BRONZE, ANY_COMPLETION, 1),
    AchievementDefinition('habit_streak_7', 'Week Warrior', '7-day streak on any habit',
                          'Flame', 'habits', TIER_SILVER, LONGEST_HABIT_STREAK, 7),
    AchievementDefinition('habit_streak_30', 'Monthly Master', '30-day streak on any habit',
                          'Trophy', 'habits', TIER_GOLD, LONGEST_HABIT_STREAK, 30),
    AchievementDefinition('habit_completions_50', 'Consistency Champion', 'Complete 50 total habits',
                          'Target', 'habits', TIER_SILVER, TOTAL_COMPLETIONS, 50),
    AchievementDefinition('habit_completions_100', 'Centurion', 'Complete 100 total habits',
                          'Medal', 'habits', TIER_GOLD, TOTAL_COMPLETIONS, 100),
    # Journal
    AchievementDefinition('first_journal', 'Dear Diary', 'Write your first journal entry',
                          'BookOpen', 'journal', TIER_BRONZE, ANY_JOURNAL_ENTRY, 1),
    AchievementDefinition('journal_streak_7', 'Reflective Week', 'Journal for 7 days straight',
                          'Sparkles', 'journal', TIER_SILVER, JOURNAL_STREAK, 7),
    AchievementDefinition('journal_entries_30', 'Thoughtful Writer', 'Write 30 journal entries',
                          'PenTool', 'journal', TIER_GOLD, JOURNAL_ENTRIES, 30),
    # Goals
    AchievementDefinition('first_goal', 'Aim High', 'Create your first goal',
                          'Mountain', 'goals', TIER_BRONZE, ANY_GOAL, 1),
    AchievementDefinition('goal_completed', 'Goal Crusher', 'Complete a goal',
                          'CheckCircle2', 'goals', TIER_SILVER, ANY_COMPLETED_GOAL, 1),
    AchievementDefinition('goals_completed_5', 'Dream Achiever', 'Complete 5 goals',
                          'Crown', 'goals', TIER_GOLD, COMPLETED_GOALS, 5),
    # Routines
    AchievementDefinition('morning_routine', 'Early Bird', 'Complete morning routine',
                          'Sunrise', 'routines', TIER_BRONZE, MORNING_ROUTINE_DONE, 1),
    AchievementDefinition('night_routine', 'Night Owl', 'Complete night routine',
                          'Moon', 'routines', TIER_BRONZE, NIGHT_ROUTINE_DONE, 1),
    AchievementDefinition('routine_streak_7', 'Routine Master', '7-day routine streak',
                          'Repeat', 'routines', TIER_SILVER, ROUTINE_STREAK, 7),
    # Special
    AchievementDefinition('perfect_day', 'Perfect Day', 'Complete all habits in one day',
                          'Star', 'special', TIER_GOLD, PERFECT_DAY, 1),
    AchievementDefinition('balanced_life', 'Life Balance', 'Habits in all 4 life areas',
                          'Heart', 'special', TIER_PLATINUM, LIFE_AREA_COUNT, 4),
]


@dataclass
class Achievement:
    definition: AchievementDefinition
    current: int
    progress: int
    unlocked: bool
    unlocked_at: Optional[str] = None

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def tier(self) -> str:
        return self.definition.tier

    def to_dict(self) -> Dict:
        d = self.definition
        return {
            'id': d.id,
            'name': d.name,
            'description': d.description,
            'icon': d.icon,
            'category': d.category,
            'tier': d.tier,
            'requirement': d.requirement,
            'current': self.current,
            'progress': self.progress,
            'unlocked': self.unlocked,
            'unlockedAt': self.unlocked_at,
        }


class AchievementService:

    @staticmethod
    def build_counters(event_log: EventLog, as_of_date: Optional[DateLike] = None) -> Dict[str, int]:
        """Derive every achievement and glow-moment counter from a snapshot."""
        today = resolve_today(as_of_date)
        today_iso = today.isoformat()
        habits = event_log.habits

        total_completions = sum(len(h.completed_dates) for h in habits)
        longest = max(
            (StreakService.longest(h.completed_dates, today) for h in habits), default=0
        )
        completed_goals = sum(1 for g in event_log.goals if g.is_completed)
        perfect = bool(habits) and all(today_iso in h.completed_dates for h in habits)
        life_areas = {h.life_area for h in habits if h.life_area in LIFE_AREAS}

        return {
            TOTAL_COMPLETIONS: total_completions,
            ANY_COMPLETION: int(total_completions > 0),
            LONGEST_HABIT_STREAK: longest,
            JOURNAL_ENTRIES: len(event_log.journal_entries),
            ANY_JOURNAL_ENTRY: int(bool(event_log.journal_entries)),
            JOURNAL_STREAK: StreakService.current(event_log.journal_dates(), today),
            ANY_GOAL: int(bool(event_log.goals)),
            ANY_COMPLETED_GOAL: int(completed_goals > 0),
            COMPLETED_GOALS: completed_goals,
            MORNING_ROUTINE_DONE: int(bool(event_log.routine_dates(ROUTINE_MORNING))),
            NIGHT_ROUTINE_DONE: int(bool(event_log.routine_dates(ROUTINE_NIGHT))),
            ROUTINE_STREAK: StreakService.current(event_log.routine_dates(), today),
            PERFECT_DAY: int(perfect),
            LIFE_AREA_COUNT: len(life_areas),
        }

    @staticmethod
    def progress(current: int, requirement: int) -> int:
        return min(100, round_half_up(current / requirement * 100))

    @staticmethod
    def evaluate(counters: Dict[str, int], now: Optional[datetime] = None,
                 definitions: Optional[List[AchievementDefinition]] = None) -> List[Achievement]:
        """
        Evaluate each definition against its counter.

        ``unlocked_at`` is the evaluation time for every unlocked achievement;
        the first-unlock time is not tracked.

        Raises:
            AnalyticsError: if a definition names a counter missing from ``counters``
        """
        definitions = definitions if definitions is not None else ACHIEVEMENT_DEFINITIONS
        stamp = (now or datetime.now(timezone.utc)).isoformat()

        achievements = []
        for definition in definitions:
            if definition.counter not in counters:
                raise AnalyticsError(definition.id, f"missing counter '{definition.counter}'")
            current = int(counters[definition.counter])
            unlocked = current >= definition.requirement
            achievements.append(Achievement(
                definition=definition,
                current=current,
                progress=AchievementService.progress(current, definition.requirement),
                unlocked=unlocked,
                unlocked_at=stamp if unlocked else None,
            ))
        return achievements

    @staticmethod
    def unlocked(achievements: List[Achievement]) -> List[Achievement]:
        return [a for a in achievements if a.unlocked]

    @staticmethod
    def in_progress(achievements: List[Achievement]) -> List[Achievement]:
        """Locked achievements with some progress, closest to unlocking first."""
        started = [a for a in achievements if not a.unlocked and a.progress > 0]
        return sorted(started, key=lambda a: a.progress, reverse=True)

    @staticmethod
    def total_points(achievements: List[Achievement]) -> int:
        return sum(TIER_POINTS[a.tier] for a in achievements if a.unlocked)
