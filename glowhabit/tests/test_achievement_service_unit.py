import pytest
from datetime import datetime, timezone

from glowhabit.exceptions import AnalyticsError
from glowhabit.models import Routine, RoutineCompletion
from glowhabit.services.achievement_service import (
    ACHIEVEMENT_DEFINITIONS, AchievementDefinition, AchievementService,
)
from glowhabit.services.event_log_service import EventLog

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def event_log(make_habit, make_entry, make_goal, days_ago):
    return EventLog(
        habits=[
            make_habit('h1', days=range(7), life_area='health'),
            make_habit('h2', days=[0], category='custom', life_area='mind'),
        ],
        goals=[make_goal('Run for fitness', progress=100, is_completed=True), make_goal('Learn Spanish')],
        journal_entries=[make_entry(0), make_entry(1)],
        routines=[Routine(id='r1', name='Morning', type='morning')],
        routine_completions=[
            RoutineCompletion(date=days_ago(0), routine_id='r1'),
            RoutineCompletion(date=days_ago(1), routine_id='r1'),
        ],
    )


class TestAchievementCountersUnit:

    def test_build_counters(self, event_log, today):
        counters = AchievementService.build_counters(event_log, today)
        assert counters == {
            'total_completions': 8,
            'any_completion': 1,
            'longest_habit_streak': 7,
            'journal_entries': 2,
            'any_journal_entry': 1,
            'journal_streak': 2,
            'any_goal': 1,
            'any_completed_goal': 1,
            'completed_goals': 1,
            'morning_routine_done': 1,
            'night_routine_done': 0,
            'routine_streak': 2,
            'perfect_day': 1,
            'life_area_count': 2,
        }

    def test_empty_log(self, today):
        counters = AchievementService.build_counters(EventLog(), today)
        assert set(counters.values()) == {0}

    def test_perfect_day_relocks(self, make_habit, today):
        log = EventLog(habits=[make_habit('a', days=[0]), make_habit('b', days=[1])])
        assert AchievementService.build_counters(log, today)['perfect_day'] == 0


class TestAchievementEvaluationUnit:

    def test_table_shape(self):
        assert len(ACHIEVEMENT_DEFINITIONS) == 16
        assert len({d.id for d in ACHIEVEMENT_DEFINITIONS}) == 16

    def test_evaluate(self, event_log, today):
        counters = AchievementService.build_counters(event_log, today)
        achievements = AchievementService.evaluate(counters, NOW)

        unlocked = [a.id for a in AchievementService.unlocked(achievements)]
        assert unlocked == [
            'first_habit', 'habit_streak_7', 'first_journal', 'first_goal',
            'goal_completed', 'morning_routine', 'perfect_day',
        ]
        assert AchievementService.total_points(achievements) == 140
        assert all(a.unlocked_at == NOW.isoformat() for a in achievements if a.unlocked)
        assert all(a.unlocked_at is None for a in achievements if not a.unlocked)

    def test_in_progress_sorted(self, event_log, today):
        counters = AchievementService.build_counters(event_log, today)
        in_progress = AchievementService.in_progress(AchievementService.evaluate(counters, NOW))
        assert [(a.id, a.progress) for a in in_progress] == [
            ('balanced_life', 50),
            ('journal_streak_7', 29),
            ('routine_streak_7', 29),
            ('habit_streak_30', 23),
            ('goals_completed_5', 20),
            ('habit_completions_50', 16),
            ('habit_completions_100', 8),
            ('journal_entries_30', 7),
        ]

    def test_progress_monotonic_and_clamped(self):
        values = [AchievementService.progress(n, 100) for n in range(0, 151)]
        assert values == sorted(values)
        assert max(values) == 100
        assert AchievementService.progress(250, 50) == 100

    def test_missing_counter(self):
        definition = AchievementDefinition('x', 'X', '', '', 'special', 'gold', 'unknown', 1)
        with pytest.raises(AnalyticsError):
            AchievementService.evaluate({}, NOW, definitions=[definition])

    def test_to_dict(self, event_log, today):
        counters = AchievementService.build_counters(event_log, today)
        first = AchievementService.evaluate(counters, NOW)[0].to_dict()
        assert first['id'] == 'first_habit'
        assert first['tier'] == 'bronze'
        assert first['progress'] == 100
        assert first['unlocked'] is True
