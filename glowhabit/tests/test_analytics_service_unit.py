import logging
import pytest
from datetime import datetime, timezone

from glowhabit.models import DeepWorkSession, Project, Routine, RoutineCompletion
from glowhabit.repositories import (
    GlowMomentRepository, GoalRepository, HabitRepository, InMemoryStore, JournalRepository,
    ProjectRepository, RoutineRepository,
)
from glowhabit.services.analytics_service import AnalyticsService
from glowhabit.services.event_log_service import EventLog
from glowhabit.utils import logging_utils
from glowhabit.utils.logging_utils import session_context

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def event_log(make_habit, make_entry, make_goal, days_ago):
    return EventLog(
        habits=[
            make_habit('h1', days=range(7), life_area='health'),
            make_habit('h2', days=[1, 2], category='mind', life_area='mind'),
        ],
        goals=[make_goal('Read 12 books', progress=25)],
        journal_entries=[
            make_entry(0, score=40, completed=1, total=2, habits=['Habit h1']),
            make_entry(1, score=60, completed=2, total=2, habits=['Habit h1', 'Habit h2']),
            make_entry(2, score=-30, completed=1, total=2),
        ],
        routines=[Routine(id='r1', name='Morning', type='morning')],
        routine_completions=[RoutineCompletion(date=days_ago(0), routine_id='r1', duration=12)],
        projects=[Project(id='p1', name='Thesis')],
        sessions=[DeepWorkSession(id='s1', project_id='p1', duration=90, date=days_ago(0),
                                  completed_at=f"{days_ago(0)}T10:15:00")],
    )


class TestAnalyticsServiceUnit:

    def test_snapshot_sections(self, event_log, today):
        snapshot = AnalyticsService(event_log, today, NOW).snapshot()

        assert snapshot['date'] == '2025-01-15'
        assert set(snapshot) == {'date', 'habits', 'journal', 'lifeBalance', 'routines', 'deepWork', 'gamification'}

        habits = snapshot['habits']
        assert habits['today'] == {'date': '2025-01-15', 'completed': 1, 'total': 2, 'percentage': 50}
        assert len(habits['monthly']) == 31
        assert habits['bestHabitId'] == 'h1'
        assert habits['weakestHabitId'] == 'h2'
        assert habits['habits']['h1']['currentStreak'] == 7

        assert snapshot['journal']['stats']['currentStreak'] == 3
        assert snapshot['journal']['habitMoodCorrelation']['dataPoints'] == 3
        assert snapshot['routines']['routines']['r1']['averageCompletionTime'] == 12
        assert snapshot['routines']['isAlternateDay'] is True
        assert snapshot['deepWork']['projects']['p1']['weeklyHours'] == 1.5
        assert snapshot['deepWork']['stats']['bestTimeOfDay'] == 'Morning'

    def test_gamification(self, event_log, today):
        gamification = AnalyticsService(event_log, today, NOW).gamification()

        assert 'first_habit' in gamification['unlockedAchievements']
        assert 'habit_streak_7' in gamification['unlockedAchievements']
        assert 'perfect_day' not in gamification['unlockedAchievements']
        assert gamification['newGlowMoment'] is None
        assert len(gamification['glowMoments']) == 8

    def test_glow_moment_revealed_once(self, event_log, today):
        repo = GlowMomentRepository(InMemoryStore())
        service = AnalyticsService(event_log, today, NOW)

        assert service.gamification(repo)['newGlowMoment']['id'] == 'first_spark'
        assert service.gamification(repo)['newGlowMoment'] is None

    def test_empty_event_log(self, today):
        snapshot = AnalyticsService(EventLog(), today, NOW).snapshot()

        assert snapshot['habits']['today']['percentage'] == 0
        assert snapshot['habits']['bestHabitId'] is None
        assert snapshot['journal']['habitMoodCorrelation'] is None
        assert snapshot['lifeBalance']['overallScore'] == 0
        assert snapshot['gamification']['totalPoints'] == 0

    def test_snapshot_is_timed(self, event_log, today, caplog):
        with caplog.at_level(logging.DEBUG, logger='glowhabit.utils.logging_utils'):
            AnalyticsService(event_log, today, NOW).snapshot()
        exits = [r for r in caplog.records if 'Exited glowhabit.services.analytics_service._snapshot' in r.message]
        assert len(exits) == 1
        assert exits[0].duration_ms >= 0

    def test_snapshot_records_share_session(self, event_log, today, caplog):
        repo = GlowMomentRepository(InMemoryStore())
        with caplog.at_level(logging.DEBUG, logger='glowhabit.utils.logging_utils'):
            with session_context('dash-1'):
                AnalyticsService(event_log, today, NOW).snapshot(repo)

        messages = {r.message: getattr(r, 'session_id', None) for r in caplog.records}
        assert messages['Glow moment unlocked'] == 'dash-1'
        assert messages['Exited glowhabit.services.analytics_service._snapshot'] == 'dash-1'

    def test_snapshot_opens_its_own_session(self, event_log, today, caplog):
        with caplog.at_level(logging.DEBUG, logger='glowhabit.utils.logging_utils'):
            AnalyticsService(event_log, today, NOW).snapshot()

        session_ids = {r.session_id for r in caplog.records if hasattr(r, 'session_id')}
        assert len(session_ids) == 1
        assert getattr(logging_utils._session_context, 'session_id', None) is None

    def test_from_repositories(self, today, days_ago):
        habits = HabitRepository(InMemoryStore())
        habits.add('Run', category='health', habit_id='h1')
        habits.toggle('h1', today)
        goals = GoalRepository(InMemoryStore())
        goals.add('Call family weekly')
        routines = RoutineRepository(InMemoryStore(), InMemoryStore())
        routines.add(Routine(id='r1', name='Night', type='night'))
        routines.complete('r1', today)
        projects = ProjectRepository(InMemoryStore(), InMemoryStore())

        log = EventLog.from_repositories(
            habits=habits, goals=goals, journal=JournalRepository(InMemoryStore()),
            routines=routines, projects=projects,
        )
        assert log.all_habit_dates() == {days_ago(0)}
        assert log.routine_dates('night') == {days_ago(0)}
        assert log.skincare_completions == []

        gamification = AnalyticsService(log, today, NOW).gamification()
        assert {'first_habit', 'first_goal', 'night_routine', 'perfect_day'} <= set(gamification['unlockedAchievements'])
