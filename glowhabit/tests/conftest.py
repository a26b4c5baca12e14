"""
Pytest configuration and fixtures for GlowHabit tests.

All dates are pinned to a fixed "today" so streaks and windows are
deterministic.
"""
import pytest
from datetime import date, timedelta
from unittest.mock import patch

from glowhabit.models import Goal, Habit, HabitsSummary, JournalEntry, SentimentData
from glowhabit.repositories import KeyValueStore


@pytest.fixture
def today():
    """A fixed Wednesday."""
    return date(2025, 1, 15)


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def days_ago(today):
    """days_ago(n) -> ISO date n days before today."""
    def _days_ago(n):
        return (today - timedelta(days=n)).isoformat()
    return _days_ago


@pytest.fixture
def kv_store():
    """Empty localStorage-style key-value store."""
    return KeyValueStore()


@pytest.fixture
def lexicon():
    """Tiny word -> valence table standing in for the VADER lexicon."""
    return {
        'happy': 2.7,
        'great': 3.1,
        'good': 1.9,
        'love': 3.2,
        'wonderful': 2.7,
        'calm': 1.3,
        'sad': -2.1,
        'bad': -2.5,
        'awful': -2.0,
        'terrible': -2.1,
        'tired': -1.9,
    }


@pytest.fixture
def patched_lexicon(lexicon):
    """Route the default lexicon loader to the tiny lexicon."""
    with patch('glowhabit.helpers.nlp_helpers.load_lexicon', return_value=lexicon) as mock_load:
        yield mock_load


@pytest.fixture
def make_habit(days_ago):
    """make_habit(id, days=[offsets], category=..., created_days_ago=...)"""
    def _make(habit_id='h1', days=(), category='health', created_days_ago=60,
              life_area=None, name=None):
        return Habit(
            id=habit_id,
            name=name or f"Habit {habit_id}",
            category=category,
            completed_dates={days_ago(n) for n in days},
            created_at=f"{days_ago(created_days_ago)}T08:00:00.000Z",
            life_area=life_area,
        )
    return _make


@pytest.fixture
def make_entry(days_ago):
    """make_entry(n, score=..., completed=..., total=..., habits=[...])"""
    def _make(n, score=None, label=None, completed=None, total=None, habits=(),
              content='Some journal text for the day', mood=None, emotions=()):
        sentiment = None
        if score is not None:
            if label is None:
                label = 'positive' if score > 10 else 'negative' if score < -10 else 'neutral'
            sentiment = SentimentData(score=score, label=label, confidence='medium',
                                      emotions=list(emotions), analyzed_at='2025-01-01T00:00:00.000Z')
        summary = None
        if total is not None:
            summary = HabitsSummary(completed=completed, total=total, habits=list(habits))
        return JournalEntry(
            id=f"e{n}",
            date=days_ago(n),
            content=content,
            mood=mood,
            sentiment=sentiment,
            habits_summary=summary,
            created_at='2025-01-01T00:00:00.000Z',
            updated_at='2025-01-01T00:00:00.000Z',
        )
    return _make


@pytest.fixture
def make_goal():
    def _make(title, progress=0, is_completed=False, goal_id=None, life_area=None):
        return Goal(
            id=goal_id or title.lower().replace(' ', '-'),
            title=title,
            progress=progress,
            is_completed=is_completed,
            created_at='2025-01-01T00:00:00.000Z',
            life_area=life_area,
        )
    return _make
