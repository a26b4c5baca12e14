import random
import pytest
from datetime import datetime, timezone

from glowhabit.repositories import GlowMomentRepository
from glowhabit.services.glow_moment_service import (
    AFFIRMATIONS, CALM_QUOTES, GLOW_MOMENT_DEFINITIONS, GlowMomentService,
)
from glowhabit.utils.constants import STORAGE_GLOW_MOMENTS

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo(kv_store):
    return GlowMomentRepository(kv_store.store(STORAGE_GLOW_MOMENTS))


def counters(**overrides):
    base = {
        'total_completions': 0,
        'longest_habit_streak': 0,
        'journal_entries': 0,
        'journal_streak': 0,
        'life_area_count': 0,
    }
    base.update(overrides)
    return base


class TestGlowMomentEvaluationUnit:

    def test_nothing_unlocked(self):
        moments = GlowMomentService.evaluate(counters(), NOW)
        assert len(moments) == len(GLOW_MOMENT_DEFINITIONS) == 8
        assert not any(m.unlocked for m in moments)

    def test_thresholds(self):
        moments = GlowMomentService.evaluate(
            counters(total_completions=50, longest_habit_streak=7, journal_entries=1), NOW
        )
        unlocked = [m.id for m in moments if m.unlocked]
        assert unlocked == ['first_spark', 'week_glow', 'reflection_start', 'consistency_50']
        assert moments[0].to_dict()['unlockedAt'] == NOW.isoformat()

    def test_affirmation_is_deterministic(self):
        assert GlowMomentService.affirmation_for('first_spark') == AFFIRMATIONS[ord('f') % 10]
        assert GlowMomentService.affirmation_for('week_glow') == "Be proud of how far you've come."
        first = GlowMomentService.evaluate(counters(), NOW)
        second = GlowMomentService.evaluate(counters(total_completions=100), NOW)
        assert [m.affirmation for m in first] == [m.affirmation for m in second]

    def test_random_affirmation(self):
        assert GlowMomentService.random_affirmation(random.Random(7)) in AFFIRMATIONS


class TestGlowMomentCheckNewUnit:

    def test_reveals_each_moment_once(self, repo):
        moments = GlowMomentService.evaluate(counters(total_completions=1, journal_entries=1), NOW)

        first = GlowMomentService.check_new(moments, repo)
        assert first.id == 'first_spark'
        assert repo.seen_ids() == {'first_spark', 'reflection_start'}

        # Both were recorded, so nothing new on the next check
        assert GlowMomentService.check_new(moments, repo) is None

    def test_later_unlock_is_revealed(self, repo):
        GlowMomentService.check_new(GlowMomentService.evaluate(counters(total_completions=1), NOW), repo)
        moments = GlowMomentService.evaluate(counters(total_completions=10, longest_habit_streak=7), NOW)
        assert GlowMomentService.check_new(moments, repo).id == 'week_glow'

    def test_seen_set_keeps_relocked_ids(self, repo):
        GlowMomentService.check_new(
            GlowMomentService.evaluate(counters(total_completions=5, longest_habit_streak=7), NOW), repo
        )
        # Streak broke, then recovered
        GlowMomentService.check_new(GlowMomentService.evaluate(counters(total_completions=5), NOW), repo)
        assert 'week_glow' in repo.seen_ids()
        relocked = GlowMomentService.evaluate(counters(total_completions=5, longest_habit_streak=7), NOW)
        assert GlowMomentService.check_new(relocked, repo) is None

    def test_nothing_unlocked_writes_nothing(self, repo, kv_store):
        assert GlowMomentService.check_new(GlowMomentService.evaluate(counters(), NOW), repo) is None
        assert kv_store.get_item(STORAGE_GLOW_MOMENTS) is None

    def test_malformed_store_reads_empty(self, kv_store, repo):
        kv_store.set_item(STORAGE_GLOW_MOMENTS, '{not json')
        assert repo.seen_ids() == set()


class TestGlowRewardsUnit:

    def test_rewards_unlock_by_count(self):
        moments = GlowMomentService.evaluate(counters(total_completions=1, journal_entries=1), NOW)
        rewards = GlowMomentService.rewards(moments)

        assert [r['isUnlocked'] for r in rewards] == [True, True, False]
        assert rewards[0]['content'] == CALM_QUOTES[0]
        assert rewards[2]['requiredMoments'] == 3

    def test_unlocked_quotes(self):
        moments = GlowMomentService.evaluate(counters(total_completions=1), NOW)
        assert GlowMomentService.unlocked_quotes(moments) == [CALM_QUOTES[0]]
        assert GlowMomentService.unlocked_quotes(GlowMomentService.evaluate(counters(), NOW)) == []
