"""
Glow Moment Service - One-time celebratory unlocks and the rewards they open.

Unlike achievements, glow moments keep a persisted seen-set so the reveal of
each moment happens once.
"""
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from glowhabit.repositories import GlowMomentRepository
from glowhabit.services.achievement_service import (
    JOURNAL_ENTRIES, JOURNAL_STREAK, LIFE_AREA_COUNT, LONGEST_HABIT_STREAK, TOTAL_COMPLETIONS,
)
from glowhabit.utils.logging_utils import log_with_context

logger = logging.getLogger(__name__)

AFFIRMATIONS = [
    "You're making progress, one step at a time.",
    "Small steps lead to big changes.",
    "Your consistency is inspiring.",
    "You showed up today. That matters.",
    "Every effort counts, no matter how small.",
    "You're building something meaningful.",
    "Trust the process. Growth takes time.",
    "You're stronger than you think.",
    "This journey is yours, and you're doing great.",
    "Be proud of how far you've come.",
]

CALM_QUOTES = [
    {'id': 'q1', 'quote': "Almost everything will work again if you unplug it for a few minutes, including you.",
     'author': "Anne Lamott"},
    {'id': 'q2', 'quote': "Nature does not hurry, yet everything is accomplished.", 'author': "Lao Tzu"},
    {'id': 'q3', 'quote': "The present moment is filled with joy and happiness. If you are attentive, you will see it.",
     'author': "Thich Nhat Hanh"},
]

# (reward id, name, description, quote, moments required)
REWARDS = [
    ('quote_1', 'Calm Quote', 'Unlock a peaceful quote', CALM_QUOTES[0], 1),
    ('quote_2', 'Wisdom Quote', 'Unlock words of wisdom', CALM_QUOTES[1], 2),
    ('quote_3', 'Mindful Quote', 'Unlock mindful reflection', CALM_QUOTES[2], 3),
]


@dataclass(frozen=True)
class GlowMomentDefinition:
    id: str
    type: str
    title: str
    description: str
    tier: str
    counter: str
    requirement: int


GLOW_MOMENT_DEFINITIONS = [
    GlowMomentDefinition('first_spark', 'milestone', 'First Spark', 'You completed your first habit',
                         'spark', TOTAL_COMPLETIONS, 1),
    GlowMomentDefinition('week_glow', 'streak', 'Week of Glow', '7-day streak achieved',
                         'glow', LONGEST_HABIT_STREAK, 7),
    GlowMomentDefinition('month_radiance', 'streak', 'Month of Radiance', '30-day streak achieved',
                         'radiance', LONGEST_HABIT_STREAK, 30),
    GlowMomentDefinition('reflection_start', 'reflection', 'Inner Light', 'You started journaling',
                         'spark', JOURNAL_ENTRIES, 1),
    GlowMomentDefinition('reflection_week', 'reflection', 'Mindful Week', 'Journaled for 7 days',
                         'glow', JOURNAL_STREAK, 7),
    GlowMomentDefinition('consistency_50', 'consistency', 'Steady Glow', '50 habits completed',
                         'glow', TOTAL_COMPLETIONS, 50),
    GlowMomentDefinition('consistency_100', 'consistency', 'Radiant Path', '100 habits completed',
                         'radiance', TOTAL_COMPLETIONS, 100),
    GlowMomentDefinition('balance_all', 'balance', 'Life in Balance', 'Habits in all 4 life areas',
                         'brilliance', LIFE_AREA_COUNT, 4),
]


@dataclass
class GlowMoment:
    id: str
    type: str
    title: str
    description: str
    affirmation: str
    tier: str
    unlocked_at: Optional[str] = None

    @property
    def unlocked(self) -> bool:
        return self.unlocked_at is not None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'description': self.description,
            'affirmation': self.affirmation,
            'tier': self.tier,
            'unlockedAt': self.unlocked_at,
        }


class GlowMomentService:

    @staticmethod
    def affirmation_for(moment_id: str) -> str:
        """Fixed affirmation per moment, keyed on the id's first character."""
        return AFFIRMATIONS[ord(moment_id[0]) % len(AFFIRMATIONS)]

    @staticmethod
    def evaluate(counters: Dict[str, int], now: Optional[datetime] = None) -> List[GlowMoment]:
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        return [
            GlowMoment(
                id=d.id,
                type=d.type,
                title=d.title,
                description=d.description,
                affirmation=GlowMomentService.affirmation_for(d.id),
                tier=d.tier,
                unlocked_at=stamp if counters.get(d.counter, 0) >= d.requirement else None,
            )
            for d in GLOW_MOMENT_DEFINITIONS
        ]

    @staticmethod
    def check_new(moments: List[GlowMoment], repository: GlowMomentRepository) -> Optional[GlowMoment]:
        """
        Return the first unlocked moment not shown before, recording it as seen.

        The stored set only grows, so a moment that re-locks and unlocks again
        is not revealed twice. Returns None when there is nothing new.
        """
        seen = repository.seen_ids()
        unlocked_ids = [m.id for m in moments if m.unlocked]
        new_ids = [i for i in unlocked_ids if i not in seen]
        if not new_ids:
            return None

        repository.save_seen_ids(seen | set(unlocked_ids))
        moment = next(m for m in moments if m.id == new_ids[0])
        log_with_context('info', "Glow moment unlocked", moment_id=moment.id, tier=moment.tier)
        return moment

    @staticmethod
    def rewards(moments: List[GlowMoment]) -> List[Dict]:
        count = sum(1 for m in moments if m.unlocked)
        return [
            {
                'id': reward_id,
                'name': name,
                'description': description,
                'type': 'quote',
                'content': quote,
                'requiredMoments': required,
                'isUnlocked': count >= required,
            }
            for reward_id, name, description, quote, required in REWARDS
        ]

    @staticmethod
    def unlocked_quotes(moments: List[GlowMoment]) -> List[Dict]:
        return [dict(r['content']) for r in GlowMomentService.rewards(moments) if r['isUnlocked']]

    @staticmethod
    def random_affirmation(rng: Optional[random.Random] = None) -> str:
        return (rng or random).choice(AFFIRMATIONS)
