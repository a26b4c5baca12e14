"""
Journal Service - Saving entries with sentiment and the journal/mood statistics.

Mood rules:
- An explicit mood on save marks the entry manual, permanently.
- Without an explicit mood, mood is derived from sentiment unless the entry
  was already manual, in which case the stored mood stays.
"""
import logging
from collections import Counter
from datetime import timedelta
from typing import Dict, List, Optional

from glowhabit import settings
from glowhabit.exceptions import ValidationError
from glowhabit.helpers.metric_helpers import (
    calendar_days, emotional_stability, mean_or_zero, round_half_up, safe_ratio,
)
from glowhabit.models import HabitsSummary, JournalEntry, SentimentData, utc_now_iso
from glowhabit.repositories import JournalRepository, generate_id
from glowhabit.services.sentiment_service import SentimentService
from glowhabit.services.streak_service import StreakService
from glowhabit.utils.constants import (
    DEFAULT_WINDOW_DAYS, MIN_ANALYZABLE_CHARS, MOOD_CHOICES, SENTIMENT_POSITIVE,
)
from glowhabit.utils.logging_utils import log_with_context
from glowhabit.utils.time_utils import DateLike, month_bounds, resolve_today, to_iso

logger = logging.getLogger(__name__)


class JournalService:

    @staticmethod
    def analyze_content(content: str, enabled: bool = True,
                        lexicon: Optional[Dict[str, float]] = None) -> Optional[SentimentData]:
        """Sentiment for content long enough to analyse, else None."""
        if not enabled or not settings.SENTIMENT_ENABLED:
            return None
        if not content or len(content.strip()) < MIN_ANALYZABLE_CHARS:
            return None
        result = SentimentService.analyze(content, lexicon=lexicon)
        return SentimentService.to_sentiment_data(result)

    @staticmethod
    def save_entry(repository: JournalRepository, on_date: DateLike, content: str,
                   mood: Optional[str] = None, habits_summary: Optional[HabitsSummary] = None,
                   manual_mood: bool = False,
                   lexicon: Optional[Dict[str, float]] = None) -> JournalEntry:
        """
        Create or update the entry for a date.

        Args:
            repository: JournalRepository to write to
            on_date: Entry date
            content: Free text
            mood: Explicit mood; marks the entry manual
            habits_summary: Same-day habit completion to attach
            manual_mood: Treat the entry as manual even without a mood
            lexicon: Override the sentiment lexicon

        Returns:
            The stored entry
        """
        if mood is not None and mood not in MOOD_CHOICES:
            raise ValidationError('mood', f"must be one of {', '.join(MOOD_CHOICES)}")

        day = to_iso(on_date)
        now = utc_now_iso()
        enabled = repository.settings()['sentimentAnalysisEnabled']
        sentiment = JournalService.analyze_content(content, enabled, lexicon)
        existing = repository.get_by_date(day)

        is_manual = manual_mood or mood is not None or (existing is not None and existing.manual_mood)
        final_mood = mood
        if final_mood is None and not is_manual and sentiment is not None:
            final_mood = SentimentService.mood_from_sentiment(sentiment.label, sentiment.score)

        if existing is not None:
            entry = JournalEntry(
                id=existing.id,
                date=day,
                content=content,
                mood=final_mood if final_mood is not None else existing.mood,
                manual_mood=is_manual,
                sentiment=sentiment or existing.sentiment,
                habits_summary=habits_summary or existing.habits_summary,
                created_at=existing.created_at,
                updated_at=now,
            )
        else:
            entry = JournalEntry(
                id=generate_id(),
                date=day,
                content=content,
                mood=final_mood,
                manual_mood=is_manual,
                sentiment=sentiment,
                habits_summary=habits_summary,
                created_at=now,
                updated_at=now,
            )

        repository.upsert(entry)
        log_with_context(
            'info', "Journal entry saved",
            date=day, mood=entry.mood, manual_mood=entry.manual_mood,
            sentiment_label=entry.sentiment.label if entry.sentiment else None,
        )
        return entry

    @staticmethod
    def journal_stats(entries: List[JournalEntry], as_of_date: Optional[DateLike] = None) -> Dict:
        today = resolve_today(as_of_date)
        dates = [e.date for e in entries]
        streak = StreakService.calculate_streak(dates, today)
        month_prefix = today.isoformat()[:7]
        total_words = sum(e.word_count for e in entries)

        return {
            'currentStreak': streak.current_streak,
            'longestStreak': streak.longest_streak,
            'totalEntries': len(entries),
            'thisMonthEntries': sum(1 for e in entries if e.date.startswith(month_prefix)),
            'avgWordsPerEntry': round_half_up(safe_ratio(total_words, len(entries))),
        }

    @staticmethod
    def month_entries(entries: List[JournalEntry], month: DateLike) -> List[Dict]:
        """One row per day of the month, with or without an entry."""
        by_date = {e.date: e for e in entries}
        start, end = month_bounds(month)
        rows = []
        for day in calendar_days(start, end):
            entry = by_date.get(day)
            rows.append({
                'date': day,
                'hasEntry': entry is not None,
                'wordCount': entry.word_count if entry else 0,
                'mood': entry.mood if entry else None,
                'sentiment': entry.sentiment.to_dict() if entry and entry.sentiment else None,
            })
        return rows

    @staticmethod
    def mood_trend(entries: List[JournalEntry], days: int = DEFAULT_WINDOW_DAYS,
                   as_of_date: Optional[DateLike] = None) -> List[Dict]:
        """Chronological days within the window that carry a mood or sentiment."""
        today = resolve_today(as_of_date)
        by_date = {e.date: e for e in entries}
        trend = []
        for offset in range(days - 1, -1, -1):
            day = (today - timedelta(days=offset)).isoformat()
            entry = by_date.get(day)
            if entry and (entry.mood or entry.sentiment):
                trend.append({
                    'date': day,
                    'mood': entry.mood,
                    'sentiment': entry.sentiment.to_dict() if entry.sentiment else None,
                })
        return trend

    @staticmethod
    def mood_analytics(entries: List[JournalEntry], days: int = DEFAULT_WINDOW_DAYS,
                       as_of_date: Optional[DateLike] = None) -> Dict:
        """
        Aggregate sentiment over entries dated on or after today - ``days``.

        Returns:
            {
                'averageScore': int,
                'positiveRatio': int percent,
                'emotionalStability': int 0-100,
                'dominantEmotions': [{'emotion', 'count'}] top 5,
                'moodByDay': [{'date', 'score', 'label'}] ascending by date
            }
        """
        cutoff = (resolve_today(as_of_date) - timedelta(days=days)).isoformat()
        recent = [e for e in entries if e.sentiment is not None and e.date >= cutoff]
        scores = [e.sentiment.score for e in recent]
        positive = sum(1 for e in recent if e.sentiment.label == SENTIMENT_POSITIVE)

        emotion_counts = Counter()
        for entry in recent:
            emotion_counts.update(entry.sentiment.emotions)

        return {
            'averageScore': round_half_up(mean_or_zero(scores)),
            'positiveRatio': round_half_up(safe_ratio(positive, len(recent)) * 100),
            'emotionalStability': emotional_stability(scores),
            'dominantEmotions': [
                {'emotion': emotion, 'count': count}
                for emotion, count in emotion_counts.most_common(5)
            ],
            'moodByDay': sorted(
                ({'date': e.date, 'score': e.sentiment.score, 'label': e.sentiment.label} for e in recent),
                key=lambda row: row['date'],
            ),
        }
