"""
Correlation Service - Joins same-day habit completion with journal sentiment.

The output is descriptive: partition averages plus threshold-based insight
sentences. It is not a statistical correlation coefficient.
"""
import logging
from typing import Dict, List, Optional

from glowhabit.helpers.metric_helpers import mean_or_zero, round_half_up
from glowhabit.models import JournalEntry

logger = logging.getLogger(__name__)

MIN_DATA_POINTS = 3
HIGH_COMPLETION_RATIO = 0.7
LOW_COMPLETION_RATIO = 0.3
MIN_GROUP_SIZE = 2
MOOD_GAP_THRESHOLD = 15
LOW_MOOD_THRESHOLD = -10
HABIT_MIN_OCCURRENCES = 3
HABIT_POSITIVE_THRESHOLD = 30
MAX_INSIGHTS = 3


class CorrelationService:

    @staticmethod
    def habit_mood_correlation(entries: List[JournalEntry]) -> Optional[Dict]:
        """
        Compare sentiment on high- and low-completion days.

        Only entries with both a habits summary and a sentiment count.

        Returns:
            None with fewer than 3 such entries, otherwise
            {
                'highCompletionAvgMood': int,
                'lowCompletionAvgMood': int,
                'insights': [str] (at most 3),
                'dataPoints': int
            }
        """
        paired = [e for e in entries if e.habits_summary is not None and e.sentiment is not None]
        if len(paired) < MIN_DATA_POINTS:
            logger.debug(f"Not enough paired entries for correlation: {len(paired)}")
            return None

        high = [e.sentiment.score for e in paired
                if e.habits_summary.completion_ratio >= HIGH_COMPLETION_RATIO]
        low = [e.sentiment.score for e in paired
               if e.habits_summary.completion_ratio < LOW_COMPLETION_RATIO]
        avg_high = mean_or_zero(high)
        avg_low = mean_or_zero(low)

        insights = []
        if len(high) >= MIN_GROUP_SIZE and avg_high > avg_low + MOOD_GAP_THRESHOLD:
            insights.append("Your mood improves on days you complete more habits")
        if len(low) >= MIN_GROUP_SIZE and avg_low < LOW_MOOD_THRESHOLD:
            insights.append("Lower mood detected on low-habit completion days")

        # Habit names in first-seen order
        habit_scores: Dict[str, List[int]] = {}
        for entry in paired:
            for habit_name in entry.habits_summary.habits:
                habit_scores.setdefault(habit_name, []).append(entry.sentiment.score)

        for habit_name, scores in habit_scores.items():
            if len(scores) >= HABIT_MIN_OCCURRENCES and mean_or_zero(scores) > HABIT_POSITIVE_THRESHOLD:
                insights.append(f'Completing "{habit_name}" correlates with better mood')

        return {
            'highCompletionAvgMood': round_half_up(avg_high),
            'lowCompletionAvgMood': round_half_up(avg_low),
            'insights': insights[:MAX_INSIGHTS],
            'dataPoints': len(paired),
        }
