"""
Suggestion Service - Client for the remote habit-suggestion endpoint.

Contract:
    request  {habits: [{name, category, completionRate, currentStreak,
              isCompletedToday}], moodTrend, timeOfDay, journalMood}
    response {suggestion, affirmation, tip?} or {error, fallback: {...}}

Failures never reach the caller: any network error, non-2xx status or
malformed body is replaced by a local fallback suggestion.
"""
import logging
import random
from datetime import datetime
from typing import Dict, List, Optional

import requests

from glowhabit import settings
from glowhabit.exceptions import SuggestionServiceError
from glowhabit.services.event_log_service import EventLog
from glowhabit.services.journal_service import JournalService
from glowhabit.services.rate_service import RateService
from glowhabit.utils.constants import SENTIMENT_NEGATIVE, SENTIMENT_NEUTRAL, SENTIMENT_POSITIVE
from glowhabit.utils.time_utils import DateLike, resolve_today, time_of_day

logger = logging.getLogger(__name__)

MOOD_TREND_THRESHOLD = 20

FALLBACK_SUGGESTIONS = [
    {
        'suggestion': "Start with just 2 minutes today.",
        'affirmation': "Small steps lead to big changes.",
        'tip': "On busy days, micro-habits still count.",
    },
    {
        'suggestion': "Be gentle with yourself right now.",
        'affirmation': "You're doing better than you think.",
        'tip': None,
    },
    {
        'suggestion': "Focus on one thing that matters to you.",
        'affirmation': "Progress over perfection.",
        'tip': "Try habit stacking: attach a new habit to one you already do.",
    },
]


def _is_suggestion(data) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get('suggestion'), str)
        and isinstance(data.get('affirmation'), str)
    )


def _normalize(data: Dict) -> Dict:
    return {
        'suggestion': data['suggestion'],
        'affirmation': data['affirmation'],
        'tip': data.get('tip'),
    }


class SuggestionService:
    """
    Fetches one suggestion per call.

    Args:
        url: Endpoint URL (default: settings.SUGGESTION_URL)
        timeout: Request timeout in seconds
        session: requests.Session to reuse
        rng: Random source for fallback picks
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None,
                 api_key: Optional[str] = None, session: Optional[requests.Session] = None,
                 rng: Optional[random.Random] = None):
        self.url = url if url is not None else settings.SUGGESTION_URL
        self.timeout = timeout if timeout is not None else settings.SUGGESTION_TIMEOUT
        self.api_key = api_key if api_key is not None else settings.SUGGESTION_API_KEY
        self.session = session or requests.Session()
        self.rng = rng or random.Random()

    @staticmethod
    def mood_trend(average_score: int) -> str:
        if average_score > MOOD_TREND_THRESHOLD:
            return SENTIMENT_POSITIVE
        if average_score < -MOOD_TREND_THRESHOLD:
            return SENTIMENT_NEGATIVE
        return SENTIMENT_NEUTRAL

    @staticmethod
    def build_request(event_log: EventLog, as_of_date: Optional[DateLike] = None,
                      now: Optional[datetime] = None) -> Dict:
        today = resolve_today(as_of_date)
        today_iso = today.isoformat()
        now = now or datetime.now()

        habits: List[Dict] = []
        for habit in event_log.habits:
            stats = RateService.habit_stats(habit, today)
            habits.append({
                'name': habit.name,
                'category': habit.category,
                'completionRate': stats['completionRate'],
                'currentStreak': stats['currentStreak'],
                'isCompletedToday': today_iso in habit.completed_dates,
            })

        analytics = JournalService.mood_analytics(event_log.journal_entries, as_of_date=today)
        today_entry = event_log.journal_entry(today)

        return {
            'habits': habits,
            'moodTrend': SuggestionService.mood_trend(analytics['averageScore']),
            'timeOfDay': time_of_day(now.hour),
            'journalMood': today_entry.mood if today_entry and today_entry.mood else None,
        }

    def fallback(self) -> Dict:
        return dict(self.rng.choice(FALLBACK_SUGGESTIONS))

    def _post(self, payload: Dict) -> Dict:
        """
        POST the request and return a suggestion dict.

        Raises:
            SuggestionServiceError: on any transport, status or body problem
        """
        if not self.url:
            raise SuggestionServiceError("no endpoint configured")

        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f"Bearer {self.api_key}"

        try:
            response = self.session.post(self.url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SuggestionServiceError(str(e)) from e
        except ValueError as e:
            raise SuggestionServiceError(f"malformed response body: {e}") from e

        if isinstance(data, dict) and data.get('error') and _is_suggestion(data.get('fallback')):
            logger.info(f"Suggestion endpoint returned its own fallback: {data['error']}")
            return _normalize(data['fallback'])
        if _is_suggestion(data):
            return _normalize(data)
        raise SuggestionServiceError("response is not a suggestion")

    def fetch(self, event_log: EventLog, as_of_date: Optional[DateLike] = None,
              now: Optional[datetime] = None) -> Dict:
        """
        Get a suggestion for the current state.

        Returns:
            {'suggestion', 'affirmation', 'tip'}; never raises
        """
        if not event_log.habits:
            return dict(FALLBACK_SUGGESTIONS[0])

        payload = self.build_request(event_log, as_of_date, now)
        try:
            return self._post(payload)
        except SuggestionServiceError as e:
            logger.warning(f"Suggestion fetch failed, using local fallback: {e.reason}")
            return self.fallback()
