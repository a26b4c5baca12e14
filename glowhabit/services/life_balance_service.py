"""
Life Balance Service - Scores the four life areas and how evenly they are served.

Per area:
    score = round(0.6 * habit completion rate + 0.4 * mean goal progress)
The completion rate only counts habit-days on or after each habit's creation.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from glowhabit.exceptions import ValidationError
from glowhabit.helpers.metric_helpers import (
    daily_completion_matrix, mean_or_zero, round_half_up, safe_ratio, stability_score,
)
from glowhabit.models import Goal, Habit
from glowhabit.utils.constants import (
    CATEGORY_TO_LIFE_AREA, DEFAULT_LIFE_AREA, DEFAULT_WINDOW_DAYS, GOAL_AREA_KEYWORDS,
    LIFE_AREA_LABELS, LIFE_AREAS, TREND_DOWN, TREND_STABLE, TREND_UP, TREND_WINDOW_DAYS,
)
from glowhabit.utils.time_utils import DateLike, last_n_days, parse_iso_date, resolve_today

logger = logging.getLogger(__name__)

HABIT_WEIGHT = 0.6
GOAL_WEIGHT = 0.4
TREND_THRESHOLD = 0.1
THRIVING_SCORE = 50
NEEDS_ATTENTION_SCORE = 30
BALANCED_STABILITY = 80
UNBALANCED_STABILITY = 50


@dataclass
class AreaScore:
    area: str
    score: int
    habit_count: int
    completion_rate: int
    goal_progress: int
    trend: str

    @property
    def label(self) -> str:
        return LIFE_AREA_LABELS[self.area]

    def to_dict(self) -> Dict:
        return {
            'area': self.area,
            'score': self.score,
            'habitCount': self.habit_count,
            'completionRate': self.completion_rate,
            'goalProgress': self.goal_progress,
            'trend': self.trend,
        }


class LifeBalanceService:

    @staticmethod
    def habit_life_area(habit: Habit) -> str:
        """An explicit life area wins; otherwise the category decides."""
        if habit.life_area in LIFE_AREAS:
            return habit.life_area
        return CATEGORY_TO_LIFE_AREA.get(habit.category, DEFAULT_LIFE_AREA)

    @staticmethod
    def goal_matches_area(goal: Goal, area: str) -> bool:
        """
        Explicitly assigned goals belong to their area only. Others match any
        area whose keywords appear in the title, so one goal may count twice.
        """
        if goal.life_area in LIFE_AREAS:
            return goal.life_area == area
        title = goal.title.lower()
        return any(keyword in title for keyword in GOAL_AREA_KEYWORDS[area])

    @staticmethod
    def _eligibility(habits: List[Habit], days: List[str]) -> np.ndarray:
        """days x habits mask: True where the habit existed on that day."""
        day_ordinals = np.array([parse_iso_date(d).toordinal() for d in days])
        created = []
        for habit in habits:
            try:
                created.append(parse_iso_date(habit.created_at).toordinal())
            except ValidationError:
                # Unknown creation date: eligible for the whole window
                created.append(day_ordinals.min() if len(day_ordinals) else 0)
        return day_ordinals[:, None] >= np.array(created, dtype=int)[None, :]

    @staticmethod
    def area_score(area: str, habits: List[Habit], goals: List[Goal],
                   as_of_date: Optional[DateLike] = None,
                   window_days: int = DEFAULT_WINDOW_DAYS) -> AreaScore:
        """
        Score one area from the habits and goals already assigned to it.

        Args:
            area: Life area id, used as the label of the result
            habits: Habits in the area
            goals: Goals matched to the area
            as_of_date: Window end (default: today)
            window_days: Trailing window for the completion rate
        """
        if not habits and not goals:
            return AreaScore(area, 0, 0, 0, 0, TREND_STABLE)

        today = resolve_today(as_of_date)
        span = max(window_days, 2 * TREND_WINDOW_DAYS)
        days = last_n_days(span, today)

        completed = daily_completion_matrix(
            {str(i): h.completed_dates for i, h in enumerate(habits)}, days
        ).to_numpy(dtype=bool).reshape(len(days), len(habits))
        eligible = LifeBalanceService._eligibility(habits, days).reshape(len(days), len(habits))
        hits = completed & eligible

        def rate(rows: slice) -> float:
            return safe_ratio(int(hits[rows].sum()), int(eligible[rows].sum()))

        completion_rate = rate(slice(0, window_days)) * 100
        goal_progress = mean_or_zero([g.progress for g in goals])
        score = round_half_up(completion_rate * HABIT_WEIGHT + goal_progress * GOAL_WEIGHT)

        recent = rate(slice(0, TREND_WINDOW_DAYS))
        older = rate(slice(TREND_WINDOW_DAYS, 2 * TREND_WINDOW_DAYS))
        if recent > older + TREND_THRESHOLD:
            trend = TREND_UP
        elif recent < older - TREND_THRESHOLD:
            trend = TREND_DOWN
        else:
            trend = TREND_STABLE

        return AreaScore(
            area=area,
            score=score,
            habit_count=len(habits),
            completion_rate=round_half_up(completion_rate),
            goal_progress=round_half_up(goal_progress),
            trend=trend,
        )

    @staticmethod
    def score(habits: List[Habit], goals: List[Goal], as_of_date: Optional[DateLike] = None) -> Dict:
        """
        Score every life area and the balance between them.

        Returns:
            {
                'overallScore': int mean of area scores,
                'areaScores': [AreaScore dicts] in LIFE_AREAS order,
                'stabilityScore': int 0-100,
                'insights': [str]
            }
        """
        area_scores = []
        for area in LIFE_AREAS:
            area_habits = [h for h in habits if LifeBalanceService.habit_life_area(h) == area]
            area_goals = [g for g in goals if LifeBalanceService.goal_matches_area(g, area)]
            area_scores.append(LifeBalanceService.area_score(area, area_habits, area_goals, as_of_date))

        scores = [s.score for s in area_scores]
        stability = stability_score(scores)

        return {
            'overallScore': round_half_up(mean_or_zero(scores)),
            'areaScores': [s.to_dict() for s in area_scores],
            'stabilityScore': stability,
            'insights': LifeBalanceService.insights(area_scores, stability),
        }

    @staticmethod
    def insights(area_scores: List[AreaScore], stability: int) -> List[str]:
        insights = []
        if area_scores:
            # Stable sort: ties keep LIFE_AREAS order
            ranked = sorted(area_scores, key=lambda s: s.score, reverse=True)
            best, worst = ranked[0], ranked[-1]
            if best.score >= THRIVING_SCORE:
                insights.append(f"{best.label} is thriving with {best.score}% score")
            if worst.score < NEEDS_ATTENTION_SCORE:
                insights.append(f"{worst.label} needs attention: only {worst.score}%")

        improving = [s.label for s in area_scores if s.trend == TREND_UP]
        declining = [s.label for s in area_scores if s.trend == TREND_DOWN]
        if improving:
            insights.append(f"Improving: {', '.join(improving)}")
        if declining:
            insights.append(f"Declining: {', '.join(declining)}")

        if stability >= BALANCED_STABILITY:
            insights.append("Great balance! Your life areas are well-distributed")
        elif stability < UNBALANCED_STABILITY:
            insights.append("Consider redistributing focus for better balance")
        return insights
