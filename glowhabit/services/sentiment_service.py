"""
Sentiment Service - Lexicon scoring of journal text into score, label,
confidence and emotion tags, plus the sentiment -> mood mapping.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from glowhabit.helpers import nlp_helpers
from glowhabit.helpers.metric_helpers import round_half_up
from glowhabit.models import SentimentData, utc_now_iso
from glowhabit.utils.constants import (
    CONFIDENCE_HIGH, CONFIDENCE_LOW, CONFIDENCE_MEDIUM,
    MOOD_GOOD, MOOD_GREAT, MOOD_LOW, MOOD_OKAY, MOOD_ROUGH,
    SENTIMENT_LABEL_THRESHOLD, SENTIMENT_NEGATIVE, SENTIMENT_NEUTRAL, SENTIMENT_POSITIVE,
    SENTIMENT_SCALE, STRONG_MOOD_THRESHOLD,
)

logger = logging.getLogger(__name__)


@dataclass
class SentimentResult:
    score: int
    comparative: float
    label: str
    confidence: str
    emotions: List[str] = field(default_factory=list)
    positive_words: List[str] = field(default_factory=list)
    negative_words: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'score': self.score,
            'comparative': self.comparative,
            'label': self.label,
            'confidence': self.confidence,
            'emotions': list(self.emotions),
            'positiveWords': list(self.positive_words),
            'negativeWords': list(self.negative_words),
        }


class SentimentService:

    @staticmethod
    def analyze(text: str, lexicon: Optional[Dict[str, float]] = None) -> SentimentResult:
        """
        Score free text.

        Args:
            text: Journal content
            lexicon: word -> valence table; defaults to the NLTK VADER lexicon

        Returns:
            SentimentResult with score in [-100, 100]. Blank text is neutral
            with low confidence and no emotions.
        """
        if not text or not text.strip():
            return SentimentResult(
                score=0, comparative=0.0, label=SENTIMENT_NEUTRAL, confidence=CONFIDENCE_LOW,
            )

        if lexicon is None:
            lexicon = nlp_helpers.load_lexicon()

        scored = nlp_helpers.score_tokens(nlp_helpers.tokenize(text), lexicon)
        scaled = max(-100.0, min(100.0, scored['comparative'] * SENTIMENT_SCALE))

        if scaled > SENTIMENT_LABEL_THRESHOLD:
            label = SENTIMENT_POSITIVE
        elif scaled < -SENTIMENT_LABEL_THRESHOLD:
            label = SENTIMENT_NEGATIVE
        else:
            label = SENTIMENT_NEUTRAL

        total_words = nlp_helpers.word_count(text)
        sentiment_words = len(scored['positive']) + len(scored['negative'])
        ratio = sentiment_words / max(total_words, 1)

        if ratio < 0.05 or total_words < 10:
            confidence = CONFIDENCE_LOW
        elif ratio < 0.15:
            confidence = CONFIDENCE_MEDIUM
        else:
            confidence = CONFIDENCE_HIGH

        return SentimentResult(
            score=round_half_up(scaled),
            comparative=scored['comparative'],
            label=label,
            confidence=confidence,
            emotions=nlp_helpers.detect_emotions(text),
            positive_words=scored['positive'],
            negative_words=scored['negative'],
        )

    @staticmethod
    def mood_from_sentiment(label: str, score: int) -> str:
        if label == SENTIMENT_POSITIVE:
            return MOOD_GREAT if score >= STRONG_MOOD_THRESHOLD else MOOD_GOOD
        if label == SENTIMENT_NEUTRAL:
            return MOOD_OKAY
        return MOOD_ROUGH if score <= -STRONG_MOOD_THRESHOLD else MOOD_LOW

    @staticmethod
    def to_sentiment_data(result: SentimentResult, analyzed_at: Optional[str] = None) -> SentimentData:
        """The persisted subset of a result."""
        return SentimentData(
            score=result.score,
            label=result.label,
            confidence=result.confidence,
            emotions=list(result.emotions),
            analyzed_at=analyzed_at or utc_now_iso(),
        )
