"""
NLP utilities for journal text.
Uses the NLTK VADER valence lexicon as a word-polarity table; scoring itself
is a plain per-word sum, not VADER's rule engine.
"""
import logging
from typing import Dict, List, Optional

from glowhabit import settings
from glowhabit.utils.constants import EMOTION_KEYWORDS, MAX_EMOTIONS, NEGATORS

logger = logging.getLogger(__name__)

# Lazy import NLTK to avoid startup overhead
_nltk_initialized = False
_lexicon: Optional[Dict[str, float]] = None
_tokenizer = None

TOKEN_PATTERN = r"[a-z0-9']+"


def _ensure_nltk():
    """Ensures NLTK is importable and the VADER lexicon is downloaded."""
    global _nltk_initialized
    if _nltk_initialized:
        return

    import nltk
    try:
        nltk.data.find('sentiment/vader_lexicon.zip')
    except LookupError:
        if not settings.NLTK_AUTO_DOWNLOAD:
            raise
        logger.info("Downloading NLTK vader_lexicon...")
        nltk.download('vader_lexicon', quiet=True)

    _nltk_initialized = True


def load_lexicon() -> Dict[str, float]:
    """
    Returns the word -> valence table, loading it once per process.

    Falls back to an empty lexicon (every text scores neutral) if NLTK or
    its data is unavailable; the fallback is cached like a real lexicon.
    """
    global _lexicon
    if _lexicon is not None:
        return _lexicon

    try:
        _ensure_nltk()
        from nltk.sentiment.vader import SentimentIntensityAnalyzer

        _lexicon = dict(SentimentIntensityAnalyzer().lexicon)
        logger.info(f"Loaded sentiment lexicon with {len(_lexicon)} words")
    except (ImportError, LookupError, OSError) as e:
        logger.warning(f"Sentiment lexicon unavailable: {e}, scoring as neutral")
        _lexicon = {}
    return _lexicon


def reset_lexicon_cache():
    """Forget the loaded lexicon so the next call reloads it."""
    global _lexicon, _nltk_initialized
    _lexicon = None
    _nltk_initialized = False


def _get_tokenizer():
    global _tokenizer
    if _tokenizer is None:
        from nltk.tokenize import RegexpTokenizer
        _tokenizer = RegexpTokenizer(TOKEN_PATTERN)
    return _tokenizer


def preprocess_text(text: str) -> str:
    """
    Normalizes text: lowercase, strip whitespace.
    """
    if not text:
        return ""
    return text.strip().lower()


def tokenize(text: str) -> List[str]:
    """
    Splits text into lowercase word tokens, keeping apostrophes.
    """
    return _get_tokenizer().tokenize(preprocess_text(text))


def word_count(text: str) -> int:
    """Whitespace-separated word count."""
    return len(text.split()) if text else 0


def score_tokens(tokens: List[str], lexicon: Dict[str, float]) -> Dict:
    """
    Sums word valences from ``lexicon``.

    A negator immediately before a scored word flips its sign.

    Returns:
        {
            'score': float (sum of valences),
            'comparative': float (score per token),
            'positive': [words with positive contribution],
            'negative': [words with negative contribution]
        }
    """
    score = 0.0
    positive, negative = [], []

    for i, token in enumerate(tokens):
        valence = lexicon.get(token)
        if not valence:
            continue
        if i > 0 and tokens[i - 1] in NEGATORS:
            valence = -valence
        score += valence
        if valence > 0:
            positive.append(token)
        else:
            negative.append(token)

    return {
        'score': score,
        'comparative': score / len(tokens) if tokens else 0.0,
        'positive': positive,
        'negative': negative,
    }


def detect_emotions(text: str, limit: int = MAX_EMOTIONS) -> List[str]:
    """
    Flags each emotion whose keyword list has a case-insensitive substring
    match in ``text``. Order follows EMOTION_KEYWORDS; at most ``limit``.
    """
    lower_text = preprocess_text(text)
    if not lower_text:
        return []
    detected = [
        emotion for emotion, keywords in EMOTION_KEYWORDS.items()
        if any(keyword in lower_text for keyword in keywords)
    ]
    return detected[:limit]
