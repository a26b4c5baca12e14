# glowhabit/utils/constants.py
"""
Central constants file for life areas, moods, tiers and storage keys.
Use these constants instead of hardcoded strings to keep the engines aligned.
"""

# ============================================
# LIFE AREAS
# ============================================
LIFE_AREA_HEALTH = "health"
LIFE_AREA_CAREER = "career"
LIFE_AREA_MIND = "mind"
LIFE_AREA_RELATIONSHIPS = "relationships"

LIFE_AREAS = [
    LIFE_AREA_HEALTH,
    LIFE_AREA_CAREER,
    LIFE_AREA_MIND,
    LIFE_AREA_RELATIONSHIPS,
]

LIFE_AREA_LABELS = {
    LIFE_AREA_HEALTH: "Health",
    LIFE_AREA_CAREER: "Career",
    LIFE_AREA_MIND: "Mind",
    LIFE_AREA_RELATIONSHIPS: "Relationships",
}

# Habit category -> life area. Anything missing falls into career.
CATEGORY_TO_LIFE_AREA = {
    "health": LIFE_AREA_HEALTH,
    "career": LIFE_AREA_CAREER,
    "mind": LIFE_AREA_MIND,
    "relationships": LIFE_AREA_RELATIONSHIPS,
    "fitness": LIFE_AREA_HEALTH,
    "nutrition": LIFE_AREA_HEALTH,
    "wellness": LIFE_AREA_MIND,
    "growth": LIFE_AREA_MIND,
    "custom": LIFE_AREA_CAREER,
}
DEFAULT_LIFE_AREA = LIFE_AREA_CAREER

# Goal title substrings per area, checked in LIFE_AREAS order
GOAL_AREA_KEYWORDS = {
    LIFE_AREA_HEALTH: ["health", "fitness", "exercise", "weight"],
    LIFE_AREA_CAREER: ["work", "career", "project", "learn"],
    LIFE_AREA_MIND: ["mental", "meditat", "read", "mindful"],
    LIFE_AREA_RELATIONSHIPS: ["friend", "family", "social", "relationship"],
}

# ============================================
# MOODS & SENTIMENT
# ============================================
MOOD_GREAT = "great"
MOOD_GOOD = "good"
MOOD_OKAY = "okay"
MOOD_LOW = "low"
MOOD_ROUGH = "rough"

MOOD_CHOICES = [MOOD_GREAT, MOOD_GOOD, MOOD_OKAY, MOOD_LOW, MOOD_ROUGH]

SENTIMENT_POSITIVE = "positive"
SENTIMENT_NEUTRAL = "neutral"
SENTIMENT_NEGATIVE = "negative"

CONFIDENCE_LOW = "low"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_HIGH = "high"

SENTIMENT_SCALE = 50
SENTIMENT_LABEL_THRESHOLD = 10
STRONG_MOOD_THRESHOLD = 50
MAX_EMOTIONS = 3
MIN_ANALYZABLE_CHARS = 10

# Ordered: detection reports the first three matches in this order
EMOTION_KEYWORDS = {
    "calm": ["calm", "peaceful", "relaxed", "serene", "tranquil", "quiet", "still",
             "centered", "balanced", "composed"],
    "stressed": ["stressed", "pressure", "overwhelmed", "tense", "anxious", "worried",
                 "frantic", "hectic", "deadline", "rush"],
    "happy": ["happy", "joy", "excited", "wonderful", "amazing", "great", "fantastic",
              "delighted", "thrilled", "elated", "cheerful"],
    "anxious": ["anxious", "nervous", "worried", "uneasy", "restless", "uncertain",
                "apprehensive", "afraid", "fear", "panic"],
    "motivated": ["motivated", "inspired", "driven", "determined", "focused", "energized",
                  "ambitious", "productive", "goal", "achieve"],
    "overwhelmed": ["overwhelmed", "exhausted", "tired", "drained", "burned", "too much",
                    "can't", "difficult", "hard", "struggling"],
    "grateful": ["grateful", "thankful", "appreciate", "blessed", "fortunate", "lucky",
                 "gratitude", "thanks"],
    "sad": ["sad", "unhappy", "down", "depressed", "lonely", "empty", "hurt",
            "disappointed", "upset", "crying", "tears"],
    "excited": ["excited", "thrilled", "eager", "enthusiastic", "pumped", "can't wait",
                "looking forward", "anticipating"],
    "peaceful": ["peace", "content", "satisfied", "harmony", "gentle", "soft", "rest",
                 "meditate", "mindful", "present"],
}

# Tokens that flip the polarity of the following word
NEGATORS = {
    "not", "no", "never", "none", "nobody", "nothing", "neither", "nor", "nowhere",
    "cannot", "cant", "can't", "dont", "don't", "doesnt", "doesn't", "didnt", "didn't",
    "isnt", "isn't", "wasnt", "wasn't", "arent", "aren't", "wont", "won't",
    "wouldnt", "wouldn't", "shouldnt", "shouldn't", "couldnt", "couldn't",
    "havent", "haven't", "hasnt", "hasn't", "hadnt", "hadn't", "aint", "ain't",
}

# ============================================
# TRENDS
# ============================================
TREND_UP = "up"
TREND_DOWN = "down"
TREND_STABLE = "stable"

# ============================================
# GAMIFICATION
# ============================================
TIER_BRONZE = "bronze"
TIER_SILVER = "silver"
TIER_GOLD = "gold"
TIER_PLATINUM = "platinum"

TIER_POINTS = {
    TIER_BRONZE: 10,
    TIER_SILVER: 25,
    TIER_GOLD: 50,
    TIER_PLATINUM: 100,
}

ROUTINE_MORNING = "morning"
ROUTINE_NIGHT = "night"
ROUTINE_TYPES = [ROUTINE_MORNING, ROUTINE_NIGHT]

# ============================================
# WINDOWS
# ============================================
DEFAULT_WINDOW_DAYS = 30
TREND_WINDOW_DAYS = 7
DEFAULT_WEEKLY_TARGET_HOURS = 10

# ============================================
# STORAGE KEYS
# ============================================
STORAGE_HABITS = "glowhabit-habits"
STORAGE_JOURNAL = "glowhabit-journal"
STORAGE_JOURNAL_SETTINGS = "glowhabit-journal-settings"
STORAGE_GOALS = "glowhabit-goals"
STORAGE_ROUTINES = "glowhabit-routines"
STORAGE_ROUTINE_COMPLETIONS = "glowhabit-routine-completions"
STORAGE_SKINCARE = "glowhabit-skincare"
STORAGE_SKINCARE_COMPLETIONS = "glowhabit-skincare-completions"
STORAGE_PROJECTS = "glowhabit-projects"
STORAGE_SESSIONS = "glowhabit-deep-work-sessions"
STORAGE_GLOW_MOMENTS = "glowhabit-glow-moments"
