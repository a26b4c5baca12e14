"""
Settings for GlowHabit.

Values are read once from environment variables at import time; every
setting has a default so the engine runs without any configuration.
"""
import os
from pathlib import Path


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name, default):
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name, default):
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


BASE_DIR = Path(__file__).resolve().parent.parent

# Storage
DATA_DIR = Path(os.environ.get('GLOWHABIT_DATA_DIR', BASE_DIR / 'data'))

# Logging
LOG_LEVEL = os.environ.get('GLOWHABIT_LOG_LEVEL', 'INFO')
LOG_FORMAT = os.environ.get('GLOWHABIT_LOG_FORMAT', 'plain')

# Sentiment
SENTIMENT_ENABLED = _env_bool('GLOWHABIT_SENTIMENT_ENABLED', True)
NLTK_AUTO_DOWNLOAD = _env_bool('GLOWHABIT_NLTK_AUTO_DOWNLOAD', True)

# Analytics
COMPLETION_WINDOW_DAYS = _env_int('GLOWHABIT_COMPLETION_WINDOW_DAYS', 30)

# Suggestion endpoint
SUGGESTION_URL = os.environ.get('GLOWHABIT_SUGGESTION_URL', '')
SUGGESTION_TIMEOUT = _env_float('GLOWHABIT_SUGGESTION_TIMEOUT', 10.0)
SUGGESTION_API_KEY = os.environ.get('GLOWHABIT_SUGGESTION_API_KEY', '')
