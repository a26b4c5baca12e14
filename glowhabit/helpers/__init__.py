"""
Helpers package for GlowHabit.

Helper functions for specific domains:
- metric_helpers: Streak run-lengths, windowed rates, variance-based stability
- nlp_helpers: Lexicon loading, tokenization and emotion keywords
"""
