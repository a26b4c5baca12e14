"""
GlowHabit: temporal engagement analytics for a habit, routine and journal tracker.

Turns raw daily completion logs into streaks, completion rates, mood trends,
habit/mood correlations, life-balance scores and achievement state.
"""

__version__ = '1.0.0'
