"""
Utilities package for GlowHabit.

Common utility functions:
- time_utils: Date parsing and calendar windows
- constants: Application constants
- logging_utils: Structured logging and timing
"""
