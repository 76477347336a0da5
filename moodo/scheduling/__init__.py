"""Scheduling - pick a short, mood-appropriate list from the task pool

Components:
    compatibility.py: Static per-mood table (preferred affects/priorities,
        base list size, energy and stress profile)
    scorer.py: Mood compatibility score for a single task
    selector.py: Filter, order and size-bound the pool for right now

Key Insight:
    A stressed brain handed eight tasks does none of them.
    The list shrinks with mood and time of day, never below two.
"""

from moodo.scheduling.compatibility import MoodProfile, get_profile, required_energy
from moodo.scheduling.scorer import TaskScorer
from moodo.scheduling.selector import MIN_CAPACITY, ScheduleSelector, capacity, time_multiplier

__all__ = [
    "MIN_CAPACITY",
    "MoodProfile",
    "ScheduleSelector",
    "TaskScorer",
    "capacity",
    "get_profile",
    "required_energy",
    "time_multiplier",
]
