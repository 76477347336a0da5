"""
Tool: Schedule Selector
Purpose: Turn the whole task pool into a short list that fits right now

Steps:
    1. Drop completed tasks
    2. Score each task against the current mood
    3. Filter:
         stressed  -> never stressful tasks; keep if score >= 0.5 or calming
         otherwise -> keep if high priority, due today, or score >= 0.6
    4. Order: urgent (due today AND high) > score > priority > earliest reminder
    5. Cut to max_count, or to the adaptive capacity for this mood and hour

Capacity:
    base(mood) x time-of-day multiplier, floored, never below 2.

Usage:
    from moodo.scheduling.selector import ScheduleSelector, capacity

    selector = ScheduleSelector()
    today = selector.select(tasks, Mood.FOCUSED)

    capacity(Mood.TIRED, hour=3)   # 2
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from moodo.models import Affect, Mood, Priority, Task
from moodo.scheduling.compatibility import get_profile
from moodo.scheduling.scorer import TaskScorer

logger = logging.getLogger(__name__)


MIN_CAPACITY = 2
STRESSED_MIN_SCORE = 0.5
GOOD_MATCH_SCORE = 0.6

# (first hour, last hour, multiplier), inclusive
TIME_MULTIPLIERS: tuple[tuple[int, int, float], ...] = (
    (0, 8, 0.8),
    (9, 11, 1.0),
    (12, 13, 0.9),
    (14, 16, 1.0),
    (17, 19, 0.8),
)
LATE_MULTIPLIER = 0.6


def time_multiplier(hour: int) -> float:
    for start, end, multiplier in TIME_MULTIPLIERS:
        if start <= hour <= end:
            return multiplier
    return LATE_MULTIPLIER


def capacity(mood: Mood, hour: int) -> int:
    """Maximum list size for this mood at this hour (always >= 2)."""
    base = get_profile(mood).base_count
    return max(MIN_CAPACITY, math.floor(base * time_multiplier(hour)))


def is_same_day(moment: datetime | None, now: datetime) -> bool:
    if moment is None:
        return False
    if moment.tzinfo is not None and now.tzinfo is None:
        moment = moment.astimezone().replace(tzinfo=None)
    elif moment.tzinfo is None and now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(now.tzinfo)
    return moment.date() == now.date()


class ScheduleSelector:
    """Filters, orders and size-bounds the task pool for the current mood."""

    def __init__(self, scorer: TaskScorer | None = None):
        self.scorer = scorer or TaskScorer()

    def scored(self, tasks: list[Task], mood: Mood) -> list[tuple[Task, float]]:
        """Score every open task. Completed tasks are dropped."""
        profile = get_profile(mood)
        return [
            (task, self.scorer.score(task, mood, profile))
            for task in tasks
            if not task.completed
        ]

    def keep(self, task: Task, score: float, mood: Mood, now: datetime) -> bool:
        affect = self.scorer.affect_of(task)

        if mood == Mood.STRESSED:
            if affect == Affect.STRESSFUL:
                return False
            return score >= STRESSED_MIN_SCORE or affect == Affect.CALMING

        return (
            task.priority == Priority.HIGH
            or is_same_day(task.deadline_at, now)
            or score >= GOOD_MATCH_SCORE
        )

    def is_urgent(self, task: Task, now: datetime) -> bool:
        return task.priority == Priority.HIGH and is_same_day(task.deadline_at, now)

    def select(
        self,
        tasks: list[Task],
        mood: Mood,
        max_count: int | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """Return the ordered short list for this mood.

        Args:
            tasks: Snapshot of the task pool
            mood: Current mood
            max_count: Explicit size limit; defaults to the adaptive capacity
            now: Reference time for "due today" and capacity (defaults to now)
        """
        now = now or datetime.now()
        candidates = [
            (task, score)
            for task, score in self.scored(tasks, mood)
            if self.keep(task, score, mood, now)
        ]

        def sort_key(pair: tuple[Task, float]):
            task, score = pair
            reminder = task.reminder_at.timestamp() if task.reminder_at else math.inf
            return (
                not self.is_urgent(task, now),
                -score,
                -task.priority.rank,
                reminder,
            )

        candidates.sort(key=sort_key)

        limit = max(0, max_count) if max_count is not None else capacity(mood, now.hour)
        selected = [task for task, _ in candidates[:limit]]

        logger.debug(
            f"Selected {len(selected)} of {len(tasks)} tasks for mood={mood.value} "
            f"(limit {limit}, {len(candidates)} passed filter)"
        )
        return selected
