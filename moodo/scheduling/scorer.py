"""Mood compatibility scoring for a single task."""

from __future__ import annotations

from moodo.affect.classifier import AffectClassifier
from moodo.models import Affect, Mood, Priority, Task, clamp
from moodo.scheduling.compatibility import MoodProfile, get_profile


PREFERRED_AFFECT_CREDIT = 0.4
BASELINE_AFFECT_CREDIT = 0.1
PREFERRED_PRIORITY_CREDIT = 0.3
HIGH_PRIORITY_CREDIT = 0.2


class TaskScorer:
    """Scores how well a task fits the current mood, in [0, 1].

    Tasks that have not been tagged yet are classified from their title
    on the fly; the tag is not written back here (the engine does that).
    """

    def __init__(self, classifier: AffectClassifier | None = None):
        self.classifier = classifier or AffectClassifier()

    def affect_of(self, task: Task) -> Affect:
        if task.affect is not None:
            return task.affect
        affect, _ = self.classifier.classify(task.title)
        return affect

    def score(self, task: Task, mood: Mood, profile: MoodProfile | None = None) -> float:
        preferences = profile or get_profile(mood)
        total = 0.0

        if self.affect_of(task) in preferences.preferred_affects:
            total += PREFERRED_AFFECT_CREDIT
        else:
            total += BASELINE_AFFECT_CREDIT

        if task.priority in preferences.preferred_priorities:
            total += PREFERRED_PRIORITY_CREDIT
        elif task.priority == Priority.HIGH and mood != Mood.STRESSED:
            total += HIGH_PRIORITY_CREDIT

        return clamp(total)
