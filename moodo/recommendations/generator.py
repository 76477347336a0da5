"""
Tool: Recommendation Generator
Purpose: Build candidate suggestions from the user's current context

Rules (each adds zero or one item):
    Energy:  energy > 0.7 -> tackle the hardest task (0.85)
             energy < 0.3 -> simple organizing session (0.80)
    Stress:  stress > 0.6 -> breathing break (0.90)
    Time:    06-09h       -> set today's priorities (0.82)
             14-16h       -> creative break (0.76)
    Fallback: nothing fired -> one fixed suggestion for the mood

So for a known mood the list is never empty.

Starter mode:
    First-time users with no tasks get three fixed suggestions for their
    mood instead of rule evaluation.

Usage:
    from moodo.recommendations.generator import RecommendationGenerator

    generator = RecommendationGenerator()
    candidates = generator.generate(Mood.CREATIVE, hour=15, stress_level=0.2, energy_level=0.5)
"""

from __future__ import annotations

import logging

from moodo.affect.classifier import AffectClassifier
from moodo.models import Mood, Recommendation, UserContext
from moodo.recommendations import catalog

logger = logging.getLogger(__name__)


HIGH_ENERGY_THRESHOLD = 0.7
LOW_ENERGY_THRESHOLD = 0.3
HIGH_STRESS_THRESHOLD = 0.6
MORNING_HOURS = range(6, 10)
AFTERNOON_HOURS = range(14, 17)


class RecommendationGenerator:
    """Turns (mood, hour, stress, energy) into candidate recommendations."""

    def __init__(self, classifier: AffectClassifier | None = None):
        self.classifier = classifier or AffectClassifier()

    def generate(
        self,
        mood: Mood,
        hour: int,
        stress_level: float,
        energy_level: float,
    ) -> list[Recommendation]:
        candidates: list[Recommendation] = []

        if energy_level > HIGH_ENERGY_THRESHOLD:
            candidates.append(catalog.build(catalog.HIGH_ENERGY))
        elif energy_level < LOW_ENERGY_THRESHOLD:
            candidates.append(catalog.build(catalog.LOW_ENERGY))

        if stress_level > HIGH_STRESS_THRESHOLD:
            candidates.append(catalog.build(catalog.HIGH_STRESS))

        if hour in MORNING_HOURS:
            candidates.append(catalog.build(catalog.MORNING_PLANNING))
        elif hour in AFTERNOON_HOURS:
            candidates.append(catalog.build(catalog.AFTERNOON_CREATIVE))

        if not candidates:
            logger.debug(f"No contextual rule fired, using fallback for mood={mood.value}")
            candidates.append(catalog.build(catalog.FALLBACKS[mood]))

        logger.debug(
            f"Generated {len(candidates)} candidates "
            f"(energy={energy_level}, stress={stress_level}, hour={hour})"
        )
        return self._annotate(candidates)

    def generate_for_context(self, context: UserContext) -> list[Recommendation]:
        return self.generate(
            context.mood,
            context.hour,
            context.stress_level,
            context.energy_level,
        )

    def starter(self, mood: Mood) -> list[Recommendation]:
        """Three fixed suggestions for a user who has no tasks yet."""
        return self._annotate([catalog.build(entry) for entry in catalog.STARTERS[mood]])

    def _annotate(self, candidates: list[Recommendation]) -> list[Recommendation]:
        for candidate in candidates:
            candidate.affect_note = self.classifier.analyze(candidate.title).reason
        return candidates
