"""Weighted ranking of candidate recommendations.

final = confidence * 0.5
      + context relevance * 0.25
      + personal alignment * 0.15
      + learning boost * 0.1

Sorted descending by final score. Equal scores keep generation order
(Python's sort is stable), so a pass is reproducible for identical input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from moodo.models import Affect, Recommendation, UserContext, clamp
from moodo.scheduling.compatibility import required_energy

if TYPE_CHECKING:
    from moodo.learning.personalization import PersonalizationStore

logger = logging.getLogger(__name__)


CONFIDENCE_WEIGHT = 0.5
RELEVANCE_WEIGHT = 0.25
ALIGNMENT_WEIGHT = 0.15
LEARNING_WEIGHT = 0.1

SHORT_TASK_MINUTES = 30


@dataclass
class ScoreBreakdown:
    confidence: float
    context_relevance: float
    personal_alignment: float
    learning_boost: float
    final: float

    def to_dict(self) -> dict[str, Any]:
        return {key: round(value, 3) for key, value in self.__dict__.items()}


def context_relevance(candidate: Recommendation, context: UserContext) -> float:
    energy_match = 1.0 - abs(context.energy_level - required_energy(candidate.affect))
    relevance = 0.5 + energy_match * 0.3
    if candidate.duration_minutes <= SHORT_TASK_MINUTES:
        relevance += 0.2
    return clamp(relevance)


def personal_alignment(candidate: Recommendation, context: UserContext) -> float:
    alignment = 0.5
    if context.stress_level > 0.7 and candidate.affect == Affect.CALMING:
        alignment += 0.3
    if context.energy_level > 0.7 and candidate.affect == Affect.FOCUSED:
        alignment += 0.2
    return clamp(alignment)


class RecommendationRanker:
    """Scores and orders candidates for one context.

    The learning boost comes from the personalization store when one is
    attached, otherwise from ``context.personalization_factor``.
    """

    def __init__(self, personalization: PersonalizationStore | None = None):
        self.personalization = personalization

    def learning_boost(self, context: UserContext) -> float:
        if self.personalization is None:
            return context.personalization_factor
        return self.personalization.boost(context.mood, context.hour)

    def breakdown(
        self, candidate: Recommendation, context: UserContext, boost: float
    ) -> ScoreBreakdown:
        relevance = context_relevance(candidate, context)
        alignment = personal_alignment(candidate, context)
        final = (
            candidate.confidence * CONFIDENCE_WEIGHT
            + relevance * RELEVANCE_WEIGHT
            + alignment * ALIGNMENT_WEIGHT
            + boost * LEARNING_WEIGHT
        )
        return ScoreBreakdown(
            confidence=candidate.confidence,
            context_relevance=relevance,
            personal_alignment=alignment,
            learning_boost=boost,
            final=clamp(final),
        )

    def rank(self, candidates: list[Recommendation], context: UserContext) -> list[Recommendation]:
        boost = self.learning_boost(context)
        ranked = [
            replace(candidate, score=self.breakdown(candidate, context, boost).final)
            for candidate in candidates
        ]
        ranked.sort(key=lambda recommendation: recommendation.score, reverse=True)
        logger.debug(f"Ranked {len(ranked)} candidates (learning boost {boost:+.3f})")
        return ranked
