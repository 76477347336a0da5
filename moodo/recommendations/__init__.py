"""Recommendations - suggest something worth doing right now

Components:
    catalog.py: Literal recommendation tables (rule items, per-mood
        fallbacks, per-mood starter sets for first-time users)
    generator.py: Evaluate context rules (energy, stress, hour of day)
        into a candidate list that is never empty for a known mood
    ranker.py: Weighted composite score and descending sort

Core Principle:
    Surface ONE or TWO good options, not a menu.
"""

from moodo.recommendations.generator import RecommendationGenerator
from moodo.recommendations.ranker import RecommendationRanker, ScoreBreakdown

__all__ = [
    "RecommendationGenerator",
    "RecommendationRanker",
    "ScoreBreakdown",
]
