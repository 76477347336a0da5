"""Affect classification - what kind of engagement does a task call for?

Components:
    classifier.py: Keyword/heuristic scorer mapping a task title to an
        affect tag (energizing, focused, creative, calming, routine,
        stressful, anxious) plus a confidence in [0, 1]

The classifier is deliberately deterministic: same title in, same tag out.
No model files, no network, no hidden state.
"""

from moodo.affect.classifier import (
    DEFAULT_AFFECT,
    DEFAULT_CONFIDENCE,
    AffectAnalysis,
    AffectClassifier,
    ConfidenceLevel,
)

__all__ = [
    "DEFAULT_AFFECT",
    "DEFAULT_CONFIDENCE",
    "AffectAnalysis",
    "AffectClassifier",
    "ConfidenceLevel",
]
