"""
Tool: Affect Classifier
Purpose: Guess what kind of engagement a task calls for from its title alone

Users won't tag every task with how it feels. The title usually tells us
enough: "Workout with friends" is energizing, "Pay electricity bill" is
routine, "Tax return deadline!" is stressful.

Scoring:
    1. Every token is checked against each affect's keyword table:
       exact hit +1.0, substring hit (either direction) +0.5 per keyword
    2. Energy indicator words push towards energizing/focused/stressful
       (high energy) or calming/routine (low energy)
    3. Whole-title patterns add fixed bonuses ("before bed", "?", digits, ...)
    4. Top score wins; confidence = top / max(1, top + runner-up)

Usage:
    from moodo.affect.classifier import AffectClassifier

    classifier = AffectClassifier()
    affect, confidence = classifier.classify("Meditate before bed")

    analysis = classifier.analyze("Tax return deadline!")
    print(analysis.reason)   # "Time pressure detected"
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Any

from moodo.models import Affect


DEFAULT_AFFECT = Affect.FOCUSED
DEFAULT_CONFIDENCE = 0.1

EXACT_MATCH_WEIGHT = 1.0
PARTIAL_MATCH_WEIGHT = 0.5

AFFECT_KEYWORDS: dict[Affect, tuple[str, ...]] = {
    Affect.CREATIVE: (
        # Core creative words
        "design", "create", "write", "brainstorm", "art", "music", "draw", "paint", "compose",
        "creative", "innovate", "imagine", "craft", "build", "make", "develop", "invent",
        # Creative activities
        "blog", "story", "poem", "video", "photo", "sketch", "prototype", "logo", "website",
        "presentation", "mockup", "wireframe", "concept", "idea", "vision", "script",
        # Creative verbs
        "express", "inspire", "visualise", "conceptualise", "ideate", "collaborate",
    ),
    Affect.ENERGIZING: (
        # Physical activities
        "workout", "run", "exercise", "gym", "jog", "swim", "bike", "hike", "walk", "dance",
        "sport", "train", "fitness", "cardio", "strength", "yoga", "pilates", "stretch",
        # High-energy chores
        "clean", "organise", "declutter", "rearrange", "sort", "tidy", "vacuum", "wash",
        "move", "pack", "unpack", "renovate", "repair", "fix", "install", "setup",
        # Action words
        "go", "do", "active", "energetic", "power", "boost", "pump", "intense", "dynamic",
    ),
    Affect.CALMING: (
        # Relaxation
        "meditate", "read", "journal", "reflect", "breathe", "relax", "rest", "sleep", "nap",
        "unwind", "decompress", "chill", "peaceful", "quiet", "serene", "tranquil",
        # Mindful activities
        "contemplate", "ponder", "think", "consider", "observe", "listen", "watch", "view",
        "nature", "garden", "plants", "tea", "coffee", "bath", "massage", "spa",
        # Gentle words
        "gentle", "slow", "soft", "easy", "simple", "minimal", "light", "calm", "zen", "colour",
    ),
    Affect.FOCUSED: (
        # Work and study
        "study", "work", "analyse", "review", "research", "examine", "investigate", "learn",
        "code", "program", "develop", "debug", "test", "solve", "calculate", "compute",
        # Mental tasks
        "focus", "concentrate", "think", "plan", "strategy", "organise", "schedule", "prepare",
        "meeting", "call", "email", "report", "document", "spreadsheet", "data", "analysis",
        # Professional activities
        "business", "project", "task", "deadline", "goal", "objective", "target", "milestone",
        "complete", "finish", "accomplish", "achieve", "deliver", "submit", "present",
    ),
    Affect.ROUTINE: (
        # Daily upkeep
        "check", "update", "review", "scan", "browse", "sort", "file", "backup", "sync",
        "maintenance", "routine", "regular", "daily", "weekly", "monthly", "schedule",
        # Simple admin
        "pay", "bill", "invoice", "receipt", "form", "paperwork", "admin", "basic", "simple",
        "quick", "easy", "straightforward", "normal", "standard", "usual", "typical",
    ),
    Affect.STRESSFUL: (
        # Deadline pressure
        "deadline", "urgent", "asap", "rush", "hurry", "pressure", "stress", "crisis", "emergency",
        "important", "critical", "priority", "must", "need", "required", "essential",
        # Challenging tasks
        "difficult", "hard", "complex", "complicated", "challenging", "tough", "demanding",
        "interview", "presentation", "meeting", "exam", "test", "evaluation", "review",
        # Anxiety-inducing admin
        "tax", "taxes", "legal", "doctor", "medical", "finance", "budget", "money", "debt",
    ),
    Affect.ANXIOUS: (
        "anxious", "anxiety", "nervous", "worry", "worried", "uneasy", "fear", "scared",
        "concern", "panic", "apprehensive",
    ),
}

# Word -> energy value in [0, 1]
ENERGY_INDICATORS: dict[str, float] = {
    "urgent": 0.8, "asap": 0.9, "rush": 0.9, "quick": 0.7, "fast": 0.7,
    "slow": 0.2, "later": 0.3, "eventually": 0.2, "someday": 0.1,
    "important": 0.6, "critical": 0.8, "priority": 0.7,
}

HIGH_ENERGY_THRESHOLD = 0.6
LOW_ENERGY_THRESHOLD = 0.4

# Ties between equal top scores resolve to the earliest affect in this order
SCORING_ORDER: tuple[Affect, ...] = (
    Affect.CREATIVE,
    Affect.ENERGIZING,
    Affect.CALMING,
    Affect.FOCUSED,
    Affect.ROUTINE,
    Affect.STRESSFUL,
    Affect.ANXIOUS,
)

_TOKEN_SPLIT = re.compile(r"[\s" + re.escape(string.punctuation) + r"]+")
_DIGITS = re.compile(r"\d+")


class ConfidenceLevel(str, Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return {
            "very_low": "Not sure",
            "low": "Maybe",
            "medium": "Likely",
            "high": "Confident",
        }[self.value]

    @classmethod
    def from_confidence(cls, confidence: float) -> ConfidenceLevel:
        if confidence >= 0.8:
            return cls.HIGH
        elif confidence >= 0.5:
            return cls.MEDIUM
        elif confidence >= 0.2:
            return cls.LOW
        return cls.VERY_LOW


@dataclass
class AffectAnalysis:
    """Classification plus a user-facing explanation."""

    affect: Affect
    confidence: float
    level: ConfidenceLevel
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "affect": self.affect.value,
            "confidence": round(self.confidence, 3),
            "level": self.level.value,
            "level_label": self.level.label,
            "reason": self.reason,
        }


# (keywords that select the specific reason, specific reason, generic reason)
_REASONS: dict[Affect, tuple[tuple[str, ...], str, str]] = {
    Affect.CREATIVE: (("design", "create"), "Creative task detected", "Suggests creative thinking"),
    Affect.ENERGIZING: (("workout", "exercise"), "Physical activity detected", "Requires active energy"),
    Affect.CALMING: (("read", "meditate"), "Relaxing activity detected", "Peaceful task identified"),
    Affect.FOCUSED: (("work", "study"), "Focus-intensive task", "Requires concentration"),
    Affect.ROUTINE: (("daily", "check"), "Regular task detected", "Simple routine activity"),
    Affect.STRESSFUL: (("deadline", "urgent"), "Time pressure detected", "Challenging task identified"),
    Affect.ANXIOUS: (("worry", "anxious"), "Anxiety-inducing task", "May trigger anxiety"),
}


def tokenize(text: str) -> list[str]:
    """Lowercase and split on whitespace and punctuation, dropping empties."""
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


class AffectClassifier:
    """Deterministic keyword scorer for task titles.

    Stateless: the keyword tables are module constants, so a single
    instance can be shared freely.
    """

    def scores(self, text: str) -> dict[Affect, float]:
        """Raw accumulated score per affect, before picking a winner."""
        totals = {affect: 0.0 for affect in SCORING_ORDER}
        lowered = text.lower()
        tokens = tokenize(text)

        for token in tokens:
            for affect, keywords in AFFECT_KEYWORDS.items():
                if token in keywords:
                    totals[affect] += EXACT_MATCH_WEIGHT
                for keyword in keywords:
                    if keyword in token or token in keyword:
                        totals[affect] += PARTIAL_MATCH_WEIGHT

        for token in tokens:
            energy = ENERGY_INDICATORS.get(token)
            if energy is None:
                continue
            if energy > HIGH_ENERGY_THRESHOLD:
                totals[Affect.ENERGIZING] += energy
                totals[Affect.FOCUSED] += energy * 0.5
                totals[Affect.STRESSFUL] += energy * 0.3
            elif energy < LOW_ENERGY_THRESHOLD:
                totals[Affect.CALMING] += 1.0 - energy
                totals[Affect.ROUTINE] += (1.0 - energy) * 0.5

        self._apply_patterns(lowered, totals)
        return totals

    def classify(self, text: str) -> tuple[Affect, float]:
        """Return (affect, confidence) for a title.

        Empty or unmatched input falls back to (focused, 0.1).
        """
        if not text or not text.strip():
            return DEFAULT_AFFECT, DEFAULT_CONFIDENCE

        totals = self.scores(text)
        ranked = sorted(SCORING_ORDER, key=lambda affect: totals[affect], reverse=True)
        top_affect = ranked[0]
        top = totals[top_affect]

        if top <= 0:
            return DEFAULT_AFFECT, DEFAULT_CONFIDENCE

        second = totals[ranked[1]]
        confidence = min(1.0, top / max(1.0, top + second))
        return top_affect, confidence

    def analyze(self, text: str) -> AffectAnalysis:
        """Classify and attach a confidence level and reason text."""
        affect, confidence = self.classify(text)
        return AffectAnalysis(
            affect=affect,
            confidence=confidence,
            level=ConfidenceLevel.from_confidence(confidence),
            reason=self.reason_for(affect, text),
        )

    @staticmethod
    def reason_for(affect: Affect, text: str) -> str:
        triggers, specific, generic = _REASONS[affect]
        lowered = text.lower()
        if any(trigger in lowered for trigger in triggers):
            return specific
        return generic

    @staticmethod
    def _apply_patterns(title: str, totals: dict[Affect, float]) -> None:
        # Time of day
        if "morning" in title or "early" in title:
            totals[Affect.ENERGIZING] += 0.3
        if "evening" in title or "night" in title or "before bed" in title:
            totals[Affect.CALMING] += 0.4

        # Doing it with other people
        if "with" in title and ("team" in title or "friends" in title or "family" in title):
            totals[Affect.ENERGIZING] += 0.2

        # Open questions
        if "?" in title:
            totals[Affect.CREATIVE] += 0.2
            totals[Affect.FOCUSED] += 0.2

        if _DIGITS.search(title):
            totals[Affect.FOCUSED] += 0.3

        if "daily" in title or "weekly" in title or "monthly" in title or "check" in title:
            totals[Affect.ROUTINE] += 0.4

        if "!" in title or "urgent" in title or "asap" in title:
            totals[Affect.STRESSFUL] += 0.5
