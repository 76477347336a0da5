"""
Tool: Personalization Store
Purpose: Remember what the user accepted or dismissed, and when

Two bounded, append-only logs:
    interactions:  (category, affect, accepted, timestamp), last 100
    mood patterns: (mood, hour, success rate, timestamp), last 50

Boost:
    Take interactions recorded within +/-2 hours of the current hour,
    compute the acceptance rate, and map it onto [-0.1, +0.1]:
        boost = (acceptance_rate - 0.5) * 0.2
    An empty window gives 0.0.

Thread Safety:
    Append + trim is not atomic as a pair, so every read and write
    goes through one lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any

from moodo.models import (
    Affect,
    Category,
    InteractionRecord,
    Mood,
    MoodSuccessPattern,
    clamp,
)

logger = logging.getLogger(__name__)


MAX_INTERACTIONS = 100
MAX_MOOD_PATTERNS = 50
WINDOW_HOURS = 2
DEFAULT_SUCCESS_RATE = 0.5
BOOST_SCALE = 0.2


class PersonalizationStore:
    """Bounded feedback logs and the boost derived from them.

    Args:
        max_interactions: Interaction log cap (oldest evicted first).
        max_mood_patterns: Mood-pattern log cap (oldest evicted first).
        window_hours: Half-width of the time-of-day window used by ``boost``.
        clock: Returns "now"; injectable for tests.
    """

    def __init__(
        self,
        max_interactions: int = MAX_INTERACTIONS,
        max_mood_patterns: int = MAX_MOOD_PATTERNS,
        window_hours: int = WINDOW_HOURS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.max_interactions = max_interactions
        self.max_mood_patterns = max_mood_patterns
        self.window_hours = window_hours
        self.clock = clock
        self._interactions: list[InteractionRecord] = []
        self._mood_patterns: list[MoodSuccessPattern] = []
        self._lock = threading.Lock()

    # ─────────────────────────────────────────────────────────────────────
    # Recording
    # ─────────────────────────────────────────────────────────────────────

    def record_interaction(
        self,
        category: Category,
        affect: Affect,
        accepted: bool,
        timestamp: datetime | None = None,
    ) -> InteractionRecord:
        record = InteractionRecord(
            category=category,
            affect=affect,
            accepted=accepted,
            timestamp=timestamp or self.clock(),
        )
        with self._lock:
            self._interactions.append(record)
            self._trim_interactions()
        return record

    def record_mood_pattern(
        self,
        mood: Mood,
        hour: int,
        success_rate: float,
        timestamp: datetime | None = None,
    ) -> MoodSuccessPattern:
        if not 0 <= hour <= 23:
            raise ValueError(f"Invalid hour: {hour}. Must be 0-23")
        pattern = MoodSuccessPattern(
            mood=mood,
            hour=hour,
            success_rate=clamp(success_rate),
            timestamp=timestamp or self.clock(),
        )
        with self._lock:
            self._mood_patterns.append(pattern)
            self._trim_mood_patterns()
        return pattern

    def _trim_interactions(self) -> None:
        """Keep only the most recent entries. Must hold _lock."""
        overflow = len(self._interactions) - self.max_interactions
        if overflow > 0:
            del self._interactions[:overflow]

    def _trim_mood_patterns(self) -> None:
        """Keep only the most recent entries. Must hold _lock."""
        overflow = len(self._mood_patterns) - self.max_mood_patterns
        if overflow > 0:
            del self._mood_patterns[:overflow]

    # ─────────────────────────────────────────────────────────────────────
    # Derived signals
    # ─────────────────────────────────────────────────────────────────────

    def boost(self, mood: Mood, hour: int) -> float:
        """Personalization boost in [-0.1, 0.1] for this time of day.

        ``mood`` is accepted for interface symmetry; interactions are not
        keyed by mood, so only the hour window matters.
        """
        with self._lock:
            window = [
                record
                for record in self._interactions
                if abs(record.timestamp.hour - hour) <= self.window_hours
            ]

        if not window:
            return 0.0

        accepted = sum(1 for record in window if record.accepted)
        acceptance_rate = accepted / len(window)
        return clamp((acceptance_rate - 0.5) * BOOST_SCALE, -0.1, 0.1)

    def success_rate(self, category: Category) -> float:
        """Accepted fraction for a category, 0.5 when there is no history."""
        with self._lock:
            records = [r for r in self._interactions if r.category == category]

        if not records:
            return DEFAULT_SUCCESS_RATE
        return sum(1 for r in records if r.accepted) / len(records)

    # ─────────────────────────────────────────────────────────────────────
    # Snapshots and state exchange
    # ─────────────────────────────────────────────────────────────────────

    @property
    def interactions(self) -> list[InteractionRecord]:
        with self._lock:
            return list(self._interactions)

    @property
    def mood_patterns(self) -> list[MoodSuccessPattern]:
        with self._lock:
            return list(self._mood_patterns)

    def to_state(self) -> dict[str, Any]:
        """Encode both logs into the persisted blob structure."""
        with self._lock:
            return {
                "interactions": [record.to_dict() for record in self._interactions],
                "moodPatterns": [pattern.to_dict() for pattern in self._mood_patterns],
            }

    def load_state(self, state: dict[str, Any] | None) -> None:
        """Replace both logs from a decoded blob.

        None resets to empty. Individual malformed records are skipped.
        """
        interactions = _decode_records(
            (state or {}).get("interactions"), InteractionRecord.from_dict, "interaction"
        )
        patterns = _decode_records(
            (state or {}).get("moodPatterns"), MoodSuccessPattern.from_dict, "mood pattern"
        )
        with self._lock:
            self._interactions = interactions
            self._mood_patterns = patterns
            self._trim_interactions()
            self._trim_mood_patterns()

    def clear(self) -> None:
        with self._lock:
            self._interactions = []
            self._mood_patterns = []

    def stats(self) -> dict[str, Any]:
        with self._lock:
            total = len(self._interactions)
            accepted = sum(1 for r in self._interactions if r.accepted)
            return {
                "interactions": total,
                "accepted": accepted,
                "mood_patterns": len(self._mood_patterns),
                "acceptance_rate": round(accepted / total, 3) if total else None,
            }


def _decode_records(raw: Any, decode: Callable[[dict], Any], label: str) -> list:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning(f"Ignoring malformed {label} log: expected a list")
        return []

    records = []
    for entry in raw:
        try:
            records.append(decode(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed {label} record: {e}")
    return records
