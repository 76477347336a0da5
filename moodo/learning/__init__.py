"""Learning - personalize ranking from accept/reject feedback

Philosophy:
    Learn from behavior, not configuration forms.
    Every accept or dismiss is a data point; nobody fills out a survey.

Components:
    personalization.py: Bounded interaction and mood-pattern logs plus
        the time-of-day personalization boost used by the ranker
    persistence.py: Key-value blob storage (SQLite or in-memory) and the
        repository that encodes/decodes the learning state

Memory Bounds:
    - interactions: most recent 100, oldest evicted first
    - mood patterns: most recent 50, oldest evicted first
"""

from moodo.learning.personalization import (
    MAX_INTERACTIONS,
    MAX_MOOD_PATTERNS,
    PersonalizationStore,
)
from moodo.learning.persistence import (
    DEFAULT_STORAGE_KEY,
    InMemoryKeyValueStore,
    KeyValueStore,
    LearningStateRepository,
    PersistenceError,
    SQLiteKeyValueStore,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "MAX_INTERACTIONS",
    "MAX_MOOD_PATTERNS",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "LearningStateRepository",
    "PersistenceError",
    "PersonalizationStore",
    "SQLiteKeyValueStore",
]
