"""Core data models.

Defines the enumerations and record types shared by every stage of a pass:
    Task / Mood → scores → Recommendation → InteractionRecord
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound="_ParseableEnum")


class _ParseableEnum(str, Enum):
    """String enum with a forgiving parser for user and stored input."""

    @classmethod
    def parse(cls: type[E], value: Any) -> E:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid {cls.__name__.lower()}: {value!r}. Must be one of: {valid}")


class Mood(_ParseableEnum):
    """Self-reported affective state."""

    ENERGIZED = "energized"
    FOCUSED = "focused"
    CREATIVE = "creative"
    CALM = "calm"
    TIRED = "tired"
    STRESSED = "stressed"
    ANXIOUS = "anxious"


class Affect(_ParseableEnum):
    """What kind of engagement a task or recommendation calls for."""

    ENERGIZING = "energizing"
    FOCUSED = "focused"
    CREATIVE = "creative"
    CALMING = "calming"
    ROUTINE = "routine"
    STRESSFUL = "stressful"
    ANXIOUS = "anxious"


class Priority(_ParseableEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 1, "medium": 2, "high": 3}[self.value]


class Category(_ParseableEnum):
    WORK = "work"
    PERSONAL = "personal"
    HEALTH = "health"
    SHOPPING = "shopping"
    LEARNING = "learning"
    FINANCE = "finance"
    TRAVEL = "travel"
    CREATIVE = "creative"


class Provenance(_ParseableEnum):
    """Which rule produced a recommendation."""

    ENERGY = "energy"
    STRESS = "stress"
    TEMPORAL = "temporal"
    BEHAVIOR = "behavior"
    NATURAL_LANGUAGE = "natural_language"


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _require_datetime(value: Any) -> datetime:
    parsed = _parse_datetime(value)
    if parsed is None:
        raise ValueError("Missing timestamp")
    return parsed


@dataclass
class Task:
    """A task as exposed by the task store.

    ``affect`` is None until the task has been classified.
    """

    id: str
    title: str
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    affect: Affect | None = None
    completed: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    reminder_at: datetime | None = None
    deadline_at: datetime | None = None
    labels: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "affect": self.affect.value if self.affect else None,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
            "reminder_at": self.reminder_at.isoformat() if self.reminder_at else None,
            "deadline_at": self.deadline_at.isoformat() if self.deadline_at else None,
            "labels": sorted(self.labels),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        affect = data.get("affect")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description"),
            priority=Priority.parse(data.get("priority", "medium")),
            affect=Affect.parse(affect) if affect else None,
            completed=bool(data.get("completed", False)),
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
            reminder_at=_parse_datetime(data.get("reminder_at")),
            deadline_at=_parse_datetime(data.get("deadline_at")),
            labels=set(data.get("labels") or []),
        )


@dataclass
class Recommendation:
    """A suggestion produced fresh on every generation pass.

    ``confidence`` is the rule's own belief; ``score`` is filled in by the
    ranker and is what the list is ordered by.
    """

    title: str
    description: str
    category: Category
    priority: Priority
    duration_minutes: int
    confidence: float
    affect: Affect
    rationale: str
    provenance: Provenance
    affect_note: str = ""
    score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "priority": self.priority.value,
            "duration_minutes": self.duration_minutes,
            "confidence": round(self.confidence, 3),
            "affect": self.affect.value,
            "rationale": self.rationale,
            "provenance": self.provenance.value,
            "affect_note": self.affect_note,
            "score": round(self.score, 3) if self.score is not None else None,
        }


@dataclass
class InteractionRecord:
    """One accept/reject event on a recommendation."""

    category: Category
    affect: Affect
    accepted: bool
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "affect": self.affect.value,
            "accepted": self.accepted,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InteractionRecord:
        return cls(
            category=Category.parse(data["category"]),
            affect=Affect.parse(data["affect"]),
            accepted=bool(data["accepted"]),
            timestamp=_require_datetime(data["timestamp"]),
        )


@dataclass
class MoodSuccessPattern:
    """How well a given hour worked out for a given mood."""

    mood: Mood
    hour: int
    success_rate: float
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        # camelCase keys are part of the persisted blob format
        return {
            "mood": self.mood.value,
            "hour": self.hour,
            "successRate": self.success_rate,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MoodSuccessPattern:
        hour = int(data["hour"])
        if not 0 <= hour <= 23:
            raise ValueError(f"Invalid hour: {hour}")
        return cls(
            mood=Mood.parse(data["mood"]),
            hour=hour,
            success_rate=min(1.0, max(0.0, float(data["successRate"]))),
            timestamp=_require_datetime(data["timestamp"]),
        )


@dataclass
class UserContext:
    """Snapshot of everything a recommendation pass needs to know."""

    hour: int
    day_of_week: int
    mood: Mood
    recent_completion_rate: float
    energy_level: float
    stress_level: float
    personalization_factor: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hour": self.hour,
            "day_of_week": self.day_of_week,
            "mood": self.mood.value,
            "recent_completion_rate": round(self.recent_completion_rate, 3),
            "energy_level": self.energy_level,
            "stress_level": self.stress_level,
            "personalization_factor": round(self.personalization_factor, 3),
        }


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a score into [low, high]."""
    return max(low, min(high, value))
